"""Implementações concretas dos colaboradores (HTTP, JSON, crypto)."""

from opengraph.infra.http import HttpClientConfig, HttpTransport
from opengraph.infra.json_codec import JsonCodec

__all__ = [
    "HttpClientConfig",
    "HttpTransport",
    "JsonCodec",
]
