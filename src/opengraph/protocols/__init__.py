"""Protocolos dos colaboradores (transporte HTTP, codec JSON)."""

from opengraph.protocols.transport import (
    Header,
    JsonCodecProtocol,
    RawResponse,
    TransportProtocol,
)

__all__ = [
    "Header",
    "JsonCodecProtocol",
    "RawResponse",
    "TransportProtocol",
]
