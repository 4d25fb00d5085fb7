"""Exceções compartilhadas do cliente Graph API."""

from .exceptions import (
    AlgorithmMismatchError,
    ConfigurationError,
    FormatError,
    GraphError,
    GraphHttpError,
    ParameterEncodingError,
    ProtocolError,
    SignatureInvalidError,
    TransportError,
)

__all__ = [
    "AlgorithmMismatchError",
    "ConfigurationError",
    "FormatError",
    "GraphError",
    "GraphHttpError",
    "ParameterEncodingError",
    "ProtocolError",
    "SignatureInvalidError",
    "TransportError",
]
