"""Cliente assíncrono da Facebook Graph API.

Padrão: client orquestra; api adapta; infra executa IO; config apoia.
"""

from opengraph.api import BatchItem, Credentials, FileRef, GraphResponse, TokenResult
from opengraph.client import GraphClient, GraphClientOptions, create_graph_client
from opengraph.utils.errors import (
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

__version__ = "0.1.0"

__all__ = [
    "AlgorithmMismatchError",
    "BatchItem",
    "ConfigurationError",
    "Credentials",
    "FileRef",
    "FormatError",
    "GraphClient",
    "GraphClientOptions",
    "GraphError",
    "GraphHttpError",
    "GraphResponse",
    "ParameterEncodingError",
    "ProtocolError",
    "SignatureInvalidError",
    "TokenResult",
    "TransportError",
    "create_graph_client",
]
