"""Adaptação da Graph API: parâmetros, envio, respostas, batch e OAuth.

Módulos:
- fields/params: codificação de parâmetros e field expansion
- dispatcher: montagem e envio das requisições autenticadas
- response/graph_errors: classificação de respostas e erros
- batch: divisão e recombinação de batch requests
- oauth: troca de tokens e URL do diálogo OAuth
"""

from opengraph.api.batch import DEFAULT_BATCH_LIMIT, BatchCoordinator, BatchItem
from opengraph.api.credentials import Credentials
from opengraph.api.dispatcher import RequestDispatcher
from opengraph.api.fields import encode_fields
from opengraph.api.graph_errors import ErrorInfo
from opengraph.api.oauth import TokenExchanger, TokenResult, build_auth_uri, parse_token_response
from opengraph.api.params import FileRef, prepare_params
from opengraph.api.response import GraphResponse, classify_response

__all__ = [
    "DEFAULT_BATCH_LIMIT",
    "BatchCoordinator",
    "BatchItem",
    "Credentials",
    "ErrorInfo",
    "FileRef",
    "GraphResponse",
    "RequestDispatcher",
    "TokenExchanger",
    "TokenResult",
    "build_auth_uri",
    "classify_response",
    "encode_fields",
    "parse_token_response",
    "prepare_params",
]
