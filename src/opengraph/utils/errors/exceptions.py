"""Exceções do cliente Graph API.

Toda falha do cliente deriva de GraphError. Nenhuma mensagem carrega
tokens, secrets ou payloads assinados.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from opengraph.api.graph_errors import ErrorInfo


class GraphError(Exception):
    """Base para erros do cliente Graph API."""


class ConfigurationError(GraphError):
    """Credencial ou URI obrigatória ausente."""


class FormatError(GraphError):
    """Entrada mal-formada (signed_request, resposta de token)."""


class AlgorithmMismatchError(GraphError):
    """signed_request assinado com algoritmo diferente de HMAC-SHA256."""


class SignatureInvalidError(GraphError):
    """Assinatura do signed_request não confere."""


class ParameterEncodingError(GraphError, ValueError):
    """Parâmetro não pode ser convertido para texto UTF-8."""


class ProtocolError(GraphError):
    """Resposta confiável sem campo esperado ou com corpo ilegível.

    Attributes:
        raw_body: Corpo bruto da resposta, para diagnóstico.
    """

    def __init__(self, message: str, raw_body: str | None = None) -> None:
        super().__init__(message)
        self.raw_body = raw_body


class GraphHttpError(GraphError):
    """Resposta não-2xx da Graph API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error: ErrorInfo | None = None,
        is_retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error = error
        self.is_retryable = is_retryable


class TransportError(GraphError):
    """Falha de rede (timeout, conexão) no transporte HTTP."""

    def __init__(self, message: str, is_retryable: bool = True) -> None:
        super().__init__(message)
        self.is_retryable = is_retryable
