"""Filters de logging: contexto e remoção de credenciais.

Campos injetados:
- correlation_id: ID de rastreamento fornecido pela aplicação
- service: Nome do serviço

URLs com ``access_token``/``client_secret`` (o httpx loga a URL de cada
requisição) têm os valores mascarados.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

_SECRET_PARAM_RE = re.compile(
    r"\b(?P<key>access_token|client_secret|code|input_token)=(?P<value>[^&\s\"']+)"
)
_OAUTH_HEADER_RE = re.compile(r"\b(?P<key>OAuth|Bearer)\s+(?P<value>[A-Za-z0-9|._\-]{16,})")
REDACTED = "***"


def redact_secrets(text: str) -> str:
    """Mascara tokens e secrets em query strings e headers Authorization."""
    text = _SECRET_PARAM_RE.sub(lambda m: f"{m.group('key')}={REDACTED}", text)
    return _OAUTH_HEADER_RE.sub(lambda m: f"{m.group('key')} {REDACTED}", text)


class ContextFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        # Preserva correlation_id passado explicitamente via `extra`
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class TokenRedactionFilter(logging.Filter):
    """Remove tokens e secrets da mensagem formatada do record."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_secrets(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True
