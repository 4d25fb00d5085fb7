"""Logging estruturado do cliente.

Campos obrigatórios em todo log: correlation_id, service, level, logger,
message, asctime. Tokens e secrets nunca são logados.
"""

from opengraph.config.logging.config import configure_logging, get_logger, log_fallback
from opengraph.config.logging.filters import ContextFilter, TokenRedactionFilter, redact_secrets
from opengraph.config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "ContextFilter",
    "TokenRedactionFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "log_fallback",
    "redact_secrets",
]
