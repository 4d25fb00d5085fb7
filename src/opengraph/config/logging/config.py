"""Configuração centralizada de logging estruturado (JSON).

Uso:
    from opengraph.config.logging import configure_logging

    configure_logging(level="INFO")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from opengraph.config.logging.filters import ContextFilter, TokenRedactionFilter
from opengraph.config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "opengraph"


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura logging JSON no root logger.

    Deve ser chamada uma vez pela aplicação; a biblioteca em si apenas
    emite logs via ``logging.getLogger(__name__)``.

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço nos logs.
        correlation_id_getter: Função opcional que retorna o correlation_id
            do contexto atual.

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(ContextFilter(service_name, correlation_id_getter))
    handler.addFilter(TokenRedactionFilter())

    root = logging.getLogger()
    root.setLevel(level_upper)
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo especificado."""
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    status_code: int | None = None,
) -> None:
    """Registra que um fallback foi acionado (sem tokens).

    Args:
        logger: Logger do módulo chamador.
        component: Nome do componente (ex: "delete_object").
        reason: Motivo do fallback (ex: "delete_rejected").
        status_code: Status HTTP que motivou o fallback.
    """
    extra: dict[str, object] = {
        "fallback_used": True,
        "component": component,
    }
    if reason:
        extra["reason"] = reason
    if status_code is not None:
        extra["status_code"] = status_code

    logger.info("Fallback applied for %s", component, extra=extra)
