"""Helpers de logging para chamadas à Graph API (sem tokens)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .graph_errors import ErrorInfo

logger = logging.getLogger(__name__)


def log_graph_error(
    error: ErrorInfo,
    method: str,
    path: str,
    status_code: int,
) -> None:
    """Loga erro da Graph API sem expor dados sensíveis."""
    logger.warning(
        "Erro da Graph API",
        extra={
            "method": method,
            "path": path,
            "status_code": status_code,
            "error_type": error.error_type,
            "error_code": error.error_code,
            "error_subcode": error.error_subcode,
            "fbtrace_id": error.fbtrace_id,
            "is_permanent": error.is_permanent,
        },
    )


def log_success(
    method: str,
    path: str,
    status_code: int,
) -> None:
    """Loga sucesso sem expor dados sensíveis."""
    logger.debug(
        "Chamada Graph API bem-sucedida",
        extra={
            "method": method,
            "path": path,
            "status_code": status_code,
        },
    )


def log_batch_dispatch(chunk_index: int, chunk_size: int, total: int) -> None:
    """Loga envio de um lote do batch."""
    logger.debug(
        "graph_batch_chunk_dispatch",
        extra={
            "chunk_index": chunk_index,
            "chunk_size": chunk_size,
            "total_requests": total,
        },
    )
