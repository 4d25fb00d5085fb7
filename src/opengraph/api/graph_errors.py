"""Erros e helpers de parsing para respostas de erro da Graph API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ErrorInfo:
    """Erro retornado pela Graph API."""

    error_type: str
    error_code: int
    message: str
    is_permanent: bool  # True se erro não é retentável
    error_subcode: int | None = None
    fbtrace_id: str | None = None

    def __str__(self) -> str:
        return f"{self.error_type}:{self.error_code}\t{self.message}"


def is_permanent_error(error_code: int, error_type: str) -> bool:
    """Classifica erro como permanente ou transitório.

    Erros permanentes: 400, 401, 403, 404, 413
    Erros transitórios: 429 (rate limit), 500+ (server errors)
    """
    permanent_codes = {400, 401, 403, 404, 413}
    if error_code in permanent_codes:
        return True

    permanent_types = {"OAuthException", "GraphMethodException"}
    return error_type in permanent_types


def parse_graph_error(response_data: Any) -> ErrorInfo | None:
    """Extrai informações de erro do corpo decodificado.

    Args:
        response_data: Corpo JSON decodificado

    Returns:
        ErrorInfo se houver objeto ``error``, None caso contrário
    """
    if not isinstance(response_data, dict):
        return None
    error_obj = response_data.get("error")
    if not error_obj or not isinstance(error_obj, dict):
        return None

    error_type = str(error_obj.get("type", "unknown"))
    error_code = _as_int(error_obj.get("code")) or 0
    message = str(error_obj.get("message", "Erro desconhecido"))

    return ErrorInfo(
        error_type=error_type,
        error_code=error_code,
        message=message,
        is_permanent=is_permanent_error(error_code, error_type),
        error_subcode=_as_int(error_obj.get("error_subcode")),
        fbtrace_id=error_obj.get("fbtrace_id"),
    )


def error_from_status(status_code: int, status_message: str) -> ErrorInfo:
    """ErrorInfo de fallback quando o corpo não traz ``error``."""
    return ErrorInfo(
        error_type="HttpError",
        error_code=status_code,
        message=status_message,
        is_permanent=is_permanent_error(status_code, "HttpError"),
    )


def _as_int(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
