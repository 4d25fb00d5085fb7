"""Formatter JSON (python-json-logger) com campos obrigatórios."""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Ordem de saída dos campos obrigatórios
REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {"asctime": "...", "level": "DEBUG", "logger": "opengraph.api.batch",
         "message": "graph_batch_chunk_dispatch", "correlation_id": "",
         "service": "opengraph", "chunk_index": 0, "chunk_size": 50}
    """
    format_string = " ".join(f"%({name})s" for name in REQUIRED_LOG_FIELDS)
    return JsonFormatter(format_string, rename_fields=FIELD_RENAME_MAP)
