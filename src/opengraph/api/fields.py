"""Codificação recursiva do parâmetro ``fields`` (field expansion).

Exemplos:
    ["id", "name"]                           -> "id,name"
    {"friends": ["id", "name"]}              -> "friends(id,name)"
    {"friends": {"limit": 2, "fields": ["id"]}} -> "friends.limit(2).fields(id)"
    {"albums": {"id": 1, "name": 1}}         -> "albums(id,name)"
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

# Valor que marca uma chave como campo selecionado: {"a": {"b": 1, "c": 1}}
SELECTION_MARKER = 1


def _is_selection_set(value: Mapping[str, Any]) -> bool:
    return bool(value) and all(
        v is True or (type(v) is int and v == SELECTION_MARKER) for v in value.values()
    )


def encode_fields(value: Any) -> str:
    """Converte escalar, lista ou mapping para a gramática de field expansion.

    Um mapping cujos valores são todos 1 (ou True) é lido como lista de
    campos: ``{"posts": {"limit": 1}}`` vira ``posts(limit)``. Para um
    modificador igual a 1, passe o valor como string:
    ``{"posts": {"limit": "1"}}`` vira ``posts.limit(1)``.
    """
    match value:
        case bool():
            return "true" if value else "false"
        case str() | int() | float():
            return str(value)
        case list() | tuple():
            return ",".join(encode_fields(item) for item in value)
        case Mapping() if _is_selection_set(value):
            return encode_fields(list(value))
        case Mapping():
            parts = []
            for key, sub in value.items():
                if isinstance(sub, Mapping) and not _is_selection_set(sub):
                    parts.append(f"{key}.{encode_fields(sub)}")
                else:
                    parts.append(f"{key}({encode_fields(sub)})")
            return ".".join(parts)
        case _:
            return str(value)
