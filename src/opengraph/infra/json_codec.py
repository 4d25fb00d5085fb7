"""Codec JSON padrão (stdlib json)."""

from __future__ import annotations

import json
from typing import Any


class JsonCodec:
    """Serialização JSON compacta, sem escapar caracteres não-ASCII."""

    def encode(self, value: Any) -> str:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))

    def decode(self, data: str | bytes) -> Any:
        return json.loads(data)
