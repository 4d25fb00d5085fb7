"""Contratos dos colaboradores externos do cliente.

O núcleo depende apenas destas abstrações; implementações concretas
ficam em opengraph.infra.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

Header = tuple[str, str]


@dataclass(frozen=True, slots=True)
class RawResponse:
    """Resultado bruto do transporte, sem decodificação."""

    status_code: int
    status_message: str
    headers: tuple[Header, ...]
    content: bytes


class TransportProtocol(Protocol):
    """Contrato mínimo para envio de requisições HTTP já montadas."""

    async def send(
        self,
        method: str,
        url: str,
        headers: list[Header],
        content: bytes,
    ) -> RawResponse: ...


class JsonCodecProtocol(Protocol):
    """Contrato de serialização JSON."""

    def encode(self, value: Any) -> str: ...

    def decode(self, data: str | bytes) -> Any: ...
