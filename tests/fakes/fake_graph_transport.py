"""Fake de transporte HTTP para testes deterministas do cliente Graph API."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import httpx

from opengraph.protocols import Header, RawResponse


@dataclass
class SentRequest:
    """Requisição capturada pelo fake."""

    method: str
    url: httpx.URL
    headers: list[Header]
    content: bytes

    def header(self, name: str) -> str | None:
        for key, value in self.headers:
            if key.lower() == name.lower():
                return value
        return None

    def form(self) -> dict[str, str]:
        """Corpo form-urlencoded decodificado."""
        return dict(httpx.QueryParams(self.content.decode("utf-8")).items())

    def query(self) -> dict[str, str]:
        return dict(self.url.params.items())


def json_response(
    data: Any,
    status_code: int = 200,
    headers: tuple[Header, ...] = (),
) -> RawResponse:
    return RawResponse(
        status_code=status_code,
        status_message=httpx.codes.get_reason_phrase(status_code),
        headers=(("Content-Type", "application/json"), *headers),
        content=json.dumps(data).encode("utf-8"),
    )


def text_response(body: str, status_code: int = 200) -> RawResponse:
    return RawResponse(
        status_code=status_code,
        status_message=httpx.codes.get_reason_phrase(status_code),
        headers=(("Content-Type", "text/plain"),),
        content=body.encode("utf-8"),
    )


@dataclass
class FakeGraphTransport:
    """Implementa TransportProtocol sem IO.

    Respostas são devolvidas na ordem em que foram enfileiradas; cada
    chamada fica registrada em ``requests``.
    """

    responses: list[RawResponse] = field(default_factory=list)
    requests: list[SentRequest] = field(default_factory=list)

    def queue(self, *responses: RawResponse) -> None:
        self.responses.extend(responses)

    async def send(
        self,
        method: str,
        url: str,
        headers: list[Header],
        content: bytes,
    ) -> RawResponse:
        self.requests.append(SentRequest(method, httpx.URL(url), list(headers), content))
        if not self.responses:
            raise AssertionError(f"Nenhuma resposta enfileirada para {method} {url}")
        return self.responses.pop(0)
