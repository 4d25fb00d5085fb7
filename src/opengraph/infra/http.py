"""Transporte HTTP (httpx) usado pelo cliente Graph API."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import httpx

from opengraph.protocols.transport import Header, RawResponse
from opengraph.utils.errors import TransportError

logger = logging.getLogger(__name__)

USER_AGENT = "opengraph-python/0.1"


@dataclass
class HttpClientConfig:
    """Configuração do transporte HTTP."""

    timeout_seconds: float = 30.0
    default_headers: dict[str, str] = field(
        default_factory=lambda: {"User-Agent": USER_AGENT}
    )
    verify_ssl: bool = True


class HttpTransport:
    """Envia requisições já montadas e devolve a resposta bruta.

    Mantém um único httpx.AsyncClient (pool de conexões) durante a vida
    do transporte; chame ``aclose`` ao final.

    Não há retry aqui: falhas de rede sobem como TransportError e a
    política de backoff fica com o chamador.
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._http_client = http_client

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Obtém ou cria cliente HTTP."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(verify=self._config.verify_ssl)
        return self._http_client

    async def aclose(self) -> None:
        """Fecha cliente HTTP."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def send(
        self,
        method: str,
        url: str,
        headers: list[Header],
        content: bytes,
    ) -> RawResponse:
        merged_headers = httpx.Headers(self._config.default_headers)
        for name, value in headers:
            merged_headers[name] = value
        client = await self._get_http_client()
        try:
            response = await client.request(
                method,
                url,
                headers=merged_headers,
                content=content or None,
                timeout=self._config.timeout_seconds,
            )
        except httpx.TimeoutException as exc:
            logger.warning("graph_http_timeout", extra={"method": method})
            raise TransportError("http_timeout") from exc
        except httpx.TransportError as exc:
            logger.warning(
                "graph_http_connection_error",
                extra={"method": method, "error_type": type(exc).__name__},
            )
            raise TransportError("http_connection_error") from exc

        return RawResponse(
            status_code=response.status_code,
            status_message=response.reason_phrase,
            headers=tuple(response.headers.multi_items()),
            content=response.content,
        )
