"""Montagem e envio das requisições autenticadas à Graph API.

Decide host (API ou upload de vídeo), estratégia de corpo (query string,
form-urlencoded ou multipart) e anexa ``Authorization: OAuth <token>``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import httpx

from opengraph.api.params import has_source, prepare_params, source_to_file

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from opengraph.protocols import Header, JsonCodecProtocol, RawResponse, TransportProtocol

logger = logging.getLogger(__name__)

GRAPH_HOST = "graph.facebook.com"
GRAPH_BETA_HOST = "graph.beta.facebook.com"
GRAPH_VIDEO_HOST = "graph-video.facebook.com"
GRAPH_VIDEO_BETA_HOST = "graph-video.beta.facebook.com"

VIDEO_UPLOAD_SUFFIX = "/videos"
QUERY_METHODS = frozenset({"GET", "DELETE"})
# Recalculados pelo transporte a partir do corpo final
_TRANSPORT_MANAGED_HEADERS = frozenset({"host", "content-length"})


def normalize_headers(headers: Iterable[Header] | Mapping[str, str] | None) -> list[Header]:
    """Cópia dos headers como lista ordenada de pares."""
    if headers is None:
        return []
    if isinstance(headers, Mapping):
        return list(headers.items())
    return list(headers)


class RequestDispatcher:
    """Constrói a requisição final e delega ao transporte."""

    def __init__(
        self,
        transport: TransportProtocol,
        json_codec: JsonCodecProtocol,
        token_getter: Callable[[], str | None],
        *,
        is_beta: bool = False,
        api_version: str = "",
    ) -> None:
        self._transport = transport
        self._json_codec = json_codec
        self._token_getter = token_getter
        self._is_beta = is_beta
        self._api_version = api_version.strip("/")

    def uri(self, path: str | httpx.URL = "") -> httpx.URL:
        """Resolve ``path`` contra o host da Graph API.

        Referências absolutas (http/https) são mantidas.
        """
        if isinstance(path, httpx.URL):
            return path
        if path.startswith(("https://", "http://")):
            return httpx.URL(path)
        host = GRAPH_BETA_HOST if self._is_beta else GRAPH_HOST
        prefix = f"{self._api_version}/" if self._api_version else ""
        return httpx.URL(f"https://{host}/{prefix}{path.lstrip('/')}")

    def video_uri(self, path: str = "") -> httpx.URL:
        """URI no host dedicado a upload de vídeo."""
        host = GRAPH_VIDEO_BETA_HOST if self._is_beta else GRAPH_VIDEO_HOST
        return self.uri(path).copy_with(host=host)

    def build_request(
        self,
        method: str,
        path_or_uri: str | httpx.URL,
        params: Mapping[str, Any] | None = None,
        headers: Iterable[Header] | Mapping[str, str] | None = None,
    ) -> httpx.Request:
        """Monta a requisição sem enviá-la."""
        method = method.upper()
        url = self.uri(path_or_uri)
        merged = {**dict(url.params.items()), **dict(params or {})}
        prepared = prepare_params(merged, self._json_codec)

        request_headers = normalize_headers(headers)
        token = self._token_getter()
        if token:
            request_headers.append(("Authorization", f"OAuth {token}"))

        with_source = has_source(prepared)
        if with_source and url.path.endswith(VIDEO_UPLOAD_SUFFIX):
            url = url.copy_with(host=self.video_uri().host)

        if method in QUERY_METHODS:
            return httpx.Request(method, url.copy_with(params=prepared), headers=request_headers)

        url = url.copy_with(query=None)
        if with_source:
            upload = source_to_file(prepared.pop("source"))
            return httpx.Request(
                method,
                url,
                headers=request_headers,
                data=prepared,
                files={"source": upload.as_upload()},
            )
        return httpx.Request(method, url, headers=request_headers, data=prepared)

    async def dispatch(
        self,
        method: str,
        path_or_uri: str | httpx.URL,
        params: Mapping[str, Any] | None = None,
        headers: Iterable[Header] | Mapping[str, str] | None = None,
    ) -> RawResponse:
        """Monta a requisição e retorna a resposta bruta do transporte."""
        request = self.build_request(method, path_or_uri, params, headers)
        content = request.read()
        forwarded = [
            (name, value)
            for name, value in request.headers.multi_items()
            if name.lower() not in _TRANSPORT_MANAGED_HEADERS
        ]
        logger.debug(
            "graph_request_dispatch",
            extra={"method": request.method, "host": request.url.host, "path": request.url.path},
        )
        return await self._transport.send(request.method, str(request.url), forwarded, content)
