"""Cliente da Graph API.

Orquestra preparação de parâmetros, envio autenticado, classificação de
respostas, batch requests, fluxos OAuth e validação de signed_request.

Uso:
    client = GraphClient(Credentials(app_id="123", secret="s3cr3t"))
    token = await client.get_app_token()
    client.set_access_token(token.access_token)
    me = await client.fetch("/me", {"fields": ["id", "name"]})

Concorrência: cada operação aguarda suas chamadas em sequência.
set_access_token não é seguro para chamadores concorrentes que
compartilham a mesma instância.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from opengraph.api.batch import DEFAULT_BATCH_LIMIT, BatchCoordinator
from opengraph.api.credentials import Credentials
from opengraph.api.dispatcher import RequestDispatcher, normalize_headers
from opengraph.api.graph_logging import log_graph_error, log_success
from opengraph.api.oauth import TokenExchanger, TokenResult, build_auth_uri
from opengraph.api.response import GraphResponse, classify_response
from opengraph.config.logging import log_fallback
from opengraph.config.settings import GraphSettings, get_graph_settings
from opengraph.infra.crypto import parse_signed_request
from opengraph.infra.http import HttpClientConfig, HttpTransport
from opengraph.infra.json_codec import JsonCodec
from opengraph.utils.errors import ConfigurationError, GraphHttpError

if TYPE_CHECKING:
    from collections.abc import Iterable

    import httpx

    from opengraph.api.batch import BatchItem
    from opengraph.protocols import Header, JsonCodecProtocol, TransportProtocol

logger = logging.getLogger(__name__)


@dataclass
class GraphClientOptions:
    """Colaboradores e limites do cliente.

    Attributes:
        transport: Transporte HTTP (padrão: HttpTransport com http_config)
        json_codec: Codec JSON (padrão: JsonCodec)
        batch_limit: Máximo de sub-requisições por batch
        is_beta: Usa o tier beta da plataforma
        api_version: Prefixo de versão (ex: v24.0); vazio usa a padrão
        http_config: Configuração do HttpTransport padrão
    """

    transport: TransportProtocol | None = None
    json_codec: JsonCodecProtocol | None = None
    batch_limit: int = DEFAULT_BATCH_LIMIT
    is_beta: bool = False
    api_version: str = ""
    http_config: HttpClientConfig | None = None


class GraphClient:
    """Cliente assíncrono da Graph API."""

    def __init__(
        self,
        credentials: Credentials | None = None,
        options: GraphClientOptions | None = None,
    ) -> None:
        opts = options or GraphClientOptions()
        if opts.batch_limit <= 0:
            raise ConfigurationError("batch_limit deve ser > 0")

        self._credentials = credentials or Credentials()
        self._options = opts
        self._json_codec = opts.json_codec or JsonCodec()
        self._transport = opts.transport or HttpTransport(opts.http_config)
        self._dispatcher = RequestDispatcher(
            self._transport,
            self._json_codec,
            self._current_token,
            is_beta=opts.is_beta,
            api_version=opts.api_version,
        )
        self._batch = BatchCoordinator(
            self.request,
            self._json_codec,
            self._current_token,
            batch_limit=opts.batch_limit,
        )

    # ------------------------------------------------------------------
    # Estado
    # ------------------------------------------------------------------

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def access_token(self) -> str:
        return self._credentials.access_token

    @property
    def batch_limit(self) -> int:
        return self._batch.batch_limit

    @property
    def is_beta(self) -> bool:
        return self._options.is_beta

    def set_access_token(self, token: str) -> None:
        """Substitui o access_token usado nas próximas chamadas."""
        self._credentials = replace(self._credentials, access_token=token)

    def _current_token(self) -> str | None:
        return self._credentials.access_token or None

    def uri(self, path: str = "") -> httpx.URL:
        return self._dispatcher.uri(path)

    def video_uri(self, path: str = "") -> httpx.URL:
        return self._dispatcher.video_uri(path)

    async def aclose(self) -> None:
        """Fecha o transporte, se ele mantiver conexões abertas."""
        close = getattr(self._transport, "aclose", None)
        if close is not None:
            await close()

    # ------------------------------------------------------------------
    # Primitiva de request
    # ------------------------------------------------------------------

    async def request(
        self,
        method: str,
        path: str | httpx.URL,
        params: Mapping[str, Any] | None = None,
        headers: Iterable[Header] | Mapping[str, str] | None = None,
        *,
        decode: bool = True,
    ) -> GraphResponse:
        """Envia a requisição e classifica a resposta.

        304 (não modificado) não é tratado como erro.

        Raises:
            GraphHttpError: Se status não-2xx (exceto 304)
            ProtocolError: Se 2xx com corpo que não é JSON (decode=True)
            TransportError: Se houver falha de rede
        """
        method = method.upper()
        raw = await self._dispatcher.dispatch(method, path, params, headers)
        response = classify_response(
            raw.status_code,
            raw.status_message,
            raw.headers,
            raw.content,
            decode=decode,
            json_codec=self._json_codec,
        )
        log_path = self._dispatcher.uri(path).path
        if not response.is_success and response.is_modified:
            error = response.to_error()
            if error.error is not None:
                log_graph_error(error.error, method, log_path, response.status_code)
            raise error

        log_success(method, log_path, response.status_code)
        return response

    async def _raw_request(
        self,
        method: str,
        path: str,
        params: Mapping[str, Any],
    ) -> GraphResponse:
        return await self.request(method, path, params, decode=False)

    async def get(
        self,
        path: str | httpx.URL,
        params: Mapping[str, Any] | None = None,
        headers: Iterable[Header] | Mapping[str, str] | None = None,
    ) -> Any:
        """GET e retorna o corpo decodificado."""
        return (await self.request("GET", path, params, headers)).data

    async def post(
        self,
        path: str | httpx.URL,
        params: Mapping[str, Any] | None = None,
        headers: Iterable[Header] | Mapping[str, str] | None = None,
    ) -> Any:
        """POST e retorna o corpo decodificado."""
        return (await self.request("POST", path, params, headers)).data

    async def fetch(
        self,
        path: str | httpx.URL,
        params: Mapping[str, Any] | None = None,
        headers: Iterable[Header] | Mapping[str, str] | None = None,
    ) -> Any:
        return await self.get(path, params, headers)

    async def publish(
        self,
        path: str | httpx.URL,
        params: Mapping[str, Any] | None = None,
        headers: Iterable[Header] | Mapping[str, str] | None = None,
    ) -> Any:
        return await self.post(path, params, headers)

    async def fetch_with_etag(
        self,
        path: str,
        params: Mapping[str, Any] | None,
        etag: str,
    ) -> Any | None:
        """GET condicional: retorna None se o recurso não mudou (304)."""
        response = await self.request("GET", path, params, [("If-None-Match", etag)])
        return response.data if response.is_modified else None

    async def delete_object(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        headers: Iterable[Header] | Mapping[str, str] | None = None,
    ) -> Any:
        """DELETE; se rejeitado, repete uma vez como POST com method=delete."""
        params = dict(params or {})
        header_list = normalize_headers(headers)
        try:
            return (await self.request("DELETE", path, params, header_list)).data
        except GraphHttpError as exc:
            log_fallback(logger, "delete_object", reason="delete_rejected", status_code=exc.status_code)
        return await self.post(path, {**params, "method": "delete"}, header_list)

    async def delete(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        headers: Iterable[Header] | Mapping[str, str] | None = None,
    ) -> Any:
        return await self.delete_object(path, params, headers)

    # ------------------------------------------------------------------
    # Batch
    # ------------------------------------------------------------------

    async def batch(
        self,
        requests: Iterable[BatchItem | Mapping[str, Any]],
        headers: Iterable[Header] | None = None,
    ) -> list[GraphResponse]:
        """Batch request; respostas na mesma ordem dos pedidos."""
        return await self._batch.batch(requests, headers)

    async def batch_fast(
        self,
        requests: Iterable[BatchItem | Mapping[str, Any]],
        headers: Iterable[Header] | None = None,
    ) -> list[list[Any]]:
        """Batch request sem classificar sub-respostas (um array por lote)."""
        return await self._batch.batch_fast(requests, headers)

    async def bulk_fetch(self, paths: Iterable[str]) -> list[GraphResponse]:
        """GET de vários caminhos via batch."""
        return await self.batch([{"method": "GET", "relative_url": path} for path in paths])

    # ------------------------------------------------------------------
    # OAuth e signed_request
    # ------------------------------------------------------------------

    def _token_exchanger(self) -> TokenExchanger:
        return TokenExchanger(self._raw_request, self._credentials, self._json_codec)

    async def get_app_token(self) -> TokenResult:
        return await self._token_exchanger().get_app_token()

    async def get_user_token_by_code(self, code: str) -> TokenResult:
        return await self._token_exchanger().get_user_token_by_code(code)

    def auth_uri(self, params: Mapping[str, Any] | None = None) -> str:
        return build_auth_uri(self._credentials, params, is_beta=self._options.is_beta)

    def parse_signed_request(self, signed_request: str, secret: str | None = None) -> dict[str, Any]:
        """Valida signed_request com ``secret`` (padrão: secret do app)."""
        return parse_signed_request(
            signed_request,
            secret or self._credentials.secret,
            self._json_codec,
        )

    # ------------------------------------------------------------------
    # Atalhos de plataforma
    # ------------------------------------------------------------------

    async def publish_action(
        self,
        action: str,
        params: Mapping[str, Any] | None = None,
        headers: Iterable[Header] | Mapping[str, str] | None = None,
    ) -> Any:
        """Publica uma Open Graph action em /me/{namespace}:{action}."""
        if not self._credentials.namespace:
            raise ConfigurationError("namespace deve estar configurado")
        return await self.publish(f"/me/{self._credentials.namespace}:{action}", params, headers)

    async def create_test_users(
        self,
        settings: Mapping[str, Any] | Iterable[Mapping[str, Any]],
    ) -> list[GraphResponse]:
        """Cria test users do app via batch (um POST por configuração)."""
        if not self._credentials.app_id:
            raise ConfigurationError("app_id deve estar configurado")
        settings_list = [settings] if isinstance(settings, Mapping) else list(settings)
        relative_url = f"/{self._credentials.app_id}/accounts/test-users"
        return await self.batch(
            [
                {"method": "POST", "relative_url": relative_url, "body": dict(setting)}
                for setting in settings_list
            ]
        )

    async def check_object(self, target: str) -> Any:
        """Força o re-scrape de um objeto (URL ou ID)."""
        return await self.publish("", {"id": target, "scrape": "true"})

    async def fql(
        self,
        query: str,
        headers: Iterable[Header] | Mapping[str, str] | None = None,
    ) -> Any:
        return await self.get("/fql", {"q": query}, headers)

    async def bulk_fql(
        self,
        queries: Mapping[str, str],
        headers: Iterable[Header] | Mapping[str, str] | None = None,
    ) -> Any:
        """FQL multi-query: ``{"nome": "SELECT ..."}``."""
        return await self.fql(self._json_codec.encode(dict(queries)), headers)


def create_graph_client(
    settings: GraphSettings | None = None,
    transport: TransportProtocol | None = None,
) -> GraphClient:
    """Factory para criar cliente a partir de GraphSettings.

    Args:
        settings: GraphSettings opcional. Se None, carrega do ambiente.
        transport: Transporte opcional (testes, transporte customizado).

    Raises:
        ConfigurationError: Se as settings forem inválidas.
    """
    graph = settings or get_graph_settings()
    errors = graph.validate()
    if errors:
        raise ConfigurationError("; ".join(errors))

    credentials = Credentials(
        app_id=graph.app_id,
        secret=graph.app_secret,
        access_token=graph.access_token,
        redirect_uri=graph.redirect_uri,
        namespace=graph.namespace,
    )
    options = GraphClientOptions(
        transport=transport,
        batch_limit=graph.batch_limit,
        is_beta=graph.is_beta,
        api_version=graph.api_version,
        http_config=HttpClientConfig(
            timeout_seconds=graph.request_timeout_seconds,
            verify_ssl=graph.verify_ssl,
        ),
    )
    logger.debug(
        "graph_client_created",
        extra={"is_beta": graph.is_beta, "batch_limit": graph.batch_limit},
    )
    return GraphClient(credentials, options)
