"""Fluxos OAuth: token de app, troca de code por token de usuário e URL
do diálogo de autorização.

A resposta de ``/oauth/access_token`` vem como query string
(``access_token=...&expires=...``), não JSON.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from opengraph.infra.json_codec import JsonCodec
from opengraph.utils.errors import ConfigurationError, FormatError, ProtocolError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from opengraph.api.credentials import Credentials
    from opengraph.api.response import GraphResponse
    from opengraph.protocols import JsonCodecProtocol

    RawRequester = Callable[[str, str, Mapping[str, Any]], Awaitable[GraphResponse]]

logger = logging.getLogger(__name__)

TOKEN_PATH = "/oauth/access_token"
DIALOG_HOST = "www.facebook.com"
DIALOG_BETA_HOST = "www.beta.facebook.com"


@dataclass(frozen=True)
class TokenResult:
    """Token obtido em /oauth/access_token."""

    access_token: str = field(repr=False)
    expires: int | None = None
    token_type: str | None = None
    raw_body: str = field(default="", repr=False, compare=False)


def parse_token_response(body: str, json_codec: JsonCodecProtocol | None = None) -> TokenResult:
    """Converte o corpo da resposta de token em TokenResult.

    Aceita query string (formato legado) e objeto JSON (``expires_in``).

    Raises:
        FormatError: Se o corpo não puder ser interpretado
        ProtocolError: Se ``access_token`` estiver ausente
    """
    text = body.strip()
    if text.startswith("{"):
        try:
            decoded = (json_codec or JsonCodec()).decode(text)
        except ValueError as exc:
            raise FormatError("token_response_invalid_json") from exc
        values: dict[str, Any] = dict(decoded) if isinstance(decoded, Mapping) else {}
        if "expires" not in values and "expires_in" in values:
            values["expires"] = values["expires_in"]
    else:
        values = dict(httpx.QueryParams(text).items())

    access_token = values.get("access_token")
    if not access_token:
        raise ProtocolError(f"não foi possível obter access_token: {body}", raw_body=body)

    expires = values.get("expires")
    try:
        expires_int = int(expires) if expires not in (None, "") else None
    except (TypeError, ValueError) as exc:
        raise FormatError("token_response_invalid_expires") from exc

    return TokenResult(
        access_token=str(access_token),
        expires=expires_int,
        token_type=values.get("token_type"),
        raw_body=body,
    )


class TokenExchanger:
    """Executa os fluxos de obtenção de token.

    Args:
        requester: Primitiva de request sem decodificação JSON do corpo
        credentials: Credenciais do app
        json_codec: Codec JSON (respostas de token em JSON)
    """

    def __init__(
        self,
        requester: RawRequester,
        credentials: Credentials,
        json_codec: JsonCodecProtocol,
    ) -> None:
        self._requester = requester
        self._credentials = credentials
        self._json_codec = json_codec

    async def exchange_token(self, extra_params: Mapping[str, Any]) -> TokenResult:
        """GET em /oauth/access_token com client_id e client_secret."""
        params = {
            **extra_params,
            "client_id": self._credentials.app_id,
            "client_secret": self._credentials.secret,
        }
        response = await self._requester("GET", TOKEN_PATH, params)
        return parse_token_response(response.text, self._json_codec)

    async def get_app_token(self) -> TokenResult:
        """Token de app (grant_type=client_credentials).

        Raises:
            ConfigurationError: Se app_id ou secret não estiverem configurados
        """
        if not (self._credentials.app_id and self._credentials.secret):
            raise ConfigurationError("app_id e secret devem estar configurados")
        result = await self.exchange_token({"grant_type": "client_credentials"})
        logger.info(
            "graph_token_exchanged",
            extra={"grant": "client_credentials", "has_expires": result.expires is not None},
        )
        return result

    async def get_user_token_by_code(self, code: str) -> TokenResult:
        """Troca o ``code`` do diálogo OAuth por token de usuário.

        Raises:
            ValueError: Se code vazio
            ConfigurationError: Se redirect_uri não estiver configurado
            ProtocolError: Se a resposta não trouxer ``expires``
        """
        if not code:
            raise ValueError("code é obrigatório")
        if not self._credentials.redirect_uri:
            raise ConfigurationError("redirect_uri deve estar configurado")

        result = await self.exchange_token(
            {"redirect_uri": self._credentials.redirect_uri, "code": code}
        )
        if result.expires is None:
            raise ProtocolError("expires não retornado", raw_body=result.raw_body)
        logger.info(
            "graph_token_exchanged",
            extra={"grant": "authorization_code", "has_expires": True},
        )
        return result


def build_auth_uri(
    credentials: Credentials,
    params: Mapping[str, Any] | None = None,
    *,
    is_beta: bool = False,
) -> str:
    """URL do diálogo OAuth para autorização do usuário.

    Args:
        credentials: Credenciais com app_id e redirect_uri
        params: Parâmetros extras (scope como string ou lista, state, display...)
        is_beta: Usa o tier beta

    Raises:
        ConfigurationError: Se redirect_uri ou app_id ausentes
        ValueError: Se scope não for string nem lista
    """
    if not (credentials.redirect_uri and credentials.app_id):
        raise ConfigurationError("redirect_uri e app_id devem estar configurados")

    query = dict(params or {})
    scope = query.get("scope")
    if isinstance(scope, (list, tuple)):
        query["scope"] = ",".join(scope)
    elif scope is not None and not isinstance(scope, str):
        raise ValueError("scope deve ser string ou lista")

    query["redirect_uri"] = credentials.redirect_uri
    query["client_id"] = credentials.app_id
    query["display"] = query.get("display") or "page"

    host = DIALOG_BETA_HOST if is_beta else DIALOG_HOST
    return str(httpx.URL(f"https://{host}/dialog/oauth/", params=query))
