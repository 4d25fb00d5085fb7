"""Settings do cliente Graph API.

Carregadas de variáveis de ambiente. Credenciais nunca aparecem em logs.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache

GRAPH_API_VERSION: str = ""  # vazio = endpoint sem versão explícita
DEFAULT_BATCH_LIMIT: int = 50


@dataclass(frozen=True)
class GraphSettings:
    """Configurações do cliente Graph API.

    Attributes:
        app_id: ID do app
        app_secret: App secret
        access_token: Token de acesso inicial
        redirect_uri: Callback do diálogo OAuth
        namespace: Namespace do app (Open Graph actions)
        api_version: Versão da Graph API (ex: v24.0); vazio usa a padrão
        is_beta: Usa o tier beta da plataforma
        batch_limit: Máximo de sub-requisições por batch
        request_timeout_seconds: Timeout das requisições HTTP
        verify_ssl: Valida certificados TLS
    """

    # Credenciais
    app_id: str = ""
    app_secret: str = field(default="", repr=False)
    access_token: str = field(default="", repr=False)
    redirect_uri: str = ""
    namespace: str = ""

    # API
    api_version: str = GRAPH_API_VERSION
    is_beta: bool = False
    batch_limit: int = DEFAULT_BATCH_LIMIT

    # HTTP
    request_timeout_seconds: float = 30.0
    verify_ssl: bool = True

    def validate(self) -> list[str]:
        """Valida configurações mínimas.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if self.batch_limit <= 0:
            errors.append("FACEBOOK_BATCH_LIMIT deve ser > 0")

        if self.request_timeout_seconds <= 0:
            errors.append("FACEBOOK_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.app_secret and not self.app_id:
            errors.append("FACEBOOK_APP_ID não configurado")

        return errors


def _parse_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


def _load_from_env() -> GraphSettings:
    """Carrega GraphSettings a partir de variáveis de ambiente."""
    return GraphSettings(
        app_id=os.getenv("FACEBOOK_APP_ID", ""),
        app_secret=os.getenv("FACEBOOK_APP_SECRET", ""),
        access_token=os.getenv("FACEBOOK_ACCESS_TOKEN", ""),
        redirect_uri=os.getenv("FACEBOOK_REDIRECT_URI", ""),
        namespace=os.getenv("FACEBOOK_NAMESPACE", ""),
        api_version=os.getenv("FACEBOOK_API_VERSION", GRAPH_API_VERSION),
        is_beta=_parse_bool(os.getenv("FACEBOOK_IS_BETA", "")),
        batch_limit=int(os.getenv("FACEBOOK_BATCH_LIMIT", str(DEFAULT_BATCH_LIMIT))),
        request_timeout_seconds=float(os.getenv("FACEBOOK_REQUEST_TIMEOUT_SECONDS", "30")),
        verify_ssl=_parse_bool(os.getenv("FACEBOOK_VERIFY_SSL", "true")),
    )


@lru_cache(maxsize=1)
def get_graph_settings() -> GraphSettings:
    """Retorna instância cacheada de GraphSettings."""
    return _load_from_env()
