"""Credenciais do app na plataforma."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Credentials:
    """Credenciais imutáveis do cliente.

    O access_token pode ser rotacionado pelo cliente dono da instância
    (GraphClient.set_access_token), que substitui sua própria cópia.

    Attributes:
        app_id: ID do app
        secret: App secret (HMAC do signed_request, troca de token)
        access_token: Token de usuário, app ou página
        redirect_uri: URI de callback do OAuth
        namespace: Namespace do app (Open Graph actions)
    """

    app_id: str = ""
    secret: str = field(default="", repr=False)
    access_token: str = field(default="", repr=False)
    redirect_uri: str = ""
    namespace: str = ""
