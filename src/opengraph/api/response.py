"""Classificação de respostas da Graph API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from opengraph.api.graph_errors import ErrorInfo, error_from_status, parse_graph_error
from opengraph.infra.json_codec import JsonCodec
from opengraph.utils.errors import GraphHttpError, ProtocolError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from opengraph.protocols import Header, JsonCodecProtocol

NOT_MODIFIED = 304


@dataclass(frozen=True, slots=True)
class GraphResponse:
    """Resultado estruturado de uma chamada (ou sub-chamada de batch)."""

    status_code: int
    status_message: str
    headers: tuple[Header, ...]
    content: bytes
    data: Any = None
    error: ErrorInfo | None = None

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_modified(self) -> bool:
        """False apenas para 304 (GET condicional com ETag)."""
        return self.status_code != NOT_MODIFIED

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    @property
    def etag(self) -> str | None:
        return self.header("ETag")

    def header(self, name: str) -> str | None:
        """Primeiro valor do header (case-insensitive)."""
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return None

    def to_error(self) -> GraphHttpError:
        """Converte a resposta de falha em GraphHttpError."""
        error = self.error or error_from_status(self.status_code, self.status_message)
        return GraphHttpError(
            f"Graph API error: {error}",
            status_code=self.status_code,
            error=error,
            is_retryable=not error.is_permanent,
        )


def classify_response(
    status_code: int,
    status_message: str,
    headers: Iterable[Header],
    body: bytes | str | None,
    *,
    decode: bool = True,
    json_codec: JsonCodecProtocol | None = None,
) -> GraphResponse:
    """Interpreta o resultado bruto do transporte.

    Args:
        status_code: Status HTTP
        status_message: Reason phrase
        headers: Pares (nome, valor)
        body: Corpo bruto
        decode: Se False, mantém o corpo de sucesso sem decodificar JSON
        json_codec: Codec JSON (padrão: JsonCodec)

    Raises:
        ProtocolError: Se status 2xx com corpo que não é JSON válido

    Returns:
        GraphResponse com ``data`` decodificado e ``error`` em caso de falha
    """
    content = body.encode("utf-8") if isinstance(body, str) else (body or b"")
    is_success = 200 <= status_code < 300

    data = None
    # Corpo de erro é sempre decodificado para preservar o objeto ``error``
    if (decode or not is_success) and content.strip():
        codec = json_codec or JsonCodec()
        try:
            data = codec.decode(content)
        except ValueError as exc:
            if is_success:
                raise ProtocolError(
                    "response_not_json",
                    raw_body=content.decode("utf-8", errors="replace"),
                ) from exc

    error = None
    if not is_success and status_code != NOT_MODIFIED:
        error = parse_graph_error(data) or error_from_status(status_code, status_message)

    return GraphResponse(
        status_code=status_code,
        status_message=status_message,
        headers=tuple(headers),
        content=content,
        data=data,
        error=error,
    )
