"""Batch requests: várias chamadas lógicas em poucas requisições HTTP.

A plataforma limita o número de sub-requisições por batch (50). Listas
maiores são divididas em lotes consecutivos, enviados em ordem, e as
respostas são recombinadas na ordem original.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Literal, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

from opengraph.api.graph_logging import log_batch_dispatch, log_graph_error
from opengraph.api.params import prepare_params
from opengraph.api.response import GraphResponse, classify_response
from opengraph.utils.errors import ConfigurationError, ProtocolError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable, Iterable, Iterator, Mapping, Sequence

    from opengraph.protocols import Header, JsonCodecProtocol

    Requester = Callable[
        [str, str, Mapping[str, Any] | None, Iterable[Header] | None],
        Awaitable[GraphResponse],
    ]

logger = logging.getLogger(__name__)

DEFAULT_BATCH_LIMIT = 50

T = TypeVar("T")


class BatchItem(BaseModel):
    """Sub-requisição de um batch.

    Campos extras aceitos pela plataforma (name, depends_on,
    omit_response_on_success, attached_files) são preservados.
    """

    model_config = ConfigDict(extra="allow")

    method: Literal["GET", "POST", "DELETE"] = Field(default="GET")
    relative_url: str = Field(..., description="Caminho relativo à raiz da Graph API.")
    body: dict[str, Any] | str | None = Field(
        default=None,
        description="Parâmetros do POST; mapping é convertido para form-urlencoded.",
    )

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


def chunked(items: Sequence[T], size: int) -> Iterator[list[T]]:
    """Divide ``items`` em lotes consecutivos de no máximo ``size``."""
    for start in range(0, len(items), size):
        yield list(items[start : start + size])


class BatchCoordinator:
    """Divide, envia e recombina batch requests.

    Args:
        requester: Primitiva de request do cliente (levanta GraphHttpError
            em respostas não-2xx)
        json_codec: Codec JSON do envelope
        token_getter: Retorna o access_token de nível superior
        batch_limit: Máximo de sub-requisições por lote
    """

    def __init__(
        self,
        requester: Requester,
        json_codec: JsonCodecProtocol,
        token_getter: Callable[[], str | None],
        batch_limit: int = DEFAULT_BATCH_LIMIT,
    ) -> None:
        if batch_limit <= 0:
            raise ConfigurationError("batch_limit deve ser > 0")
        self._requester = requester
        self._json_codec = json_codec
        self._token_getter = token_getter
        self._batch_limit = batch_limit

    @property
    def batch_limit(self) -> int:
        return self._batch_limit

    async def batch_fast(
        self,
        requests: Iterable[BatchItem | Mapping[str, Any]],
        headers: Iterable[Header] | None = None,
    ) -> list[list[Any]]:
        """Envia os lotes e retorna os arrays de resposta sem classificar."""
        return [entries async for _, entries in self._dispatch_chunks(requests, headers)]

    async def batch(
        self,
        requests: Iterable[BatchItem | Mapping[str, Any]],
        headers: Iterable[Header] | None = None,
    ) -> list[GraphResponse]:
        """Envia os lotes e classifica cada sub-resposta, na ordem de entrada.

        Raises:
            ConfigurationError: Se não houver access_token
            GraphHttpError: Na primeira sub-resposta com falha
            ProtocolError: Se a resposta do lote não tiver o formato esperado
        """
        results: list[GraphResponse] = []
        async for items, entries in self._dispatch_chunks(requests, headers):
            for item, entry in zip(items, entries, strict=True):
                response = self._classify_entry(entry)
                if not response.is_success:
                    error = response.to_error()
                    log_graph_error(error.error, item.method, item.relative_url, response.status_code)
                    raise error
                results.append(response)
        logger.debug("graph_batch_completed", extra={"responses": len(results)})
        return results

    async def _dispatch_chunks(
        self,
        requests: Iterable[BatchItem | Mapping[str, Any]],
        headers: Iterable[Header] | None,
    ) -> AsyncIterator[tuple[list[BatchItem], list[Any]]]:
        # Além do header Authorization, a plataforma exige access_token
        # como parâmetro de nível superior do batch.
        token = self._token_getter()
        if not token:
            raise ConfigurationError("access_token de nível superior deve estar configurado")

        items = [self._coerce(request) for request in requests]
        for index, chunk in enumerate(chunked(items, self._batch_limit)):
            log_batch_dispatch(index, len(chunk), len(items))
            envelope = self._json_codec.encode([self._encode_item(item) for item in chunk])
            response = await self._requester(
                "POST",
                "",
                {"access_token": token, "batch": envelope},
                headers,
            )
            entries = response.data
            if not isinstance(entries, list) or len(entries) != len(chunk):
                raise ProtocolError("batch_response_mismatch", raw_body=response.text)
            yield chunk, entries

    @staticmethod
    def _coerce(request: BatchItem | Mapping[str, Any]) -> BatchItem:
        if isinstance(request, BatchItem):
            return request
        return BatchItem.model_validate(dict(request))

    def _encode_item(self, item: BatchItem) -> dict[str, Any]:
        encoded = item.model_dump(exclude_none=True)
        if item.method == "POST" and isinstance(item.body, dict):
            prepared = prepare_params(item.body, self._json_codec)
            encoded["body"] = str(httpx.QueryParams(prepared))
        return encoded

    def _classify_entry(self, entry: Any) -> GraphResponse:
        if not isinstance(entry, dict):
            raise ProtocolError("batch_item_without_response")
        status_code = int(entry.get("code") or 0)
        message = entry.get("message") or httpx.codes.get_reason_phrase(status_code)
        headers = tuple((h["name"], h["value"]) for h in entry.get("headers") or [])
        return classify_response(
            status_code,
            message,
            headers,
            entry.get("body") or "",
            json_codec=self._json_codec,
        )
