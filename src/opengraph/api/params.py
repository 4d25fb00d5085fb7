"""Preparação de parâmetros para o formato de envio da Graph API.

Valores aceitos formam uma variante fechada: escalar, lista, mapping ou
FileRef (referência a arquivo para upload).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeAlias

from opengraph.api.fields import encode_fields
from opengraph.infra.json_codec import JsonCodec
from opengraph.utils.errors import ParameterEncodingError

if TYPE_CHECKING:
    from opengraph.protocols import JsonCodecProtocol

Scalar: TypeAlias = str | bytes | int | float | bool | None
ParamValue: TypeAlias = "Scalar | FileRef | list[ParamValue] | Mapping[str, ParamValue]"


@dataclass(frozen=True, slots=True)
class FileRef:
    """Arquivo a ser enviado no parâmetro ``source``.

    Attributes:
        path: Caminho no disco (ignorado se ``content`` for informado)
        filename: Nome enviado no multipart (padrão: nome do arquivo)
        content: Bytes do arquivo, para uploads sem arquivo em disco
        content_type: MIME type opcional
    """

    path: str | Path | None = None
    filename: str | None = None
    content: bytes | None = None
    content_type: str | None = None

    def read(self) -> bytes:
        if self.content is not None:
            return self.content
        if self.path is None:
            raise ValueError("FileRef sem path nem content")
        return Path(self.path).read_bytes()

    @property
    def upload_name(self) -> str:
        if self.filename:
            return self.filename
        return Path(self.path).name if self.path is not None else "source"

    def as_upload(self) -> tuple[str, bytes] | tuple[str, bytes, str]:
        """Tupla no formato de ``files`` do httpx."""
        if self.content_type:
            return (self.upload_name, self.read(), self.content_type)
        return (self.upload_name, self.read())


def _encode_text(value: Any) -> Any:
    match value:
        case bytes():
            try:
                return value.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise ParameterEncodingError("parameter_not_utf8") from exc
        case list() | tuple():
            return [_encode_text(item) for item in value]
        case Mapping():
            return {_encode_text(k): _encode_text(v) for k, v in value.items()}
        case _:
            return value


def prepare_params(
    params: Mapping[str, Any] | None,
    json_codec: JsonCodecProtocol | None = None,
) -> dict[str, Any]:
    """Normaliza parâmetros para envio.

    - textos em UTF-8, recursivamente
    - ``permissions`` em lista vira string separada por vírgula
    - ``source`` vira lista de um elemento (marca de arquivo)
    - ``fields`` é codificado com field expansion
    - ``object`` e demais mappings de primeiro nível viram JSON

    O mapping de entrada não é alterado.

    Raises:
        ParameterEncodingError: Se algum valor bytes não for UTF-8 válido
    """
    codec = json_codec or JsonCodec()
    prepared: dict[str, Any] = _encode_text(dict(params or {}))

    perms = prepared.get("permissions")
    if isinstance(perms, list):
        prepared["permissions"] = ",".join(str(p) for p in perms)

    source = prepared.get("source")
    if source and not isinstance(source, list):
        prepared["source"] = [source]

    if prepared.get("fields") is not None:
        prepared["fields"] = encode_fields(prepared["fields"])

    for key, value in prepared.items():
        if isinstance(value, Mapping):
            prepared[key] = codec.encode(value)

    return prepared


def has_source(params: Mapping[str, Any]) -> bool:
    """True se os parâmetros (já preparados) carregam arquivo em ``source``."""
    return bool(params.get("source"))


def source_to_file(source: list[Any]) -> FileRef:
    """Converte o valor preparado de ``source`` em FileRef.

    Aceita ``[FileRef]``, ``[path]`` ou ``[path, filename]``.
    """
    first = source[0]
    if isinstance(first, FileRef):
        return first
    filename = source[1] if len(source) > 1 else None
    return FileRef(path=first, filename=filename)
