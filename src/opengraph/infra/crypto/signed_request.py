"""Validação do signed_request entregue pela plataforma.

Formato: ``<assinatura base64url>.<payload JSON base64url>``.
A assinatura é HMAC-SHA256 do payload *codificado*, com o app secret
como chave.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import logging
from typing import TYPE_CHECKING, Any

from opengraph.infra.json_codec import JsonCodec
from opengraph.utils.errors import (
    AlgorithmMismatchError,
    ConfigurationError,
    FormatError,
    SignatureInvalidError,
)

if TYPE_CHECKING:
    from opengraph.protocols import JsonCodecProtocol

logger = logging.getLogger(__name__)

EXPECTED_ALGORITHM = "HMAC-SHA256"
_URLSAFE_TO_STANDARD = bytes.maketrans(b"-_", b"+/")


def urlsafe_b64decode(data: str) -> bytes:
    """Decodifica base64 URL-safe restaurando o padding omitido.

    Caracteres fora do alfabeto são rejeitados (FormatError).
    """
    padded = data + "=" * (-len(data) % 4)
    try:
        standard = padded.encode("ascii").translate(_URLSAFE_TO_STANDARD)
        return base64.b64decode(standard, validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise FormatError("invalid_base64") from exc


def compute_signature(payload: str, secret: str) -> bytes:
    """HMAC-SHA256 do payload codificado."""
    return hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).digest()


def parse_signed_request(
    signed_request: str,
    secret: str | None,
    json_codec: JsonCodecProtocol | None = None,
) -> dict[str, Any]:
    """Valida o signed_request e retorna as claims decodificadas.

    Args:
        signed_request: String ``assinatura.payload`` recebida da plataforma
        secret: App secret
        json_codec: Codec JSON do payload (padrão: JsonCodec)

    Raises:
        ConfigurationError: Se secret não estiver configurado
        FormatError: Se a string ou o payload estiverem mal-formados
        AlgorithmMismatchError: Se o algoritmo não for HMAC-SHA256
        SignatureInvalidError: Se a assinatura não conferir

    Returns:
        Claims do payload
    """
    if not secret:
        raise ConfigurationError("secret deve estar configurado")
    if not signed_request:
        raise FormatError("signed_request não informado")

    parts = signed_request.split(".")
    if len(parts) != 2:
        raise FormatError("signed_request_malformed")
    encoded_sig, payload = parts

    signature = urlsafe_b64decode(encoded_sig)
    is_valid = hmac.compare_digest(signature, compute_signature(payload, secret))
    try:
        claims = _decode_claims(payload, json_codec or JsonCodec())
    except FormatError:
        # Payload ilegível com assinatura inválida conta como adulteração
        if not is_valid:
            raise SignatureInvalidError("signature_mismatch") from None
        raise

    algorithm = str(claims.get("algorithm") or "")
    if algorithm.upper() != EXPECTED_ALGORITHM:
        logger.warning("signed_request_algorithm_mismatch", extra={"algorithm": algorithm})
        raise AlgorithmMismatchError(f"algorithm deve ser {EXPECTED_ALGORITHM}")

    if not is_valid:
        logger.warning("signed_request_invalid_signature")
        raise SignatureInvalidError("signature_mismatch")

    return claims


def _decode_claims(payload: str, json_codec: JsonCodecProtocol) -> dict[str, Any]:
    try:
        claims = json_codec.decode(urlsafe_b64decode(payload))
    except ValueError as exc:
        raise FormatError("invalid_payload_json") from exc
    if not isinstance(claims, dict):
        raise FormatError("payload_not_object")
    return claims
