"""Validação de artefatos assinados pela plataforma (signed_request)."""

from .signed_request import (
    EXPECTED_ALGORITHM,
    compute_signature,
    parse_signed_request,
    urlsafe_b64decode,
)

__all__ = [
    "EXPECTED_ALGORITHM",
    "compute_signature",
    "parse_signed_request",
    "urlsafe_b64decode",
]
