"""
Signature verification for HMAC-signed tokens.

Only the signature is checked. ``exp`` and ``nbf`` are informational here;
use ``claims.is_expired`` to display them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from . import base64url, hmac_engine
from .decoder import decode_segment, split_token
from .errors import DecodeError, JWTError, MissingCredentialsError, SignatureMismatchError

__all__ = [
    "CREDENTIALS_REQUIRED",
    "SIGNATURE_FAILED",
    "VerificationResult",
    "check_signature",
    "verify",
]

logger = logging.getLogger(__name__)

CREDENTIALS_REQUIRED = "Token and secret key are required"
SIGNATURE_FAILED = "signature verification failed"


@dataclass(frozen=True)
class VerificationResult:
    verified: bool
    error: str | None = None


def check_signature(token: str, secret: bytes | str) -> dict:
    """Verify *token* against *secret* and return its payload.

    Raises:
        MissingCredentialsError: If the token or the secret is empty.
        MalformedTokenError: If the token does not have three segments.
        DecodeError / ParseError: If the header or payload cannot be decoded.
        UnsupportedAlgorithmError: If the header's ``alg`` is not supported.
        InvalidKeyError: If a text secret cannot be encoded as UTF-8.
        SignatureMismatchError: If the signature does not match.
    """
    if not token or not secret:
        raise MissingCredentialsError(CREDENTIALS_REQUIRED)

    header_b64, payload_b64, signature_b64 = split_token(token)
    header = decode_segment(header_b64)
    algorithm = hmac_engine.validate_algorithm(header.get("alg"))

    # Segments outside the alphabet can never match and may not be encodable
    if not base64url.is_base64url(payload_b64):
        raise DecodeError(
            "Invalid base64url string: contains characters outside the URL-safe alphabet"
        )
    if not base64url.is_base64url(signature_b64):
        raise SignatureMismatchError(SIGNATURE_FAILED)

    signing_input = f"{header_b64}.{payload_b64}".encode("ascii")
    expected = base64url.encode(hmac_engine.sign(algorithm, secret, signing_input))

    if not hmac_engine.verify_equal(expected.encode("ascii"), signature_b64.encode("ascii")):
        raise SignatureMismatchError(SIGNATURE_FAILED)

    return decode_segment(payload_b64)


def verify(token: str, secret: bytes | str) -> VerificationResult:
    """Check the signature of *token* and report the outcome.

    Never raises for bad input; the reason is returned in ``error``.
    """
    try:
        check_signature(token, secret)
    except JWTError as exc:
        logger.debug("Verification failed: %s", exc)
        return VerificationResult(verified=False, error=str(exc))

    logger.debug("Signature verified")
    return VerificationResult(verified=True)
