"""
Core JWT decoding logic.

Decodes a JWT token without signature verification and returns the
header, payload, and raw signature as structured data. Structural validity
and cryptographic validity are separate checks; see ``verifier`` for the
latter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from . import base64url, canonical_json
from .errors import DecodeError, JWTError, MalformedTokenError, ParseError

__all__ = [
    "INVALID_FORMAT",
    "DecodedResult",
    "DecodedToken",
    "decode",
    "decode_segment",
    "decode_token",
    "split_token",
]

logger = logging.getLogger(__name__)

INVALID_FORMAT = "Invalid token format"


@dataclass(frozen=True)
class DecodedToken:
    """Holds the three decoded parts of a JWT token."""

    header: dict
    payload: dict
    signature: str


@dataclass(frozen=True)
class DecodedResult:
    """Outcome of :func:`decode`; never raises, always describes the token."""

    header: dict = field(default_factory=dict)
    payload: dict = field(default_factory=dict)
    signature: str = ""
    is_valid: bool = False
    error: str | None = None


def split_token(token: str) -> tuple[str, str, str]:
    """Split a compact token into its three segments.

    Raises:
        MalformedTokenError: If the token does not have exactly 3 parts.
    """
    parts = token.split(".")
    if len(parts) != 3:
        raise MalformedTokenError(INVALID_FORMAT)
    return parts[0], parts[1], parts[2]


def decode_segment(segment: str) -> dict:
    """Decode a single base64url-encoded JWT segment into a dict.

    Raises:
        DecodeError: If the segment is not valid base64url.
        ParseError: If the decoded bytes are not a JSON object.
    """
    return canonical_json.parse(base64url.decode(segment))


def decode(token: str) -> DecodedResult:
    """Decode *token* into header, payload and raw signature.

    Failures are reported through ``is_valid``/``error`` instead of being
    raised; the error text is the underlying message, unchanged.
    """
    try:
        header_b64, payload_b64, signature = split_token(token)
        header = decode_segment(header_b64)
        payload = decode_segment(payload_b64)
    except JWTError as exc:
        logger.debug("Token failed to decode: %s", exc)
        return DecodedResult(is_valid=False, error=str(exc))

    return DecodedResult(
        header=header,
        payload=payload,
        signature=signature,
        is_valid=True,
    )


def decode_token(token: str) -> DecodedToken:
    """
    Decode a JWT token string into its three components.

    The token is split on ``'.'`` and each segment is base64url-decoded.
    Signature verification is **not** performed — this is for inspection only.

    Raises:
        MalformedTokenError: If the token is empty or not three parts.
        DecodeError: If the header or payload is not valid base64url.
        ParseError: If the header or payload is not a JSON object.
    """
    token = token.strip()

    if not token:
        raise MalformedTokenError("Token is empty.")

    header_b64, payload_b64, signature = split_token(token)

    try:
        header = decode_segment(header_b64)
    except (DecodeError, ParseError) as exc:
        raise type(exc)(f"Could not decode header: {exc}") from exc
    try:
        payload = decode_segment(payload_b64)
    except (DecodeError, ParseError) as exc:
        raise type(exc)(f"Could not decode payload: {exc}") from exc

    return DecodedToken(header=header, payload=payload, signature=signature)
