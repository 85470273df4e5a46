"""
Token generation: header + payload + HMAC signature in compact form.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Mapping

from . import base64url, canonical_json, hmac_engine
from .duration import parse_duration
from .errors import InvalidPayloadJsonError, ParseError

__all__ = [
    "GenerateOptions",
    "generate",
    "generate_with_options",
    "load_payload",
    "now_ms",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerateOptions:
    """Optional signing settings; ``None`` means "use the default"."""

    algorithm: str | None = None
    expires_in: str | None = None


def now_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def load_payload(payload: Mapping[str, Any] | str) -> dict[str, Any]:
    """Return a private copy of *payload*, parsing it first if it is JSON text.

    Raises:
        InvalidPayloadJsonError: If the text is not a JSON object.
    """
    if isinstance(payload, str):
        try:
            return canonical_json.parse(payload)
        except ParseError as exc:
            raise InvalidPayloadJsonError(f"Invalid JSON in custom payload: {exc}") from exc
    return dict(payload)


def generate(
    payload: Mapping[str, Any] | str,
    secret: bytes | str,
    *,
    algorithm: str | None = None,
    expires_in: str | None = None,
    now: int | None = None,
) -> str:
    """Build and sign a compact JWT.

    *payload* is a mapping of claims or raw JSON text. When *expires_in* is
    given, ``exp`` is set to ``now + duration`` (whole seconds, rounded
    down), replacing any ``exp`` already present. *now* is in milliseconds
    and defaults to the current time. The caller's mapping is never modified.

    Raises:
        InvalidPayloadJsonError: If the payload text or a claim value is not
            valid JSON.
        UnsupportedAlgorithmError: If *algorithm* is not HS256/HS384/HS512.
        InvalidDurationError: If *expires_in* cannot be parsed.
    """
    claims = load_payload(payload)

    if expires_in:
        current = now_ms() if now is None else now
        claims["exp"] = (current + parse_duration(expires_in)) // 1000

    alg = hmac_engine.validate_algorithm(algorithm or hmac_engine.DEFAULT_ALGORITHM)

    header = {"alg": alg, "typ": "JWT"}
    try:
        payload_json = canonical_json.serialize(claims)
    except (TypeError, ValueError) as exc:
        raise InvalidPayloadJsonError(f"Payload is not JSON-serializable: {exc}") from exc

    signing_input = (
        base64url.encode(canonical_json.serialize(header))
        + "."
        + base64url.encode(payload_json)
    )
    signature = hmac_engine.sign(alg, secret, signing_input.encode("ascii"))

    logger.debug("Generated %s token with %d claim(s)", alg, len(claims))
    return signing_input + "." + base64url.encode(signature)


def generate_with_options(
    payload: Mapping[str, Any] | str,
    secret: bytes | str,
    options: GenerateOptions | None = None,
) -> str:
    """Same as :func:`generate`, taking the settings as one options object."""
    options = options or GenerateOptions()
    return generate(
        payload,
        secret,
        algorithm=options.algorithm,
        expires_in=options.expires_in,
    )
