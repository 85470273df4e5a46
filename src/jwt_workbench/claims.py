"""
Helpers for working with claims.

- time-claim display (``exp``, ``iat``, ``nbf``)
- building a payload from individually typed claims
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable

from . import canonical_json
from .errors import InvalidPayloadJsonError, ParseError

__all__ = [
    "CLAIM_TYPES",
    "INVALID_DATE",
    "TIME_CLAIM_LABELS",
    "ClaimSpec",
    "TimeClaim",
    "build_payload",
    "coerce_claim_value",
    "format_timestamp",
    "is_expired",
    "time_claims",
]

logger = logging.getLogger(__name__)

CLAIM_TYPES = ("string", "number", "boolean", "object")

INVALID_DATE = "Invalid Date"

TIME_CLAIM_LABELS = {
    "exp": "Expires at",
    "iat": "Issued at",
    "nbf": "Not before",
}


# ---------------------------------------------------------------------------
# Time claims
# ---------------------------------------------------------------------------

def is_expired(exp: float | None = None, *, now: int | None = None) -> bool:
    """Return True once *exp* (seconds) has been reached.

    A missing or zero *exp* never expires. *now* is in milliseconds and
    defaults to the current time. The boundary ``exp * 1000 == now`` counts
    as expired.
    """
    if not exp:
        return False
    current = time.time_ns() // 1_000_000 if now is None else now
    return current >= exp * 1000


def format_timestamp(ts: float | None) -> str:
    """Format an epoch timestamp (seconds) as a local date and time.

    Returns ``"N/A"`` for a missing value and ``"Invalid Date"`` for one the
    platform cannot represent.
    """
    if not ts:
        return "N/A"
    try:
        return datetime.fromtimestamp(ts).strftime("%c")
    except (OverflowError, OSError, ValueError):
        return INVALID_DATE


@dataclass(frozen=True)
class TimeClaim:
    """One display row for a numeric date claim."""

    name: str
    label: str
    value: float
    formatted: str
    expired: bool


def time_claims(payload: dict, *, now: int | None = None) -> list[TimeClaim]:
    """Return display rows for the ``exp``/``iat``/``nbf`` claims in *payload*.

    Claims that are absent or not numeric are skipped.
    """
    rows: list[TimeClaim] = []
    for name, label in TIME_CLAIM_LABELS.items():
        value = payload.get(name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        rows.append(
            TimeClaim(
                name=name,
                label=label,
                value=value,
                formatted=format_timestamp(value),
                expired=is_expired(value, now=now),
            )
        )
    return rows


# ---------------------------------------------------------------------------
# Claim builder
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ClaimSpec:
    """A single claim as entered by a user: raw text plus its intended type."""

    key: str
    value: str
    type: str = "string"


def _parse_number(key: str, value: str) -> int | float:
    text = value.strip()
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError as exc:
        raise InvalidPayloadJsonError(f"Invalid number for claim: {key}") from exc
    if not math.isfinite(number):
        raise InvalidPayloadJsonError(f"Invalid number for claim: {key}")
    return number


def coerce_claim_value(key: str, value: str, claim_type: str = "string") -> Any:
    """Convert the raw text of a claim to a JSON value of *claim_type*.

    Raises:
        InvalidPayloadJsonError: If the text cannot be read as *claim_type*.
    """
    if claim_type == "string":
        return value
    if claim_type == "number":
        return _parse_number(key, value)
    if claim_type == "boolean":
        return value.lower() == "true"
    if claim_type == "object":
        try:
            return canonical_json.loads(value)
        except ParseError as exc:
            raise InvalidPayloadJsonError(f"Invalid JSON for claim: {key}") from exc
    raise InvalidPayloadJsonError(
        f"Unknown claim type {claim_type!r} for claim: {key} "
        f"(expected one of {', '.join(CLAIM_TYPES)})"
    )


def build_payload(claims: Iterable[ClaimSpec]) -> dict[str, Any]:
    """Assemble a payload from typed claims, in the order given.

    Claims with a blank key are skipped; a repeated key keeps its last value.
    """
    payload: dict[str, Any] = {}
    for claim in claims:
        if not claim.key.strip():
            continue
        payload[claim.key] = coerce_claim_value(claim.key, claim.value, claim.type)
    logger.debug("Built payload with %d claim(s)", len(payload))
    return payload
