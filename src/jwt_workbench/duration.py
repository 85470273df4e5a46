"""
Human-readable expiry durations such as ``"30m"``, ``"1h"`` or ``"2d"``.

A string without a recognised unit falls back to its leading integer,
read as a number of **seconds**: ``"90"`` is 90 seconds and so is
``"90x"``. This mirrors how the expiry field has always behaved and is kept
on purpose. A string with no leading integer at all is an error.
"""

from __future__ import annotations

import re

from .errors import InvalidDurationError

__all__ = ["UNIT_MILLISECONDS", "parse_duration"]

_DURATION_RE = re.compile(r"([0-9]+)([smhdw])")

# Leading integer, the way JavaScript's parseInt(text, 10) reads it.
_LEADING_INT_RE = re.compile(r"^\s*([+-]?[0-9]+)")

UNIT_MILLISECONDS = {
    "s": 1000,
    "m": 60 * 1000,
    "h": 60 * 60 * 1000,
    "d": 24 * 60 * 60 * 1000,
    "w": 7 * 24 * 60 * 60 * 1000,
}


def parse_duration(text: str) -> int:
    """Convert a duration string to milliseconds.

    Examples::

        parse_duration("2d")   # 172800000
        parse_duration("90")   # 90000 (unit-less means seconds)

    Raises:
        InvalidDurationError: If no integer can be read from *text*.
    """
    match = _DURATION_RE.fullmatch(text)
    if match:
        return int(match.group(1)) * UNIT_MILLISECONDS[match.group(2)]

    fallback = _LEADING_INT_RE.match(text)
    if not fallback:
        raise InvalidDurationError(
            f"Invalid duration: {text!r} (expected e.g. 30s, 15m, 1h, 2d, 1w)"
        )
    return int(fallback.group(1)) * 1000
