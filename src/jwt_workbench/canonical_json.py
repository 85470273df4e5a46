"""
Compact JSON serialization for signing, and strict JSON parsing for display.

The signature covers the exact bytes produced by :func:`serialize`, so keys
keep their insertion order and no whitespace is emitted.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from .errors import ParseError

__all__ = ["serialize", "parse", "loads"]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unexpected non-standard JSON constant {name}")


def serialize(value: Mapping[str, Any]) -> bytes:
    """Serialize *value* to compact UTF-8 JSON, preserving key order.

    Raises ``TypeError`` for values that are not JSON-representable and
    ``ValueError`` for ``NaN``/``Infinity``.
    """
    return json.dumps(
        value,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    ).encode("utf-8")


def loads(data: bytes | str) -> Any:
    """Parse any standard JSON value.

    Raises:
        ParseError: On malformed JSON, invalid UTF-8 or ``NaN``/``Infinity``.
    """
    try:
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return json.loads(data, parse_constant=_reject_constant)
    except UnicodeDecodeError as exc:
        raise ParseError(f"Invalid UTF-8 in JSON: {exc}") from exc
    except ValueError as exc:
        # json.JSONDecodeError is a ValueError subclass
        raise ParseError(str(exc)) from exc


def parse(data: bytes | str) -> dict:
    """Parse *data* as JSON and require an object at the top level.

    Raises:
        ParseError: On malformed JSON or a non-object top-level value.
    """
    value = loads(data)
    if not isinstance(value, dict):
        raise ParseError(f"Expected a JSON object, got {type(value).__name__}")
    return value
