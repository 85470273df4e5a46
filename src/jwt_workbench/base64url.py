"""
Unpadded URL-safe base64, as used by the JWT compact serialization.
"""

from __future__ import annotations

import base64
import binascii
import re

from .errors import DecodeError

__all__ = ["encode", "decode", "is_base64url"]

_ALPHABET_RE = re.compile(r"[A-Za-z0-9_-]*")


def _add_base64_padding(data: str) -> str:
    """Add padding characters for base64url decoding."""
    padding = len(data) % 4
    if padding:
        data += "=" * (4 - padding)
    return data


def is_base64url(data: str) -> bool:
    """Return True if *data* only uses the unpadded base64url alphabet."""
    return _ALPHABET_RE.fullmatch(data) is not None


def encode(data: bytes) -> str:
    """Encode *data* with the URL-safe alphabet and strip all ``=`` padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def decode(data: str) -> bytes:
    """Decode an unpadded base64url string.

    Raises:
        DecodeError: If *data* contains characters outside the base64url
            alphabet (padding included) or its length can never be padded
            to a multiple of four.
    """
    if not is_base64url(data):
        raise DecodeError("Invalid base64url string: contains characters outside the URL-safe alphabet")
    if len(data) % 4 == 1:
        raise DecodeError(f"Invalid base64url string: impossible length {len(data)}")

    try:
        return base64.urlsafe_b64decode(_add_base64_padding(data))
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"Invalid base64url string: {exc}") from exc
