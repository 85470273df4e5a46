"""
Exception hierarchy for JWT decoding, signing and verification.

Every error carries a human-readable message intended for direct display.
The pure entry points (``decode`` and ``verify``) convert these into result
objects; the signer and the raising helpers let them propagate.
"""

from __future__ import annotations

__all__ = [
    "JWTError",
    "MalformedTokenError",
    "DecodeError",
    "ParseError",
    "UnsupportedAlgorithmError",
    "InvalidPayloadJsonError",
    "MissingCredentialsError",
    "SignatureMismatchError",
    "InvalidDurationError",
    "InvalidKeyError",
]


class JWTError(Exception):
    """Base class for all jwt-workbench errors."""


class MalformedTokenError(JWTError):
    """Raised when a token does not have exactly three segments."""


class DecodeError(JWTError):
    """Raised when a segment is not valid base64url."""


class ParseError(JWTError):
    """Raised when JSON is malformed or its top level is not an object."""


class UnsupportedAlgorithmError(JWTError):
    """Raised for an algorithm identifier outside HS256/HS384/HS512."""


class InvalidPayloadJsonError(JWTError):
    """Raised when a caller-supplied payload or claim is not valid JSON."""


class MissingCredentialsError(JWTError):
    """Raised when the token or the secret is empty."""


class SignatureMismatchError(JWTError):
    """Raised when the recomputed signature does not match the token."""


class InvalidDurationError(JWTError, ValueError):
    """Raised when an expiry duration cannot be read as a number."""


class InvalidKeyError(JWTError):
    """Raised when a text secret cannot be turned into key bytes."""
