"""
HMAC signing for the HS256 / HS384 / HS512 family.

Digest selection comes from PyJWT's ``HMACAlgorithm``. Keys are used as raw
bytes: no PEM-shape checks, no minimum length and no key derivation.
"""

from __future__ import annotations

import hmac
import logging

from jwt.algorithms import HMACAlgorithm

from .errors import InvalidKeyError, UnsupportedAlgorithmError

__all__ = [
    "DEFAULT_ALGORITHM",
    "SUPPORTED_ALGORITHMS",
    "get_algorithm",
    "validate_algorithm",
    "sign",
    "verify_equal",
]

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "HS256"

_HASHES = {
    "HS256": HMACAlgorithm.SHA256,
    "HS384": HMACAlgorithm.SHA384,
    "HS512": HMACAlgorithm.SHA512,
}

SUPPORTED_ALGORITHMS = tuple(_HASHES)


def validate_algorithm(algorithm: object) -> str:
    """Return *algorithm* unchanged if it is HS256, HS384 or HS512.

    Raises:
        UnsupportedAlgorithmError: For any other identifier.
    """
    if not isinstance(algorithm, str) or algorithm not in _HASHES:
        raise UnsupportedAlgorithmError(
            f"Unsupported algorithm: {algorithm!r} "
            f"(expected one of {', '.join(SUPPORTED_ALGORITHMS)})"
        )
    return algorithm


def get_algorithm(algorithm: object) -> HMACAlgorithm:
    """Return a PyJWT ``HMACAlgorithm`` for *algorithm*.

    A fresh instance is built on every call so nothing is shared between
    concurrent callers.

    Raises:
        UnsupportedAlgorithmError: If *algorithm* is not HS256, HS384 or HS512.
    """
    return HMACAlgorithm(_HASHES[validate_algorithm(algorithm)])


def sign(algorithm: str, key: bytes | str, message: bytes) -> bytes:
    """Compute the raw HMAC digest of *message* under *key*.

    Raises:
        UnsupportedAlgorithmError: If *algorithm* is not supported.
        InvalidKeyError: If a text *key* cannot be encoded as UTF-8.
    """
    if isinstance(key, str):
        try:
            key = key.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise InvalidKeyError(f"Secret key is not valid UTF-8 text: {exc.reason}") from exc
    digest = get_algorithm(algorithm).sign(message, key)
    logger.debug("Signed %d bytes with %s", len(message), algorithm)
    return digest


def verify_equal(a: bytes, b: bytes) -> bool:
    """Compare two byte strings in constant time."""
    return hmac.compare_digest(a, b)
