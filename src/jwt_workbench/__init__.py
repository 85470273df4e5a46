"""JWT Workbench — decode, verify and generate HMAC-signed JSON Web Tokens."""

__version__ = "1.0.0"

from .claims import format_timestamp, is_expired
from .decoder import DecodedResult, decode
from .duration import parse_duration
from .errors import (
    DecodeError,
    InvalidDurationError,
    InvalidKeyError,
    InvalidPayloadJsonError,
    JWTError,
    MalformedTokenError,
    MissingCredentialsError,
    ParseError,
    SignatureMismatchError,
    UnsupportedAlgorithmError,
)
from .signer import GenerateOptions, generate
from .verifier import VerificationResult, verify

__all__ = [
    "DecodeError",
    "DecodedResult",
    "GenerateOptions",
    "InvalidDurationError",
    "InvalidKeyError",
    "InvalidPayloadJsonError",
    "JWTError",
    "MalformedTokenError",
    "MissingCredentialsError",
    "ParseError",
    "SignatureMismatchError",
    "UnsupportedAlgorithmError",
    "VerificationResult",
    "decode",
    "format_timestamp",
    "generate",
    "is_expired",
    "parse_duration",
    "verify",
]
