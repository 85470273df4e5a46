"""
CLI entry point for jwt-workbench.

Subcommands:
    decode    — inspect a token without signature verification
    verify    — check a token's HMAC signature against a secret
    generate  — build and sign a new token

Tokens can be passed as an argument, piped via ``--stdin`` or typed at an
interactive prompt.
"""

from __future__ import annotations

import argparse
import getpass
import json
import logging
import sys

from .claims import CLAIM_TYPES, ClaimSpec, build_payload, time_claims
from .config import DEFAULT_CONFIG_PATH, AppConfig, ConfigError, load_config
from .decoder import decode_token
from .errors import JWTError
from .hmac_engine import SUPPORTED_ALGORITHMS
from .logging_setup import setup_logging
from .signer import generate
from .verifier import verify

__all__ = ["main", "parse_claim"]

logger = logging.getLogger(__name__)

EXIT_ERROR = 1
EXIT_NOT_VERIFIED = 2
EXIT_INTERRUPTED = 130


# ---------------------------------------------------------------------------
# Output formatting
# ---------------------------------------------------------------------------

def _print_json(label: str, data: dict) -> None:
    """Print a labelled JSON section."""
    print(f"\n{label}:")
    print(json.dumps(data, indent=4, ensure_ascii=False))


def _print_result(header: dict, payload: dict, signature: str) -> None:
    """Pretty-print the decoded token parts."""
    _print_json("Header", header)
    _print_json("Payload", payload)

    rows = time_claims(payload)
    if rows:
        print("\nTime claims:")
        for row in rows:
            marker = "  [EXPIRED]" if row.expired else ""
            print(f"  {row.label:<11}: {row.formatted}{marker}")

    print(f"\nSignature (base64url encoded):\n{signature}")


# ---------------------------------------------------------------------------
# Input helpers
# ---------------------------------------------------------------------------

def _fail(message: str, code: int = EXIT_ERROR) -> None:
    print(f"Error: {message}")
    sys.exit(code)


def _prompt(text: str, *, secret: bool = False) -> str:
    try:
        value = getpass.getpass(text) if secret else input(text)
    except (EOFError, KeyboardInterrupt):
        print()
        sys.exit(EXIT_INTERRUPTED)
    return value.strip()


def _resolve_token(args: argparse.Namespace) -> str:
    if args.stdin:
        token = sys.stdin.read().strip()
        if not token:
            _fail("No token received on stdin.")
        return token
    if args.token:
        return args.token.strip()

    # Interactive mode
    print("JWT Token Decoder" if args.command == "decode" else "JWT Signature Verifier")
    print("=================" if args.command == "decode" else "======================")
    return _prompt("Please enter your JWT token: ")


def _resolve_secret(args: argparse.Namespace, cfg: AppConfig, *, interactive: bool) -> str:
    if args.secret:
        return args.secret
    if cfg.secret.secret:
        logger.debug("Using secret from config / environment")
        return cfg.secret.secret
    if interactive:
        return _prompt("Secret key: ", secret=True)
    return ""


def parse_claim(text: str) -> ClaimSpec:
    """Parse a ``KEY=VALUE`` or ``KEY:TYPE=VALUE`` command-line claim.

    Raises:
        argparse.ArgumentTypeError: If the claim has no ``=``.
    """
    if "=" not in text:
        raise argparse.ArgumentTypeError(f"Claim must look like KEY=VALUE or KEY:TYPE=VALUE, got {text!r}")
    key, value = text.split("=", 1)
    claim_type = "string"
    if ":" in key:
        name, suffix = key.rsplit(":", 1)
        if suffix in CLAIM_TYPES:
            key, claim_type = name, suffix
    return ClaimSpec(key=key, value=value, type=claim_type)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def _add_token_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "token",
        nargs="?",
        default=None,
        help="JWT token string (optional — prompts interactively if omitted)",
    )
    parser.add_argument(
        "--stdin",
        action="store_true",
        default=False,
        help="Read token from stdin (for piping)",
    )


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="jwt-workbench",
        description="Decode, verify and generate HMAC-signed JWT tokens (HS256/HS384/HS512).",
        epilog="Examples:\n"
               "  %(prog)s decode <token>\n"
               "  echo '<token>' | %(prog)s decode --stdin\n"
               "  %(prog)s verify <token> --secret my-secret\n"
               "  %(prog)s generate --secret my-secret --claim sub=123 --claim admin:boolean=true\n"
               "  %(prog)s generate --secret my-secret --alg HS512 --payload '{\"sub\": \"123\"}'\n",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", "-c", default=DEFAULT_CONFIG_PATH,
                        help=f"Path to YAML config file (default: {DEFAULT_CONFIG_PATH})")
    parser.add_argument("--verbose", "-v", action="store_true", default=False,
                        help="Enable verbose (debug) logging")
    parser.add_argument("--no-log-file", action="store_true", default=False,
                        help="Do not write a log file under logs/")

    sub = parser.add_subparsers(dest="command", metavar="<command>")
    sub.required = True

    decode_p = sub.add_parser("decode", help="Decode a token without signature verification")
    _add_token_args(decode_p)
    decode_p.add_argument("--json", action="store_true", default=False,
                          help="Print header, payload and signature as one JSON document")

    verify_p = sub.add_parser("verify", help="Verify a token's signature")
    _add_token_args(verify_p)
    verify_p.add_argument("--secret", "-s", default=None,
                          help="Secret key (default: config / JWT_WORKBENCH_SECRET / prompt)")

    gen_p = sub.add_parser("generate", help="Generate a signed token")
    gen_p.add_argument("--secret", "-s", default=None,
                       help="Secret key (default: config / JWT_WORKBENCH_SECRET / prompt)")
    gen_p.add_argument("--alg", "-a", choices=SUPPORTED_ALGORITHMS, default=None,
                       help="Signing algorithm (default: from config, HS256)")
    expiry = gen_p.add_mutually_exclusive_group()
    expiry.add_argument("--expires-in", "-e", default=None,
                        help="Expiry duration, e.g. 30s, 15m, 1h, 2d, 1w (default: from config, 1h)")
    expiry.add_argument("--no-expiry", action="store_true", default=False,
                        help="Do not add an exp claim")
    payload = gen_p.add_mutually_exclusive_group()
    payload.add_argument("--payload", "-p", default=None, metavar="JSON",
                         help="Custom payload as a JSON object")
    payload.add_argument("--claim", action="append", type=parse_claim, default=[],
                         metavar="KEY[:TYPE]=VALUE",
                         help=f"Add a claim; TYPE is one of {', '.join(CLAIM_TYPES)} (repeatable)")

    return parser.parse_args(argv)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _cmd_decode(args: argparse.Namespace, cfg: AppConfig) -> int:
    token = _resolve_token(args)
    result = decode_token(token)

    if args.json:
        print(json.dumps(
            {"header": result.header, "payload": result.payload, "signature": result.signature},
            indent=4,
            ensure_ascii=False,
        ))
    else:
        _print_result(result.header, result.payload, result.signature)
    return 0


def _cmd_verify(args: argparse.Namespace, cfg: AppConfig) -> int:
    token = _resolve_token(args)
    secret = _resolve_secret(args, cfg, interactive=not args.stdin)

    result = verify(token, secret)
    if result.verified:
        print("Signature verified")
        return 0
    print(f"Signature NOT verified: {result.error}")
    return EXIT_NOT_VERIFIED


def _cmd_generate(args: argparse.Namespace, cfg: AppConfig) -> int:
    secret = _resolve_secret(args, cfg, interactive=True)
    if not secret:
        _fail("Secret key is required")

    if args.payload is not None and args.payload.strip():
        payload = args.payload
    else:
        payload = build_payload(args.claim)

    expires_in = None if args.no_expiry else (args.expires_in or cfg.signing.expires_in or None)
    algorithm = args.alg or cfg.signing.algorithm

    token = generate(payload, secret, algorithm=algorithm, expires_in=expires_in)
    print(token)
    return 0


_COMMANDS = {
    "decode": _cmd_decode,
    "verify": _cmd_verify,
    "generate": _cmd_generate,
}


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)

    # Load config
    try:
        cfg = load_config(args.config, required=args.config != DEFAULT_CONFIG_PATH)
    except ConfigError as e:
        _fail(str(e))

    log_path = setup_logging(
        verbose=args.verbose,
        log_prefix=cfg.logging.log_prefix,
        log_dir=cfg.logging.log_dir,
        log_to_file=not args.no_log_file,
    )
    if log_path:
        logger.debug("Logging to %s", log_path)
    logger.debug("Command: %s", args.command)

    try:
        code = _COMMANDS[args.command](args, cfg)
    except JWTError as exc:
        logger.debug("%s failed: %s", args.command, exc)
        _fail(str(exc))

    sys.exit(code)
