"""
Configuration loading, validation, and typed models.

Supports:
  - YAML config file with signing defaults and an optional secret
  - Environment variable override for the secret (JWT_WORKBENCH_SECRET)
  - CLI argument merging in ``cli`` (CLI > env > YAML > built-in defaults)

The config file is optional: without one the built-in defaults apply.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .duration import parse_duration
from .errors import InvalidDurationError
from .hmac_engine import DEFAULT_ALGORITHM, SUPPORTED_ALGORITHMS

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "PROJECT_ROOT",
    "find_project_root",
    "ENV_SECRET",
    "ConfigError",
    "SigningConfig",
    "SecretConfig",
    "LogConfig",
    "AppConfig",
    "load_config",
]

logger = logging.getLogger(__name__)


def find_project_root(package_dir: str) -> str:
    """Return the checkout root for a package living under ``src/``.

    An installed copy (site-packages) has no checkout around it, so the
    current working directory is used instead.
    """
    parent = os.path.dirname(os.path.abspath(package_dir))
    if os.path.basename(parent) == "src":
        return os.path.dirname(parent)
    return os.getcwd()


PROJECT_ROOT = find_project_root(os.path.dirname(__file__))

# Default config path — relative to the project root
DEFAULT_CONFIG_PATH = os.path.join(PROJECT_ROOT, "config", "config.yaml")

# Environment variable names
ENV_SECRET = "JWT_WORKBENCH_SECRET"


# ---------------------------------------------------------------------------
# Typed configuration models
# ---------------------------------------------------------------------------

class ConfigError(Exception):
    """Raised when the configuration file is missing or invalid."""


@dataclass(frozen=True)
class SigningConfig:
    algorithm: str = DEFAULT_ALGORITHM
    expires_in: str = "1h"


@dataclass(frozen=True)
class SecretConfig:
    secret: str = ""

    def __repr__(self) -> str:
        """Redact secret in repr to prevent accidental logging."""
        shown = "***redacted***" if self.secret else "(empty)"
        return f"SecretConfig(secret='{shown}')"


@dataclass(frozen=True)
class LogConfig:
    log_dir: str = "logs"
    log_prefix: str = "jwt_workbench"


@dataclass(frozen=True)
class AppConfig:
    signing: SigningConfig = field(default_factory=SigningConfig)
    secret: SecretConfig = field(default_factory=SecretConfig)
    logging: LogConfig = field(default_factory=LogConfig)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

_PLACEHOLDER_VALUES = frozenset({
    "your-secret-key",
    "REPLACE_WITH_YOUR_SECRET",
})


def _section(raw: dict, name: str) -> dict:
    value = raw.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{name}' must be a mapping, got {type(value).__name__}")
    return value


def load_config(config_path: str | None = None, *, required: bool = False) -> AppConfig:
    """Load and validate the YAML configuration file.

    Environment variables take precedence over YAML values for secrets:
      - JWT_WORKBENCH_SECRET  -> secret.value

    A missing file yields the built-in defaults unless *required* is True.

    Raises:
        ConfigError: If the file is required but missing, or contains
            invalid values.
    """
    path = Path(config_path or DEFAULT_CONFIG_PATH)
    raw: dict = {}

    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            raise ConfigError(f"Invalid config file format: expected YAML mapping, got {type(raw).__name__}")
        logger.debug("Config loaded from %s", path)
    elif required:
        raise ConfigError(
            f"Config file not found: {path}\n"
            "Copy config/config.yaml.example to config/config.yaml and fill in your values."
        )
    else:
        logger.debug("No config file at %s, using defaults", path)

    # --- Signing defaults ---
    signing_section = _section(raw, "signing")
    algorithm = str(signing_section.get("algorithm") or DEFAULT_ALGORITHM)
    if algorithm not in SUPPORTED_ALGORITHMS:
        raise ConfigError(
            f"Invalid signing.algorithm: {algorithm!r}. "
            f"Supported: {', '.join(SUPPORTED_ALGORITHMS)}."
        )

    expires_in = signing_section.get("expires_in", "1h")
    expires_in = "" if expires_in is None else str(expires_in)
    if expires_in:
        try:
            parse_duration(expires_in)
        except InvalidDurationError as e:
            raise ConfigError(f"Invalid signing.expires_in: {e}") from e

    # --- Secret (env var > YAML) ---
    secret_value = os.environ.get(ENV_SECRET) or str(_section(raw, "secret").get("value") or "")
    if secret_value in _PLACEHOLDER_VALUES:
        logger.warning("Ignoring placeholder secret in config; pass --secret or set %s", ENV_SECRET)
        secret_value = ""

    # --- Logging ---
    log_section = _section(raw, "logging")
    log_dir = str(log_section.get("log_dir") or "logs")
    if not os.path.isabs(log_dir):
        log_dir = os.path.join(PROJECT_ROOT, log_dir)

    config = AppConfig(
        signing=SigningConfig(algorithm=algorithm, expires_in=expires_in),
        secret=SecretConfig(secret=secret_value),
        logging=LogConfig(
            log_dir=log_dir,
            log_prefix=str(log_section.get("log_prefix") or "jwt_workbench"),
        ),
    )
    logger.debug("Signing defaults: algorithm=%s expires_in=%s", algorithm, expires_in or "(none)")
    return config
