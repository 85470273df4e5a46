from __future__ import annotations

import logging
import os

import pytest

from jwt_workbench.config import ENV_SECRET, AppConfig, ConfigError, find_project_root, load_config
from jwt_workbench.logging_setup import setup_logging


@pytest.fixture(autouse=True)
def _no_env_secret(monkeypatch):
    monkeypatch.delenv(ENV_SECRET, raising=False)


def _write(tmp_path, text: str) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_missing_file_uses_defaults(tmp_path):
    cfg = load_config(str(tmp_path / "absent.yaml"))
    assert cfg.signing.algorithm == "HS256"
    assert cfg.signing.expires_in == "1h"
    assert cfg.secret.secret == ""
    assert isinstance(cfg, AppConfig)


def test_missing_file_required(tmp_path):
    with pytest.raises(ConfigError, match="Config file not found"):
        load_config(str(tmp_path / "absent.yaml"), required=True)


def test_values_are_read(tmp_path):
    path = _write(tmp_path, (
        "signing:\n"
        "  algorithm: HS512\n"
        "  expires_in: 2d\n"
        "secret:\n"
        "  value: top-secret\n"
        "logging:\n"
        f"  log_dir: {tmp_path / 'logs'}\n"
        "  log_prefix: test\n"
    ))
    cfg = load_config(path)
    assert cfg.signing.algorithm == "HS512"
    assert cfg.signing.expires_in == "2d"
    assert cfg.secret.secret == "top-secret"
    assert cfg.logging.log_dir == str(tmp_path / "logs")
    assert cfg.logging.log_prefix == "test"


def test_empty_expiry_disables_exp(tmp_path):
    cfg = load_config(_write(tmp_path, "signing:\n  expires_in: ''\n"))
    assert cfg.signing.expires_in == ""


def test_env_secret_wins(tmp_path, monkeypatch):
    monkeypatch.setenv(ENV_SECRET, "from-env")
    cfg = load_config(_write(tmp_path, "secret:\n  value: from-yaml\n"))
    assert cfg.secret.secret == "from-env"


def test_placeholder_secret_is_ignored(tmp_path):
    cfg = load_config(_write(tmp_path, "secret:\n  value: your-secret-key\n"))
    assert cfg.secret.secret == ""


def test_secret_is_redacted_in_repr(tmp_path):
    cfg = load_config(_write(tmp_path, "secret:\n  value: top-secret\n"))
    assert "top-secret" not in repr(cfg)


@pytest.mark.parametrize("text,match", [
    ("- a\n- b\n", "expected YAML mapping"),
    ("signing:\n  algorithm: RS256\n", "signing.algorithm"),
    ("signing:\n  expires_in: soon\n", "signing.expires_in"),
    ("signing: HS256\n", "'signing' must be a mapping"),
])
def test_invalid_config(tmp_path, text, match):
    with pytest.raises(ConfigError, match=match):
        load_config(_write(tmp_path, text))


def test_setup_logging_writes_file(tmp_path):
    try:
        log_path = setup_logging(verbose=True, log_prefix="unit", log_dir=str(tmp_path))
        logging.getLogger("jwt_workbench.test").debug("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert os.path.basename(log_path).startswith("unit_")
        with open(log_path, encoding="utf-8") as fh:
            assert "hello" in fh.read()
    finally:
        for handler in list(logging.getLogger().handlers):
            handler.close()
        logging.getLogger().handlers.clear()


def test_setup_logging_without_file(tmp_path):
    try:
        assert setup_logging(log_to_file=False, log_dir=str(tmp_path)) is None
        assert os.listdir(tmp_path) == []
    finally:
        logging.getLogger().handlers.clear()


def test_project_root_of_src_checkout(tmp_path):
    package_dir = tmp_path / "checkout" / "src" / "jwt_workbench"
    package_dir.mkdir(parents=True)
    assert find_project_root(str(package_dir)) == str(tmp_path / "checkout")


def test_project_root_of_installed_package_is_cwd(tmp_path, monkeypatch):
    package_dir = tmp_path / "lib" / "site-packages" / "jwt_workbench"
    package_dir.mkdir(parents=True)
    monkeypatch.chdir(tmp_path)
    assert find_project_root(str(package_dir)) == os.getcwd()
