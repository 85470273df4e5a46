"""End-to-end tests for the command-line front end."""

from __future__ import annotations

import argparse
import io
import json
import logging

import pytest

from jwt_workbench import decode, generate
from jwt_workbench.cli import main, parse_claim
from jwt_workbench.config import ENV_SECRET

SECRET = "cli-secret"


@pytest.fixture(autouse=True)
def _isolate(monkeypatch):
    monkeypatch.delenv(ENV_SECRET, raising=False)
    yield
    logging.getLogger().handlers.clear()


@pytest.fixture
def config_path(tmp_path) -> str:
    path = tmp_path / "config.yaml"
    path.write_text("signing:\n  algorithm: HS384\n  expires_in: 30m\n", encoding="utf-8")
    return str(path)


def run(config_path: str, *argv: str) -> int:
    with pytest.raises(SystemExit) as exc:
        main(["--no-log-file", "-c", config_path, *argv])
    return exc.value.code


class TestParseClaim:
    def test_plain_claim_is_string(self):
        claim = parse_claim("sub=123")
        assert (claim.key, claim.value, claim.type) == ("sub", "123", "string")

    def test_typed_claim(self):
        claim = parse_claim("admin:boolean=true")
        assert (claim.key, claim.value, claim.type) == ("admin", "true", "boolean")

    def test_value_may_contain_equals_and_colons(self):
        claim = parse_claim("url=https://x?a=b")
        assert (claim.key, claim.value) == ("url", "https://x?a=b")

    def test_unknown_suffix_stays_in_key(self):
        assert parse_claim("urn:example=1").key == "urn:example"

    def test_missing_equals(self):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_claim("novalue")


class TestGenerateCommand:
    def test_uses_config_defaults(self, config_path, capsys):
        assert run(config_path, "generate", "--secret", SECRET, "--claim", "sub=42") == 0
        token = capsys.readouterr().out.strip()
        result = decode(token)
        assert result.header["alg"] == "HS384"
        assert result.payload["sub"] == "42"
        assert "exp" in result.payload

    def test_flags_override_config(self, config_path, capsys):
        code = run(config_path, "generate", "--secret", SECRET, "--alg", "HS512", "--no-expiry",
                   "--claim", "admin:boolean=true", "--claim", "age:number=7")
        assert code == 0
        result = decode(capsys.readouterr().out.strip())
        assert result.header["alg"] == "HS512"
        assert result.payload == {"admin": True, "age": 7}

    def test_json_payload(self, config_path, capsys):
        assert run(config_path, "generate", "-s", SECRET, "--no-expiry", "--payload", '{"a": [1]}') == 0
        assert decode(capsys.readouterr().out.strip()).payload == {"a": [1]}

    def test_invalid_json_payload(self, config_path, capsys):
        assert run(config_path, "generate", "-s", SECRET, "--payload", "{bad") == 1
        assert "Invalid JSON in custom payload" in capsys.readouterr().out

    def test_secret_from_environment(self, config_path, capsys, monkeypatch):
        monkeypatch.setenv(ENV_SECRET, SECRET)
        assert run(config_path, "generate", "--no-expiry") == 0
        token = capsys.readouterr().out.strip()
        assert run(config_path, "verify", token, "--secret", SECRET) == 0


class TestVerifyCommand:
    def test_verified(self, config_path, capsys):
        token = generate({"sub": "1"}, SECRET)
        assert run(config_path, "verify", token, "--secret", SECRET) == 0
        assert "Signature verified" in capsys.readouterr().out

    def test_not_verified(self, config_path, capsys):
        token = generate({"sub": "1"}, SECRET)
        assert run(config_path, "verify", token, "--secret", "wrong") == 2
        assert "signature verification failed" in capsys.readouterr().out

    def test_stdin(self, config_path, capsys, monkeypatch):
        token = generate({"sub": "1"}, SECRET)
        monkeypatch.setattr("sys.stdin", io.StringIO(token + "\n"))
        assert run(config_path, "verify", "--stdin", "--secret", SECRET) == 0

    def test_stdin_without_secret_reports_missing_credentials(self, config_path, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("a.b.c\n"))
        assert run(config_path, "verify", "--stdin") == 2
        assert "Token and secret key are required" in capsys.readouterr().out


class TestDecodeCommand:
    def test_pretty_output(self, config_path, capsys):
        token = generate({"sub": "1", "exp": 1}, SECRET)
        assert run(config_path, "decode", token) == 0
        out = capsys.readouterr().out
        assert "Header:" in out
        assert '"sub": "1"' in out
        assert "Expires at" in out
        assert "[EXPIRED]" in out
        assert token.split(".")[2] in out

    def test_every_past_time_claim_is_flagged(self, config_path, capsys):
        token = generate({"sub": "1", "iat": 1, "nbf": 2}, SECRET)
        assert run(config_path, "decode", token) == 0
        out = capsys.readouterr().out
        assert out.count("[EXPIRED]") == 2
        assert "Issued at" in out

    def test_json_output(self, config_path, capsys):
        token = generate({"sub": "1"}, SECRET)
        assert run(config_path, "decode", "--json", token) == 0
        doc = json.loads(capsys.readouterr().out)
        assert doc["header"] == {"alg": "HS256", "typ": "JWT"}
        assert doc["payload"] == {"sub": "1"}

    def test_invalid_token(self, config_path, capsys):
        assert run(config_path, "decode", "onlyonepart") == 1
        assert "Error: Invalid token format" in capsys.readouterr().out

    def test_empty_stdin(self, config_path, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO(""))
        assert run(config_path, "decode", "--stdin") == 1
        assert "No token received on stdin" in capsys.readouterr().out


def test_missing_custom_config(tmp_path, capsys):
    assert run(str(tmp_path / "absent.yaml"), "decode", "a.b.c") == 1
    assert "Config file not found" in capsys.readouterr().out
