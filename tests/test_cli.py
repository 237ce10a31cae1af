"""Tests for the acmedns-register command line entry point."""

import json
import logging
from unittest.mock import patch

import pytest

from acmedns.config import AppConfig
from acmedns.errors import ClientError
from acmedns.models import Account

_ACCOUNT = Account(
    full_domain="d420c923-bbd7-4056-ab64-c3ca54c9b3cf.auth.acme-dns.io",
    sub_domain="d420c923-bbd7-4056-ab64-c3ca54c9b3cf",
    username="eabcdb41-d89f-4580-826f-3e62e9755ef2",
    password="pbAXVjlIOE01xbut7YnAbkhMQIkcwoHO0ek2j4Q0",
    server_url="https://auth.acme-dns.io",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("ACMEDNS_API_URL", "ACMEDNS_STORAGE_PATH", "ACMEDNS_ALLOW_FROM", "ACMEDNS_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


class TestRun:
    @patch("acmedns.cli.Client")
    def test_registers_and_saves_account(self, mock_client_cls, tmp_path, caplog):
        from acmedns.cli import run

        mock_client = mock_client_cls.return_value.__enter__.return_value
        mock_client.register_account.return_value = _ACCOUNT
        path = tmp_path / "accounts.json"
        config = AppConfig(
            api_url="https://auth.acme-dns.io",
            storage_path=str(path),
            allow_from=("10.0.0.0/8",),
            timeout=10.0,
        )

        with caplog.at_level(logging.INFO, logger="acmedns.cli"):
            acct = run(config, "example.com")

        assert acct == _ACCOUNT
        mock_client_cls.assert_called_once_with("https://auth.acme-dns.io", timeout=10.0)
        mock_client.register_account.assert_called_once_with(("10.0.0.0/8",))
        assert json.loads(path.read_text(encoding="utf-8")) == {"example.com": _ACCOUNT.to_dict()}
        assert f"_acme-challenge.example.com CNAME {_ACCOUNT.full_domain}." in caplog.text


class TestMain:
    @patch("acmedns.cli.run")
    def test_flags_build_config(self, mock_run):
        from acmedns.cli import main

        rc = main(
            [
                "--api",
                "https://auth.acme-dns.io",
                "--domain",
                "example.com",
                "--storage",
                "accounts.json",
                "--allow-from",
                "10.0.0.0/8,192.168.1.0/24",
            ]
        )

        assert rc == 0
        config, domain = mock_run.call_args.args
        assert domain == "example.com"
        assert config.api_url == "https://auth.acme-dns.io"
        assert config.storage_path == "accounts.json"
        assert config.allow_from == ("10.0.0.0/8", "192.168.1.0/24")
        assert config.timeout == 30.0

    @patch("acmedns.cli.run")
    def test_environment_fills_missing_flags(self, mock_run, monkeypatch):
        from acmedns.cli import main

        monkeypatch.setenv("ACMEDNS_API_URL", "https://env.acme-dns.io")
        monkeypatch.setenv("ACMEDNS_STORAGE_PATH", "env.json")

        assert main(["--domain", "example.com"]) == 0

        config, _ = mock_run.call_args.args
        assert config.api_url == "https://env.acme-dns.io"
        assert config.storage_path == "env.json"

    @patch("acmedns.cli.run")
    def test_missing_api_returns_error(self, mock_run):
        from acmedns.cli import main

        assert main(["--domain", "example.com", "--storage", "accounts.json"]) == 1
        mock_run.assert_not_called()

    def test_missing_domain_exits_with_usage_error(self):
        from acmedns.cli import main

        with pytest.raises(SystemExit) as exc_info:
            main(["--api", "https://auth.acme-dns.io", "--storage", "accounts.json"])

        assert exc_info.value.code == 2

    def test_empty_domain_exits_with_usage_error(self):
        from acmedns.cli import main

        with pytest.raises(SystemExit) as exc_info:
            main(["--api", "https://auth.acme-dns.io", "--storage", "accounts.json", "--domain", ""])

        assert exc_info.value.code == 2

    @patch("acmedns.cli.run")
    def test_client_error_returns_failure(self, mock_run, caplog):
        from acmedns.cli import main

        mock_run.side_effect = ClientError("response error", 400, b'{"error":"bad"}')

        with caplog.at_level(logging.ERROR, logger="acmedns.cli"):
            rc = main(["--api", "https://auth.acme-dns.io", "--domain", "example.com", "--storage", "a.json"])

        assert rc == 1
        assert "400: response error" in caplog.text
