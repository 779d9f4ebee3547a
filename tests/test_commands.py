"""
Tests for the command line entry point
"""

from unittest.mock import AsyncMock, patch

import pytest

from dynupdater.commands import build_parser, get_api_key, main
from dynupdater.config import Settings
from dynupdater.dynu.exceptions import ConfigurationError, DomainNotFoundError


class TestGetApiKey:
    def test_explicit_argument_wins(self):
        assert get_api_key("from-arg", Settings(api_key="from-env")) == "from-arg"

    def test_falls_back_to_settings(self):
        assert get_api_key(None, Settings(api_key="from-env")) == "from-env"

    def test_missing_everywhere(self):
        with pytest.raises(ConfigurationError) as exc_info:
            get_api_key(None, Settings(api_key=None))

        assert "DYNU_API_KEY" in str(exc_info.value)


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("DYNU_API_KEY", "env-key")
    monkeypatch.setenv("DYNU_REQUEST_TIMEOUT", "3")

    loaded = Settings()

    assert loaded.api_key == "env-key"
    assert loaded.request_timeout == 3.0


def test_init_arguments_override_environment(monkeypatch):
    monkeypatch.setenv("DYNU_API_KEY", "env-key")

    assert Settings(api_key="explicit").api_key == "explicit"


class TestParser:
    def test_refresh(self):
        args = build_parser().parse_args(["--api-key", "k", "refresh", "example.dynu.net"])

        assert args.command == "refresh"
        assert args.domain == "example.dynu.net"
        assert args.api_key == "k"

    def test_upsert_txt(self):
        args = build_parser().parse_args(
            ["upsert-txt", "example.dynu.net", "_acme-challenge", "token", "--ttl", "60"]
        )

        assert args.command == "upsert-txt"
        assert args.key == "_acme-challenge"
        assert args.value == "token"
        assert args.ttl == 60

    def test_upsert_txt_default_ttl(self):
        args = build_parser().parse_args(["upsert-txt", "example.dynu.net", "k", "v"])
        assert args.ttl == 120

    def test_delete_txt(self):
        args = build_parser().parse_args(["delete-txt", "example.dynu.net", "k"])

        assert args.command == "delete-txt"
        assert args.key == "k"

    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestMain:
    def test_missing_api_key_exits_before_any_request(self):
        with (
            patch("dynupdater.commands.settings", Settings(api_key=None)),
            patch("dynupdater.commands.run", new_callable=AsyncMock) as run_mock,
        ):
            with pytest.raises(SystemExit) as exc_info:
                main(["refresh", "example.dynu.net"])

        assert exc_info.value.code == 2
        run_mock.assert_not_called()

    def test_runs_with_explicit_key(self):
        with (
            patch("dynupdater.commands.settings", Settings(api_key=None)),
            patch("dynupdater.commands.run", new_callable=AsyncMock) as run_mock,
        ):
            main(["--api-key", "k", "delete-txt", "example.dynu.net", "k"])

        run_mock.assert_awaited_once()
        args, api_key, _ = run_mock.await_args.args
        assert api_key == "k"
        assert args.command == "delete-txt"

    def test_errors_exit_non_zero(self):
        with (
            patch("dynupdater.commands.settings", Settings(api_key="k")),
            patch(
                "dynupdater.commands.run",
                new_callable=AsyncMock,
                side_effect=DomainNotFoundError("example.dynu.net"),
            ),
        ):
            with pytest.raises(SystemExit) as exc_info:
                main(["refresh", "example.dynu.net"])

        assert exc_info.value.code == 1

    def test_refresh_dispatch(self):
        with (
            patch("dynupdater.commands.settings", Settings(api_key="k")),
            patch("dynupdater.commands.DynuUpdater") as updater_cls,
        ):
            updater_cls.return_value.refresh = AsyncMock(return_value=False)
            main(["refresh", "example.dynu.net"])

        updater_cls.return_value.refresh.assert_awaited_once_with("example.dynu.net")
