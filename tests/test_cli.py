"""
Tests for CLI functionality.

These tests verify the command-line interface logic.
"""

from __future__ import annotations

import argparse
import json
from io import StringIO
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest

from desklet_weather import cli
from desklet_weather.cli import cmd_info, cmd_providers, cmd_refresh, cmd_show, create_parser, main
from desklet_weather.schemas import WeatherRecord
from desklet_weather.store import DataStore

if TYPE_CHECKING:
    from pathlib import Path


class TestCreateParser:
    """Tests for create_parser function."""

    def test_creates_parser(self) -> None:
        parser = create_parser()
        assert isinstance(parser, argparse.ArgumentParser)
        assert parser.prog == "desklet-weather"

    def test_parser_has_version(self) -> None:
        parser = create_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["--version"])

    def test_parser_has_debug_flag(self) -> None:
        args = create_parser().parse_args(["--debug", "info"])
        assert args.debug is True

    def test_parser_refresh_defaults(self) -> None:
        args = create_parser().parse_args(["refresh"])
        assert args.command == "refresh"
        assert args.provider is None
        assert args.station is None
        assert args.force is False

    def test_parser_refresh_options(self) -> None:
        args = create_parser().parse_args(
            ["refresh", "--provider", "nws", "--station", "40.7,-74.0", "--api-key", "k", "--force"]
        )
        assert args.provider == "nws"
        assert args.station == "40.7,-74.0"
        assert args.api_key == "k"
        assert args.force is True

    def test_parser_show_command(self) -> None:
        args = create_parser().parse_args(["show", "--json"])
        assert args.command == "show"
        assert args.json is True


class TestCmdProviders:
    """Tests for cmd_providers function."""

    def test_lists_every_provider(self) -> None:
        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            assert cmd_providers(argparse.Namespace()) == 0
            output = mock_stdout.getvalue()
        for key in ("bbc", "google", "nws", "owmfree", "openmeteo"):
            assert key in output
        assert "OpenWeatherMap Free, 5 days (API key)" in output


class TestCmdInfo:
    """Tests for cmd_info function."""

    def test_prints_app_info(self) -> None:
        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            assert cmd_info(argparse.Namespace()) == 0
            output = mock_stdout.getvalue()
        assert "desklet-weather" in output
        assert "Version" in output
        assert "Provider" in output


class TestCmdRefresh:
    """Tests for cmd_refresh function."""

    def _args(self, **overrides: object) -> argparse.Namespace:
        values = {"provider": "bbc", "station": "2643743", "api_key": None, "language": None, "force": False}
        values.update(overrides)
        return argparse.Namespace(**values)

    def test_success_returns_zero(self) -> None:
        with patch("desklet_weather.cli.refresh_weather") as mock_flow:
            mock_flow.return_value = {"ok": True, "refreshed": True}
            assert cmd_refresh(self._args()) == 0
            mock_flow.assert_called_once_with(
                provider="bbc", station="2643743", api_key=None, language=None, force=False
            )

    def test_failure_returns_one(self) -> None:
        with patch("desklet_weather.cli.refresh_weather") as mock_flow:
            mock_flow.return_value = {"ok": False, "refreshed": True}
            assert cmd_refresh(self._args()) == 1

    def test_unknown_provider_rejected(self) -> None:
        with (
            patch("desklet_weather.cli.refresh_weather") as mock_flow,
            patch("sys.stderr", new=StringIO()) as mock_stderr,
        ):
            assert cmd_refresh(self._args(provider="metoffice")) == 1
            assert "unknown provider" in mock_stderr.getvalue()
        mock_flow.assert_not_called()


class TestCmdShow:
    """Tests for cmd_show function."""

    def test_no_record(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(cli, "store", DataStore(tmp_path))
        with patch("sys.stderr", new=StringIO()) as mock_stderr:
            assert cmd_show(argparse.Namespace(provider="nws", json=False)) == 1
            assert "No stored nws record" in mock_stderr.getvalue()

    def test_prints_summary(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        store = DataStore(tmp_path)
        record = WeatherRecord.blank(2)
        record.location.city = "Hoboken"
        record.location.region = "NJ"
        record.current.temperature = 5.5
        record.current.has_temperature = True
        record.current.condition_text = "Cloudy"
        record.days[0].day = "Mon"
        record.days[0].maximum_temperature = 8
        store.save_record("nws", record, ttl_seconds=600)
        monkeypatch.setattr(cli, "store", store)

        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            assert cmd_show(argparse.Namespace(provider="nws", json=False)) == 0
            output = mock_stdout.getvalue()

        assert "Hoboken, NJ (nws)" in output
        assert "Now: 5.5°C, Cloudy" in output
        assert "Mon: 8/-°C" in output

    def test_json_output(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        store = DataStore(tmp_path)
        store.save_record("bbc", WeatherRecord.blank(3), ttl_seconds=600)
        monkeypatch.setattr(cli, "store", store)

        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            assert cmd_show(argparse.Namespace(provider="bbc", json=True)) == 0
            data = json.loads(mock_stdout.getvalue())

        assert data["horizon"] == 3
        assert len(data["days"]) == 3


class TestMain:
    """Tests for main entry point."""

    def test_no_command_prints_help(self) -> None:
        with patch("sys.argv", ["desklet-weather"]), patch("sys.stdout", new=StringIO()):
            assert main() == 0

    def test_dispatches_info(self) -> None:
        with (
            patch("sys.argv", ["desklet-weather", "info"]),
            patch("desklet_weather.cli.cmd_info", return_value=0) as mock_info,
        ):
            assert main() == 0
            mock_info.assert_called_once()

    def test_dispatches_providers(self) -> None:
        with patch("sys.argv", ["desklet-weather", "providers"]), patch("sys.stdout", new=StringIO()) as out:
            assert main() == 0
        assert "openmeteo" in out.getvalue()
