"""Unit tests for the config commands."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
import yaml
from typer.testing import CliRunner

from todolist_cli.commands.config import _parse_value, app
from todolist_cli.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND

runner = CliRunner()


@pytest.fixture()
def config_service(tmp_config):
    with patch("todolist_cli.commands.config.get_config_service", return_value=tmp_config):
        yield tmp_config


class TestConfigCommand:
    def test_show_yaml(self, config_service):
        result = runner.invoke(app, ["show"])
        assert result.exit_code == 0, result.output
        data = yaml.safe_load(result.output.split(str(config_service.config_path))[0])
        assert data["display"]["upcoming_days"] == 7

    def test_show_json(self, config_service):
        result = runner.invoke(app, ["show", "--output", "json"])
        assert result.exit_code == 0
        assert '"upcoming_days": 7' in result.output

    def test_get(self, config_service):
        result = runner.invoke(app, ["get", "display.date_format"])
        assert result.exit_code == 0
        assert "%d/%m/%Y" in result.output

    def test_get_section(self, config_service):
        result = runner.invoke(app, ["get", "storage"])
        assert result.exit_code == 0
        assert "autosave: true" in result.output

    def test_get_unknown(self, config_service):
        result = runner.invoke(app, ["get", "display.nope"])
        assert result.exit_code == ERROR_NOT_FOUND

    def test_set(self, config_service):
        result = runner.invoke(app, ["set", "display.upcoming_days", "14"])
        assert result.exit_code == 0, result.output
        assert config_service.get("display.upcoming_days") == 14
        saved = json.loads(config_service.config_path.read_text(encoding="utf-8"))
        assert saved["display"]["upcoming_days"] == 14

    def test_set_bool(self, config_service):
        result = runner.invoke(app, ["set", "storage.autosave", "false"])
        assert result.exit_code == 0
        assert config_service.get("storage.autosave") is False

    def test_set_unknown_key(self, config_service):
        result = runner.invoke(app, ["set", "display.nope", "1"])
        assert result.exit_code == ERROR_NOT_FOUND

    def test_set_invalid_value(self, config_service):
        result = runner.invoke(app, ["set", "display.upcoming_days", "soon"])
        assert result.exit_code == ERROR_INVALID_ARGS
        assert "Invalid value" in result.output

    def test_set_output_format(self, config_service):
        assert runner.invoke(app, ["set", "display.format", "json"]).exit_code == 0
        result = runner.invoke(app, ["set", "display.format", "xml"])
        assert result.exit_code == ERROR_INVALID_ARGS
        assert config_service.get("display.format") == "json"

    def test_reset_key(self, config_service):
        config_service.set("display.upcoming_days", 30)
        result = runner.invoke(app, ["reset", "display.upcoming_days", "--yes"])
        assert result.exit_code == 0
        assert config_service.get("display.upcoming_days") == 7

    def test_reset_cancelled(self, config_service):
        config_service.set("display.upcoming_days", 30)
        result = runner.invoke(app, ["reset"], input="n\n")
        assert result.exit_code == 0
        assert config_service.get("display.upcoming_days") == 30


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("true", True),
        ("False", False),
        ("12", 12),
        ("%Y-%m-%d", "%Y-%m-%d"),
        ('[{"name": "Home"}]', [{"name": "Home"}]),
        ("[not json", "[not json"),
    ],
)
def test_parse_value(raw, expected):
    assert _parse_value(raw) == expected
