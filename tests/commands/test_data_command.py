"""Unit tests for the data (save/load) commands."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from todolist_cli.commands.data import app
from todolist_cli.utils.exit_codes import ERROR_STORAGE

runner = CliRunner()


@pytest.fixture()
def service(patch_todo_service):
    return patch_todo_service


class TestDataCommand:
    def test_save_default(self, service):
        result = runner.invoke(app, ["save"])
        assert result.exit_code == 0, result.output
        assert service.storage.default_file.exists()

    def test_save_named_appends_json(self, service, tmp_path):
        result = runner.invoke(app, ["save", "backup"])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "backup.json").exists()
        assert "backup.json" in result.output

    def test_load_replaces_working_list(self, service):
        task = service.add_task("Keep me")
        service.save_to("backup")
        service.delete_task(task.id)

        result = runner.invoke(app, ["load", "backup", "--yes"])
        assert result.exit_code == 0, result.output
        assert "1 tasks" in result.output
        assert service.get_task(task.id).title == "Keep me"
        # working store saved after loading
        assert not service.is_dirty

    def test_load_missing_file_warns(self, service):
        result = runner.invoke(app, ["load", "missing", "--yes"])
        assert result.exit_code == 0, result.output
        assert "No saved list" in result.output
        assert service.list_categories() == []

    def test_load_asks_before_replacing(self, service):
        service.add_task("Current")
        result = runner.invoke(app, ["load", "missing"], input="n\n")
        assert result.exit_code == 0
        assert "cancelled" in result.output
        assert len(service.list_tasks()) == 1

    def test_load_corrupt_file(self, service, tmp_path):
        (tmp_path / "broken.json").write_text("{oops", encoding="utf-8")
        result = runner.invoke(app, ["load", "broken", "--yes"])
        assert result.exit_code == ERROR_STORAGE
        assert "corrupt" in result.output

    def test_path(self, service):
        result = runner.invoke(app, ["path"])
        assert result.exit_code == 0
        assert "todolist.json" in result.output

    def test_path_is_logged(self, service, tmp_path):
        from todolist_cli.utils.logger import get_logger

        runner.invoke(app, ["path"])
        for handler in get_logger().handlers:
            handler.flush()
        content = (tmp_path / "logs" / "todolist.log").read_text()
        assert "command completed: data_path" in content
