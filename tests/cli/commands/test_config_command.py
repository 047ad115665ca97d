"""Tests for the config commands."""

import json

from maintenance_tracker.cli.main import cli
from maintenance_tracker.core.constants import DATA_DIR_NAME
from maintenance_tracker.core.task_storage import TaskStorageManager
from maintenance_tracker.utils.config_manager import ConfigManager


class TestConfigCommands:
    """Test config show/set/reset."""

    def test_show(self, cli_runner, project_dir):
        result = cli_runner.invoke(cli, ['config', 'show'])

        assert result.exit_code == 0
        body = result.output.split("Tracker Configuration:", 1)[1]
        assert json.loads(body)["horizon_days"] == 3

    def test_set(self, cli_runner, project_dir):
        result = cli_runner.invoke(cli, ['config', 'set', 'horizon_days', '7'])

        assert result.exit_code == 0
        assert "Set horizon_days = 7" in result.output
        assert ConfigManager(project_dir / DATA_DIR_NAME).get_config().horizon_days == 7

    def test_set_bool(self, cli_runner, project_dir):
        cli_runner.invoke(cli, ['config', 'set', 'auto_follow_up', 'false'])
        assert ConfigManager(project_dir / DATA_DIR_NAME).get_config().auto_follow_up is False

    def test_set_invalid(self, cli_runner, project_dir):
        result = cli_runner.invoke(cli, ['config', 'set', 'horizon_days', 'soon'])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_set_unknown_key(self, cli_runner, project_dir):
        result = cli_runner.invoke(cli, ['config', 'set', 'colour', 'blue'])

        assert result.exit_code == 1
        assert "Unknown config keys: colour" in result.output

    def test_reset(self, cli_runner, project_dir):
        cli_runner.invoke(cli, ['config', 'set', 'horizon_days', '7'])
        result = cli_runner.invoke(cli, ['config', 'reset'])

        assert "Configuration reset to defaults" in result.output
        assert ConfigManager(project_dir / DATA_DIR_NAME).get_config().horizon_days == 3

    def test_disabled_follow_up_applies_to_complete(self, cli_runner, project_dir):
        cli_runner.invoke(cli, ['config', 'set', 'auto_follow_up', 'false'])
        cli_runner.invoke(cli, ['task', 'create', '-e', 'pump-1', '-d', '2024-06-03', '-f', 'weekly'])
        storage_dir = project_dir / DATA_DIR_NAME
        task_id = TaskStorageManager(storage_dir).list_tasks()[0].id

        result = cli_runner.invoke(cli, ['task', 'complete', task_id, '-d', '1'])

        assert "Next occurrence" not in result.output
        assert len(TaskStorageManager(storage_dir).list_tasks()) == 1
