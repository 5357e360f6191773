"""CLI tests for configuration commands."""

import os
from pathlib import Path
from typing import Any

from click.testing import CliRunner

from drillbook.cli import cli
from drillbook.config import ConfigManager


def _env_with_home(tmp_path: Path) -> dict[str, Any]:
    env = {key: value for key, value in os.environ.items() if not key.startswith("DRILLBOOK__")}
    env["HOME"] = str(tmp_path)
    return env


def _manager(tmp_path: Path) -> ConfigManager:
    return ConfigManager(tmp_path / ".drillbook" / "config.yaml", environ={})


def test_config_view_creates_and_displays_config(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)

    result = runner.invoke(cli, ["config", "view"], env=env)

    assert result.exit_code == 0
    assert "processing:" in result.output
    assert "sort_column: group" in result.output
    assert _manager(tmp_path).path.exists()


def test_config_view_shows_environment_unless_disabled(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)
    env["DRILLBOOK__QUERY__SORT_COLUMN"] = "title"

    with_env = runner.invoke(cli, ["config", "view"], env=env)
    without_env = runner.invoke(cli, ["config", "view", "--no-env"], env=env)

    assert "sort_column: title" in with_env.output
    assert "sort_column: group" in without_env.output


def test_config_set_updates_value_and_writes_diff(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)

    result = runner.invoke(
        cli, ["config", "set", "query.sort_column", "--value", "frequency"], env=env
    )

    assert result.exit_code == 0
    assert "frequency" in result.output
    assert "Last updated" not in result.output
    assert "Updated query.sort_column." in result.output
    assert _manager(tmp_path).load().query.sort_column == "frequency"


def test_config_set_keeps_file_when_value_is_invalid(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)

    result = runner.invoke(
        cli, ["config", "set", "query.sort_direction", "--value", "sideways"], env=env
    )

    assert result.exit_code != 0
    assert _manager(tmp_path).load().query.sort_direction == "asc"


def test_config_set_rejects_unknown_section(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)

    result = runner.invoke(cli, ["config", "set", "colours.title", "--value", "red"], env=env)

    assert result.exit_code != 0
    assert "colours" not in _manager(tmp_path).read_text()


def test_config_edit_applies_changes(tmp_path: Path, monkeypatch) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)
    manager = _manager(tmp_path)
    manager.ensure_exists()

    def _mock_edit(text: str, **_: Any) -> str:
        return text.replace("level: WARNING", "level: ERROR")

    monkeypatch.setattr("drillbook.cli.click.edit", _mock_edit)

    result = runner.invoke(cli, ["config", "edit"], env=env)

    assert result.exit_code == 0
    assert "Configuration updated successfully." in result.output
    assert manager.load().logging.level == "ERROR"


def test_config_edit_without_changes_leaves_file(tmp_path: Path, monkeypatch) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)
    manager = _manager(tmp_path)
    manager.ensure_exists()
    before = manager.read_text()

    monkeypatch.setattr("drillbook.cli.click.edit", lambda text, **_: None)

    result = runner.invoke(cli, ["config", "edit"], env=env)

    assert result.exit_code == 0
    assert "No changes applied." in result.output
    assert manager.read_text() == before
