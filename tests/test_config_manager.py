"""Unit tests for configuration management."""

from pathlib import Path

import pytest

from drillbook.config import (
    ConfigError,
    ConfigManager,
    parse_env,
    resolve_with_precedence,
    set_dotted,
)
from drillbook.ingestion import SourceFile
from drillbook.session import Session
from drillbook.state import InMemoryCompletionStore


def _manager(tmp_path: Path, **environ: str) -> ConfigManager:
    return ConfigManager(tmp_path / "config.yaml", environ=environ)


def test_first_load_writes_defaults_with_header(tmp_path: Path) -> None:
    manager = _manager(tmp_path)

    config = manager.load()

    text = manager.path.read_text(encoding="utf-8")
    assert text.startswith("# Drillbook configuration file")
    assert "# Last updated:" in text
    assert "sort_column: group" in text
    assert config.export.filename == "leetcode_problems.csv"
    assert config.progress.path == "~/.drillbook/progress.json"


def test_default_path_lives_under_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    assert ConfigManager().path == tmp_path / ".drillbook" / "config.yaml"


def test_environment_sort_column_drives_session_default_sort(tmp_path: Path) -> None:
    manager = _manager(
        tmp_path,
        DRILLBOOK__QUERY__SORT_COLUMN="frequency",
        DRILLBOOK__QUERY__SORT_DIRECTION="desc",
    )
    session = Session(store=InMemoryCompletionStore(), config=manager.load())
    session.load_files(
        [
            SourceFile(
                relative_path="r/G/P.csv",
                content=b"Title,Frequency,Link\nLow,10,l1\nHigh,90,l2\nMid,50,l3\n",
            )
        ]
    )

    assert (session.sort_column, session.sort_direction) == ("frequency", "desc")
    assert [record["Title"] for record in session.view()] == ["High", "Mid", "Low"]


def test_command_line_beats_environment_beats_file(tmp_path: Path) -> None:
    manager = _manager(
        tmp_path, DRILLBOOK__CLI__ROW_LIMIT="25", DRILLBOOK__QUERY__COMPLETION="completed"
    )
    manager.write(
        {"cli": {"row_limit": 5, "quiet_default": True}, "query": {"sort_column": "title"}}
    )

    config = manager.load(cli_overrides={"cli.row_limit": 10})

    assert config.cli.row_limit == 10
    assert config.cli.quiet_default is True
    assert config.query.sort_column == "title"
    assert config.query.completion == "completed"
    assert manager.load(include_env=False).cli.row_limit == 5


def test_progress_path_can_be_redirected(tmp_path: Path) -> None:
    target = tmp_path / "elsewhere" / "done.json"
    manager = _manager(tmp_path, DRILLBOOK__PROGRESS__PATH=str(target))

    assert manager.load().progress.path == str(target)


def test_parse_env_reads_yaml_scalars_and_ignores_other_variables() -> None:
    overrides = parse_env(
        {
            "DRILLBOOK__CLI__ROW_LIMIT": "25",
            "DRILLBOOK__EXPORT__INCLUDE_STATUS": "true",
            "DRILLBOOK__QUERY__SORT_COLUMN": "Acceptance Rate",
            "DRILLBOOK__": "ignored",
            "HOME": "/tmp",
        }
    )

    assert overrides == {
        "cli.row_limit": 25,
        "export.include_status": True,
        "query.sort_column": "Acceptance Rate",
    }


def test_set_dotted_creates_sections_and_rejects_scalars() -> None:
    data: dict = {"query": "oops"}

    set_dotted(data, "export.include_status", True)
    assert data["export"] == {"include_status": True}

    with pytest.raises(ConfigError):
        set_dotted(data, "query.sort_column", "title")
    with pytest.raises(ConfigError):
        set_dotted(data, " . ", 1)


def test_invalid_file_contents_raise_config_error(tmp_path: Path) -> None:
    manager = _manager(tmp_path)
    manager.path.write_text("- not-a-mapping", encoding="utf-8")

    with pytest.raises(ConfigError):
        manager.load()

    manager.path.write_text("query: [unclosed", encoding="utf-8")
    with pytest.raises(ConfigError):
        manager.load()


def test_unknown_and_invalid_values_are_rejected() -> None:
    with pytest.raises(ConfigError):
        resolve_with_precedence({"query": {"colour": "blue"}})
    with pytest.raises(ConfigError):
        resolve_with_precedence(cli_overrides={"query.sort_direction": "sideways"})
