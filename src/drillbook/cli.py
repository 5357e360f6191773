"""Command line interface for Drillbook."""

from __future__ import annotations

import difflib
import functools
import logging
from pathlib import Path
from typing import Any, Callable, Mapping, NoReturn

import click
import yaml
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from drillbook.config import (
    ConfigError,
    ConfigManager,
    DrillbookConfig,
    resolve_with_precedence,
    set_dotted,
)
from drillbook.dataset.fields import (
    DIFFICULTY,
    FREQUENCY,
    GROUP,
    PERIOD,
    TITLE,
    TOPICS,
    Record,
    acceptance_value,
    split_topics,
)
from drillbook.export import EmptyExportError, write_export
from drillbook.ingestion import EmptyBatchError, IngestionResult
from drillbook.query import SORT_COLUMNS, FilterCriteria, parse_number, use_user_collation
from drillbook.session import Session
from drillbook.state import JsonCompletionStore, StateError

console = Console()


def _handle_cli_error(
    message: str,
    *,
    code: str,
    json_output: bool,
    original: Exception | None = None,
) -> NoReturn:
    """Emit a standardized error and terminate the command.

    Args:
        message: Human-readable error message.
        code: Machine-readable error identifier.
        json_output: Indicates whether JSON mode is active.
        original: Original exception for chaining when not using JSON.

    Raises:
        SystemExit: When emitting JSON output to terminate the command.
        click.ClickException: For non-JSON flows to surface the error.
    """

    if json_output:
        console.print_json(data={"error": {"code": code, "message": message}})
        raise SystemExit(1)

    raise click.ClickException(message) from original


def _emit_message(message: Any, *, mode: str, quiet: bool, summary_only: bool) -> None:
    """Print CLI output according to quiet/summary settings.

    Args:
        message: Renderable or string to emit.
        mode: Output mode identifier (`detail`, `summary`, `warning`, or `error`).
        quiet: Whether quiet mode is active.
        summary_only: Whether only summary lines should be emitted.
    """

    if quiet and mode != "error":
        return
    if summary_only and mode not in {"summary", "warning", "error"}:
        return
    console.print(message)


def _load_config(overrides: Mapping[str, Any] | None = None) -> DrillbookConfig:
    try:
        config = ConfigManager().load(cli_overrides=overrides)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    return config


def _open_session(config: DrillbookConfig, *, json_output: bool) -> Session:
    store = JsonCompletionStore(Path(config.progress.path))
    try:
        return Session(store=store, config=config)
    except StateError as exc:
        _handle_cli_error(str(exc), code="state_error", json_output=json_output, original=exc)


def _ingest(session: Session, root: str, *, json_output: bool) -> IngestionResult:
    try:
        return session.load_directory(Path(root))
    except EmptyBatchError as exc:
        _handle_cli_error(
            f"Error loading data: {exc}", code="empty_batch", json_output=json_output, original=exc
        )


def _format_acceptance(record: Record) -> str:
    rate = parse_number(acceptance_value(record))
    return f"{rate * 100:.1f}%" if rate else ""


_CRITERIA_OPTIONS = (
    "group",
    "difficulty",
    "period",
    "topic",
    "min_frequency",
    "min_acceptance",
    "search",
)


def _filter_options(command: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the shared filter and sort options to ``command``."""

    options = [
        click.option("--group", default="", help="Only problems from this group."),
        click.option("--difficulty", default="", help="Only problems of this difficulty."),
        click.option("--period", default="", help="Only problems from this time period."),
        click.option("--topic", default="", help="Only problems whose topics contain TEXT."),
        click.option("--min-frequency", type=float, default=0, help="Minimum frequency score."),
        click.option(
            "--min-acceptance", type=float, default=0, help="Minimum acceptance percentage."
        ),
        click.option(
            "--status",
            "completion",
            type=click.Choice(["all", "completed", "not-completed"]),
            default=None,
            help="Filter by completion state.",
        ),
        click.option("--search", default="", help="Search titles, groups and topics."),
        click.option(
            "--sort",
            "sort_column",
            default=None,
            help=f"Sort column ({', '.join(SORT_COLUMNS)} or any CSV column).",
        ),
        click.option("--desc", "descending", is_flag=True, help="Sort in descending order."),
    ]
    for option in reversed(options):
        command = option(command)

    @functools.wraps(command)
    def wrapper(**kwargs: Any) -> Any:
        kwargs["criteria_values"] = {name: kwargs.pop(name) for name in _CRITERIA_OPTIONS}
        kwargs["overrides"] = _query_overrides(
            kwargs.pop("completion"), kwargs.pop("sort_column"), kwargs.pop("descending")
        )
        return command(**kwargs)

    return wrapper


def _query_overrides(
    completion: str | None, sort_column: str | None, descending: bool
) -> dict[str, Any]:
    """Translate completion and sort flags into dotted configuration overrides."""
    overrides: dict[str, Any] = {}
    if completion:
        overrides["query.completion"] = completion
    if sort_column:
        overrides["query.sort_column"] = sort_column
    if sort_column or descending:
        overrides["query.sort_direction"] = "desc" if descending else "asc"
    return overrides


def _prepare_view(session: Session, criteria_values: dict[str, Any]) -> list[Record]:
    criteria = FilterCriteria(**criteria_values, completion=session.config.query.completion)
    return session.view(criteria)


def _render_table(session: Session, records: list[Record]) -> Table:
    table = Table(show_lines=False)
    for heading in ("Done", "Group", "Period", "Difficulty", "Title", "Frequency", "Acceptance"):
        table.add_column(heading)
    table.add_column("Topics", overflow="fold")
    for record in records:
        table.add_row(
            "[green]✓[/green]" if session.is_completed(record) else "",
            record.get(GROUP, ""),
            record.get(PERIOD, ""),
            record.get(DIFFICULTY, ""),
            record.get(TITLE, ""),
            record.get(FREQUENCY, ""),
            _format_acceptance(record),
            ", ".join(split_topics(record.get(TOPICS))),
        )
    return table


def _emit_ingestion_notes(result: IngestionResult, *, quiet: bool, summary_only: bool) -> None:
    for note in result.notes:
        _emit_message(
            f"[yellow]Note: {note}[/yellow]",
            mode="warning",
            quiet=quiet,
            summary_only=summary_only,
        )
    for error in result.errors:
        _emit_message(
            f"[red]Skipped {error}[/red]",
            mode="error",
            quiet=quiet,
            summary_only=summary_only,
        )


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="drillbook")
def cli() -> None:
    """Drillbook merges problem-list CSV folders so you can filter, sort and track them."""


@cli.command("list")
@click.argument("root", type=click.Path(exists=True, path_type=str))
@_filter_options
@click.option("--limit", type=int, default=None, help="Show at most N problems.")
@click.option("--json", "json_output", is_flag=True, help="Emit matching problems as JSON.")
@click.option("--summary", "summary_mode", is_flag=True, help="Only emit summary lines.")
@click.option("--quiet", is_flag=True, help="Suppress non-error output.")
def list_problems(
    root: str,
    criteria_values: dict[str, Any],
    overrides: dict[str, Any],
    limit: int | None,
    json_output: bool,
    summary_mode: bool,
    quiet: bool,
) -> None:
    """Load the CSV folder at ROOT and list the problems that match the filters."""
    if limit is not None:
        overrides["cli.row_limit"] = limit
    config = _load_config(overrides)
    quiet = quiet or config.cli.quiet_default
    summary_only = summary_mode or config.cli.summary_default
    session = _open_session(config, json_output=json_output)
    result = _ingest(session, root, json_output=json_output)
    records = _prepare_view(session, criteria_values)
    summary = session.summary(records)

    row_limit = config.cli.row_limit
    shown = records[:row_limit] if row_limit else records

    if json_output:
        console.print_json(
            data={
                "counts": {
                    "loaded": len(session.dataset),
                    "matches": summary.total,
                    "completed": summary.completed,
                    "percent": summary.percent,
                },
                "sort": {"column": session.sort_column, "direction": session.sort_direction},
                "notes": result.notes,
                "errors": result.errors,
                "results": [
                    {**record, "completed": session.is_completed(record)} for record in shown
                ],
            }
        )
        return

    emit = functools.partial(_emit_message, quiet=quiet, summary_only=summary_only)
    _emit_ingestion_notes(result, quiet=quiet, summary_only=summary_only)
    emit(result.status_message(), mode="detail")
    if shown:
        emit(_render_table(session, shown), mode="detail")
    emit(f"[green]{summary.describe()}.[/green]", mode="summary")


@cli.command("export")
@click.argument("root", type=click.Path(exists=True, path_type=str))
@_filter_options
@click.option(
    "--output",
    type=click.Path(path_type=str),
    default=None,
    help="Destination file or directory (defaults to the configured file name).",
)
@click.option("--with-status/--no-status", default=None, help="Add a Completed column.")
@click.option("--json", "json_output", is_flag=True, help="Describe the written file as JSON.")
@click.option("--quiet", is_flag=True, help="Suppress non-error output.")
def export_problems(
    root: str,
    criteria_values: dict[str, Any],
    overrides: dict[str, Any],
    output: str | None,
    with_status: bool | None,
    json_output: bool,
    quiet: bool,
) -> None:
    """Export the problems under ROOT that match the filters to CSV."""
    if with_status is not None:
        overrides["export.include_status"] = with_status
    config = _load_config(overrides)
    quiet = quiet or config.cli.quiet_default
    session = _open_session(config, json_output=json_output)
    _ingest(session, root, json_output=json_output)
    criteria = FilterCriteria(**criteria_values, completion=config.query.completion)

    try:
        document = session.export(criteria, with_status=config.export.include_status)
        target = write_export(document, Path(output) if output else Path.cwd())
    except EmptyExportError as exc:
        _handle_cli_error(str(exc), code="empty_export", json_output=json_output, original=exc)
    except OSError as exc:
        _handle_cli_error(
            f"Unable to write export: {exc}",
            code="write_failed",
            json_output=json_output,
            original=exc,
        )

    if json_output:
        console.print_json(
            data={
                "path": str(target),
                "rows": document.row_count,
                "media_type": document.media_type,
            }
        )
        return

    _emit_message(
        f"[green]Exported {document.row_count} problems to {target}.[/green]",
        mode="summary",
        quiet=quiet,
        summary_only=False,
    )


@cli.command("stats")
@click.argument("root", type=click.Path(exists=True, path_type=str))
@_filter_options
@click.option("--json", "json_output", is_flag=True, help="Emit statistics as JSON.")
def stats(
    root: str,
    criteria_values: dict[str, Any],
    overrides: dict[str, Any],
    json_output: bool,
) -> None:
    """Show completion progress and available filter choices for ROOT."""
    config = _load_config(overrides)
    session = _open_session(config, json_output=json_output)
    result = _ingest(session, root, json_output=json_output)
    records = _prepare_view(session, criteria_values)
    summary = session.summary(records)
    dataset = session.dataset

    if json_output:
        console.print_json(
            data={
                "counts": {
                    "matches": summary.total,
                    "completed": summary.completed,
                    "percent": summary.percent,
                },
                "groups": dataset.sorted_groups(),
                "periods": dataset.sorted_periods(),
                "topics": dataset.sorted_topics(),
                "simplified_structure": result.simplified_structure,
            }
        )
        return

    table = Table(title="Filter choices")
    table.add_column("Field")
    table.add_column("Count", justify="right")
    table.add_column("Values", overflow="fold")
    for label, values in (
        ("Groups", dataset.sorted_groups()),
        ("Periods", dataset.sorted_periods()),
        ("Topics", dataset.sorted_topics()),
    ):
        table.add_row(label, str(len(values)), ", ".join(values))
    console.print(table)
    console.print(f"[green]{summary.describe()}.[/green]")


@cli.command("done")
@click.argument("links", nargs=-1, required=True)
def done(links: tuple[str, ...]) -> None:
    """Mark the problems identified by LINKS as completed."""
    config = _load_config()
    session = _open_session(config, json_output=False)
    try:
        session.mark(*links, done=True)
    except StateError as exc:
        raise click.ClickException(str(exc)) from exc
    console.print(f"[green]Marked {len(links)} problem(s) as completed.[/green]")


@cli.command("undone")
@click.argument("links", nargs=-1, required=True)
def undone(links: tuple[str, ...]) -> None:
    """Clear the completed flag for LINKS."""
    config = _load_config()
    session = _open_session(config, json_output=False)
    missing = [link for link in links if link not in session.completed]
    try:
        session.mark(*links, done=False)
    except StateError as exc:
        raise click.ClickException(str(exc)) from exc
    if missing:
        console.print(f"[yellow]{len(missing)} link(s) were not marked as completed.[/yellow]")
    console.print(f"[green]Cleared {len(links) - len(missing)} completed problem(s).[/green]")


@cli.group()
def config() -> None:
    """Inspect and change the settings stored in ~/.drillbook/config.yaml."""


def _config_manager() -> ConfigManager:
    manager = ConfigManager()
    try:
        manager.ensure_exists()
    except OSError as exc:
        raise click.ClickException(f"Unable to create {manager.path}: {exc}") from exc
    return manager


def _store_validated(manager: ConfigManager, data: dict[str, Any]) -> None:
    try:
        resolve_with_precedence(data)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    manager.write(data)


@config.command("view")
@click.option("--no-env", is_flag=True, help="Show the file values without DRILLBOOK__ overrides.")
def config_view(no_env: bool) -> None:
    """Print the effective settings as YAML."""
    manager = _config_manager()
    try:
        effective = manager.load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    yaml_text = yaml.safe_dump(effective.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="New value, parsed as YAML.")
def config_set(key: str, value: str) -> None:
    """Store VALUE under a dotted KEY such as query.sort_column."""
    manager = _config_manager()
    before = manager.read_text().splitlines()

    try:
        data = manager.read_overrides()
        set_dotted(data, key, yaml.safe_load(value))
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Unable to parse value: {exc}") from exc
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    _store_validated(manager, data)

    # The timestamp line changes on every write.
    changes = [
        line
        for line in difflib.unified_diff(
            before, manager.read_text().splitlines(), "before", "after", lineterm="", n=1
        )
        if "Last updated:" not in line
    ]
    if changes:
        console.print(Syntax("\n".join(changes), "diff", word_wrap=False))
    console.print(f"[green]Updated {key}.[/green]")


@config.command("edit")
def config_edit() -> None:
    """Edit the settings file in $EDITOR and validate the result."""
    manager = _config_manager()
    original = manager.read_text()
    edited = click.edit(original, extension=".yaml")

    if edited is None or edited == original:
        console.print("[yellow]No changes applied.[/yellow]")
        return

    try:
        data = yaml.safe_load(edited) or {}
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Invalid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise click.ClickException("The settings file must hold a mapping of sections.")
    _store_validated(manager, data)
    console.print("[green]Configuration updated successfully.[/green]")


def main() -> None:
    """Invoke the Click CLI as the console script entry point."""
    use_user_collation()
    cli()


if __name__ == "__main__":
    main()
