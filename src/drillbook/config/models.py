"""Configuration models describing Drillbook settings."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class DrillbookBaseModel(BaseModel):
    """Shared configuration for Drillbook Pydantic models."""

    model_config = ConfigDict(extra="forbid")


class ProcessingOptions(DrillbookBaseModel):
    """Options governing how problem folders are scanned and read.

    Attributes:
        recurse_directories: Whether to descend into subdirectories of the root.
        process_hidden_files: Whether hidden files and folders are included.
        follow_symlinks: Whether symbolic links are traversed.
        encoding: Text encoding used when decoding CSV bytes.
    """

    recurse_directories: bool = True
    process_hidden_files: bool = False
    follow_symlinks: bool = False
    encoding: str = "utf-8"


class QueryDefaults(DrillbookBaseModel):
    """Default sort and completion settings applied when a query omits them.

    Attributes:
        sort_column: Column name used when no sort is requested.
        sort_direction: Direction used when no sort is requested.
        completion: Completion mode applied when none is requested.
    """

    sort_column: str = "group"
    sort_direction: Literal["asc", "desc"] = "asc"
    completion: Literal["all", "completed", "not-completed"] = "all"


class ProgressSettings(DrillbookBaseModel):
    """Location of the persisted completion set.

    Attributes:
        path: JSON file that stores completed problem links.
    """

    path: str = "~/.drillbook/progress.json"


class ExportSettings(DrillbookBaseModel):
    """Export defaults.

    Attributes:
        filename: File name used when no output path is given.
        include_status: Whether exports add a ``Completed`` column by default.
    """

    filename: str = "leetcode_problems.csv"
    include_status: bool = False


class LoggingSettings(DrillbookBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
    """

    level: str = "WARNING"


class CLIOptions(DrillbookBaseModel):
    """CLI behavior defaults and presentation preferences.

    Attributes:
        quiet_default: Whether commands suppress non-error output by default.
        summary_default: Whether commands only print summary lines by default.
        row_limit: Default maximum number of rows rendered by ``list`` (0 = all).
    """

    quiet_default: bool = False
    summary_default: bool = False
    row_limit: int = 0


class DrillbookConfig(DrillbookBaseModel):
    """Top-level configuration struct for Drillbook.

    Attributes:
        processing: Folder scanning settings.
        query: Default query settings.
        progress: Completion store settings.
        export: Export settings.
        logging: Logging configuration.
        cli: CLI presentation defaults.
    """

    processing: ProcessingOptions = Field(default_factory=ProcessingOptions)
    query: QueryDefaults = Field(default_factory=QueryDefaults)
    progress: ProgressSettings = Field(default_factory=ProgressSettings)
    export: ExportSettings = Field(default_factory=ExportSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)


__all__ = [
    "DrillbookBaseModel",
    "ProcessingOptions",
    "QueryDefaults",
    "ProgressSettings",
    "ExportSettings",
    "LoggingSettings",
    "CLIOptions",
    "DrillbookConfig",
]
