"""Ingestion errors."""


class IngestionError(Exception):
    """Base exception for problem-folder ingestion."""


class EmptyBatchError(IngestionError):
    """Raised when no selected file produced a single parsed record."""

    default_message = (
        "No valid CSV files found. Make sure your files have .csv extension "
        "and contain valid data."
    )

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
