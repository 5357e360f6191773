"""CSV export of filtered problem views."""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from pathlib import Path
from typing import AbstractSet, Optional, Sequence

from drillbook.dataset.fields import (
    ACCEPTANCE,
    ACCEPTANCE_ALT,
    DIFFICULTY,
    FREQUENCY,
    GROUP,
    LINK,
    PERIOD,
    TITLE,
    TOPICS,
    Record,
)
from drillbook.ingestion.parser import COMMENT_PREFIX

EXPORT_FILENAME = "leetcode_problems.csv"
EXPORT_MEDIA_TYPE = "text/csv"
STATUS_COLUMN = "Completed"

PREFERRED_COLUMNS = (
    GROUP,
    PERIOD,
    DIFFICULTY,
    TITLE,
    FREQUENCY,
    ACCEPTANCE,
    ACCEPTANCE_ALT,
    LINK,
    TOPICS,
)


class EmptyExportError(Exception):
    """Raised when asked to export a view without any records."""

    def __init__(self) -> None:
        super().__init__("No problems to export")


def export_columns(records: Sequence[Record]) -> list[str]:
    """Return the output column order for ``records``.

    Preferred columns come first when present; every other column follows in
    the order it was first seen.
    """
    seen: dict[str, None] = {}
    for record in records:
        for key in record:
            seen.setdefault(key, None)
    ordered = [name for name in PREFERRED_COLUMNS if name in seen]
    ordered.extend(name for name in seen if name not in PREFERRED_COLUMNS)
    return ordered


def with_status(records: Sequence[Record], completed: AbstractSet[str]) -> list[Record]:
    """Return copies of ``records`` carrying a ``Completed`` Yes/No column."""
    return [
        {**record, STATUS_COLUMN: "Yes" if record.get(LINK) in completed else "No"}
        for record in records
    ]


def _reads_as_skipped(values: list[str]) -> bool:
    line = ",".join(values).strip()
    return not line or line.startswith(COMMENT_PREFIX)


def export_csv(
    records: Sequence[Record],
    *,
    completed: Optional[AbstractSet[str]] = None,
) -> str:
    """Serialize ``records`` to CSV text.

    Values containing commas, quotes or line breaks are quoted with inner
    quotes doubled; missing values are written as empty strings. Rows that
    would otherwise read back as blank or ``//`` comment lines are fully quoted.

    Args:
        records: View to export, in display order.
        completed: When given, adds a ``Completed`` column based on these links.

    Returns:
        str: CSV document with a header line and ``\\n`` line endings.

    Raises:
        EmptyExportError: If ``records`` is empty.
    """
    if not records:
        raise EmptyExportError()
    if completed is not None:
        records = with_status(records, completed)

    columns = export_columns(records)
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    strict = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_ALL)

    writer.writerow(columns)
    for record in records:
        values = [record.get(name) or "" for name in columns]
        (strict if _reads_as_skipped(values) else writer).writerow(values)
    return buffer.getvalue()


@dataclass(frozen=True, slots=True)
class ExportDocument:
    """A serialized view ready to be saved or offered as a download.

    Attributes:
        filename: Suggested file name.
        media_type: MIME type of ``text``.
        text: CSV document.
        row_count: Number of data rows in ``text``.
    """

    filename: str
    media_type: str
    text: str
    row_count: int


def build_export(
    records: Sequence[Record],
    *,
    completed: Optional[AbstractSet[str]] = None,
    filename: str = EXPORT_FILENAME,
) -> ExportDocument:
    """Serialize ``records`` into an :class:`ExportDocument`.

    Raises:
        EmptyExportError: If ``records`` is empty.
    """
    return ExportDocument(
        filename=filename,
        media_type=EXPORT_MEDIA_TYPE,
        text=export_csv(records, completed=completed),
        row_count=len(records),
    )


def write_export(document: ExportDocument, destination: Path) -> Path:
    """Write ``document`` to ``destination``; a directory gets the document's file name."""
    target = destination / document.filename if destination.is_dir() else destination
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(document.text, encoding="utf-8")
    return target


__all__ = [
    "EXPORT_FILENAME",
    "EXPORT_MEDIA_TYPE",
    "PREFERRED_COLUMNS",
    "STATUS_COLUMN",
    "EmptyExportError",
    "ExportDocument",
    "build_export",
    "export_columns",
    "export_csv",
    "with_status",
    "write_export",
]
