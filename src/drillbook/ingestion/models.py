"""Models shared by the ingestion pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel

from drillbook.dataset.models import Dataset


class SourceFile(BaseModel):
    """A candidate problem file selected for ingestion.

    Attributes:
        relative_path: Slash-delimited path beginning with the selected root
            folder name, e.g. ``"lists/Google/2024.csv"``.
        path: Location on disk, when the file comes from the filesystem.
        content: In-memory bytes, used instead of ``path`` when provided.
    """

    relative_path: str
    path: Optional[Path] = None
    content: Optional[bytes] = None

    @property
    def name(self) -> str:
        return self.relative_path.rsplit("/", 1)[-1]

    @property
    def is_csv(self) -> bool:
        return self.name.endswith(".csv")

    def read_text(self, encoding: str = "utf-8") -> str:
        """Return the decoded file contents.

        Raises:
            OSError: If the file cannot be read from disk.
            UnicodeDecodeError: If the bytes are not valid for ``encoding``.
        """
        if self.content is not None:
            return self.content.decode(encoding)
        if self.path is None:
            raise OSError(f"{self.relative_path}: no content or path to read from")
        return self.path.read_bytes().decode(encoding)


@dataclass(slots=True)
class IngestionResult:
    """Outcome of ingesting one batch of problem files.

    Attributes:
        dataset: Merged dataset built from every readable file.
        processed: Relative paths that were read and parsed.
        empty: Relative paths that were read but held no records.
        errors: Messages for files that could not be read.
        notes: Advisory messages about the batch layout.
        simplified_structure: True when the batch does not follow
            ``root/<group>/<period>.csv``.
    """

    dataset: Dataset = field(default_factory=Dataset)
    processed: List[str] = field(default_factory=list)
    empty: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)
    simplified_structure: bool = False

    @property
    def group_count(self) -> int:
        return len(self.dataset.groups)

    def status_message(self) -> str:
        """Return the summary shown after a successful load."""
        return (
            f"Successfully loaded {len(self.dataset)} problems from "
            f"{self.group_count} groups."
        )


__all__ = ["SourceFile", "IngestionResult"]
