"""Dataset containers produced by merging parsed problem files."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from .fields import Record


@dataclass(frozen=True, slots=True)
class FileLabels:
    """Group and period labels inferred for one source file.

    Attributes:
        group: Originating organization or category, e.g. a company name.
        period: Time window label, e.g. ``"6 months"`` or ``"2024"``.
    """

    group: str
    period: str


@dataclass(slots=True)
class FileBatch:
    """Records parsed from a single file together with its inferred labels.

    Attributes:
        path: Slash-delimited path of the file, starting at the selected root.
        labels: Labels inferred from the path.
        records: Rows parsed from the file, in file order.
    """

    path: str
    labels: FileLabels
    records: List[Record] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class Dataset:
    """Merged problem records plus the label sets offered as filter choices.

    Attributes:
        records: Every record, ordered by file then by row.
        groups: Distinct group labels from path classification.
        periods: Distinct period labels from path classification.
        topics: Distinct topic tags found across all records.
    """

    records: Tuple[Record, ...] = ()
    groups: frozenset[str] = frozenset()
    periods: frozenset[str] = frozenset()
    topics: frozenset[str] = frozenset()

    def __len__(self) -> int:
        return len(self.records)

    @property
    def is_empty(self) -> bool:
        """Return True when the dataset holds no records."""
        return not self.records

    def sorted_groups(self) -> list[str]:
        return sorted(self.groups)

    def sorted_periods(self) -> list[str]:
        return sorted(self.periods)

    def sorted_topics(self) -> list[str]:
        return sorted(self.topics)


__all__ = ["FileLabels", "FileBatch", "Dataset"]
