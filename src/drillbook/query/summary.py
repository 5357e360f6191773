"""Counts shown alongside a filtered view."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import AbstractSet, Sequence

from drillbook.dataset.fields import LINK, Record


@dataclass(frozen=True, slots=True)
class ViewSummary:
    """Problem and completion counts for a view.

    Attributes:
        total: Number of records in the view.
        completed: Number of those records marked done.
        percent: Completed share rounded half-up to a whole percent.
    """

    total: int
    completed: int
    percent: int

    def describe(self) -> str:
        return (
            f"{self.total} problems found, "
            f"{self.completed} completed ({self.percent}%)"
        )


def summarize_view(records: Sequence[Record], completed: AbstractSet[str]) -> ViewSummary:
    """Count how many records in ``records`` have been completed."""
    done = sum(1 for record in records if record.get(LINK) in completed)
    total = len(records)
    percent = math.floor(done / total * 100 + 0.5) if total else 0
    return ViewSummary(total=total, completed=done, percent=percent)


__all__ = ["ViewSummary", "summarize_view"]
