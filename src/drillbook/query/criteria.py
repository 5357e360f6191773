"""Query parameters supplied by the presentation layer."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

CompletionMode = Literal["all", "completed", "not-completed"]
SortDirection = Literal["asc", "desc"]

SORT_GROUP = "group"
SORT_PERIOD = "period"
SORT_DIFFICULTY = "difficulty"
SORT_TITLE = "title"
SORT_FREQUENCY = "frequency"
SORT_ACCEPTANCE = "acceptance"

SORT_COLUMNS = (
    SORT_GROUP,
    SORT_PERIOD,
    SORT_DIFFICULTY,
    SORT_TITLE,
    SORT_FREQUENCY,
    SORT_ACCEPTANCE,
)


class FilterCriteria(BaseModel):
    """Conjunctive filter settings; every field defaults to "no restriction".

    Attributes:
        group: Exact group label, or empty for any.
        difficulty: Exact difficulty tier, or empty for any.
        period: Exact period label, or empty for any.
        topic: Text that must appear within the record's topics field.
        min_frequency: Minimum frequency score; ignored unless positive.
        min_acceptance: Minimum acceptance percentage (0-100); ignored unless positive.
        completion: Which completion state to keep.
        search: Case-insensitive text matched against title, group and topics.
    """

    model_config = ConfigDict(extra="forbid")

    group: str = ""
    difficulty: str = ""
    period: str = ""
    topic: str = ""
    min_frequency: float = 0
    min_acceptance: float = 0
    completion: CompletionMode = "all"
    search: str = ""


__all__ = [
    "CompletionMode",
    "SortDirection",
    "FilterCriteria",
    "SORT_COLUMNS",
    "SORT_GROUP",
    "SORT_PERIOD",
    "SORT_DIFFICULTY",
    "SORT_TITLE",
    "SORT_FREQUENCY",
    "SORT_ACCEPTANCE",
]
