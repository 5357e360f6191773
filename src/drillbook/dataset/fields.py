"""Field names recognized in problem listings."""

from __future__ import annotations

from typing import Dict, Optional

Record = Dict[str, str]

GROUP = "Group"
PERIOD = "Period"
DIFFICULTY = "Difficulty"
TITLE = "Title"
FREQUENCY = "Frequency"
ACCEPTANCE = "Acceptance Rate"
ACCEPTANCE_ALT = "Acceptance_Rate"
LINK = "Link"
TOPICS = "Topics"

UNKNOWN_LABEL = "Unknown"


def acceptance_value(record: Record) -> Optional[str]:
    """Return the acceptance ratio from whichever column spelling is populated."""
    return record.get(ACCEPTANCE) or record.get(ACCEPTANCE_ALT)


def split_topics(value: str | None) -> list[str]:
    """Split a comma-separated topics field into trimmed, unquoted tags."""
    if not value:
        return []
    tags = (piece.strip().replace('"', "") for piece in value.split(","))
    return [tag for tag in tags if tag]


__all__ = [
    "Record",
    "GROUP",
    "PERIOD",
    "DIFFICULTY",
    "TITLE",
    "FREQUENCY",
    "ACCEPTANCE",
    "ACCEPTANCE_ALT",
    "LINK",
    "TOPICS",
    "UNKNOWN_LABEL",
    "acceptance_value",
    "split_topics",
]
