"""Filtering and sorting over merged problem records.

Every function here returns a new list and leaves its input untouched, so a
dataset can be filtered and re-sorted any number of times without copying it.
"""

from __future__ import annotations

from typing import AbstractSet, Callable, Iterable, Sequence

from drillbook.dataset.fields import (
    DIFFICULTY,
    FREQUENCY,
    GROUP,
    LINK,
    PERIOD,
    TITLE,
    TOPICS,
    Record,
    acceptance_value,
)
from drillbook.dataset.models import Dataset

from .collation import collation_key
from .criteria import (
    SORT_ACCEPTANCE,
    SORT_DIFFICULTY,
    SORT_FREQUENCY,
    SORT_GROUP,
    SORT_PERIOD,
    SORT_TITLE,
    FilterCriteria,
    SortDirection,
)
from .numbers import number_or_zero, parse_number

DIFFICULTY_RANK = {"EASY": 1, "MEDIUM": 2, "HARD": 3}

_TEXT_COLUMNS = {SORT_GROUP: GROUP, SORT_PERIOD: PERIOD, SORT_TITLE: TITLE}


def matches(
    record: Record,
    criteria: FilterCriteria,
    completed: AbstractSet[str] = frozenset(),
) -> bool:
    """Return True when ``record`` satisfies every supplied criterion."""
    if criteria.group and record.get(GROUP) != criteria.group:
        return False
    if criteria.difficulty and record.get(DIFFICULTY) != criteria.difficulty:
        return False
    if criteria.period and record.get(PERIOD) != criteria.period:
        return False

    topics = record.get(TOPICS) or ""
    if criteria.topic and criteria.topic not in topics:
        return False

    if criteria.min_frequency > 0:
        frequency = parse_number(record.get(FREQUENCY))
        if frequency is None or frequency < criteria.min_frequency:
            return False

    if criteria.min_acceptance > 0:
        ratio = parse_number(acceptance_value(record))
        if ratio is None or ratio * 100 < criteria.min_acceptance:
            return False

    is_done = record.get(LINK) in completed
    if criteria.completion == "completed" and not is_done:
        return False
    if criteria.completion == "not-completed" and is_done:
        return False

    query = criteria.search.lower()
    if query:
        haystacks = (record.get(TITLE) or "", record.get(GROUP) or "", topics)
        if not any(query in text.lower() for text in haystacks):
            return False

    return True


def filter_records(
    records: Iterable[Record],
    criteria: FilterCriteria | None = None,
    completed: AbstractSet[str] = frozenset(),
) -> list[Record]:
    """Return the records that satisfy ``criteria``, preserving input order.

    Args:
        records: Records to filter; typically ``Dataset.records``.
        criteria: Filter settings; None keeps every record.
        completed: Links the user has marked done.

    Returns:
        list[Record]: Matching records in their original order.
    """
    if criteria is None:
        return list(records)
    return [record for record in records if matches(record, criteria, completed)]


def _difficulty_key(record: Record) -> int:
    return DIFFICULTY_RANK.get(record.get(DIFFICULTY) or "", 0)


def _text_key(field_name: str) -> Callable[[Record], tuple[str, str, str]]:
    def key(record: Record) -> tuple[str, str, str]:
        return collation_key(record.get(field_name) or "")

    return key


def sort_key(column: str) -> Callable[[Record], object]:
    """Return the key function used to order records by ``column``.

    Known column names map to their fields; anything else compares the raw
    field of that name as text.
    """
    if column == SORT_DIFFICULTY:
        return _difficulty_key
    if column == SORT_FREQUENCY:
        return lambda record: number_or_zero(record.get(FREQUENCY))
    if column == SORT_ACCEPTANCE:
        return lambda record: number_or_zero(acceptance_value(record))
    return _text_key(_TEXT_COLUMNS.get(column, column))


def sort_records(
    records: Sequence[Record],
    column: str = SORT_GROUP,
    direction: SortDirection = "asc",
) -> list[Record]:
    """Return a stably sorted copy of ``records``.

    Records that compare equal keep their relative order in both directions.
    """
    return sorted(records, key=sort_key(column), reverse=direction == "desc")


def query(
    dataset: Dataset,
    criteria: FilterCriteria | None = None,
    completed: AbstractSet[str] = frozenset(),
    column: str = SORT_GROUP,
    direction: SortDirection = "asc",
) -> list[Record]:
    """Filter ``dataset`` and sort the result."""
    return sort_records(filter_records(dataset.records, criteria, completed), column, direction)


__all__ = [
    "DIFFICULTY_RANK",
    "matches",
    "filter_records",
    "sort_key",
    "sort_records",
    "query",
]
