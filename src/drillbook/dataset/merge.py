"""Merge per-file record lists into a single dataset."""

from __future__ import annotations

from typing import Iterable

from .fields import GROUP, PERIOD, TOPICS, Record, split_topics
from .models import Dataset, FileBatch


def label_record(record: Record, group: str, period: str) -> Record:
    """Return a copy of ``record`` with inferred labels filled in.

    Values already present in the row win over the inferred ones.
    """
    labelled = dict(record)
    if not labelled.get(GROUP):
        labelled[GROUP] = group
    if not labelled.get(PERIOD):
        labelled[PERIOD] = period
    return labelled


def merge_batches(batches: Iterable[FileBatch]) -> Dataset:
    """Combine file batches into a dataset and derive its label sets.

    Group and period choices come from each file's classification even when
    individual rows carry their own explicit values.
    """
    records: list[Record] = []
    groups: set[str] = set()
    periods: set[str] = set()
    topics: set[str] = set()

    for batch in batches:
        groups.add(batch.labels.group)
        periods.add(batch.labels.period)
        for record in batch.records:
            labelled = label_record(record, batch.labels.group, batch.labels.period)
            topics.update(split_topics(labelled.get(TOPICS)))
            records.append(labelled)

    return Dataset(
        records=tuple(records),
        groups=frozenset(groups),
        periods=frozenset(periods),
        topics=frozenset(topics),
    )


__all__ = ["label_record", "merge_batches"]
