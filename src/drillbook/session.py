"""Session state shared by the query, export and progress operations."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from drillbook.config.models import DrillbookConfig
from drillbook.dataset.fields import LINK, Record
from drillbook.dataset.models import Dataset
from drillbook.export import ExportDocument, build_export
from drillbook.ingestion import EmptyBatchError, IngestionPipeline, IngestionResult, SourceFile
from drillbook.query import (
    FilterCriteria,
    SortDirection,
    ViewSummary,
    filter_records,
    sort_records,
    summarize_view,
)
from drillbook.state import CompletionStore, InMemoryCompletionStore

LOGGER = logging.getLogger(__name__)


class Session:
    """Own the current dataset, completion set and sort state.

    The dataset is only ever replaced as a whole: a failed ingestion leaves the
    session empty rather than holding a partial batch.
    """

    def __init__(
        self,
        store: CompletionStore | None = None,
        config: DrillbookConfig | None = None,
    ) -> None:
        self.config = config or DrillbookConfig()
        self.store: CompletionStore = store or InMemoryCompletionStore()
        self.dataset = Dataset()
        self.completed: set[str] = self.store.load()
        self.sort_column: str = self.config.query.sort_column
        self.sort_direction: SortDirection = self.config.query.sort_direction
        self.pipeline = IngestionPipeline(processing=self.config.processing)

    # Ingestion --------------------------------------------------------

    def load_directory(self, root: Path) -> IngestionResult:
        """Replace the dataset with the CSV files found beneath ``root``."""
        return self.load_files(self.pipeline.scan(root))

    def load_files(self, files: Iterable[SourceFile]) -> IngestionResult:
        """Replace the dataset with ``files``.

        Raises:
            EmptyBatchError: If no file produced a record; the session is left
                without data.
        """
        self.dataset = Dataset()
        try:
            result = self.pipeline.run(files)
        except EmptyBatchError:
            LOGGER.warning("Ingestion produced no records; session cleared.")
            raise
        self.dataset = result.dataset
        return result

    # Queries ----------------------------------------------------------

    def default_criteria(self) -> FilterCriteria:
        return FilterCriteria(completion=self.config.query.completion)

    def view(self, criteria: FilterCriteria | None = None) -> list[Record]:
        """Return the filtered dataset ordered by the current sort state."""
        filtered = filter_records(
            self.dataset.records, criteria or self.default_criteria(), self.completed
        )
        return sort_records(filtered, self.sort_column, self.sort_direction)

    def sort_by(self, column: str, direction: Optional[SortDirection] = None) -> None:
        """Select the sort column.

        Choosing the current column again flips the direction; a new column
        starts ascending. An explicit ``direction`` always wins.
        """
        if direction is not None:
            self.sort_column, self.sort_direction = column, direction
        elif column == self.sort_column:
            self.sort_direction = "desc" if self.sort_direction == "asc" else "asc"
        else:
            self.sort_column, self.sort_direction = column, "asc"

    def summary(self, records: list[Record]) -> ViewSummary:
        return summarize_view(records, self.completed)

    def export(
        self, criteria: FilterCriteria | None = None, *, with_status: bool = False
    ) -> ExportDocument:
        """Return the current view as a CSV export document.

        Raises:
            EmptyExportError: If the view holds no records.
        """
        completed = self.completed if with_status else None
        return build_export(
            self.view(criteria), completed=completed, filename=self.config.export.filename
        )

    # Progress ---------------------------------------------------------

    def is_completed(self, record: Record) -> bool:
        return record.get(LINK) in self.completed

    def mark(self, *links: str, done: bool = True) -> None:
        """Mark or unmark ``links`` and persist the completion set."""
        if done:
            self.completed.update(links)
        else:
            self.completed.difference_update(links)
        self.store.save(self.completed)

    def toggle(self, link: str) -> bool:
        """Flip the completion flag for ``link``; return the new state."""
        done = link not in self.completed
        self.mark(link, done=done)
        return done


__all__ = ["Session"]
