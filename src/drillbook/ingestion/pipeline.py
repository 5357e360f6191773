"""High-level ingestion pipeline orchestration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from drillbook.config.models import ProcessingOptions
from drillbook.dataset.merge import merge_batches
from drillbook.dataset.models import FileBatch

from .classifier import PathClassifier
from .discovery import DirectoryScanner
from .errors import EmptyBatchError
from .models import IngestionResult, SourceFile
from .parser import CsvParser

LOGGER = logging.getLogger(__name__)

SIMPLIFIED_STRUCTURE_NOTE = (
    "Using simplified folder structure. "
    "For best results, use: /root/companyname/timeperiod.csv"
)


class IngestionPipeline:
    """Read, parse, classify and merge a batch of problem files."""

    def __init__(
        self,
        parser: CsvParser | None = None,
        processing: ProcessingOptions | None = None,
    ) -> None:
        self.parser = parser or CsvParser()
        self.processing = processing or ProcessingOptions()

    def scan(self, root: Path) -> list[SourceFile]:
        """Return the files beneath ``root`` according to processing options."""
        scanner = DirectoryScanner(
            recursive=self.processing.recurse_directories,
            include_hidden=self.processing.process_hidden_files,
            follow_symlinks=self.processing.follow_symlinks,
        )
        return list(scanner.scan(root))

    def run_directory(self, root: Path) -> IngestionResult:
        """Ingest every CSV file beneath ``root``."""
        return self.run(self.scan(root))

    def run(self, files: Iterable[SourceFile]) -> IngestionResult:
        """Ingest ``files`` and return the merged result.

        Files that cannot be read are skipped and reported in
        ``IngestionResult.errors``; they never abort sibling files.

        Raises:
            EmptyBatchError: If no file yielded at least one record.
        """
        candidates = [source for source in files if source.is_csv]
        classifier = PathClassifier(source.relative_path for source in candidates)
        result = IngestionResult(simplified_structure=not classifier.has_preferred_structure)

        batches: list[FileBatch] = []
        for source in candidates:
            try:
                text = source.read_text(self.processing.encoding)
            except (OSError, UnicodeDecodeError) as exc:
                LOGGER.warning("Skipping unreadable file %s: %s", source.relative_path, exc)
                result.errors.append(f"{source.relative_path}: {exc}")
                continue

            records = self.parser.parse(text)
            labels = classifier.labels_for(source.relative_path)
            batches.append(FileBatch(path=source.relative_path, labels=labels, records=records))
            if records:
                result.processed.append(source.relative_path)
            else:
                result.empty.append(source.relative_path)
            LOGGER.debug(
                "Parsed %d records from %s as %s / %s",
                len(records),
                source.relative_path,
                labels.group,
                labels.period,
            )

        if not result.processed:
            raise EmptyBatchError()

        if result.simplified_structure:
            LOGGER.warning(
                "Files do not follow the expected structure /root/companyname/timeperiod.csv"
            )
            result.notes.append(SIMPLIFIED_STRUCTURE_NOTE)

        result.dataset = merge_batches(batches)
        LOGGER.info(result.status_message())
        return result


__all__ = ["IngestionPipeline", "SIMPLIFIED_STRUCTURE_NOTE"]
