"""Infer group and period labels from the layout of problem folders.

Problem lists usually arrive as ``root/<company>/<window>.csv``, but flatter
layouts are common: ``root/<company>.csv``, ``root/<company> - <window>.csv``,
or a single loose file. The classifier looks at the whole batch first, picks
the most common path depth as the convention, and then labels each file
according to that convention. It never fails; missing structure produces
``Unknown`` labels.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from drillbook.dataset.fields import UNKNOWN_LABEL
from drillbook.dataset.models import FileLabels

CSV_SUFFIX = ".csv"
PREFERRED_DEPTH = 3
NAME_SEPARATOR = " - "


def _segments(path: str) -> list[str]:
    return path.split("/")


def _strip_suffix(segment: str) -> str:
    return segment.replace(CSV_SUFFIX, "", 1)


@dataclass(frozen=True, slots=True)
class DepthAnalysis:
    """Segment-count statistics for a batch of CSV paths.

    Attributes:
        convention_depth: Most frequent segment count (0 for an empty batch).
        max_depth: Largest segment count observed.
        counts: Number of files per segment count.
    """

    convention_depth: int = 0
    max_depth: int = 0
    counts: Mapping[int, int] = field(default_factory=dict)


def analyze_depths(paths: Iterable[str]) -> DepthAnalysis:
    """Return depth statistics for the ``.csv`` entries in ``paths``.

    Ties between equally common depths go to the shallower depth.
    """
    counts = Counter(len(_segments(path)) for path in paths if path.endswith(CSV_SUFFIX))
    if not counts:
        return DepthAnalysis()

    convention = 0
    best = 0
    for depth in sorted(counts):
        if counts[depth] > best:
            best = counts[depth]
            convention = depth
    return DepthAnalysis(convention_depth=convention, max_depth=max(counts), counts=dict(counts))


def classify_path(path: str, convention_depth: int) -> FileLabels:
    """Derive the (group, period) labels for ``path``.

    Args:
        path: Slash-delimited path whose first segment is the selected root
            folder, e.g. ``"lists/Google/2024.csv"``.
        convention_depth: Segment count shared by most files in the batch.

    Returns:
        FileLabels: Labels for the file; ``Unknown`` where nothing can be inferred.
    """
    parts = _segments(path)

    if convention_depth >= PREFERRED_DEPTH:
        group = parts[1] if len(parts) > 1 else UNKNOWN_LABEL
        if len(parts) > 2:
            period = _strip_suffix(parts[2])
        elif len(parts) > 1:
            period = _strip_suffix(parts[1])
        else:
            period = UNKNOWN_LABEL
        return FileLabels(group=group, period=period)

    stem = _strip_suffix(parts[-1])
    beneath_root = parts[1:] if len(parts) > 1 else parts
    if len(beneath_root) > 1:
        return FileLabels(group=parts[-2], period=stem)

    pieces = stem.split(NAME_SEPARATOR)
    if len(pieces) > 1:
        return FileLabels(group=pieces[0], period=pieces[1])
    return FileLabels(group=UNKNOWN_LABEL, period=stem)


class PathClassifier:
    """Label every file in a batch using the batch's dominant layout."""

    def __init__(self, paths: Iterable[str]) -> None:
        self._paths = [path for path in paths if path.endswith(CSV_SUFFIX)]
        self.analysis = analyze_depths(self._paths)

    @property
    def convention_depth(self) -> int:
        return self.analysis.convention_depth

    @property
    def has_preferred_structure(self) -> bool:
        """Return True when files mostly follow ``root/<group>/<period>.csv``."""
        return self.analysis.convention_depth >= PREFERRED_DEPTH

    def labels_for(self, path: str) -> FileLabels:
        return classify_path(path, self.analysis.convention_depth)

    def classify_all(self) -> dict[str, FileLabels]:
        """Return labels for every candidate path in the batch."""
        return {path: self.labels_for(path) for path in self._paths}


__all__ = [
    "CSV_SUFFIX",
    "PREFERRED_DEPTH",
    "DepthAnalysis",
    "PathClassifier",
    "analyze_depths",
    "classify_path",
]
