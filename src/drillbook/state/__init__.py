"""Persistence for the set of completed problems."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import AbstractSet, Protocol

from pydantic import ValidationError

from .errors import StateError
from .models import CompletionState

LOGGER = logging.getLogger(__name__)

DEFAULT_PROGRESS_PATH = Path("~/.drillbook/progress.json")


class CompletionStore(Protocol):
    """Storage capability for completed problem links."""

    def load(self) -> set[str]:
        """Return the persisted links."""

    def save(self, links: AbstractSet[str]) -> None:
        """Replace the persisted links with ``links``."""


class InMemoryCompletionStore:
    """Completion store kept in process memory."""

    def __init__(self, links: AbstractSet[str] = frozenset()) -> None:
        self._links = set(links)

    def load(self) -> set[str]:
        return set(self._links)

    def save(self, links: AbstractSet[str]) -> None:
        self._links = set(links)


class JsonCompletionStore:
    """Persist completed links to a JSON file."""

    def __init__(self, path: Path | None = None) -> None:
        """Initialize the store.

        Args:
            path: JSON file location; defaults to ``~/.drillbook/progress.json``.
        """
        self._path = (path or DEFAULT_PROGRESS_PATH).expanduser()

    @property
    def path(self) -> Path:
        """Return the resolved progress file path."""
        return self._path

    def load(self) -> set[str]:
        """Load the persisted completion set.

        Returns:
            set[str]: Completed links; empty when no progress file exists yet.

        Raises:
            StateError: If the stored data cannot be parsed.
        """
        if not self._path.exists():
            return set()

        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise StateError(f"Invalid progress data in {self._path}: {exc}") from exc

        # Older files hold a bare list of links.
        if isinstance(data, list):
            data = {"links": data}
        try:
            state = CompletionState.model_validate(data)
        except ValidationError as exc:
            raise StateError(f"Invalid progress data in {self._path}: {exc}") from exc
        return set(state.links)

    def save(self, links: AbstractSet[str]) -> None:
        """Persist ``links``, replacing any previous contents.

        Args:
            links: Complete set of links marked done.

        Raises:
            StateError: If the progress file cannot be written.
        """
        state = CompletionState(links=sorted(links), updated_at=datetime.now(timezone.utc))
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(state.model_dump(mode="json"), indent=2), encoding="utf-8"
            )
        except OSError as exc:
            raise StateError(f"Unable to write progress file {self._path}: {exc}") from exc
        LOGGER.debug("Saved %d completed links to %s", len(links), self._path)


__all__ = [
    "CompletionState",
    "CompletionStore",
    "DEFAULT_PROGRESS_PATH",
    "InMemoryCompletionStore",
    "JsonCompletionStore",
    "StateError",
]
