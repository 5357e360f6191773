"""Problem-file discovery utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator

from .models import SourceFile


def _is_hidden(path: Path) -> bool:
    return any(part.startswith(".") for part in path.parts if part not in (".", ".."))


class DirectoryScanner:
    """Discover files beneath a selected folder, mirroring a folder picker.

    Every discovered file is reported with a relative path that begins with the
    root folder's own name, so ``lists/Google/2024.csv`` for a root called
    ``lists``.
    """

    def __init__(
        self,
        *,
        recursive: bool = True,
        include_hidden: bool = False,
        follow_symlinks: bool = False,
    ) -> None:
        self.recursive = recursive
        self.include_hidden = include_hidden
        self.follow_symlinks = follow_symlinks

    def scan(self, root: Path) -> Iterator[SourceFile]:
        """Yield files discovered under ``root`` in a stable, sorted order."""
        root = root.expanduser().resolve()
        if not root.exists():
            return

        if root.is_file():
            yield SourceFile(relative_path=root.name, path=root)
            return

        for path in sorted(self._iter_paths(root)):
            if path.is_symlink() and not self.follow_symlinks:
                continue
            if not path.is_file():
                continue
            relative = path.relative_to(root)
            if not self.include_hidden and _is_hidden(relative):
                continue
            yield SourceFile(
                relative_path="/".join((root.name, *relative.parts)),
                path=path,
            )

    def _iter_paths(self, root: Path) -> Iterable[Path]:
        if self.recursive:
            yield from root.rglob("*")
        else:
            yield from root.iterdir()


__all__ = ["DirectoryScanner"]
