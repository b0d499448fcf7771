"""Filesystem capability used as the signalling medium.

A token only ever needs three operations on its signal file: check that it
exists, create it, and delete it. ``LocalFileSystem`` does this on disk;
``MemoryFileSystem`` keeps a set of paths so several tokens in one process can
share it as if they lived in different processes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class SignalFileSystem(Protocol):
    """Minimal filesystem interface needed by ``CancellationToken``."""

    def exists(self, path: str) -> bool:
        """Return True if a file exists at ``path``."""
        ...

    def create(self, path: str) -> None:
        """Create an empty file at ``path``, truncating any existing one."""
        ...

    def delete(self, path: str) -> None:
        """Delete ``path``. Raises ``FileNotFoundError`` when it is absent."""
        ...


class LocalFileSystem:
    """Signal files on the local disk."""

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def create(self, path: str) -> None:
        Path(path).write_text("", encoding="utf-8")

    def delete(self, path: str) -> None:
        Path(path).unlink()


class MemoryFileSystem:
    """In-memory stand-in for the local disk."""

    def __init__(self, paths: set[str] | None = None) -> None:
        self._paths: set[str] = set(paths or ())

    @property
    def paths(self) -> frozenset[str]:
        return frozenset(self._paths)

    def exists(self, path: str) -> bool:
        return path in self._paths

    def create(self, path: str) -> None:
        self._paths.add(path)

    def delete(self, path: str) -> None:
        try:
            self._paths.remove(path)
        except KeyError:
            raise FileNotFoundError(path) from None
