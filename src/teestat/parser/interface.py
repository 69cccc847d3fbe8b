"""Abstract parser interface for demo snapshot adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Iterator

from .types import Snapshot


class SnapshotStream(ABC):
    """Pull-based stream of decoded snapshots.

    Consumers poll ``next_snapshot`` until it returns None. The stream is
    also iterable, so it can be passed anywhere an iterable of snapshots is
    accepted. Whoever opened the stream is responsible for closing it.
    """

    @abstractmethod
    def next_snapshot(self) -> Snapshot | None:
        """Return the next snapshot, or None at end of stream.

        Raises:
            SnapshotDecodeError: If the next snapshot is malformed
        """
        pass

    def close(self) -> None:
        """Release any underlying resources."""

    def __iter__(self) -> Iterator[Snapshot]:
        while True:
            snapshot = self.next_snapshot()
            if snapshot is None:
                return
            yield snapshot

    def __enter__(self) -> SnapshotStream:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class IterableSnapshotStream(SnapshotStream):
    """Adapt an in-memory iterable of snapshots to the stream contract."""

    def __init__(self, snapshots: Iterable[Snapshot]):
        self._iterator = iter(snapshots)

    def next_snapshot(self) -> Snapshot | None:
        return next(self._iterator, None)


class DemoAdapter(ABC):
    """Abstract base class for demo decoder adapters.

    Adapters turn a source on disk into a ``SnapshotStream``. Opening should
    fail fast for missing or unreadable files; malformed snapshots are
    reported lazily while the stream is consumed.
    """

    @abstractmethod
    def open(self, path: Path) -> SnapshotStream:
        """Open a snapshot stream for the given source.

        Args:
            path: Path to the demo or snapshot dump

        Returns:
            SnapshotStream positioned at the first tick

        Raises:
            DemoFileNotFoundError: If the file doesn't exist
            DemoIOError: If there's an I/O error opening the file
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the name identifier for this adapter."""
        pass

    @property
    def file_suffixes(self) -> tuple[str, ...]:
        """File suffixes this adapter expects when scanning directories."""
        return ()
