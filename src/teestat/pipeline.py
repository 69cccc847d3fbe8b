"""Single- and multi-source analysis pipeline.

This module provides:
1. ``analyze``: one snapshot source → per-player combined stats
2. ``analyze_sources`` / ``analyze_paths``: many sources analyzed in
   parallel, each failure isolated to its own source
3. ``analyze_many``: the parallel run folded into one result map

Sources are analyzed on a thread pool with no shared mutable state. The
fold over per-source results always follows the input order, so the
merged result does not depend on which task finishes first. When a player
name appears in several sources, the entry of the later source replaces
the earlier one.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, Mapping, Sequence

from .analysis import ChangeDetector, CombinedStats, NameFilter, visible_players
from .parser import get_adapter
from .parser.types import TICKS_PER_SECOND, Snapshot

logger = logging.getLogger(__name__)

ResultMap = dict[str, CombinedStats]


class SourceStatus(Enum):
    """Status of one analyzed source."""

    SUCCESS = "success"
    ERROR = "error"


@dataclass
class SourceResult:
    """Result of analyzing a single source."""

    status: SourceStatus
    label: str
    stats: ResultMap = field(default_factory=dict)
    error: str | None = None

    def __str__(self) -> str:
        if self.status == SourceStatus.SUCCESS:
            return f"✓ {self.label} ({len(self.stats)} players)"
        return f"✗ {self.label}: {self.error}"


def analyze(
    source: Iterable[Snapshot],
    name_filter: NameFilter = None,
    *,
    ticks_per_second: float = TICKS_PER_SECOND,
) -> ResultMap:
    """Run the full change-statistics pipeline over one snapshot source.

    Args:
        source: SnapshotStream or any iterable of snapshots, in tick order
        name_filter: Case-insensitive substring, or a name predicate
        ticks_per_second: Tick rate of the source

    Returns:
        Mapping of player name to CombinedStats

    Raises:
        SnapshotDecodeError: If the source yields a malformed snapshot
    """
    detector = ChangeDetector()
    for name, state in visible_players(source, name_filter):
        detector.observe_state(name, state)
    return detector.finalize(ticks_per_second)


def merge_results(results: Iterable[Mapping[str, CombinedStats]]) -> ResultMap:
    """Fold per-source result maps in order; later entries win."""
    merged: ResultMap = {}
    for index, result in enumerate(results):
        for name, stats in result.items():
            if name in merged:
                logger.debug(
                    f"Player '{name}' from source #{index} replaces an "
                    "earlier entry"
                )
            merged[name] = stats
    return merged


def _run_source(
    label: str,
    load: Callable[[], ResultMap],
) -> SourceResult:
    try:
        stats = load()
    except Exception as e:
        logger.warning(f"Failed to analyze {label}: {e}")
        return SourceResult(status=SourceStatus.ERROR, label=label, error=str(e))

    logger.debug(f"Analyzed {label}: {len(stats)} players")
    return SourceResult(status=SourceStatus.SUCCESS, label=label, stats=stats)


def analyze_sources(
    sources: Sequence[Iterable[Snapshot]],
    *,
    labels: Sequence[str] | None = None,
    ticks_per_second: float = TICKS_PER_SECOND,
    max_workers: int | None = None,
) -> list[SourceResult]:
    """Analyze independent sources in parallel.

    Args:
        sources: Snapshot sources; each is consumed by exactly one task
        labels: Optional display labels, defaults to "source #<index>"
        ticks_per_second: Tick rate shared by all sources
        max_workers: Thread pool size (None uses the executor default)

    Returns:
        One SourceResult per source, in input order
    """
    if labels is None:
        labels = [f"source #{i}" for i in range(len(sources))]
    if len(labels) != len(sources):
        raise ValueError("labels must match sources one-to-one")

    def task(label: str, source: Iterable[Snapshot]) -> SourceResult:
        return _run_source(
            label, lambda: analyze(source, ticks_per_second=ticks_per_second)
        )

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(task, labels, sources))


def analyze_paths(
    paths: Sequence[Path],
    *,
    adapter_name: str = "jsonl",
    name_filter: NameFilter = None,
    ticks_per_second: float = TICKS_PER_SECOND,
    max_workers: int | None = None,
) -> list[SourceResult]:
    """Open and analyze demo files in parallel.

    Each file is opened inside its own task, so a missing or unreadable
    file fails only that source.

    Raises:
        AdapterNotFoundError: If the adapter name is unknown
    """
    adapter = get_adapter(adapter_name)

    def load(path: Path) -> ResultMap:
        with adapter.open(path) as stream:
            return analyze(
                stream, name_filter, ticks_per_second=ticks_per_second
            )

    def task(path: Path) -> SourceResult:
        return _run_source(str(path), lambda: load(path))

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        results = list(executor.map(task, paths))

    failed = sum(1 for r in results if r.status == SourceStatus.ERROR)
    logger.info(f"Analyzed {len(results)} sources ({failed} failed)")
    return results


def analyze_many(
    sources: Sequence[Iterable[Snapshot]],
    *,
    ticks_per_second: float = TICKS_PER_SECOND,
    max_workers: int | None = None,
) -> ResultMap:
    """Analyze sources in parallel and merge them into one result map.

    Failed sources contribute nothing. Duplicate player names resolve to
    the entry of the source that comes last in ``sources``.
    """
    results = analyze_sources(
        sources, ticks_per_second=ticks_per_second, max_workers=max_workers
    )
    return merge_results(result.stats for result in results)
