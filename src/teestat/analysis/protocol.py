"""Shared snapshot traversal helpers for analysis modules.

Both the statistics pipeline and the series extraction walk the snapshot
stream the same way: once per tick, skipping players without a character
and players rejected by the name filter.
"""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, Union

from ..parser.types import PlayerState, Snapshot

NamePredicate = Callable[[str], bool]
NameFilter = Union[str, NamePredicate, None]


def make_name_filter(name_filter: NameFilter = None) -> NamePredicate:
    """Build a name predicate.

    A string filter matches by case-insensitive substring containment; the
    empty string (or None) matches every name. Callables are used as-is.
    """
    if callable(name_filter):
        return name_filter

    needle = (name_filter or "").lower()

    def _matches(name: str) -> bool:
        return needle in name.lower()

    return _matches


def visible_players(
    snapshots: Iterable[Snapshot],
    name_filter: NameFilter = None,
) -> Iterator[tuple[str, PlayerState]]:
    """Yield (name, state) for every visible, matching player of every tick.

    Snapshots are consumed in stream order and not retained.
    """
    matches = make_name_filter(name_filter)
    for snapshot in snapshots:
        for name, state in snapshot.visible():
            if matches(name):
                yield name, state
