"""Change-rate statistics over a log of change events.

Rates are derived from the time between consecutive change events
(1 / elapsed seconds) rather than by counting events in a fixed window,
so the result does not depend on an arbitrary window size.
"""

from __future__ import annotations

import statistics
from dataclasses import dataclass
from typing import Sequence, Union

from ..parser.types import TICKS_PER_SECOND
from .types import ChangeEvent

Timestamp = Union[int, float]


@dataclass(frozen=True)
class Stats:
    """Rate summary for one signal of one player.

    Rates are events per second; ``overall_changes`` is an event count.
    The all-zero value means there was not enough data to measure a rate.
    """

    average: float = 0.0
    median: float = 0.0
    max: float = 0.0
    overall_changes: int = 0


def _timestamp(event: ChangeEvent | Timestamp) -> Timestamp:
    if isinstance(event, ChangeEvent):
        return event.timestamp
    return event


def change_rates(
    log: Sequence[ChangeEvent | Timestamp],
    ticks_per_second: float = TICKS_PER_SECOND,
) -> list[float]:
    """Return the sorted per-interval rates of a change log.

    Intervals of zero length (coincident events) have no defined rate and
    are skipped.
    """
    if ticks_per_second <= 0:
        raise ValueError("ticks_per_second must be positive")

    timestamps = sorted(_timestamp(event) for event in log)
    rates: list[float] = []
    for earlier, later in zip(timestamps, timestamps[1:]):
        elapsed = later - earlier
        if elapsed <= 0:
            continue
        rates.append(1.0 / (elapsed / ticks_per_second))
    rates.sort()
    return rates


def calculate_stats(
    log: Sequence[ChangeEvent | Timestamp],
    ticks_per_second: float = TICKS_PER_SECOND,
) -> Stats:
    """Reduce a change log into average, median and max change rate.

    Args:
        log: Change events (or bare timestamps in ticks); order is irrelevant
        ticks_per_second: Tick rate used to convert ticks to seconds

    Returns:
        Stats for the log. Logs with fewer than two events, or whose events
        all coincide, yield the zero Stats with ``overall_changes`` set to
        the log length.
    """
    if ticks_per_second <= 0:
        raise ValueError("ticks_per_second must be positive")

    overall_changes = len(log)
    if overall_changes < 2:
        return Stats(overall_changes=overall_changes)

    rates = change_rates(log, ticks_per_second)
    if not rates:
        return Stats(overall_changes=overall_changes)

    return Stats(
        average=sum(rates) / len(rates),
        median=statistics.median(rates),
        max=rates[-1],
        overall_changes=overall_changes,
    )
