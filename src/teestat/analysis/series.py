"""Raw per-player time series and their projection into plot points.

``extract_series`` keeps every tick of every matching player without
reducing it to statistics. ``plot_points`` turns one player's series into
the two traces a plotting surface draws: a direction line at -1/0/1 and
hook bars of height 0.5 while the hook is engaged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from ..parser.types import TICKS_PER_SECOND, Direction, PlayerState, Snapshot
from .protocol import NameFilter, visible_players
from .signals import hook_engaged

DIRECTION_LEVELS = {
    Direction.LEFT: -1.0,
    Direction.NONE: 0.0,
    Direction.RIGHT: 1.0,
}
HOOK_BAR_HEIGHT = 0.5


@dataclass(frozen=True)
class PlotSeries:
    """Plot-ready traces; x values are seconds."""

    direction: list[tuple[float, float]] = field(default_factory=list)
    hook: list[tuple[float, float]] = field(default_factory=list)

    def to_dict(self) -> dict[str, list[list[float]]]:
        return {
            "direction": [list(point) for point in self.direction],
            "hook": [list(point) for point in self.hook],
        }


def extract_series(
    source: Iterable[Snapshot],
    name_filter: NameFilter = None,
) -> dict[str, list[PlayerState]]:
    """Collect the per-tick states of every matching player.

    Returns:
        Mapping of player name to states in stream order, keys in
        first-seen order
    """
    series: dict[str, list[PlayerState]] = {}
    for name, state in visible_players(source, name_filter):
        series.setdefault(name, []).append(state)
    return series


def plot_points(
    states: Iterable[PlayerState],
    ticks_per_second: float = TICKS_PER_SECOND,
) -> PlotSeries:
    """Project a player's states onto direction and hook traces."""
    direction: list[tuple[float, float]] = []
    hook: list[tuple[float, float]] = []
    for state in states:
        seconds = state.tick / ticks_per_second
        direction.append((seconds, DIRECTION_LEVELS[state.direction]))
        hook.append(
            (seconds, HOOK_BAR_HEIGHT if hook_engaged(state.hook_state) else 0.0)
        )
    return PlotSeries(direction=direction, hook=hook)
