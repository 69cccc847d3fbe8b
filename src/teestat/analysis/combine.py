"""Per-player combination of direction and hook statistics."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from .rates import Stats


@dataclass(frozen=True)
class CombinedStats:
    """Direction and hook change statistics of one player."""

    direction_change_rate_average: float = 0.0
    direction_change_rate_median: float = 0.0
    direction_change_rate_max: float = 0.0
    hook_state_change_rate_average: float = 0.0
    hook_state_change_rate_median: float = 0.0
    hook_state_change_rate_max: float = 0.0
    direction_changes: int = 0
    hook_changes: int = 0
    overall_changes: int = 0

    @property
    def direction(self) -> Stats:
        return Stats(
            average=self.direction_change_rate_average,
            median=self.direction_change_rate_median,
            max=self.direction_change_rate_max,
            overall_changes=self.direction_changes,
        )

    @property
    def hook(self) -> Stats:
        return Stats(
            average=self.hook_state_change_rate_average,
            median=self.hook_state_change_rate_median,
            max=self.hook_state_change_rate_max,
            overall_changes=self.hook_changes,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CombinedStats:
        """Rebuild from a serialized mapping, ignoring unknown keys."""
        known = {k: data[k] for k in cls.__dataclass_fields__ if k in data}
        return cls(**known)


def combine_stats(direction_stats: Stats, hook_stats: Stats) -> CombinedStats:
    """Merge a player's direction and hook Stats into one record."""
    direction_changes = direction_stats.overall_changes
    hook_changes = hook_stats.overall_changes
    return CombinedStats(
        direction_change_rate_average=direction_stats.average,
        direction_change_rate_median=direction_stats.median,
        direction_change_rate_max=direction_stats.max,
        hook_state_change_rate_average=hook_stats.average,
        hook_state_change_rate_median=hook_stats.median,
        hook_state_change_rate_max=hook_stats.max,
        direction_changes=direction_changes,
        hook_changes=hook_changes,
        overall_changes=direction_changes + hook_changes,
    )
