"""Per-player change detection for direction and hook signals.

The detector remembers the last observed value of each signal per player.
The first observation of a player only seeds that memory; every later
observation whose value differs from the previous one appends a
``ChangeEvent`` to the player's log for that signal. The two signals are
tracked independently.

Events are appended in arrival order. A stream that is not time-ordered
therefore yields logs in arrival order too; only the rate calculation
sorts by timestamp.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..parser.types import TICKS_PER_SECOND, Direction, PlayerState
from .combine import CombinedStats, combine_stats
from .rates import calculate_stats
from .signals import project_signals
from .types import ChangeEvent, SignalKind


@dataclass
class _PlayerTrack:
    last_direction: Direction | None = None
    last_hook_engaged: bool | None = None
    direction_log: list[ChangeEvent] = field(default_factory=list)
    hook_log: list[ChangeEvent] = field(default_factory=list)


class ChangeDetector:
    """Stateful tracker emitting timestamped change events per player.

    Example:
        detector = ChangeDetector()
        for name, state in visible_players(stream):
            detector.observe_state(name, state)
        stats = detector.finalize()
    """

    def __init__(self) -> None:
        self._tracks: dict[str, _PlayerTrack] = {}

    def observe(
        self,
        player_name: str,
        timestamp: int | float,
        direction: Direction,
        hook_engaged: bool,
    ) -> None:
        """Record one tick of signal values for a player."""
        track = self._tracks.get(player_name)
        if track is None:
            track = _PlayerTrack()
            self._tracks[player_name] = track

        if track.last_direction is None:
            track.last_direction = direction
        elif direction != track.last_direction:
            track.direction_log.append(ChangeEvent(timestamp))
            track.last_direction = direction

        if track.last_hook_engaged is None:
            track.last_hook_engaged = hook_engaged
        elif hook_engaged != track.last_hook_engaged:
            track.hook_log.append(ChangeEvent(timestamp))
            track.last_hook_engaged = hook_engaged

    def observe_state(self, player_name: str, state: PlayerState) -> None:
        """Project a player state and record it at its tick."""
        direction, engaged = project_signals(state)
        self.observe(player_name, state.tick, direction, engaged)

    def players(self) -> list[str]:
        """Names of all observed players, in first-seen order."""
        return list(self._tracks)

    def log(self, player_name: str, kind: SignalKind) -> tuple[ChangeEvent, ...]:
        """Snapshot of a player's change log for one signal.

        Raises:
            KeyError: If the player was never observed
        """
        track = self._tracks[player_name]
        if kind is SignalKind.DIRECTION:
            return tuple(track.direction_log)
        return tuple(track.hook_log)

    def direction_log(self, player_name: str) -> tuple[ChangeEvent, ...]:
        return self.log(player_name, SignalKind.DIRECTION)

    def hook_log(self, player_name: str) -> tuple[ChangeEvent, ...]:
        return self.log(player_name, SignalKind.HOOK)

    def finalize(
        self, ticks_per_second: float = TICKS_PER_SECOND
    ) -> dict[str, CombinedStats]:
        """Reduce every observed player's logs to combined statistics.

        Every observed player is present in the result, including players
        without a single change. Keys are ordered by name.
        """
        results: dict[str, CombinedStats] = {}
        for name in sorted(self._tracks):
            results[name] = combine_stats(
                calculate_stats(self.direction_log(name), ticks_per_second),
                calculate_stats(self.hook_log(name), ticks_per_second),
            )
        return results
