"""Plain-text composer for analysis results.

Renders one fixed-width block per player: a centered name banner, the
change counts, then the direction and hook change rates. Rendering is
pure so the CLI and the offline viewer share it.
"""

from __future__ import annotations

from typing import Mapping

from .analysis import CombinedStats, Stats

_WIDTH = 44


def _banner(text: str, fill: str) -> str:
    return f"{' ' + text + ' ':{fill}^{_WIDTH}}"


def _rate(value: float) -> str:
    return f"{value:0>5.2f} per second"


class _PlainComposer:
    """Stateful helper that constructs one player block."""

    def __init__(self, name: str, stats: CombinedStats) -> None:
        self.name = name
        self.stats = stats
        self.lines: list[str] = []

    def build(self) -> str:
        self._emit_heading()
        self._emit_counts()
        self._emit_rates("Direction Change Rate", self.stats.direction)
        self._emit_rates("Hook State Change Rate", self.stats.hook)
        self._emit_footer()
        return "\n".join(self.lines)

    def _emit(self, text: str = "") -> None:
        self.lines.append(text)

    def _emit_heading(self) -> None:
        self._emit(_banner(self.name, "="))
        self._emit()

    def _emit_counts(self) -> None:
        self._emit(f"Overall Input State Changes : {self.stats.overall_changes}")
        self._emit(f"Direction Changes ......... : {self.stats.direction_changes}")
        self._emit(f"Hook Changes .............. : {self.stats.hook_changes}")
        self._emit()

    def _emit_rates(self, title: str, stats: Stats) -> None:
        self._emit(_banner(title, "-"))
        self._emit()
        self._emit(f"Average : {_rate(stats.average)}")
        self._emit(f"Median  : {_rate(stats.median)}")
        self._emit(f"Max ... : {_rate(stats.max)}")
        self._emit()

    def _emit_footer(self) -> None:
        self._emit("=" * _WIDTH)
        self._emit(_banner("END", "="))
        self._emit("=" * _WIDTH)
        self._emit()
        self._emit()


def render_player(name: str, stats: CombinedStats) -> str:
    """Render the text block of one player."""
    return _PlainComposer(name, stats).build()


def render_plain(results: Mapping[str, CombinedStats]) -> str:
    """Render all players, ordered by name."""
    return "\n".join(render_player(name, results[name]) for name in sorted(results))
