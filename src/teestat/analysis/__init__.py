"""Change detection and rate statistics for per-player snapshot streams.

Pipeline per source:
snapshots → signal projection → change detection → change logs →
rate statistics → combined per-player stats.
"""

from __future__ import annotations

from .combine import CombinedStats, combine_stats
from .detector import ChangeDetector
from .protocol import NameFilter, make_name_filter, visible_players
from .rates import Stats, calculate_stats, change_rates
from .series import PlotSeries, extract_series, plot_points
from .signals import hook_engaged, project_signals
from .types import ChangeEvent, SignalKind

__all__ = [
    "ChangeDetector",
    "ChangeEvent",
    "CombinedStats",
    "NameFilter",
    "PlotSeries",
    "SignalKind",
    "Stats",
    "calculate_stats",
    "change_rates",
    "combine_stats",
    "extract_series",
    "hook_engaged",
    "make_name_filter",
    "plot_points",
    "project_signals",
    "visible_players",
]
