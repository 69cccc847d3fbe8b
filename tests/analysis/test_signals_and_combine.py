"""Tests for signal projection and stats combination."""

import pytest

from teestat.analysis import (
    CombinedStats,
    Stats,
    combine_stats,
    hook_engaged,
    project_signals,
)
from teestat.parser.types import Direction, HookState

from fixtures.builders import create_test_state


@pytest.mark.parametrize(
    "hook_state,expected",
    [
        (HookState.RETRACTED, False),
        (HookState.IDLE, False),
        (HookState.RETRACT_START, False),
        (HookState.RETRACTING, False),
        (HookState.RETRACT_END, False),
        (HookState.FLYING, True),
        (HookState.GRABBED, True),
    ],
)
def test_hook_engaged_covers_every_state(hook_state, expected):
    assert hook_engaged(hook_state) is expected


def test_project_signals_returns_direction_and_engagement():
    state = create_test_state(3, Direction.RIGHT, HookState.GRABBED)
    assert project_signals(state) == (Direction.RIGHT, True)


def test_combine_copies_both_stats_verbatim():
    direction = Stats(average=3.5, median=3.5, max=5.0, overall_changes=4)
    hook = Stats(average=1.0, median=0.5, max=2.0, overall_changes=7)

    combined = combine_stats(direction, hook)

    assert combined.direction == direction
    assert combined.hook == hook
    assert combined.direction_changes == 4
    assert combined.hook_changes == 7
    assert combined.overall_changes == 11


def test_combine_with_zero_stats_keeps_player():
    combined = combine_stats(Stats(overall_changes=1), Stats())
    assert combined == CombinedStats(direction_changes=1, overall_changes=1)


def test_combined_stats_dict_round_trip():
    combined = combine_stats(Stats(2.0, 2.0, 2.0, 2), Stats(1.0, 1.0, 1.0, 3))
    data = combined.to_dict()

    assert data["overall_changes"] == 5
    assert set(data) == set(CombinedStats.__dataclass_fields__)
    assert CombinedStats.from_dict({**data, "extra": 1}) == combined
