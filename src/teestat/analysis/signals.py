"""Projection of player state onto the two tracked discrete signals."""

from __future__ import annotations

from ..parser.types import Direction, HookState, PlayerState

# Hook counts as engaged while it is extending or attached
_HOOK_ENGAGED = {
    HookState.RETRACTED: False,
    HookState.IDLE: False,
    HookState.RETRACT_START: False,
    HookState.RETRACTING: False,
    HookState.RETRACT_END: False,
    HookState.FLYING: True,
    HookState.GRABBED: True,
}


def hook_engaged(hook_state: HookState) -> bool:
    """Return True when the hook is flying or grabbed."""
    return _HOOK_ENGAGED[hook_state]


def project_signals(state: PlayerState) -> tuple[Direction, bool]:
    """Map a player state to its (direction, hook_engaged) signal pair."""
    return state.direction, hook_engaged(state.hook_state)
