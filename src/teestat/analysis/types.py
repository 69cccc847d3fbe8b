"""Event types produced by the change detector."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class SignalKind(Enum):
    """Discrete signals tracked per player."""

    DIRECTION = "direction"
    HOOK = "hook"


@dataclass(frozen=True)
class ChangeEvent:
    """A signal changed value at ``timestamp`` (in ticks)."""

    timestamp: Union[int, float]
