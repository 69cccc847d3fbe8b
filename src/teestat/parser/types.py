"""Core data types for the parser layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, NamedTuple

# Native simulation rate of the demo stream
TICKS_PER_SECOND = 50


class Vec2(NamedTuple):
    """2D vector with x, y components (world units)."""

    x: float
    y: float


ORIGIN = Vec2(0.0, 0.0)


class Direction(Enum):
    """Horizontal movement input."""

    LEFT = "Left"
    NONE = "None"
    RIGHT = "Right"

    @classmethod
    def from_raw(cls, value: Any) -> Direction:
        """Convert a decoder value (variant name or DDNet integer)."""
        return _convert(cls, _DIRECTION_CODES, value)


class HookState(Enum):
    """Seven-state hook lifecycle."""

    RETRACTED = "Retracted"
    IDLE = "Idle"
    RETRACT_START = "RetractStart"
    RETRACTING = "Retracting"
    RETRACT_END = "RetractEnd"
    FLYING = "Flying"
    GRABBED = "Grabbed"

    @classmethod
    def from_raw(cls, value: Any) -> HookState:
        """Convert a decoder value (variant name or DDNet integer)."""
        return _convert(cls, _HOOK_STATE_CODES, value)


class ActiveWeapon(Enum):
    HAMMER = "Hammer"
    PISTOL = "Pistol"
    SHOTGUN = "Shotgun"
    GRENADE = "Grenade"
    RIFLE = "Rifle"
    NINJA = "Ninja"

    @classmethod
    def from_raw(cls, value: Any) -> ActiveWeapon:
        return _convert(cls, _WEAPON_CODES, value)


class Emote(Enum):
    NORMAL = "Normal"
    PAIN = "Pain"
    HAPPY = "Happy"
    SURPRISE = "Surprise"
    ANGRY = "Angry"
    BLINK = "Blink"

    @classmethod
    def from_raw(cls, value: Any) -> Emote:
        return _convert(cls, _EMOTE_CODES, value)


# DDNet protocol integer codes
_DIRECTION_CODES = {
    -1: Direction.LEFT,
    0: Direction.NONE,
    1: Direction.RIGHT,
}

_HOOK_STATE_CODES = {
    -1: HookState.RETRACTED,
    0: HookState.IDLE,
    1: HookState.RETRACT_START,
    2: HookState.RETRACTING,
    3: HookState.RETRACT_END,
    4: HookState.FLYING,
    5: HookState.GRABBED,
}

_WEAPON_CODES = {
    0: ActiveWeapon.HAMMER,
    1: ActiveWeapon.PISTOL,
    2: ActiveWeapon.SHOTGUN,
    3: ActiveWeapon.GRENADE,
    4: ActiveWeapon.RIFLE,
    5: ActiveWeapon.NINJA,
}

_EMOTE_CODES = {
    0: Emote.NORMAL,
    1: Emote.PAIN,
    2: Emote.HAPPY,
    3: Emote.SURPRISE,
    4: Emote.ANGRY,
    5: Emote.BLINK,
}


def _convert(enum_cls: type[Enum], codes: dict[int, Enum], value: Any):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        if value in codes:
            return codes[value]
        raise ValueError(f"Unknown {enum_cls.__name__} code: {value}")
    if isinstance(value, str):
        try:
            return enum_cls(value)
        except ValueError:
            pass
        try:
            return enum_cls[value.upper()]
        except KeyError:
            pass
    raise ValueError(f"Unknown {enum_cls.__name__} value: {value!r}")


@dataclass(frozen=True)
class PlayerState:
    """Character state of one player at one tick.

    Only ``tick``, ``direction`` and ``hook_state`` feed the change
    statistics; the remaining fields are carried for extraction.
    """

    tick: int
    direction: Direction = Direction.NONE
    hook_state: HookState = HookState.IDLE

    pos: Vec2 = ORIGIN
    vel: Vec2 = ORIGIN
    angle: float = 0.0

    hook_tick: int = 0
    hook_pos: Vec2 = ORIGIN
    hook_direction: Vec2 = ORIGIN

    health: int = 0
    armor: int = 0
    ammo_count: int = 0
    weapon: ActiveWeapon = ActiveWeapon.HAMMER
    emote: Emote = Emote.NORMAL
    attack_tick: int = 0

    # DDNet character extension
    freeze_end: int = 0
    jumps: int = 0
    tele_checkpoint: int = 0
    strong_weak_id: int = 0
    jumped_total: int = 0
    ninja_activation_tick: int = 0
    target: Vec2 = ORIGIN

    @property
    def seconds(self) -> float:
        """Tick converted to seconds at the native rate."""
        return self.tick / TICKS_PER_SECOND

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain JSON-compatible values."""
        out: dict[str, Any] = {}
        for name in self.__dataclass_fields__:
            value = getattr(self, name)
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, Vec2):
                value = value._asdict()
            out[name] = value
        return out


@dataclass(frozen=True)
class PlayerSnapshot:
    """A player entry inside a snapshot.

    ``state`` is None when the player is connected but has no character
    in the world (spectating or dead).
    """

    name: str
    state: PlayerState | None = None
    client_id: int | None = None


@dataclass(frozen=True)
class Snapshot:
    """Decoded game state at one tick."""

    players: list[PlayerSnapshot] = field(default_factory=list)

    def visible(self) -> Iterator[tuple[str, PlayerState]]:
        """Yield (name, state) for players that currently have a character."""
        for player in self.players:
            if player.state is not None:
                yield player.name, player.state
