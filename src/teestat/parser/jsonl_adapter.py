"""JSON Lines adapter for decoded snapshot dumps.

Each non-blank line holds one tick:

    {"players": [{"name": "nameless tee", "id": 0, "tee": {...}}]}

``tee`` is null for players without a character in the world. Tee fields
mirror ``PlayerState``; enum fields accept either the variant name
("Left", "Flying") or the DDNet protocol integer.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import IO, Any

from ..errors import DemoFileNotFoundError, DemoIOError, InvalidDemoFormatError
from .errors import SnapshotDecodeError
from .interface import DemoAdapter, SnapshotStream
from .types import (
    ORIGIN,
    ActiveWeapon,
    Direction,
    Emote,
    HookState,
    PlayerSnapshot,
    PlayerState,
    Snapshot,
    Vec2,
)

logger = logging.getLogger(__name__)

_INT_FIELDS = (
    "hook_tick",
    "health",
    "armor",
    "ammo_count",
    "attack_tick",
    "freeze_end",
    "jumps",
    "tele_checkpoint",
    "strong_weak_id",
    "jumped_total",
    "ninja_activation_tick",
)
_VEC_FIELDS = ("pos", "vel", "hook_pos", "hook_direction", "target")


def _vec_from_raw(raw: Any) -> Vec2:
    if raw is None:
        return ORIGIN
    if isinstance(raw, dict):
        return Vec2(float(raw.get("x", 0.0)), float(raw.get("y", 0.0)))
    if isinstance(raw, (list, tuple)) and len(raw) == 2:
        return Vec2(float(raw[0]), float(raw[1]))
    raise ValueError(f"Expected {{x, y}} object, got {raw!r}")


def player_state_from_dict(data: dict[str, Any]) -> PlayerState:
    """Build a PlayerState from a decoded tee mapping.

    Raises:
        ValueError: If a required field is missing or a value is invalid
    """
    if "tick" not in data:
        raise ValueError("tee is missing 'tick'")

    kwargs: dict[str, Any] = {
        "tick": int(data["tick"]),
        "direction": Direction.from_raw(data.get("direction", "None")),
        "hook_state": HookState.from_raw(data.get("hook_state", "Idle")),
        "angle": float(data.get("angle", 0.0)),
    }
    if "weapon" in data:
        kwargs["weapon"] = ActiveWeapon.from_raw(data["weapon"])
    if "emote" in data:
        kwargs["emote"] = Emote.from_raw(data["emote"])
    for key in _INT_FIELDS:
        if key in data:
            kwargs[key] = int(data[key])
    for key in _VEC_FIELDS:
        if key in data:
            kwargs[key] = _vec_from_raw(data[key])
    return PlayerState(**kwargs)


def snapshot_from_dict(data: dict[str, Any]) -> Snapshot:
    """Build a Snapshot from one decoded line."""
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

    players: list[PlayerSnapshot] = []
    for raw_player in data.get("players", []) or []:
        if not isinstance(raw_player, dict):
            raise ValueError(f"Expected player object, got {raw_player!r}")
        name = raw_player.get("name")
        if not isinstance(name, str):
            raise ValueError("player entry is missing a string 'name'")
        tee = raw_player.get("tee")
        players.append(
            PlayerSnapshot(
                name=name,
                state=player_state_from_dict(tee) if tee is not None else None,
                client_id=raw_player.get("id"),
            )
        )
    return Snapshot(players=players)


class JsonlSnapshotStream(SnapshotStream):
    """Snapshot stream over an open JSON Lines file handle."""

    def __init__(self, handle: IO[str], path: str):
        self._handle = handle
        self._path = path
        self._line_no = 0

    def next_snapshot(self) -> Snapshot | None:
        while True:
            try:
                line = self._handle.readline()
            except OSError as e:
                raise DemoIOError(self._path, e) from e
            except UnicodeDecodeError as e:
                raise SnapshotDecodeError(
                    self._path, self._line_no + 1, "not valid UTF-8"
                ) from e
            if not line:
                return None
            self._line_no += 1
            if not line.strip():
                continue
            try:
                return snapshot_from_dict(json.loads(line))
            except (ValueError, TypeError, OverflowError, RecursionError) as e:
                raise SnapshotDecodeError(self._path, self._line_no, str(e)) from e

    def close(self) -> None:
        self._handle.close()


class JsonlAdapter(DemoAdapter):
    """Read snapshot dumps written one JSON object per tick."""

    @property
    def name(self) -> str:
        return "jsonl"

    @property
    def file_suffixes(self) -> tuple[str, ...]:
        return (".jsonl", ".ndjson")

    def open(self, path: Path) -> SnapshotStream:
        path_str = str(path)
        if not path.exists():
            raise DemoFileNotFoundError(path_str)
        if not path.is_file():
            raise InvalidDemoFormatError(path_str, "Path is not a regular file")

        try:
            handle = open(path, encoding="utf-8")
        except OSError as e:
            raise DemoIOError(path_str, e) from e

        logger.debug(f"Opened snapshot dump {path_str}")
        return JsonlSnapshotStream(handle, path_str)
