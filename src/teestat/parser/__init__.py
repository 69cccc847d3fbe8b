"""Parser module for decoded demo snapshot streams.

This module provides a pluggable interface for reading per-tick player
snapshots with support for different decoding backends. The default
implementation reads JSON Lines snapshot dumps produced by an external
demo decoder.

Example usage:
    from teestat.parser import get_adapter

    adapter = get_adapter()
    with adapter.open(Path("run.jsonl")) as stream:
        for snapshot in stream:
            ...
"""

from __future__ import annotations

from typing import Any

from .errors import AdapterNotFoundError, ParserError, SnapshotDecodeError
from .interface import DemoAdapter, IterableSnapshotStream, SnapshotStream
from .jsonl_adapter import JsonlAdapter
from .types import (
    TICKS_PER_SECOND,
    ActiveWeapon,
    Direction,
    Emote,
    HookState,
    PlayerSnapshot,
    PlayerState,
    Snapshot,
    Vec2,
)

# Registry of available parser adapters
_ADAPTER_REGISTRY: dict[str, type[DemoAdapter]] = {
    "jsonl": JsonlAdapter,
}

# Default adapter name
_DEFAULT_ADAPTER = "jsonl"


def get_adapter(name: str = _DEFAULT_ADAPTER, **adapter_kwargs: Any) -> DemoAdapter:
    """Get a parser adapter by name.

    Args:
        name: Name of the adapter to retrieve. Defaults to "jsonl".
        **adapter_kwargs: Optional adapter-specific constructor arguments.

    Returns:
        Instance of the requested parser adapter

    Raises:
        AdapterNotFoundError: If the requested adapter is not found
    """
    if name not in _ADAPTER_REGISTRY:
        available = list(_ADAPTER_REGISTRY.keys())
        raise AdapterNotFoundError(name, available)

    adapter_class = _ADAPTER_REGISTRY[name]
    return adapter_class(**adapter_kwargs)


def list_adapters() -> list[str]:
    """List all available parser adapter names."""
    return list(_ADAPTER_REGISTRY.keys())


def register_adapter(name: str, adapter_class: type[DemoAdapter]) -> None:
    """Register a new parser adapter.

    This lets a binary demo decoder plug into the CLI and batch pipeline.
    The adapter class must implement the DemoAdapter interface.

    Args:
        name: Name to register the adapter under
        adapter_class: Class that implements DemoAdapter interface

    Raises:
        TypeError: If adapter_class doesn't implement DemoAdapter
        ValueError: If name is already registered
    """
    if name in _ADAPTER_REGISTRY:
        raise ValueError(f"Adapter '{name}' is already registered")

    if not isinstance(adapter_class, type) or not issubclass(
        adapter_class, DemoAdapter
    ):
        raise TypeError(
            f"Adapter class must inherit from DemoAdapter, got {adapter_class}"
        )

    _ADAPTER_REGISTRY[name] = adapter_class


__all__ = [
    # Core types
    "TICKS_PER_SECOND",
    "ActiveWeapon",
    "Direction",
    "Emote",
    "HookState",
    "PlayerSnapshot",
    "PlayerState",
    "Snapshot",
    "Vec2",
    # Interface
    "DemoAdapter",
    "IterableSnapshotStream",
    "SnapshotStream",
    "JsonlAdapter",
    # Functions
    "get_adapter",
    "list_adapters",
    "register_adapter",
    # Exceptions
    "ParserError",
    "SnapshotDecodeError",
    "AdapterNotFoundError",
]
