# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""State snapshots handed to the validation engine.

A snapshot maps top-level field names to current values. Model-like values
(structured records with a stable identity) are passed through untouched so
the engine can read them structurally; other ordered collections are turned
into plain lists.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping
from typing import Any, Protocol, runtime_checkable

__all__ = (
    "Identifiable",
    "MappingSnapshot",
    "StateSnapshotAdapter",
    "is_model_like",
    "normalize_snapshot",
    "normalize_value",
)

MODEL_MARKER = "__statecheck_model__"


@runtime_checkable
class StateSnapshotAdapter(Protocol):
    """Supplies the current public state of a component."""

    def snapshot(self) -> dict[str, Any]: ...


@runtime_checkable
class Identifiable(Protocol):
    """Anything exposing a stable ``id``."""

    id: Any


def is_model_like(value: Any) -> bool:
    """Capability check for structured records with a stable identity.

    True for objects exposing an ``id`` attribute, and for any object whose
    type sets ``__statecheck_model__ = True`` (e.g. a typed collection of
    records that should reach the engine intact). Strings, mappings and
    plain collections never qualify.
    """
    marker = getattr(type(value), MODEL_MARKER, None)
    if marker is not None:
        return bool(marker)
    if value is None or isinstance(value, (str, bytes, bytearray, Mapping)):
        return False
    if isinstance(value, Collection):
        return False
    return isinstance(value, Identifiable)


def normalize_value(value: Any) -> Any:
    """Convert ordered-collection-like non-model values to lists."""
    if is_model_like(value) or isinstance(value, list):
        return value
    if isinstance(value, (str, bytes, bytearray, Mapping)):
        return value
    if isinstance(value, Collection):
        return list(value)
    return value


def normalize_snapshot(data: Mapping[str, Any]) -> dict[str, Any]:
    return {name: normalize_value(value) for name, value in data.items()}


class MappingSnapshot:
    """StateSnapshotAdapter over a fixed mapping (or a callable producing one)."""

    def __init__(self, data: Mapping[str, Any] | None = None, *, loader=None):
        if data is not None and loader is not None:
            raise ValueError("Provide either data or loader, not both")
        self._data = dict(data or {})
        self._loader = loader

    def snapshot(self) -> dict[str, Any]:
        if self._loader is not None:
            return dict(self._loader())
        return dict(self._data)

    def __repr__(self) -> str:
        return f"MappingSnapshot(fields={list(self.snapshot())})"
