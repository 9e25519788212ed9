# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Core primitives: field paths, error bags, state snapshots."""

from __future__ import annotations

from typing import TYPE_CHECKING

# Lazy import mapping - all modules are in statecheck.core.*
_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    # bag
    "ErrorBag": ("statecheck.core.bag", "ErrorBag"),
    # paths
    "after_first_dot": ("statecheck.core.paths", "after_first_dot"),
    "before_first_dot": ("statecheck.core.paths", "before_first_dot"),
    "canonicalize": ("statecheck.core.paths", "canonicalize"),
    "has_rule_for": ("statecheck.core.paths", "has_rule_for"),
    "matches_pattern": ("statecheck.core.paths", "matches_pattern"),
    "matches_rule_key": ("statecheck.core.paths", "matches_rule_key"),
    "missing_rule_for": ("statecheck.core.paths", "missing_rule_for"),
    # snapshot
    "MappingSnapshot": ("statecheck.core.snapshot", "MappingSnapshot"),
    "StateSnapshotAdapter": ("statecheck.core.snapshot", "StateSnapshotAdapter"),
    "is_model_like": ("statecheck.core.snapshot", "is_model_like"),
    "normalize_snapshot": ("statecheck.core.snapshot", "normalize_snapshot"),
}

_LOADED: dict[str, object] = {}


def __getattr__(name: str) -> object:
    """Lazy import attributes on first access."""
    if name in _LOADED:
        return _LOADED[name]

    if name in _LAZY_IMPORTS:
        from importlib import import_module

        module_name, attr_name = _LAZY_IMPORTS[name]
        module = import_module(module_name)
        value = getattr(module, attr_name)
        _LOADED[name] = value
        return value

    raise AttributeError(f"module 'statecheck.core' has no attribute {name!r}")


def __dir__() -> list[str]:
    """Return all available attributes for autocomplete."""
    return list(__all__)


if TYPE_CHECKING:
    from .bag import ErrorBag
    from .paths import (
        after_first_dot,
        before_first_dot,
        canonicalize,
        has_rule_for,
        matches_pattern,
        matches_rule_key,
        missing_rule_for,
    )
    from .snapshot import (
        MappingSnapshot,
        StateSnapshotAdapter,
        is_model_like,
        normalize_snapshot,
    )

__all__ = [
    "ErrorBag",
    "MappingSnapshot",
    "StateSnapshotAdapter",
    "after_first_dot",
    "before_first_dot",
    "canonicalize",
    "has_rule_for",
    "is_model_like",
    "matches_pattern",
    "matches_rule_key",
    "missing_rule_for",
    "normalize_snapshot",
]
