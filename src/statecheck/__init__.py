# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""statecheck - Declarative validation for stateful components.

Top-level re-exports for convenient imports:
- statecheck.Component, ValidatesInput -> statecheck.validation
- statecheck.ErrorBag -> statecheck.core.bag
- statecheck.RuleEngine -> statecheck.rules
- errors -> statecheck.errors
"""

from __future__ import annotations

from typing import TYPE_CHECKING

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "Component": ("statecheck.validation.component", "Component"),
    "ValidatesInput": ("statecheck.validation.component", "ValidatesInput"),
    "ValidationRunner": ("statecheck.validation.runner", "ValidationRunner"),
    "StaticRuleSource": ("statecheck.validation.sources", "StaticRuleSource"),
    "ErrorBag": ("statecheck.core.bag", "ErrorBag"),
    "MappingSnapshot": ("statecheck.core.snapshot", "MappingSnapshot"),
    "RuleEngine": ("statecheck.rules.engine", "RuleEngine"),
    "ValidationConfig": ("statecheck.config", "ValidationConfig"),
    "MissingRulesError": ("statecheck.errors", "MissingRulesError"),
    "PropertyNotFoundError": ("statecheck.errors", "PropertyNotFoundError"),
    "StatecheckError": ("statecheck.errors", "StatecheckError"),
    "ValidationError": ("statecheck.errors", "ValidationError"),
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

    raise AttributeError(f"module 'statecheck' has no attribute {name!r}")


def __dir__() -> list[str]:
    """List available attributes."""
    return list(_LAZY_IMPORTS.keys())


if TYPE_CHECKING:
    from statecheck.config import ValidationConfig
    from statecheck.core.bag import ErrorBag
    from statecheck.core.snapshot import MappingSnapshot
    from statecheck.errors import (
        MissingRulesError,
        PropertyNotFoundError,
        StatecheckError,
        ValidationError,
    )
    from statecheck.rules.engine import RuleEngine
    from statecheck.validation.component import Component, ValidatesInput
    from statecheck.validation.runner import ValidationRunner
    from statecheck.validation.sources import StaticRuleSource
