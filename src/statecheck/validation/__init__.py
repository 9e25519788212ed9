# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Validation layer - rule sources, runners and the component surface.

**ValidationRunner** (orchestration):
    Resolves rules from a RuleSource, snapshots state, runs the engine and
    maintains the owner's error bag. Full passes replace the bag; scoped
    passes merge with errors recorded for unrelated fields.

**ValidatesInput / Component** (host surface):
    validate(), validate_only(), get_error_bag(), add_error(),
    set_error_bag(), reset_error_bag(), has_rule_for(), rules_for_model().
"""

from __future__ import annotations

from typing import TYPE_CHECKING

# Lazy import mapping
_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    # attributes
    "shorten_model_attributes": (
        "statecheck.validation.attributes",
        "shorten_model_attributes",
    ),
    # component
    "Component": ("statecheck.validation.component", "Component"),
    "ValidatesInput": ("statecheck.validation.component", "ValidatesInput"),
    # runner
    "ErrorBagHolder": ("statecheck.validation.runner", "ErrorBagHolder"),
    "ErrorBagOwner": ("statecheck.validation.runner", "ErrorBagOwner"),
    "ValidationRunner": ("statecheck.validation.runner", "ValidationRunner"),
    # sources
    "DeclaredRuleSource": ("statecheck.validation.sources", "DeclaredRuleSource"),
    "RuleSource": ("statecheck.validation.sources", "RuleSource"),
    "StaticRuleSource": ("statecheck.validation.sources", "StaticRuleSource"),
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

    raise AttributeError(f"module 'statecheck.validation' has no attribute {name!r}")


def __dir__() -> list[str]:
    """Return all available attributes for autocomplete."""
    return list(__all__)


if TYPE_CHECKING:
    from statecheck.validation.attributes import shorten_model_attributes
    from statecheck.validation.component import Component, ValidatesInput
    from statecheck.validation.runner import (
        ErrorBagHolder,
        ErrorBagOwner,
        ValidationRunner,
    )
    from statecheck.validation.sources import (
        DeclaredRuleSource,
        RuleSource,
        StaticRuleSource,
    )

__all__ = (
    "Component",
    "DeclaredRuleSource",
    "ErrorBagHolder",
    "ErrorBagOwner",
    "RuleSource",
    "StaticRuleSource",
    "ValidatesInput",
    "ValidationRunner",
    "shorten_model_attributes",
)
