# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Constraint engine boundary.

The validation core treats the engine as a black box: given data, rules,
messages and display names it builds an Evaluation that either returns the
validated data or raises ValidationError. RuleEngine is the bundled
implementation; any object satisfying ConstraintEngine can replace it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from statecheck.config import ValidationConfig
from statecheck.core.bag import ErrorBag

from .registry import RuleRegistry
from .validator import Validator

__all__ = ("ConstraintEngine", "Evaluation", "RuleEngine")


@runtime_checkable
class Evaluation(Protocol):
    def validate(self) -> dict[str, Any]: ...

    def errors(self) -> ErrorBag: ...

    def get_displayable_attribute(self, attribute: str) -> str: ...

    def add_custom_attributes(self, attributes: Mapping[str, str]) -> Any: ...


@runtime_checkable
class ConstraintEngine(Protocol):
    def make(
        self,
        data: Mapping[str, Any],
        rules: Mapping[str, Any],
        messages: Mapping[str, str],
        attributes: Mapping[str, str],
    ) -> Evaluation: ...


class RuleEngine:
    """Build Validator evaluations backed by a RuleRegistry.

    Args:
        registry: Rule lookup; the process-wide default when omitted.
        config: Engine-level switches (bail, implicit empty skipping).
    """

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        config: ValidationConfig | None = None,
    ) -> None:
        self.registry = registry
        self.config = config or ValidationConfig()

    def make(
        self,
        data: Mapping[str, Any],
        rules: Mapping[str, Any],
        messages: Mapping[str, str] | None = None,
        attributes: Mapping[str, str] | None = None,
    ) -> Validator:
        return Validator(
            data,
            rules,
            messages,
            attributes,
            registry=self.registry,
            config=self.config,
        )

    def __repr__(self) -> str:
        return f"RuleEngine(registry={self.registry!r})"
