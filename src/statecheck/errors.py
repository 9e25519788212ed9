# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Exception hierarchy for statecheck.

All errors carry a human-readable message plus an optional ``details`` dict
for structured context. ``ValidationError`` is the only expected, user-facing
failure; the rest signal configuration or programming mistakes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from statecheck.core.bag import ErrorBag

__all__ = (
    "ConfigurationError",
    "MissingRulesError",
    "PropertyNotFoundError",
    "RuleNotFoundError",
    "StatecheckError",
    "ValidationError",
)


class StatecheckError(Exception):
    """Base error with structured details."""

    default_message: str = "statecheck error"

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": dict(self.details),
        }


class ConfigurationError(StatecheckError):
    default_message = "Invalid configuration"


class MissingRulesError(ConfigurationError):
    """No validation rules were resolved for a component."""

    def __init__(self, component: str, *, details: dict[str, Any] | None = None):
        self.component = component
        super().__init__(
            f"Missing validation rules on [{component}]",
            details={"component": component, **(details or {})},
        )


class RuleNotFoundError(ConfigurationError):
    """A rule expression names a rule the engine does not know."""

    default_message = "Unknown validation rule"


class PropertyNotFoundError(StatecheckError):
    """A rule key or validated path names a top-level field the component does not expose."""

    def __init__(self, rule_key: str, *, details: dict[str, Any] | None = None):
        self.rule_key = rule_key
        super().__init__(
            f"No property found for validation: [{rule_key}]",
            details={"rule_key": rule_key, **(details or {})},
        )


class ValidationError(StatecheckError):
    """One or more field rules failed.

    Attributes:
        errors: Per-field message bag. Partial validation replaces this with
            the merged bag before propagating.
        evaluation: Engine evaluation that produced the failure, if any.
    """

    default_message = "The given data was invalid."

    def __init__(
        self,
        errors: ErrorBag | Any,
        *,
        evaluation: Any = None,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        from statecheck.core.bag import ErrorBag

        self.errors = ErrorBag.coerce(errors)
        self.evaluation = evaluation
        super().__init__(message or self._summarize(self.errors), details=details)

    @classmethod
    def _summarize(cls, errors: ErrorBag) -> str:
        first = errors.first()
        if first is None:
            return cls.default_message
        remaining = errors.count() - 1
        if remaining <= 0:
            return first
        plural = "error" if remaining == 1 else "errors"
        return f"{first} (and {remaining} more {plural})"

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "errors": self.errors.messages()}
