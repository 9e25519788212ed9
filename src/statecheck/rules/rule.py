# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Rule base classes and rule-expression parsing.

A rule expression is whatever a rule map holds for one key:
    "required|min:3"                  # pipe-delimited string
    ["required", "in:draft,published"] # list of strings
    [Required(), Min("3")]             # Rule instances
    lambda attribute, value: ...       # callable -> message | None
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from .registry import RuleRegistry

__all__ = (
    "MISSING",
    "CallableRule",
    "Rule",
    "RuleContext",
    "is_empty_value",
    "parse_rule_expression",
)


class _Missing:
    """Sentinel for a path that resolves to nothing."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def is_empty_value(value: Any) -> bool:
    return value is MISSING or value is None or value == ""


@dataclass(slots=True)
class RuleContext:
    """What a rule may look at besides the value under test.

    Attributes:
        attribute: Concrete field path being checked (``items.0.name``)
        data: Full data snapshot given to the engine
        rule_names: Names of every rule declared for this attribute
    """

    attribute: str
    data: Mapping[str, Any]
    rule_names: frozenset[str] = field(default_factory=frozenset)

    def has_rule(self, *names: str) -> bool:
        return any(name in self.rule_names for name in names)


class Rule(ABC):
    """Base validation rule.

    Subclasses set ``name`` and ``message`` and implement ``passes``.

    Class attributes:
        name: Key used in rule expressions and message overrides
        message: Default template; ``:attribute`` and ``replacements()`` apply
        implicit: Run even when the value is missing or empty
        marker: Carries no check of its own (``nullable``, ``bail``)
        split_params: Split the parameter string on commas
    """

    name: ClassVar[str] = ""
    message: ClassVar[str] = "The :attribute field is invalid."
    implicit: ClassVar[bool] = False
    marker: ClassVar[bool] = False
    split_params: ClassVar[bool] = True

    def __init__(self, *params: str):
        self.params: tuple[str, ...] = tuple(params)

    @property
    def rule_name(self) -> str:
        """Name used for message lookups (``{path}.{rule_name}``)."""
        return self.name

    @abstractmethod
    def passes(self, value: Any, context: RuleContext) -> bool:
        raise NotImplementedError("Subclasses must implement passes method")

    def message_template(self, value: Any, context: RuleContext) -> str:
        return self.message

    def replacements(self) -> dict[str, str]:
        return {}

    def format(self, template: str, display_name: str) -> str:
        text = template
        # Longest placeholder first so ":values" is not eaten by ":value"
        for placeholder, replacement in sorted(
            self.replacements().items(), key=lambda kv: -len(kv[0])
        ):
            text = text.replace(f":{placeholder}", replacement)
        return text.replace(":attribute", display_name)

    def failure_message(self, value: Any, context: RuleContext, display_name: str) -> str:
        return self.format(self.message_template(value, context), display_name)

    def _param(self, index: int, rule: str | None = None) -> str:
        try:
            return self.params[index]
        except IndexError:
            from statecheck.errors import ConfigurationError

            raise ConfigurationError(
                f"Validation rule '{rule or self.name}' requires at least "
                f"{index + 1} parameter(s)",
                details={"rule": rule or self.name, "params": list(self.params)},
            ) from None

    def __repr__(self) -> str:
        params = ",".join(self.params)
        return f"{type(self).__name__}({self.name}{':' + params if params else ''})"


class CallableRule(Rule):
    """Adapter for ``fn(attribute, value) -> message | None`` callables."""

    def __init__(self, func: Callable[[str, Any], str | None]):
        super().__init__()
        self.func = func
        self._last_message: str | None = None

    @property
    def rule_name(self) -> str:
        return getattr(self.func, "__name__", "callable")

    def __repr__(self) -> str:
        return f"CallableRule({self.rule_name})"

    def passes(self, value: Any, context: RuleContext) -> bool:
        self._last_message = self.func(context.attribute, value)
        return self._last_message is None

    def message_template(self, value: Any, context: RuleContext) -> str:
        return self._last_message or self.message


def _parse_segment(segment: str, registry: RuleRegistry) -> Rule:
    name, _, raw_params = segment.strip().partition(":")
    rule_cls = registry.get(name.strip())
    if not raw_params:
        return rule_cls()
    if not rule_cls.split_params:
        return rule_cls(raw_params)
    return rule_cls(*[p.strip() for p in raw_params.split(",")])


def parse_rule_expression(expression: Any, registry: RuleRegistry) -> list[Rule]:
    """Turn a rule-map value into Rule instances.

    Raises:
        RuleNotFoundError: If a named rule is not registered.
        TypeError: If an element is neither str, Rule nor callable.
    """
    if isinstance(expression, str):
        return [_parse_segment(s, registry) for s in expression.split("|") if s.strip()]
    if isinstance(expression, Rule):
        return [expression]
    if isinstance(expression, (list, tuple)):
        parsed: list[Rule] = []
        for item in expression:
            if isinstance(item, str):
                # A list item is one rule; "regex:a|b" keeps its pipe.
                if item.strip():
                    parsed.append(_parse_segment(item, registry))
            else:
                parsed.extend(parse_rule_expression(item, registry))
        return parsed
    if callable(expression):
        return [CallableRule(expression)]
    raise TypeError(f"Unsupported rule expression: {type(expression).__name__}")
