# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Built-in rules for the reference engine."""

from __future__ import annotations

import re
from collections.abc import Collection, Mapping
from typing import Any

from .rule import MISSING, Rule, RuleContext

__all__ = (
    "BUILTIN_RULES",
    "Bail",
    "Between",
    "Boolean",
    "Email",
    "In",
    "Integer",
    "ListRule",
    "MappingRule",
    "Max",
    "Min",
    "Nullable",
    "Numeric",
    "Regex",
    "Required",
    "StringRule",
)

_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_number(value: Any) -> float | None:
    if _is_number(value):
        return value
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


class Required(Rule):
    name = "required"
    message = "The :attribute field is required."
    implicit = True

    def passes(self, value: Any, context: RuleContext) -> bool:
        if value is MISSING or value is None:
            return False
        if isinstance(value, str):
            return value.strip() != ""
        if isinstance(value, Collection):
            return len(value) > 0
        return True


class Nullable(Rule):
    name = "nullable"
    marker = True

    def passes(self, value: Any, context: RuleContext) -> bool:
        return True


class Bail(Rule):
    name = "bail"
    marker = True

    def passes(self, value: Any, context: RuleContext) -> bool:
        return True


class StringRule(Rule):
    name = "string"
    message = "The :attribute field must be a string."

    def passes(self, value: Any, context: RuleContext) -> bool:
        return isinstance(value, str)


class Integer(Rule):
    name = "integer"
    message = "The :attribute field must be an integer."

    def passes(self, value: Any, context: RuleContext) -> bool:
        if isinstance(value, bool):
            return False
        if isinstance(value, int):
            return True
        return isinstance(value, str) and bool(_INTEGER_RE.match(value.strip()))


class Numeric(Rule):
    name = "numeric"
    message = "The :attribute field must be a number."

    def passes(self, value: Any, context: RuleContext) -> bool:
        return _as_number(value) is not None


class Boolean(Rule):
    name = "boolean"
    message = "The :attribute field must be true or false."

    _accepted = (True, False, 0, 1, "0", "1")

    def passes(self, value: Any, context: RuleContext) -> bool:
        return any(value is v or (type(value) is type(v) and value == v) for v in self._accepted)


class ListRule(Rule):
    name = "list"
    message = "The :attribute field must be a list."

    def passes(self, value: Any, context: RuleContext) -> bool:
        return isinstance(value, (list, tuple))


class MappingRule(Rule):
    name = "mapping"
    message = "The :attribute field must be a mapping."

    def passes(self, value: Any, context: RuleContext) -> bool:
        return isinstance(value, Mapping)


class _SizeRule(Rule):
    """Compares the value's size: numbers by value, strings and collections by length."""

    messages_by_kind: dict[str, str] = {}

    def _size(self, value: Any, context: RuleContext) -> float | None:
        if _is_number(value):
            return value
        if isinstance(value, str):
            if context.has_rule("numeric", "integer"):
                return _as_number(value)
            return len(value)
        if isinstance(value, Collection):
            return len(value)
        return None

    def _kind(self, value: Any, context: RuleContext) -> str:
        if _is_number(value) or (isinstance(value, str) and context.has_rule("numeric", "integer")):
            return "numeric"
        if isinstance(value, str):
            return "string"
        return "collection"

    def message_template(self, value: Any, context: RuleContext) -> str:
        return self.messages_by_kind[self._kind(value, context)]

    def _bound(self, index: int) -> float:
        raw = self._param(index)
        number = _as_number(raw)
        if number is None:
            from statecheck.errors import ConfigurationError

            raise ConfigurationError(
                f"Validation rule '{self.name}' expects numeric parameters",
                details={"rule": self.name, "params": list(self.params)},
            )
        return number


class Min(_SizeRule):
    name = "min"
    messages_by_kind = {
        "numeric": "The :attribute field must be at least :min.",
        "string": "The :attribute field must be at least :min characters.",
        "collection": "The :attribute field must have at least :min items.",
    }

    def passes(self, value: Any, context: RuleContext) -> bool:
        size = self._size(value, context)
        return size is not None and size >= self._bound(0)

    def replacements(self) -> dict[str, str]:
        return {"min": self._param(0)}


class Max(_SizeRule):
    name = "max"
    messages_by_kind = {
        "numeric": "The :attribute field must not be greater than :max.",
        "string": "The :attribute field must not be greater than :max characters.",
        "collection": "The :attribute field must not have more than :max items.",
    }

    def passes(self, value: Any, context: RuleContext) -> bool:
        size = self._size(value, context)
        return size is not None and size <= self._bound(0)

    def replacements(self) -> dict[str, str]:
        return {"max": self._param(0)}


class Between(_SizeRule):
    name = "between"
    messages_by_kind = {
        "numeric": "The :attribute field must be between :min and :max.",
        "string": "The :attribute field must be between :min and :max characters.",
        "collection": "The :attribute field must have between :min and :max items.",
    }

    def passes(self, value: Any, context: RuleContext) -> bool:
        size = self._size(value, context)
        return size is not None and self._bound(0) <= size <= self._bound(1)

    def replacements(self) -> dict[str, str]:
        return {"min": self._param(0), "max": self._param(1)}


class In(Rule):
    name = "in"
    message = "The selected :attribute is invalid."

    def passes(self, value: Any, context: RuleContext) -> bool:
        if isinstance(value, (list, tuple)):
            return all(str(item) in self.params for item in value)
        return str(value) in self.params

    def replacements(self) -> dict[str, str]:
        return {"values": ", ".join(self.params)}


class Email(Rule):
    name = "email"
    message = "The :attribute field must be a valid email address."

    def passes(self, value: Any, context: RuleContext) -> bool:
        return isinstance(value, str) and bool(_EMAIL_RE.match(value))


class Regex(Rule):
    name = "regex"
    message = "The :attribute field format is invalid."
    split_params = False

    def passes(self, value: Any, context: RuleContext) -> bool:
        if not isinstance(value, (str, int, float)) or isinstance(value, bool):
            return False
        return re.search(self._param(0), str(value)) is not None


BUILTIN_RULES: tuple[type[Rule], ...] = (
    Required,
    Nullable,
    Bail,
    StringRule,
    Integer,
    Numeric,
    Boolean,
    ListRule,
    MappingRule,
    Min,
    Max,
    Between,
    In,
    Email,
    Regex,
)
