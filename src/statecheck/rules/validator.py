# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Validator - one evaluation of a rule map against a data snapshot.

Wildcard rule keys are expanded against the data before evaluation, so
``items.*.name`` with two items checks ``items.0.name`` and ``items.1.name``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from statecheck.config import ValidationConfig
from statecheck.core.bag import ErrorBag
from statecheck.core.paths import (
    WILDCARD,
    before_first_dot,
    is_index,
    join_path,
    matches_rule_key,
    split_path,
)
from statecheck.errors import ValidationError

from .registry import RuleRegistry, get_default_registry
from .rule import MISSING, Rule, RuleContext, is_empty_value, parse_rule_expression

logger = logging.getLogger(__name__)

__all__ = ("Validator", "data_get", "expand_rule_key")


def _step(current: Any, segment: str) -> Any:
    if current is MISSING or current is None:
        return MISSING
    if isinstance(current, Mapping):
        return current.get(segment, MISSING)
    if isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
        if not is_index(segment):
            return MISSING
        index = int(segment)
        return current[index] if index < len(current) else MISSING
    if isinstance(current, (str, bytes)):
        return MISSING
    return getattr(current, segment, MISSING)


def data_get(data: Mapping[str, Any], path: str) -> Any:
    """Resolve a concrete dot path; MISSING when any segment is absent.

    Mappings are read by key, sequences by index, other objects by attribute.
    """
    current: Any = data
    for segment in split_path(path):
        current = _step(current, segment)
        if current is MISSING:
            return MISSING
    return current


def _children(value: Any) -> list[str]:
    if isinstance(value, Mapping):
        return [str(key) for key in value.keys()]
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return [str(index) for index in range(len(value))]
    return []


def expand_rule_key(data: Mapping[str, Any], key: str) -> list[str]:
    """Concrete paths selected by ``key`` in ``data``.

    Literal segments are kept even when absent, so ``required`` can fail on
    them; a wildcard over a missing or scalar value selects nothing.
    """
    if WILDCARD not in split_path(key):
        return [key]

    paths: list[list[str]] = [[]]
    for segment in split_path(key):
        if segment != WILDCARD:
            paths = [prefix + [segment] for prefix in paths]
            continue
        expanded: list[list[str]] = []
        for prefix in paths:
            parent = data_get(data, join_path(prefix)) if prefix else data
            expanded.extend(prefix + [child] for child in _children(parent))
        paths = expanded
    return [join_path(segments) for segments in paths]


class Validator:
    """Evaluate ``rules`` against ``data`` and collect messages.

    Attributes:
        data: Snapshot under validation
        rules: Rule map (key -> expression)
        custom_messages: Message overrides
        custom_attributes: Display-name overrides keyed by path or rule key

    Example:
        >>> v = Validator({"name": ""}, {"name": "required"})
        >>> v.fails()
        True
        >>> v.errors().first("name")
        'The name field is required.'
    """

    def __init__(
        self,
        data: Mapping[str, Any],
        rules: Mapping[str, Any],
        messages: Mapping[str, str] | None = None,
        attributes: Mapping[str, str] | None = None,
        *,
        registry: RuleRegistry | None = None,
        config: ValidationConfig | None = None,
    ) -> None:
        self.data = data
        self.rules = dict(rules)
        self.custom_messages: dict[str, str] = dict(messages or {})
        self.custom_attributes: dict[str, str] = dict(attributes or {})
        self.registry = registry if registry is not None else get_default_registry()
        self.config = config or ValidationConfig()
        self._parsed: dict[str, list[Rule]] = {
            key: parse_rule_expression(expression, self.registry)
            for key, expression in self.rules.items()
        }
        self._errors: ErrorBag | None = None

    # -- display names ----------------------------------------------------

    def get_displayable_attribute(self, attribute: str) -> str:
        """Custom name for ``attribute`` (exact, then wildcard key), else the path."""
        if attribute in self.custom_attributes:
            return self.custom_attributes[attribute]
        for key, name in self.custom_attributes.items():
            if WILDCARD in split_path(key) and matches_rule_key(key, attribute):
                return name
        return attribute

    def add_custom_attributes(self, attributes: Mapping[str, str]) -> Validator:
        self.custom_attributes.update(attributes)
        self._errors = None
        return self

    # -- evaluation -------------------------------------------------------

    def _message_for(self, rule: Rule, path: str, key: str, value: Any, context: RuleContext) -> str:
        name = rule.rule_name
        for candidate in (f"{path}.{name}", f"{key}.{name}", path, key, name):
            if candidate in self.custom_messages:
                template = self.custom_messages[candidate]
                break
        else:
            template = rule.message_template(value, context)
        return rule.format(template, self.get_displayable_attribute(path))

    def _check(self, path: str, key: str, rules: list[Rule], bag: ErrorBag) -> None:
        value = data_get(self.data, path)
        names = frozenset(rule.rule_name for rule in rules)
        context = RuleContext(attribute=path, data=self.data, rule_names=names)
        bail = self.config.stop_on_first_failure or "bail" in names

        for rule in rules:
            if rule.marker:
                continue
            if not rule.implicit:
                if value is None and "nullable" in names:
                    continue
                if self.config.implicit_skip_empty and is_empty_value(value):
                    continue
            if rule.passes(value, context):
                continue
            bag.add(path, self._message_for(rule, path, key, value, context))
            if bail:
                break

    def errors(self) -> ErrorBag:
        """Messages from evaluating every rule; computed once."""
        if self._errors is None:
            bag = ErrorBag()
            for key, rules in self._parsed.items():
                for path in expand_rule_key(self.data, key):
                    self._check(path, key, rules, bag)
            self._errors = bag
        return self._errors

    def fails(self) -> bool:
        return self.errors().any()

    def passes(self) -> bool:
        return not self.fails()

    def validated(self) -> dict[str, Any]:
        """Top-level fields referenced by the rule keys, in rule order."""
        result: dict[str, Any] = {}
        for key in self.rules:
            field = before_first_dot(key)
            if field not in result and field in self.data:
                result[field] = self.data[field]
        return result

    def validate(self) -> dict[str, Any]:
        """Return validated data or raise ValidationError with the message bag."""
        if self.fails():
            errors = self.errors()
            logger.debug("Validation failed for %s", errors.keys())
            raise ValidationError(errors, evaluation=self)
        return self.validated()

    def __repr__(self) -> str:
        return f"Validator(rules={list(self.rules)})"
