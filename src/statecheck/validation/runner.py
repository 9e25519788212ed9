# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""ValidationRunner - full and field-scoped validation passes.

A full pass evaluates every rule and, on success, clears the whole error
bag; on failure the engine's bag is the complete answer.

A scoped pass (``validate_one``) evaluates only the rules whose key selects
one concrete field path. Its result covers those keys alone, so it is
combined with the owner's current bag:

    failure: new errors + current errors outside the scoped keys
    success: current errors minus entries matching the scoped keys
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

from statecheck.config import ValidationConfig
from statecheck.core.bag import ErrorBag
from statecheck.core.paths import before_first_dot, matches_rule_key
from statecheck.core.snapshot import StateSnapshotAdapter, normalize_snapshot
from statecheck.errors import MissingRulesError, PropertyNotFoundError, ValidationError
from statecheck.rules.engine import ConstraintEngine, RuleEngine

from .attributes import shorten_model_attributes
from .sources import RuleSource

logger = logging.getLogger(__name__)

__all__ = ("ErrorBagHolder", "ErrorBagOwner", "ValidationRunner")


@runtime_checkable
class ErrorBagOwner(Protocol):
    def get_error_bag(self) -> ErrorBag: ...

    def reset_error_bag(self, field: str | Iterable[str] | None = None) -> Any: ...


class ErrorBagHolder:
    """Standalone ErrorBagOwner for runners not attached to a component."""

    def __init__(self, bag: ErrorBag | Mapping[str, Any] | None = None):
        self._bag: ErrorBag | None = ErrorBag.coerce(bag) if bag is not None else None

    def get_error_bag(self) -> ErrorBag:
        if self._bag is None:
            self._bag = ErrorBag()
        return self._bag

    def set_error_bag(self, bag: ErrorBag | Mapping[str, Any]) -> ErrorBag:
        self._bag = ErrorBag.coerce(bag)
        return self._bag

    def reset_error_bag(self, field: str | Iterable[str] | None = None) -> ErrorBag:
        if field is None:
            self._bag = ErrorBag()
        else:
            self._bag = self.get_error_bag().except_(field)
        return self._bag


class ValidationRunner:
    """Run validation passes for one owner.

    Args:
        rule_source: Supplies rules and messages when a call passes none.
        snapshot: Supplies the owner's current public state.
        errors: Holds the owner's error bag; a private holder when omitted.
        engine: Constraint engine; RuleEngine(config=config) when omitted.
        name: Owner name reported by MissingRulesError.
        config: Validation switches.
        prepare: Hook applied to the normalized data before evaluation.

    Example:
        runner = ValidationRunner(
            rule_source=StaticRuleSource({"email": "required|email"}),
            snapshot=MappingSnapshot({"email": ""}),
            name="signup",
        )
        try:
            runner.validate_all()
        except ValidationError as e:
            e.errors.first("email")
    """

    def __init__(
        self,
        rule_source: RuleSource,
        snapshot: StateSnapshotAdapter,
        *,
        errors: ErrorBagOwner | None = None,
        engine: ConstraintEngine | None = None,
        name: str = "component",
        config: ValidationConfig | None = None,
        prepare: Callable[[dict[str, Any]], dict[str, Any]] | None = None,
    ) -> None:
        self.rule_source = rule_source
        self.snapshot = snapshot
        self.errors = errors if errors is not None else ErrorBagHolder()
        self.config = config or ValidationConfig()
        self.engine = engine if engine is not None else RuleEngine(config=self.config)
        self.name = name
        self.prepare = prepare

    # -- resolution -------------------------------------------------------

    def resolve(
        self,
        rules: Mapping[str, Any] | None = None,
        messages: Mapping[str, str] | None = None,
    ) -> tuple[dict[str, Any], dict[str, str]]:
        """Provided rules/messages, else the rule source's.

        Raises:
            MissingRulesError: If no rules resolve.
        """
        resolved_rules = dict(self.rule_source.rules() if rules is None else rules)
        if not resolved_rules:
            raise MissingRulesError(self.name)
        resolved_messages = dict(messages) if messages else dict(self.rule_source.messages())
        return resolved_rules, resolved_messages

    def data_for(
        self,
        rules: Mapping[str, Any],
        fields: Iterable[str] | None = None,
        require: Iterable[str] = (),
    ) -> dict[str, Any]:
        """Normalized snapshot restricted to ``fields`` (default: fields ``rules`` reference).

        ``require`` lists extra paths whose top-level field must exist even
        though no rule names them.

        Raises:
            PropertyNotFoundError: If a rule key or required path references a
                field the snapshot lacks.
        """
        properties = self.snapshot.snapshot()
        for key in (*rules, *require):
            if before_first_dot(key) not in properties:
                raise PropertyNotFoundError(
                    key, details={"component": self.name, "available": list(properties)}
                )

        wanted = (
            {before_first_dot(key) for key in rules} if fields is None else set(fields)
        )
        data = normalize_snapshot(
            {name: value for name, value in properties.items() if name in wanted}
        )
        if self.prepare is not None:
            data = self.prepare(data)
        return data

    def _evaluation(
        self,
        data: Mapping[str, Any],
        rules: Mapping[str, Any],
        messages: Mapping[str, str],
        attributes: Mapping[str, str] | None,
    ):
        evaluation = self.engine.make(data, rules, messages, dict(attributes or {}))
        if self.config.shorten_model_attributes:
            shorten_model_attributes(data, rules, evaluation)
        return evaluation

    # -- passes -----------------------------------------------------------

    def validate_all(
        self,
        rules: Mapping[str, Any] | None = None,
        messages: Mapping[str, str] | None = None,
        attributes: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        """Validate every rule; clear the whole error bag on success.

        Raises:
            MissingRulesError: If no rules resolve.
            PropertyNotFoundError: If a rule names an unknown field.
            ValidationError: If any rule fails; carries the engine's bag.
        """
        rules, messages = self.resolve(rules, messages)
        data = self.data_for(rules)
        logger.debug("Validating %s: %d rule(s)", self.name, len(rules))

        validated = self._evaluation(data, rules, messages, attributes).validate()

        self.errors.reset_error_bag()
        return validated

    def validate_one(
        self,
        path: str,
        rules: Mapping[str, Any] | None = None,
        messages: Mapping[str, str] | None = None,
        attributes: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        """Validate the rules selecting ``path``; keep unrelated errors.

        Raises:
            MissingRulesError: If no rules resolve.
            PropertyNotFoundError: If a rule names an unknown field, or no
                rule selects ``path`` and its field does not exist either.
            ValidationError: If a scoped rule fails; carries the scoped
                errors merged with the current out-of-scope errors.
        """
        rules, messages = self.resolve(rules, messages)
        scoped = {key: rule for key, rule in rules.items() if matches_rule_key(key, path)}
        scoped_keys = list(scoped)

        data = self.data_for(
            rules,
            fields={before_first_dot(key) for key in scoped},
            require=() if scoped else (path,),
        )
        logger.debug("Validating %s.%s against %s", self.name, path, scoped_keys)

        try:
            validated = self._evaluation(data, scoped, messages, attributes).validate()
        except ValidationError as e:
            merged = self.errors.get_error_bag().supersede(scoped_keys, e.errors)
            raise ValidationError(merged, evaluation=e.evaluation, details=e.details) from None

        if scoped_keys:
            self.errors.reset_error_bag(scoped_keys)
        return validated

    def __repr__(self) -> str:
        return f"ValidationRunner(name={self.name!r}, engine={self.engine!r})"
