# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Validation surface for stateful components.

ValidatesInput adds validation and error-bag management to any object that
exposes its state as attributes. Component is the pydantic flavour: its
declared fields are the public state.

    class PostForm(Component):
        title: str = ""
        tags: list[str] = []

        rules: ClassVar[dict[str, Any]] = {
            "title": "required|min:3",
            "tags.*": "string|max:20",
        }

    form = PostForm()
    with form.capture_errors():
        form.validate_only("title")
    form.get_error_bag().first("title")
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, ClassVar

from pydantic import BaseModel, PrivateAttr

from statecheck.config import ValidationConfig
from statecheck.core import paths
from statecheck.core.bag import ErrorBag
from statecheck.errors import ValidationError
from statecheck.rules.engine import ConstraintEngine

from .runner import ValidationRunner
from .sources import DeclaredRuleSource, RuleSource

logger = logging.getLogger(__name__)

__all__ = ("Component", "ValidatesInput")


class ValidatesInput:
    """Mixin: rules, validation passes and an error bag for the host object.

    Rules and messages come from ``get_rule_source()``, by default the
    host's own ``rules`` / ``messages`` (method or mapping attribute).
    """

    component_name: ClassVar[str | None] = None
    validation_config: ClassVar[ValidationConfig] = ValidationConfig()

    # -- collaborators ----------------------------------------------------

    @classmethod
    def get_name(cls) -> str:
        return cls.component_name or cls.__name__

    def get_rule_source(self) -> RuleSource:
        return DeclaredRuleSource(self)

    def get_engine(self) -> ConstraintEngine | None:
        """Engine for validation passes; None selects the bundled RuleEngine."""
        return None

    def snapshot(self) -> dict[str, Any]:
        """Public attributes by name; values are not copied or serialized."""
        return {
            name: value
            for name, value in vars(self).items()
            if not name.startswith("_")
        }

    def prepare_for_validation(self, data: dict[str, Any]) -> dict[str, Any]:
        """Hook to adjust normalized data before the engine sees it."""
        return data

    def validation_runner(self) -> ValidationRunner:
        return ValidationRunner(
            rule_source=self.get_rule_source(),
            snapshot=self,
            errors=self,
            engine=self.get_engine(),
            name=self.get_name(),
            config=self.validation_config,
            prepare=self.prepare_for_validation,
        )

    # -- rules ------------------------------------------------------------

    def get_rules(self) -> dict[str, Any]:
        return dict(self.get_rule_source().rules())

    def get_messages(self) -> dict[str, str]:
        return dict(self.get_rule_source().messages())

    def rules_for_model(self, name: str) -> dict[str, Any]:
        """Rules whose top-level segment is ``name``."""
        return {
            key: rule
            for key, rule in self.get_rules().items()
            if paths.before_first_dot(key) == name
        }

    def has_rule_for(self, path: str) -> bool:
        return paths.has_rule_for(path, self.get_rules())

    def missing_rule_for(self, path: str) -> bool:
        return not self.has_rule_for(path)

    # -- validation -------------------------------------------------------

    def validate(
        self,
        rules: Mapping[str, Any] | None = None,
        messages: Mapping[str, str] | None = None,
        attributes: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        """Validate all rules. See ValidationRunner.validate_all."""
        return self.validation_runner().validate_all(rules, messages, attributes)

    def validate_only(
        self,
        path: str,
        rules: Mapping[str, Any] | None = None,
        messages: Mapping[str, str] | None = None,
        attributes: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        """Validate the rules selecting ``path``. See ValidationRunner.validate_one."""
        return self.validation_runner().validate_one(path, rules, messages, attributes)

    @contextlib.contextmanager
    def capture_errors(self) -> Iterator[None]:
        """Store a raised ValidationError's bag as this component's error bag.

        The error is consumed; other exceptions propagate.
        """
        try:
            yield
        except ValidationError as e:
            logger.debug("%s captured errors for %s", self.get_name(), e.errors.keys())
            self.set_error_bag(e.errors)

    # -- error bag --------------------------------------------------------

    def get_error_bag(self) -> ErrorBag:
        bag = getattr(self, "_error_bag", None)
        if bag is None:
            bag = self._error_bag = ErrorBag()
        return bag

    def add_error(self, path: str, message: str) -> ErrorBag:
        return self.get_error_bag().add(path, message)

    def set_error_bag(self, bag: ErrorBag | Mapping[str, Any]) -> ErrorBag:
        self._error_bag = ErrorBag.coerce(bag)
        return self._error_bag

    def error_bag_except(self, field: str | Iterable[str]) -> ErrorBag:
        return self.get_error_bag().except_(field)

    def reset_error_bag(self, field: str | Iterable[str] | None = None) -> ErrorBag:
        """Clear all errors, or only those whose path matches ``field`` pattern(s)."""
        if field is None:
            self._error_bag = ErrorBag()
        else:
            self._error_bag = self.error_bag_except(field)
        return self._error_bag

    def clear_validation(self, field: str | Iterable[str] | None = None) -> ErrorBag:
        return self.reset_error_bag(field)

    def reset_validation(self, field: str | Iterable[str] | None = None) -> ErrorBag:
        return self.reset_error_bag(field)


class Component(ValidatesInput, BaseModel):
    """Pydantic component whose declared fields form the validated state.

    Declare rules as ``rules: ClassVar[dict[str, Any]]`` or a ``rules()``
    method; messages likewise.
    """

    _error_bag: ErrorBag | None = PrivateAttr(default=None)

    def snapshot(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in type(self).model_fields}
