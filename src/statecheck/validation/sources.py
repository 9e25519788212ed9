# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Rule sources: where a validation pass gets its rules and messages."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

__all__ = ("DeclaredRuleSource", "RuleSource", "StaticRuleSource")


@runtime_checkable
class RuleSource(Protocol):
    def rules(self) -> Mapping[str, Any]: ...

    def messages(self) -> Mapping[str, str]: ...


class StaticRuleSource:
    """Fixed rule and message maps."""

    def __init__(
        self,
        rules: Mapping[str, Any] | None = None,
        messages: Mapping[str, str] | None = None,
    ) -> None:
        self._rules = dict(rules or {})
        self._messages = dict(messages or {})

    def rules(self) -> dict[str, Any]:
        return dict(self._rules)

    def messages(self) -> dict[str, str]:
        return dict(self._messages)

    def __repr__(self) -> str:
        return f"StaticRuleSource(rules={list(self._rules)})"


class DeclaredRuleSource:
    """Read ``rules`` / ``messages`` declared on an owner object.

    Each may be a method returning a mapping or a plain mapping attribute.
    Anything undeclared resolves to an empty mapping.
    """

    def __init__(self, owner: Any, *, rules_attr: str = "rules", messages_attr: str = "messages"):
        self.owner = owner
        self.rules_attr = rules_attr
        self.messages_attr = messages_attr

    def _resolve(self, attr: str) -> dict[str, Any]:
        declared = getattr(self.owner, attr, None)
        if callable(declared):
            declared = declared()
        if declared is None:
            return {}
        if not isinstance(declared, Mapping):
            raise TypeError(
                f"{type(self.owner).__name__}.{attr} must be a mapping, "
                f"got {type(declared).__name__}"
            )
        return dict(declared)

    def rules(self) -> dict[str, Any]:
        return self._resolve(self.rules_attr)

    def messages(self) -> dict[str, str]:
        return self._resolve(self.messages_attr)

    def __repr__(self) -> str:
        return f"DeclaredRuleSource(owner={type(self.owner).__name__})"
