# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Name-to-rule registry for the reference engine."""

from __future__ import annotations

from statecheck.errors import RuleNotFoundError

from .rule import Rule

__all__ = ("RuleRegistry", "get_default_registry", "reset_default_registry")


class RuleRegistry:
    """Map rule names to Rule classes.

    Example:
        >>> registry = RuleRegistry.with_builtins()
        >>> registry.register(Uppercase)
        >>> registry.get("uppercase")
        <class 'Uppercase'>
    """

    def __init__(self):
        self._rules: dict[str, type[Rule]] = {}

    @classmethod
    def with_builtins(cls) -> RuleRegistry:
        from .common import BUILTIN_RULES

        registry = cls()
        for rule_cls in BUILTIN_RULES:
            registry.register(rule_cls)
        return registry

    def register(
        self,
        rule_cls: type[Rule],
        *,
        name: str | None = None,
        override: bool = False,
    ) -> None:
        """Register a rule class under ``name`` (default: ``rule_cls.name``).

        Raises:
            ValueError: If the name is empty, or taken and override=False.
        """
        key = name or rule_cls.name
        if not key:
            raise ValueError(f"Rule {rule_cls.__name__} has no name")
        if key in self._rules and not override:
            raise ValueError(
                f"Rule '{key}' already registered. Use override=True to replace."
            )
        self._rules[key] = rule_cls

    def unregister(self, name: str) -> bool:
        """Remove registration. Returns True if existed."""
        return self._rules.pop(name, None) is not None

    def get(self, name: str) -> type[Rule]:
        """Get rule class by name. Raises RuleNotFoundError if unknown."""
        if name not in self._rules:
            raise RuleNotFoundError(
                f"Validation rule '{name}' is not registered",
                details={"rule": name, "available": self.list_names()},
            )
        return self._rules[name]

    def has(self, name: str) -> bool:
        return name in self._rules

    def list_names(self) -> list[str]:
        return list(self._rules.keys())

    def __contains__(self, name: str) -> bool:
        return name in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleRegistry(rules={self.list_names()})"


_default_registry: RuleRegistry | None = None


def get_default_registry() -> RuleRegistry:
    """Process-wide registry, built with the built-in rules on first use."""
    global _default_registry
    if _default_registry is None:
        _default_registry = RuleRegistry.with_builtins()
    return _default_registry


def reset_default_registry() -> None:
    """Drop the default registry; the next access rebuilds it."""
    global _default_registry
    _default_registry = None
