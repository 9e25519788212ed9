# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""ErrorBag - ordered per-field collection of failure messages.

Keys are field paths (``email``, ``items.0.name``), values are message lists
in insertion order. A path missing from the bag means "no known error", not
"the field is valid".
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from .paths import matches_any_pattern

__all__ = ("ErrorBag",)


class ErrorBag:
    """Ordered multi-map from field path to messages.

    Mutators work in place; the filtering combinators (``except_``,
    ``supersede``) return new bags and leave the receiver untouched.
    Reads return copies.

    Example:
        >>> bag = ErrorBag()
        >>> bag.add("email", "The email field is required.")
        >>> bag.first("email")
        'The email field is required.'
        >>> bag.except_(["email"]).is_empty()
        True
    """

    def __init__(self, messages: Mapping[str, Any] | None = None):
        self._messages: dict[str, list[str]] = {}
        if messages:
            for key, value in messages.items():
                self._extend(key, value)

    @classmethod
    def coerce(cls, bag_like: ErrorBag | Mapping[str, Any] | None) -> ErrorBag:
        """Return ``bag_like`` as an ErrorBag; existing bags pass through."""
        if isinstance(bag_like, ErrorBag):
            return bag_like
        if bag_like is None:
            return cls()
        if isinstance(bag_like, Mapping):
            return cls(bag_like)
        raise TypeError(
            f"Cannot build ErrorBag from {type(bag_like).__name__}; "
            "expected ErrorBag or mapping of path -> message(s)"
        )

    def _extend(self, key: str, value: Any) -> None:
        if isinstance(value, str):
            value = [value]
        bucket = self._messages.setdefault(key, [])
        for message in value:
            if message not in bucket:
                bucket.append(message)

    # -- mutation ---------------------------------------------------------

    def add(self, key: str, message: str) -> ErrorBag:
        """Append ``message`` under ``key``; duplicate messages are dropped."""
        self._extend(key, message)
        return self

    def merge(self, other: ErrorBag | Mapping[str, Any]) -> ErrorBag:
        """Append every entry of ``other`` after this bag's own entries."""
        for key, value in ErrorBag.coerce(other).items():
            self._extend(key, value)
        return self

    # -- combinators ------------------------------------------------------

    def except_(self, patterns: str | Iterable[str]) -> ErrorBag:
        """New bag without entries whose key matches any glob ``pattern``."""
        if isinstance(patterns, str):
            patterns = [patterns]
        patterns = list(patterns)
        return ErrorBag(
            {
                key: messages
                for key, messages in self._messages.items()
                if not matches_any_pattern(patterns, key)
            }
        )

    def supersede(
        self,
        scoped_keys: Iterable[str],
        new_bag: ErrorBag | Mapping[str, Any],
    ) -> ErrorBag:
        """Combine a scoped result with this bag's out-of-scope entries.

        Entries matching ``scoped_keys`` are dropped from this bag, so a scoped
        field that passed loses its stale messages; everything else is kept
        behind the entries of ``new_bag``.
        """
        merged = ErrorBag(ErrorBag.coerce(new_bag).messages())
        return merged.merge(self.except_(list(scoped_keys)))

    # -- reads ------------------------------------------------------------

    def has(self, key: str) -> bool:
        return bool(self._messages.get(key))

    def get(self, key: str) -> list[str]:
        return list(self._messages.get(key, []))

    def first(self, key: str | None = None) -> str | None:
        """First message for ``key``, or the first message overall."""
        if key is not None:
            messages = self._messages.get(key)
            return messages[0] if messages else None
        for messages in self._messages.values():
            if messages:
                return messages[0]
        return None

    def keys(self) -> list[str]:
        return list(self._messages.keys())

    def items(self) -> list[tuple[str, list[str]]]:
        return [(key, list(messages)) for key, messages in self._messages.items()]

    def all(self) -> list[str]:
        """Every message, flattened in insertion order."""
        return [message for messages in self._messages.values() for message in messages]

    def messages(self) -> dict[str, list[str]]:
        return {key: list(messages) for key, messages in self._messages.items()}

    def count(self) -> int:
        return sum(len(messages) for messages in self._messages.values())

    def is_empty(self) -> bool:
        return not self.any()

    def any(self) -> bool:
        return self.count() > 0

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._messages))

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ErrorBag):
            return self._messages == other._messages
        if isinstance(other, Mapping):
            return self._messages == ErrorBag(other)._messages
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ErrorBag({self._messages!r})"
