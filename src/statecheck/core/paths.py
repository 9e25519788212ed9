# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Dot-notation field paths and rule-key matching.

Field paths address values in a component snapshot (``items.2.name``).
Rule keys use the same notation but may carry the wildcard segment ``*``
in place of a collection index (``items.*.name``).

Three matching modes exist, each for one job:
    has_rule_for       - is a concrete path governed by any declared rule?
    matches_rule_key   - does a rule key select a concrete path (one segment per ``*``)?
    matches_pattern    - flat glob over error-bag keys (``*`` spans dots)
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from functools import lru_cache
from typing import Any

__all__ = (
    "SEPARATOR",
    "WILDCARD",
    "after_first_dot",
    "before_first_dot",
    "canonicalize",
    "has_rule_for",
    "is_index",
    "join_path",
    "matches_any_pattern",
    "matches_pattern",
    "matches_rule_key",
    "missing_rule_for",
    "split_path",
)

SEPARATOR = "."
WILDCARD = "*"


def split_path(path: str) -> list[str]:
    return path.split(SEPARATOR)


def join_path(segments: Iterable[str]) -> str:
    return SEPARATOR.join(segments)


def is_index(segment: str) -> bool:
    """True for a non-empty run of ASCII digits (``0``, ``10``, ``007``)."""
    return segment.isascii() and segment.isdigit()


def before_first_dot(key: str) -> str:
    return key.split(SEPARATOR, 1)[0]


def after_first_dot(key: str) -> str:
    _, _, rest = key.partition(SEPARATOR)
    return rest


def canonicalize(path: str) -> str:
    """Replace numeric index segments with the wildcard.

    Interior indices and a trailing index are both replaced; a leading
    segment is a field name and is never rewritten.

    Examples:
        >>> canonicalize("list.3")
        'list.*'
        >>> canonicalize("list.3.name")
        'list.*.name'
        >>> canonicalize("a.3.4.b")
        'a.*.*.b'
    """
    segments = split_path(path)
    return join_path(
        [segments[0]]
        + [WILDCARD if is_index(segment) else segment for segment in segments[1:]]
    )


def _prefix_before_wildcard(key: str) -> str:
    segments = split_path(key)
    if WILDCARD in segments[1:]:
        segments = segments[: segments.index(WILDCARD, 1)]
    return join_path(segments)


def has_rule_for(path: str, rules: Mapping[str, Any] | Iterable[str]) -> bool:
    """Whether ``path`` is governed by a declared rule key.

    A path carrying numeric indices must match a rule key exactly once its
    indices are wildcarded. A path without indices also counts as ruled when
    a wildcard rule exists beneath it (``items`` for ``items.*.name``); this
    answers "is this field validated at all", not which rule entries apply.
    """
    keys = list(rules.keys() if isinstance(rules, Mapping) else rules)
    canonical = canonicalize(path)

    if canonical != path:
        return canonical in keys

    return any(_prefix_before_wildcard(key) == path for key in keys)


def missing_rule_for(path: str, rules: Mapping[str, Any] | Iterable[str]) -> bool:
    return not has_rule_for(path, rules)


def matches_rule_key(key: str, path: str) -> bool:
    """Whether rule ``key`` selects the concrete ``path``.

    ``*`` stands for exactly one segment; all other segments compare
    literally and both sides must have the same depth.
    """
    if key == path:
        return True

    key_segments = split_path(key)
    path_segments = split_path(path)
    if len(key_segments) != len(path_segments):
        return False

    return all(
        expected == WILDCARD or expected == actual
        for expected, actual in zip(key_segments, path_segments)
    )


@lru_cache(maxsize=512)
def _compile_pattern(pattern: str) -> re.Pattern[str]:
    return re.compile(re.escape(pattern).replace(r"\*", ".*"), re.DOTALL)


def matches_pattern(pattern: str, key: str) -> bool:
    """Flat glob match where ``*`` matches any run of characters, dots included."""
    if pattern == key:
        return True
    return _compile_pattern(pattern).fullmatch(key) is not None


def matches_any_pattern(patterns: Iterable[str], key: str) -> bool:
    return any(matches_pattern(pattern, key) for pattern in patterns)
