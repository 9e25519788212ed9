# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from statecheck.core.paths import SEPARATOR, after_first_dot, before_first_dot
from statecheck.core.snapshot import is_model_like
from statecheck.rules.engine import Evaluation

__all__ = ("shorten_model_attributes",)


def shorten_model_attributes(
    data: Mapping[str, Any],
    rules: Mapping[str, Any],
    evaluation: Evaluation,
) -> dict[str, str]:
    """Display ``post.title`` as ``title`` when ``post`` holds a model.

    Only keys whose display name is still the raw key get shortened; an
    explicit attribute name always wins. Returns the names registered.
    """
    shortened: dict[str, str] = {}
    for key in rules:
        if SEPARATOR not in key:
            continue
        field = before_first_dot(key)
        if not is_model_like(data.get(field)):
            continue
        if evaluation.get_displayable_attribute(key) == key:
            shortened[key] = after_first_dot(key)

    if shortened:
        evaluation.add_custom_attributes(shortened)
    return shortened
