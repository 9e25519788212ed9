# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Validation configuration.

Provides ValidationConfig for tuning how components run validation.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

__all__ = ("ValidationConfig",)


class ValidationConfig(BaseModel):
    """Configuration for a component's validation passes.

    Attributes:
        shorten_model_attributes: Display ``foo.bar`` as ``bar`` in messages
            when ``foo`` holds a model-like value.
        implicit_skip_empty: Skip non-required rules for missing, None or
            empty-string values.
        stop_on_first_failure: Stop evaluating a field's rules after its
            first failure (engine-wide ``bail``).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    shorten_model_attributes: bool = Field(default=True)
    implicit_skip_empty: bool = Field(default=True)
    stop_on_first_failure: bool = Field(default=False)
