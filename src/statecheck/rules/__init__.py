# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Rules module: the bundled constraint engine.

Core exports:
- Rule, RuleContext, CallableRule: Base rule classes
- Validator: One evaluation of a rule map against data
- RuleEngine, ConstraintEngine, Evaluation: Engine boundary
- RuleRegistry: Name-to-rule mapping
- Common rules: Required, StringRule, Integer, Numeric, Min, Max, In, ...
"""

from statecheck.errors import RuleNotFoundError, ValidationError

from .common import (
    BUILTIN_RULES,
    Bail,
    Between,
    Boolean,
    Email,
    In,
    Integer,
    ListRule,
    MappingRule,
    Max,
    Min,
    Nullable,
    Numeric,
    Regex,
    Required,
    StringRule,
)
from .engine import ConstraintEngine, Evaluation, RuleEngine
from .registry import RuleRegistry, get_default_registry, reset_default_registry
from .rule import MISSING, CallableRule, Rule, RuleContext, parse_rule_expression
from .validator import Validator, data_get, expand_rule_key

__all__ = (
    # Base classes
    "MISSING",
    "CallableRule",
    "Rule",
    "RuleContext",
    "RuleNotFoundError",
    "ValidationError",
    "parse_rule_expression",
    # Engine
    "ConstraintEngine",
    "Evaluation",
    "RuleEngine",
    "Validator",
    "data_get",
    "expand_rule_key",
    # Registry
    "RuleRegistry",
    "get_default_registry",
    "reset_default_registry",
    # Common rules
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
