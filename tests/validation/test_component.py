# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for statecheck.validation.component - the host component surface."""

from __future__ import annotations

from typing import Any, ClassVar

import pytest

from statecheck.config import ValidationConfig
from statecheck.core.bag import ErrorBag
from statecheck.errors import MissingRulesError, PropertyNotFoundError, ValidationError
from statecheck.rules import RuleEngine
from statecheck.validation.component import Component, ValidatesInput
from statecheck.validation.sources import StaticRuleSource


class SignupForm(Component):
    email: str = ""
    name: str = ""
    items: list[dict[str, Any]] = []

    rules: ClassVar[dict[str, Any]] = {
        "email": "required|email",
        "name": "required|min:2",
        "items.*.name": "required",
    }
    messages: ClassVar[dict[str, str]] = {
        "email.required": "We need your email.",
    }


class MethodRulesForm(Component):
    a: str = ""
    b: str = ""

    def rules(self) -> dict[str, Any]:
        return {"a": "required", "b": "required"}


class BareForm(Component):
    a: str = ""


class PlainHost(ValidatesInput):
    """Non-pydantic host exposing state as instance attributes."""

    rules = {"title": "required|min:3"}

    def __init__(self, title: str = ""):
        self.title = title


# =============================================================================
# Tests: error bag management
# =============================================================================


class TestErrorBag:
    def test_lazy_empty_bag(self):
        form = SignupForm()
        assert form.get_error_bag().is_empty()
        assert form.get_error_bag() is form.get_error_bag()

    def test_add_error(self):
        form = SignupForm()
        form.add_error("email", "taken")
        form.add_error("email", "invalid")
        assert form.get_error_bag().get("email") == ["taken", "invalid"]

    def test_set_error_bag_from_mapping(self):
        form = SignupForm()
        form.set_error_bag({"a": "bad"})
        assert isinstance(form.get_error_bag(), ErrorBag)
        assert form.get_error_bag().get("a") == ["bad"]

    def test_set_error_bag_keeps_instance(self):
        form = SignupForm()
        bag = ErrorBag({"a": "bad"})
        form.set_error_bag(bag)
        assert form.get_error_bag() is bag

    def test_reset_all_idempotent(self):
        form = SignupForm()
        form.set_error_bag({"a": "bad", "b": "bad"})
        assert form.reset_error_bag().is_empty()
        assert form.reset_error_bag().is_empty()
        assert form.get_error_bag().is_empty()

    def test_reset_absent_field_leaves_bag(self):
        form = SignupForm()
        form.set_error_bag({"b": "bad"})
        form.reset_error_bag("a")
        assert form.get_error_bag().messages() == {"b": ["bad"]}

    def test_reset_by_pattern(self):
        form = SignupForm()
        form.set_error_bag({"items.0.name": "x", "items.1.name": "y", "email": "z"})
        form.reset_error_bag("items.*")
        assert form.get_error_bag().messages() == {"email": ["z"]}

    def test_reset_several_fields(self):
        form = SignupForm()
        form.set_error_bag({"a": "x", "b": "y", "c": "z"})
        form.reset_error_bag(["a", "c"])
        assert form.get_error_bag().keys() == ["b"]

    def test_aliases(self):
        form = SignupForm()
        form.set_error_bag({"a": "x", "b": "y"})
        form.clear_validation("a")
        assert form.get_error_bag().keys() == ["b"]
        form.reset_validation()
        assert form.get_error_bag().is_empty()

    def test_error_bag_except(self):
        form = SignupForm()
        form.set_error_bag({"a": "x", "b": "y"})
        assert form.error_bag_except("a").keys() == ["b"]
        assert form.get_error_bag().keys() == ["a", "b"]

    def test_bag_not_part_of_state(self):
        form = SignupForm()
        form.add_error("email", "bad")
        assert "_error_bag" not in form.model_dump()
        assert "_error_bag" not in form.snapshot()


# =============================================================================
# Tests: rules
# =============================================================================


class TestRules:
    def test_class_attribute_rules(self):
        assert SignupForm().get_rules()["email"] == "required|email"
        assert SignupForm().get_messages() == {"email.required": "We need your email."}

    def test_method_rules(self):
        assert MethodRulesForm().get_rules() == {"a": "required", "b": "required"}
        assert MethodRulesForm().get_messages() == {}

    def test_no_rules_declared(self):
        assert BareForm().get_rules() == {}
        assert BareForm().rules_for_model("a") == {}

    def test_rules_for_model(self):
        assert SignupForm().rules_for_model("items") == {"items.*.name": "required"}

    def test_has_rule_for(self):
        form = SignupForm()
        assert form.has_rule_for("items.2.name") is True
        assert form.has_rule_for("items") is True
        assert form.has_rule_for("other") is False
        assert form.missing_rule_for("other") is True

    def test_injected_rule_source(self):
        class Injected(Component):
            a: str = ""

            def get_rule_source(self):
                return StaticRuleSource({"a": "required"})

        with pytest.raises(ValidationError):
            Injected().validate()


# =============================================================================
# Tests: validation passes
# =============================================================================


class TestValidate:
    def test_failure_messages(self):
        form = SignupForm(name="x", items=[{"name": ""}])
        with pytest.raises(ValidationError) as exc_info:
            form.validate()
        assert exc_info.value.errors.messages() == {
            "email": ["We need your email."],
            "name": ["The name field must be at least 2 characters."],
            "items.0.name": ["The items.0.name field is required."],
        }

    def test_success_clears_bag(self):
        form = SignupForm(email="a@b.co", name="Ann")
        form.set_error_bag({"email": "old", "whatever": "old"})
        assert form.validate() == {"email": "a@b.co", "name": "Ann", "items": []}
        assert form.get_error_bag().is_empty()

    def test_missing_rules(self):
        with pytest.raises(MissingRulesError) as exc_info:
            BareForm().validate()
        assert exc_info.value.component == "BareForm"

    def test_component_name_override(self):
        class Named(BareForm):
            component_name: ClassVar[str] = "named-form"

        with pytest.raises(MissingRulesError, match="named-form"):
            Named().validate()

    def test_rule_for_unknown_property(self):
        with pytest.raises(PropertyNotFoundError):
            BareForm().validate({"ghost": "required"})

    def test_prepare_for_validation(self):
        class Trimmed(Component):
            code: str = ""
            rules: ClassVar[dict[str, Any]] = {"code": "in:abc"}

            def prepare_for_validation(self, data):
                return {key: value.strip() for key, value in data.items()}

        form = Trimmed(code="  abc ")
        assert form.validate() == {"code": "abc"}
        assert form.code == "  abc "

    def test_custom_engine(self):
        class Bailing(SignupForm):
            def get_engine(self):
                return RuleEngine(config=ValidationConfig(stop_on_first_failure=True))

        form = Bailing(email="nope", name="Ann")
        with pytest.raises(ValidationError) as exc_info:
            form.validate({"email": "email|min:10"})
        assert exc_info.value.errors.count() == 1


class TestValidateOnly:
    def test_partial_success_preserves_unrelated(self):
        form = MethodRulesForm(a="", b="ok")
        form.set_error_bag({"a": ["bad"], "b": ["bad"]})
        form.validate_only("b", rules={"b": "required"})
        assert form.get_error_bag().messages() == {"a": ["bad"]}

    def test_partial_failure_is_additive(self):
        form = MethodRulesForm(a="", b="")
        form.set_error_bag({"a": ["bad"], "b": ["bad"]})
        with form.capture_errors():
            form.validate_only("b", rules={"b": "required"})
        assert form.get_error_bag().messages() == {
            "a": ["bad"],
            "b": ["The b field is required."],
        }

    def test_sequence_of_field_updates(self):
        """Errors accumulate field by field and clear as fields are fixed."""
        form = SignupForm(email="", name="")
        with form.capture_errors():
            form.validate_only("email")
        with form.capture_errors():
            form.validate_only("name")
        assert form.get_error_bag().keys() == ["name", "email"]

        form.email = "a@b.co"
        with form.capture_errors():
            form.validate_only("email")
        assert form.get_error_bag().keys() == ["name"]

    def test_indexed_field(self):
        form = SignupForm(items=[{"name": "pen"}, {"name": ""}])
        with form.capture_errors():
            form.validate_only("items.1.name")
        assert form.get_error_bag().keys() == ["items.1.name"]

    def test_unknown_field_is_not_a_validation_failure(self):
        form = MethodRulesForm(a="", b="")
        form.set_error_bag({"a": ["bad"]})
        with pytest.raises(PropertyNotFoundError):
            with form.capture_errors():
                form.validate_only("ghost")
        assert form.get_error_bag().messages() == {"a": ["bad"]}


class TestCaptureErrors:
    def test_stores_bag_and_suppresses(self):
        form = SignupForm()
        with form.capture_errors():
            form.validate()
        assert form.get_error_bag().has("email")

    def test_other_errors_propagate(self):
        with pytest.raises(MissingRulesError):
            with BareForm().capture_errors():
                BareForm().validate()

    def test_no_error_leaves_bag(self):
        form = SignupForm(email="a@b.co", name="Ann")
        form.add_error("x", "manual")
        with form.capture_errors():
            pass
        assert form.get_error_bag().keys() == ["x"]


class TestPlainHost:
    def test_snapshot_uses_public_attributes(self):
        host = PlainHost("ab")
        host._private = "hidden"
        assert host.snapshot() == {"title": "ab"}

    def test_validate(self):
        host = PlainHost("ab")
        with host.capture_errors():
            host.validate()
        assert host.get_error_bag().first("title") == (
            "The title field must be at least 3 characters."
        )

        host.title = "abc"
        assert host.validate() == {"title": "abc"}
        assert host.get_error_bag().is_empty()
