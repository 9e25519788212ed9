# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for statecheck.validation.attributes - model attribute shortening."""

from __future__ import annotations

from typing import Any, ClassVar

import pytest
from pydantic import BaseModel

from statecheck.config import ValidationConfig
from statecheck.errors import ValidationError
from statecheck.rules import Validator
from statecheck.validation.attributes import shorten_model_attributes
from statecheck.validation.component import Component


class Post(BaseModel):
    id: int
    title: str = ""


class PostEditor(Component):
    post: Post
    meta: dict[str, Any] = {}

    rules: ClassVar[dict[str, Any]] = {
        "post.title": "required|min:3",
        "meta.slug": "required",
    }


class UnshortenedEditor(PostEditor):
    validation_config: ClassVar[ValidationConfig] = ValidationConfig(
        shorten_model_attributes=False
    )


class TestShortenModelAttributes:
    def test_model_keys_shortened(self):
        data = {"post": Post(id=1), "meta": {}}
        rules = {"post.title": "required", "meta.slug": "required"}
        evaluation = Validator(data, rules)

        assert shorten_model_attributes(data, rules, evaluation) == {"post.title": "title"}
        assert evaluation.get_displayable_attribute("post.title") == "title"
        assert evaluation.get_displayable_attribute("meta.slug") == "meta.slug"

    def test_explicit_attribute_wins(self):
        data = {"post": Post(id=1)}
        rules = {"post.title": "required"}
        evaluation = Validator(data, rules, attributes={"post.title": "headline"})

        assert shorten_model_attributes(data, rules, evaluation) == {}
        assert evaluation.get_displayable_attribute("post.title") == "headline"

    def test_top_level_key_untouched(self):
        data = {"post": Post(id=1)}
        rules = {"post": "required"}
        assert shorten_model_attributes(data, rules, Validator(data, rules)) == {}


class TestShorteningThroughComponent:
    def test_message_uses_short_name(self):
        editor = PostEditor(post=Post(id=1, title=""), meta={"slug": "x"})
        with pytest.raises(ValidationError) as exc_info:
            editor.validate()
        assert exc_info.value.errors.messages() == {
            "post.title": ["The title field is required."]
        }

    def test_only_display_changes(self):
        """Shortening changes the label, never which fields fail."""
        shortened = PostEditor(post=Post(id=1, title="ab"), meta={})
        plain = UnshortenedEditor(post=Post(id=1, title="ab"), meta={})

        with pytest.raises(ValidationError) as short_exc:
            shortened.validate()
        with pytest.raises(ValidationError) as plain_exc:
            plain.validate()

        assert short_exc.value.errors.keys() == plain_exc.value.errors.keys()
        assert short_exc.value.errors.first("post.title") == (
            "The title field must be at least 3 characters."
        )
        assert plain_exc.value.errors.first("post.title") == (
            "The post.title field must be at least 3 characters."
        )

    def test_model_passes(self):
        editor = PostEditor(post=Post(id=1, title="Hello"), meta={"slug": "hello"})
        validated = editor.validate()
        assert validated["post"] is editor.post

    def test_explicit_attribute_through_validate(self):
        editor = PostEditor(post=Post(id=1), meta={"slug": "x"})
        with pytest.raises(ValidationError) as exc_info:
            editor.validate(attributes={"post.title": "headline"})
        assert exc_info.value.errors.first("post.title") == "The headline field is required."
