# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for probity.rules.each - Each rule."""

from typing import Annotated

import pytest

from probity.rules import Callback, Each, Length, Nested, Number
from probity.validation import Result, validate


def key_recorder(keys: list):
    def record(value, rule, context) -> Result:
        keys.append(context.get_parameter(Each.PARAMETER_EACH_KEY))
        return Result()

    return record


class Tag:
    label: Annotated[str, Length(max=5)]

    def __init__(self, label: str):
        self.label = label


class Article:
    tags: Annotated[list, Each([Length(max=3)])]
    related: Annotated[list, Each(Nested())]
    scores: Annotated[dict, Each(Number(min=0))]

    def __init__(self, tags=(), related=(), scores=None):
        self.tags = list(tags)
        self.related = list(related)
        self.scores = scores or {}


# =============================================================================
# Tests: iteration and keys
# =============================================================================


class TestEachKeys:
    """Tests for element keys exposed on the context."""

    def test_mapping_keys(self):
        keys: list = []
        validate({"k1": 10, "k2": 20}, [Each(Callback(key_recorder(keys)))])
        assert keys == ["k1", "k2"]

    def test_sequence_indexes(self):
        keys: list = []
        validate(["a", "b", "c"], [Each(Callback(key_recorder(keys)))])
        assert keys == [0, 1, 2]

    def test_generator(self):
        keys: list = []
        validate({"v": (x for x in "ab")}, {"v": Each(Callback(key_recorder(keys)))})
        assert keys == [0, 1]

    def test_key_removed_after_loop(self):
        outer_keys: list = []

        def after(value, rule, context) -> Result:
            outer_keys.append(context.get_parameter(Each.PARAMETER_EACH_KEY, "unset"))
            return Result()

        validate({"v": [1, 2]}, {"v": [Each(Number()), Callback(after)]})
        assert outer_keys == ["unset"]

    def test_nested_each_restores_outer_key(self):
        seen: list = []

        def inner_done(value, rule, context) -> Result:
            seen.append(context.get_parameter(Each.PARAMETER_EACH_KEY))
            return Result()

        rule = Each([Each(Number()), Callback(inner_done)])
        validate({"m": [[1], [2]]}, {"m": rule})
        assert seen == [0, 1]


# =============================================================================
# Tests: errors
# =============================================================================


class TestEachErrors:
    """Tests for element error paths and input checks."""

    def test_element_paths(self):
        result = validate(Article(tags=["ok", "toolong", "no", "nope"]))
        assert result.get_error_messages_indexed_by_path() == {
            "tags[1]": ["Value must contain at most 3 character(s)."],
            "tags[3]": ["Value must contain at most 3 character(s)."],
        }

    def test_nested_element_paths(self):
        result = validate(Article(related=[Tag("fine"), Tag("far too long")]))
        assert result.get_error_messages_indexed_by_path() == {
            "related[1].label": ["label must contain at most 5 character(s)."]
        }

    def test_mapping_element_paths(self):
        result = validate(Article(scores={"math": 3, "art": -1}))
        assert result.get_error_messages_indexed_by_path() == {
            "scores[art]": ["Value must be no less than 0."]
        }

    def test_top_level_paths(self):
        result = validate({"k1": 1, "k2": -1}, [Each(Number(min=0))])
        assert result.get_error_messages_indexed_by_path() == {
            "[k2]": ["Value must be no less than 0."]
        }

    @pytest.mark.parametrize("value", [5, "text", None, object()])
    def test_incorrect_input(self, value):
        result = validate({"v": value}, {"v": Each(Number())})
        assert result.get_error_messages() == ["v must be iterable."]

    def test_empty_iterable_is_valid(self):
        assert validate({"v": []}, {"v": Each(Number())}).is_valid

    def test_options(self):
        options = Each([Length(max=3)]).get_options()
        assert options["incorrect_input_message"] == {"template": "{attribute} must be iterable."}
        assert options["rules"][0]["max"] == 3
