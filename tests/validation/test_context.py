# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for probity.validation.context - ValidationContext."""

from typing import Annotated

import pytest

from probity.core.config import ValidatorConfig
from probity.core.dataset import create_data_set
from probity.errors import ValidationDepthError
from probity.rules import Callback, Nested
from probity.validation import Result, ValidationContext, Validator


class Node:
    label: str
    child: Annotated[object, Nested(skip_on_empty=True)]

    def __init__(self, label: str, child: "Node | None" = None):
        self.label = label
        self.child = child


def chain(length: int) -> Node:
    node = None
    for i in reversed(range(length)):
        node = Node(f"n{i}", node)
    return node


@pytest.fixture
def context() -> ValidationContext:
    return ValidationContext(Validator(), create_data_set({"a": 1}))


# =============================================================================
# Tests: parameters and state
# =============================================================================


class TestContextState:
    """Tests for context attributes and parameters."""

    def test_initial_state(self, context):
        assert context.attribute is None
        assert context.attribute_label == "Value"
        assert context.depth == 0
        assert context.raw_data == {"a": 1}
        assert not context.is_attribute_missing

    def test_parameters(self, context):
        context.set_parameter("k", 1)
        assert context.get_parameter("k") == 1
        assert context.parameters == {"k": 1}
        context.unset_parameter("k")
        assert context.get_parameter("k", "default") == "default"
        context.unset_parameter("k")

    def test_validate_restores_state(self, context):
        context.attribute = "outer"
        data_set = context.data_set
        seen = []

        def record(value, rule, ctx):
            seen.append((ctx.attribute, ctx.depth))
            return Result()

        context.validate({"inner": 1}, {"inner": Callback(record)})

        assert seen == [("inner", 1)]
        assert context.attribute == "outer"
        assert context.data_set is data_set
        assert context.depth == 0


# =============================================================================
# Tests: recursion guards
# =============================================================================


class TestRecursionGuards:
    """Tests for cycle detection and the depth limit."""

    def test_cycle_is_not_reentered(self):
        a = Node("a")
        b = Node("b", a)
        a.child = b

        assert Validator().validate(a).is_valid

    def test_depth_limit(self):
        validator = Validator(ValidatorConfig(max_depth=3))
        assert validator.validate(chain(3)).is_valid
        with pytest.raises(ValidationDepthError) as exc_info:
            validator.validate(chain(5))
        assert exc_info.value.details["max_depth"] == 3

    def test_find_subject_innermost(self):
        inner = Node("inner")
        outer = Node("outer", inner)
        found = []

        def record(value, rule, ctx):
            found.append(ctx.find_subject(Node).label)
            return Result()

        Validator().validate(outer, {"child": [Nested({"label": Callback(record)})]})
        assert found == ["inner"]
