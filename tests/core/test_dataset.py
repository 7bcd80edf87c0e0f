# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for probity.core.dataset - data set wrappers."""

import datetime as dt
import enum
from dataclasses import dataclass
from decimal import Decimal
from typing import Annotated

import pytest

from probity.core.dataset import (
    MappingDataSet,
    ObjectDataSet,
    SingleValueDataSet,
    create_data_set,
    is_structured_object,
)
from probity.core.ruleset import RuleSet
from probity.core.types import Undefined
from probity.rules import Length, Required


class Color(enum.Enum):
    RED = "red"


@dataclass
class Point:
    x: Annotated[int, Required()] = 0
    y: int = 0


class SelfDescribing:
    value: Annotated[str, Length(max=1)] = ""

    def get_rules(self):
        return {"value": [Required()]}


# =============================================================================
# Tests: is_structured_object
# =============================================================================


class TestIsStructuredObject:
    """Tests for object vs. single value classification."""

    @pytest.mark.parametrize(
        "value",
        [None, "s", b"b", 1, 1.5, True, Decimal("1"), dt.date(2024, 1, 1), Color.RED,
         [1], (1,), {1}, frozenset(), {"a": 1}, int],
    )
    def test_single_values(self, value):
        assert not is_structured_object(value)

    def test_objects(self):
        assert is_structured_object(Point())
        assert is_structured_object(object())


# =============================================================================
# Tests: create_data_set
# =============================================================================


class TestCreateDataSet:
    """Tests for data set selection."""

    def test_mapping(self):
        data_set = create_data_set({"a": 1})
        assert isinstance(data_set, MappingDataSet)
        assert data_set.get_attribute_value("a") == 1
        assert data_set.get_attribute_value("b") is Undefined
        assert data_set.has_attribute("a")
        assert data_set.get_data() == {"a": 1}

    def test_object(self):
        data_set = create_data_set(Point(1, 2))
        assert isinstance(data_set, ObjectDataSet)
        assert data_set.get_data() == {"x": 1, "y": 2}
        assert data_set.source == Point(1, 2)

    def test_single_value(self):
        data_set = create_data_set(42)
        assert isinstance(data_set, SingleValueDataSet)
        assert data_set.source == 42
        assert data_set.get_attribute_value("x") is Undefined
        assert not data_set.has_attribute("x")
        assert data_set.get_data() is None

    def test_data_set_passes_through(self):
        data_set = MappingDataSet({})
        assert create_data_set(data_set) is data_set


# =============================================================================
# Tests: ObjectDataSet.get_rules
# =============================================================================


class TestObjectDataSetRules:
    """Tests for rule sourcing."""

    def test_declared_rules(self):
        rule_set = ObjectDataSet(Point()).get_rules()
        assert list(rule_set.member_rules) == ["x"]

    def test_rules_provider_overrides_declarations(self):
        rule_set = ObjectDataSet(SelfDescribing()).get_rules()
        assert isinstance(rule_set, RuleSet)
        assert [type(r) for r in rule_set.member_rules["value"]] == [Required]
