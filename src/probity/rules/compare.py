# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Comparison rules.

Compare a value with a fixed target or with another attribute of the data
being validated (``target_attribute``, resolved from the current data set).

Comparison types:
    number    both sides converted to numbers (numeric strings allowed, floats
              compared by their shortest repr, None kept as None)
    string    both sides converted to str
    original  values compared as they are (dates, decimals, ...)
"""

from __future__ import annotations

import datetime as dt
import math
import numbers
import operator as op
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any, ClassVar, Literal

from probity.core.rule import Rule
from probity.core.types import is_sentinel
from probity.validation.result import Result

if TYPE_CHECKING:
    from probity.validation.context import ValidationContext

__all__ = (
    "Compare",
    "CompareType",
    "Equal",
    "GreaterThan",
    "GreaterThanOrEqual",
    "LessThan",
    "LessThanOrEqual",
    "NotEqual",
)

CompareType = Literal["number", "string", "original"]

_OPERATORS = {
    "==": (op.eq, "equal to"),
    "!=": (op.ne, "not equal to"),
    ">": (op.gt, "greater than"),
    ">=": (op.ge, "greater than or equal to"),
    "<": (op.lt, "less than"),
    "<=": (op.le, "less than or equal to"),
}
_TYPES = ("number", "string", "original")
_ALLOWED = (type(None), bool, numbers.Number, str, dt.date, dt.time, dt.timedelta)

_MISSING = object()


class Compare(Rule):
    """Compare the value against a target value or attribute.

    Args:
        target_value: Constant to compare with.
        target_attribute: Attribute of the current data set to compare
            with. Takes precedence over target_value.
        operator: One of ==, !=, >, >=, <, <=.
        type: "number", "string" or "original".

    Raises:
        ValueError: On an unknown operator or type.
    """

    DEFAULT_OPERATOR: ClassVar[str] = "=="

    def __init__(
        self,
        target_value: Any = None,
        *,
        target_attribute: str | None = None,
        operator: str | None = None,
        type: CompareType = "number",
        message: str | None = None,
        incorrect_input_message: str = (
            "{attribute} must be a number, string, boolean, null or date/time value."
        ),
        incorrect_data_set_type_message: str = (
            "The compared attribute must be a number, string, boolean, null or date/time value."
        ),
        skip_on_empty: Any = False,
        skip_on_error: bool = False,
        when: Any = None,
    ):
        operator = operator or self.DEFAULT_OPERATOR
        if operator not in _OPERATORS:
            raise ValueError(
                f'Operator "{operator}" is not supported. Expected one of: {list(_OPERATORS)}.'
            )
        if type not in _TYPES:
            raise ValueError(f'Type "{type}" is not supported. Expected one of: {list(_TYPES)}.')

        super().__init__(skip_on_empty=skip_on_empty, skip_on_error=skip_on_error, when=when)
        self.target_value = target_value
        self.target_attribute = target_attribute
        self.operator = operator
        self.type = type
        self.message = message or (
            f'{{attribute}} must be {_OPERATORS[operator][1]} "{{target_value_or_attribute}}".'
        )
        self.incorrect_input_message = incorrect_input_message
        self.incorrect_data_set_type_message = incorrect_data_set_type_message

    def _parameters(self) -> dict[str, Any]:
        return {
            "target_value": self.target_value,
            "target_attribute": self.target_attribute,
            "target_value_or_attribute": (
                self.target_attribute if self.target_attribute is not None else self.target_value
            ),
        }

    def evaluate(self, value: Any, context: ValidationContext) -> Result:
        parameters = {"attribute": context.attribute_label, **self._parameters()}
        result = Result()

        if not isinstance(value, _ALLOWED):
            return result.add_error(self.incorrect_input_message, parameters)

        target = self.target_value
        if self.target_attribute is not None:
            target = context.data_set.get_attribute_value(self.target_attribute)
            if is_sentinel(target):
                target = None
            if not isinstance(target, _ALLOWED):
                return result.add_error(self.incorrect_data_set_type_message, parameters)

        left, right = _coerce(value, self.type), _coerce(target, self.type)
        if left is _MISSING or right is _MISSING:
            return result.add_error(self.incorrect_input_message, parameters)

        compare = _OPERATORS[self.operator][0]
        try:
            passed = compare(left, right)
        except (TypeError, InvalidOperation):
            passed = False
        if not passed:
            result.add_error(self.message, {**parameters, "value": value})
        return result

    def get_options(self) -> dict[str, Any]:
        parameters = self._parameters()
        return {
            "target_value": self.target_value,
            "target_attribute": self.target_attribute,
            "incorrect_input_message": {
                "template": self.incorrect_input_message,
                "parameters": parameters,
            },
            "incorrect_data_set_type_message": {
                "template": self.incorrect_data_set_type_message,
                "parameters": parameters,
            },
            "message": {"template": self.message, "parameters": parameters},
            "type": self.type,
            "operator": self.operator,
            **super().get_options(),
        }


def _coerce(value: Any, compare_type: str) -> Any:
    if compare_type == "original":
        return value
    if compare_type == "string":
        return "" if value is None else str(value)
    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, float):
        return Decimal(str(value)) if math.isfinite(value) else value
    if isinstance(value, numbers.Number):
        return value
    if isinstance(value, str):
        try:
            return Decimal(value.strip())
        except InvalidOperation:
            return _MISSING
    return _MISSING


class _FixedOperator(Compare):
    def __init__(self, target_value: Any = None, **kwargs: Any):
        super().__init__(target_value, operator=self.DEFAULT_OPERATOR, **kwargs)


class Equal(_FixedOperator):
    DEFAULT_OPERATOR = "=="


class NotEqual(_FixedOperator):
    DEFAULT_OPERATOR = "!="


class GreaterThan(_FixedOperator):
    DEFAULT_OPERATOR = ">"


class GreaterThanOrEqual(_FixedOperator):
    DEFAULT_OPERATOR = ">="


class LessThan(_FixedOperator):
    DEFAULT_OPERATOR = "<"


class LessThanOrEqual(_FixedOperator):
    DEFAULT_OPERATOR = "<="
