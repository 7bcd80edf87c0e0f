# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Common leaf rules: Required, Length, Number, Regex."""

from __future__ import annotations

import numbers
import re
from collections.abc import Sized
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

from probity.core.rule import EmptyPredicate, Rule, when_empty
from probity.validation.result import Result

if TYPE_CHECKING:
    from probity.validation.context import ValidationContext

__all__ = ("Length", "Number", "Regex", "Required")


class Required(Rule):
    """Value must be present and not empty.

    Empty collections count as empty in addition to ``empty_predicate``.
    """

    def __init__(
        self,
        *,
        message: str = "{attribute} cannot be blank.",
        not_passed_message: str = "{attribute} not passed.",
        empty_predicate: EmptyPredicate = when_empty,
        skip_on_error: bool = False,
        when: Any = None,
    ):
        super().__init__(skip_on_error=skip_on_error, when=when)
        self.message = message
        self.not_passed_message = not_passed_message
        self.empty_predicate = empty_predicate

    def evaluate(self, value: Any, context: ValidationContext) -> Result:
        parameters = {"attribute": context.attribute_label}
        if context.is_attribute_missing:
            return Result().add_error(self.not_passed_message, parameters)
        if self.empty_predicate(value, False) or _is_empty_collection(value):
            return Result().add_error(self.message, parameters)
        return Result()

    def get_options(self) -> dict[str, Any]:
        return {
            "message": {"template": self.message},
            "not_passed_message": {"template": self.not_passed_message},
            **super().get_options(),
        }


def _is_empty_collection(value: Any) -> bool:
    return isinstance(value, Sized) and not isinstance(value, str) and len(value) == 0


class Length(Rule):
    """String length bounds.

    Args:
        min: Minimum number of characters.
        max: Maximum number of characters.
        exactly: Exact number of characters. Excludes min and max.

    Raises:
        ValueError: If no bound is given, exactly is combined with min/max,
            or min is greater than max.
    """

    def __init__(
        self,
        min: int | None = None,
        max: int | None = None,
        *,
        exactly: int | None = None,
        incorrect_input_message: str = "{attribute} must be a string.",
        less_than_min_message: str = "{attribute} must contain at least {min} character(s).",
        greater_than_max_message: str = "{attribute} must contain at most {max} character(s).",
        not_exactly_message: str = "{attribute} must contain exactly {exactly} character(s).",
        skip_on_empty: Any = False,
        skip_on_error: bool = False,
        when: Any = None,
    ):
        if min is None and max is None and exactly is None:
            raise ValueError('At least one of "min", "max" and "exactly" must be specified.')
        if exactly is not None and (min is not None or max is not None):
            raise ValueError('"exactly" is mutually exclusive with "min" and "max".')
        if min is not None and max is not None and min > max:
            raise ValueError('"min" must be lower than "max".')

        super().__init__(skip_on_empty=skip_on_empty, skip_on_error=skip_on_error, when=when)
        self.min = min
        self.max = max
        self.exactly = exactly
        self.incorrect_input_message = incorrect_input_message
        self.less_than_min_message = less_than_min_message
        self.greater_than_max_message = greater_than_max_message
        self.not_exactly_message = not_exactly_message

    def evaluate(self, value: Any, context: ValidationContext) -> Result:
        parameters = {
            "attribute": context.attribute_label,
            "min": self.min,
            "max": self.max,
            "exactly": self.exactly,
        }
        result = Result()
        if not isinstance(value, str):
            return result.add_error(self.incorrect_input_message, parameters)

        length = len(value)
        parameters["length"] = length
        if self.exactly is not None and length != self.exactly:
            result.add_error(self.not_exactly_message, parameters)
        elif self.min is not None and length < self.min:
            result.add_error(self.less_than_min_message, parameters)
        elif self.max is not None and length > self.max:
            result.add_error(self.greater_than_max_message, parameters)
        return result

    def get_options(self) -> dict[str, Any]:
        return {
            "min": self.min,
            "max": self.max,
            "exactly": self.exactly,
            "less_than_min_message": {"template": self.less_than_min_message},
            "greater_than_max_message": {"template": self.greater_than_max_message},
            "not_exactly_message": {"template": self.not_exactly_message},
            **super().get_options(),
        }


class Number(Rule):
    """Numeric value within optional bounds. Numeric strings are accepted.

    Args:
        min: Lower bound, inclusive.
        max: Upper bound, inclusive.
        integer_only: Reject non-integral values.
    """

    def __init__(
        self,
        min: float | None = None,
        max: float | None = None,
        *,
        integer_only: bool = False,
        incorrect_input_message: str = "{attribute} must be a number.",
        not_integer_message: str = "{attribute} must be an integer.",
        less_than_min_message: str = "{attribute} must be no less than {min}.",
        greater_than_max_message: str = "{attribute} must be no greater than {max}.",
        skip_on_empty: Any = False,
        skip_on_error: bool = False,
        when: Any = None,
    ):
        if min is not None and max is not None and min > max:
            raise ValueError('"min" must be lower than "max".')

        super().__init__(skip_on_empty=skip_on_empty, skip_on_error=skip_on_error, when=when)
        self.min = min
        self.max = max
        self.integer_only = integer_only
        self.incorrect_input_message = incorrect_input_message
        self.not_integer_message = not_integer_message
        self.less_than_min_message = less_than_min_message
        self.greater_than_max_message = greater_than_max_message

    def evaluate(self, value: Any, context: ValidationContext) -> Result:
        parameters = {"attribute": context.attribute_label, "min": self.min, "max": self.max}
        result = Result()

        number = _to_number(value)
        if number is None:
            return result.add_error(self.incorrect_input_message, parameters)
        parameters["value"] = value

        if self.integer_only and number != int(number):
            return result.add_error(self.not_integer_message, parameters)
        if self.min is not None and number < self.min:
            result.add_error(self.less_than_min_message, parameters)
        elif self.max is not None and number > self.max:
            result.add_error(self.greater_than_max_message, parameters)
        return result

    def get_options(self) -> dict[str, Any]:
        return {
            "min": self.min,
            "max": self.max,
            "integer_only": self.integer_only,
            "incorrect_input_message": {"template": self.incorrect_input_message},
            "not_integer_message": {"template": self.not_integer_message},
            "less_than_min_message": {"template": self.less_than_min_message},
            "greater_than_max_message": {"template": self.greater_than_max_message},
            **super().get_options(),
        }


def _to_number(value: Any) -> Decimal | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, Decimal)):
        return Decimal(value)
    if isinstance(value, numbers.Real):
        number = Decimal(float(value))
    elif isinstance(value, str):
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            return None
    else:
        return None
    return number if number.is_finite() else None


class Regex(Rule):
    """String must match (or, with ``negate``, must not match) a pattern.

    The pattern is compiled on construction; an invalid pattern raises
    ``re.error``.
    """

    def __init__(
        self,
        pattern: str | re.Pattern[str],
        *,
        negate: bool = False,
        incorrect_input_message: str = "{attribute} must be a string.",
        message: str = "{attribute} is invalid.",
        skip_on_empty: Any = False,
        skip_on_error: bool = False,
        when: Any = None,
    ):
        super().__init__(skip_on_empty=skip_on_empty, skip_on_error=skip_on_error, when=when)
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        self.negate = negate
        self.incorrect_input_message = incorrect_input_message
        self.message = message

    def evaluate(self, value: Any, context: ValidationContext) -> Result:
        parameters = {"attribute": context.attribute_label}
        if not isinstance(value, str):
            return Result().add_error(self.incorrect_input_message, parameters)
        matched = self.pattern.search(value) is not None
        if matched == self.negate:
            return Result().add_error(self.message, {**parameters, "value": value})
        return Result()

    def get_options(self) -> dict[str, Any]:
        return {
            "pattern": self.pattern.pattern,
            "negate": self.negate,
            "incorrect_input_message": {"template": self.incorrect_input_message},
            "message": {"template": self.message},
            **super().get_options(),
        }
