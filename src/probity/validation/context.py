# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""ValidationContext - per-call state shared by every rule evaluation.

One context lives for one top-level ``Validator.validate`` call. Composite
rules recurse through ``context.validate``, which swaps the current data set
and attribute for the duration of the inner call and restores them after.
Named parameters are shared across the whole call (``Each`` publishes the
current element key through them).
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from probity.core.dataset import DataSet, is_structured_object
from probity.errors import ValidationDepthError

from .result import Result

if TYPE_CHECKING:
    from .validator import Validator

logger = logging.getLogger(__name__)

__all__ = ("ValidationContext",)


class ValidationContext:
    """Ambient state for rules.

    Attributes:
        validator: Validator running this call
        root_data_set: Data set of the top-level data
        data_set: Data set currently being validated
        attribute: Attribute currently validated, None for subject rules
        is_attribute_missing: The current attribute does not exist
        depth: Current recursion depth (0 at top level)
    """

    def __init__(
        self,
        validator: Validator,
        data_set: DataSet,
        parameters: dict[str, Any] | None = None,
    ):
        self.validator = validator
        self.root_data_set = data_set
        self.data_set = data_set
        self.attribute: str | None = None
        self.is_attribute_missing = False
        self.depth = 0
        self._parameters: dict[str, Any] = dict(parameters or {})
        self._active: set[int] = set()
        self._subjects: list[Any] = []

    @property
    def raw_data(self) -> Any:
        """Top-level data as passed to the validator."""
        return self.root_data_set.source

    @property
    def attribute_label(self) -> str:
        return self.attribute if self.attribute is not None else "Value"

    @property
    def parameters(self) -> dict[str, Any]:
        return dict(self._parameters)

    def get_parameter(self, name: str, default: Any = None) -> Any:
        return self._parameters.get(name, default)

    def set_parameter(self, name: str, value: Any) -> None:
        self._parameters[name] = value

    def unset_parameter(self, name: str) -> None:
        self._parameters.pop(name, None)

    def validate(self, data: Any, rules: Any = None) -> Result:
        """Validate nested data within this context.

        Rediscovering the rules of an object that is already being validated
        further up the current path returns an empty Result instead of
        entering it again.

        Raises:
            ValidationDepthError: If nesting exceeds the configured max_depth.
        """
        subject = data.source if isinstance(data, DataSet) else data
        if rules is None and self.is_active(subject):
            logger.debug(
                f"Skipping {type(subject).__qualname__}: already on the validation path"
            )
            return Result()

        max_depth = self.validator.config.max_depth
        if self.depth >= max_depth:
            raise ValidationDepthError(
                f"Validation nested deeper than max_depth={max_depth}",
                details={"max_depth": max_depth, "attribute": self.attribute},
            )

        saved = (self.data_set, self.attribute, self.is_attribute_missing)
        self.depth += 1
        try:
            return self.validator.validate(data, rules, self)
        finally:
            self.depth -= 1
            self.data_set, self.attribute, self.is_attribute_missing = saved

    def is_active(self, subject: Any) -> bool:
        return is_structured_object(subject) and id(subject) in self._active

    @contextmanager
    def entering(self, subject: Any, discovered: bool = False) -> Iterator[None]:
        """Push subject onto the validation path for the enclosed block.

        Args:
            subject: Data being validated.
            discovered: Its own discovered rules are evaluated, which makes
                it active for cycle detection.
        """
        if not is_structured_object(subject):
            yield
            return
        mark = discovered and id(subject) not in self._active
        if mark:
            self._active.add(id(subject))
        self._subjects.append(subject)
        try:
            yield
        finally:
            self._subjects.pop()
            if mark:
                self._active.discard(id(subject))

    def find_subject(self, owner: type) -> Any | None:
        """Innermost subject on the active path that is an instance of owner."""
        for subject in reversed(self._subjects):
            if isinstance(subject, owner):
                return subject
        return None

    def __repr__(self) -> str:
        return (
            f"ValidationContext(attribute={self.attribute!r}, depth={self.depth}, "
            f"parameters={self._parameters!r})"
        )
