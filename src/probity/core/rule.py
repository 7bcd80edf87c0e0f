# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Rule base class and the capabilities the engine dispatches on.

A rule evaluates one value against a context and returns a ``Result``. Rules
hold configuration only; evaluation never mutates them, so one instance can
be shared by concurrent validations.

Skip behaviour common to every rule:
    skip_on_empty: bool or predicate (value, is_missing) -> bool.
        True means ``when_empty``. An empty value skips this rule and the
        rules after it in the same list.
    skip_on_error: skip when an earlier rule for the same value failed.
    when: predicate (value, context) -> bool; False skips the rule.
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from probity.validation.context import ValidationContext
    from probity.validation.result import Result

__all__ = (
    "AfterInitAttribute",
    "EmptyPredicate",
    "Rule",
    "RulesProvider",
    "WhenPredicate",
    "when_empty",
    "when_missing",
    "when_null",
)

EmptyPredicate = Callable[[Any, bool], bool]
WhenPredicate = Callable[[Any, "ValidationContext"], bool]


def when_empty(value: Any, is_missing: bool = False) -> bool:
    """Default emptiness: missing, None or empty string."""
    return is_missing or value is None or (isinstance(value, str) and value == "")


def when_null(value: Any, is_missing: bool = False) -> bool:
    return is_missing or value is None


def when_missing(value: Any, is_missing: bool = False) -> bool:
    return is_missing


@runtime_checkable
class AfterInitAttribute(Protocol):
    """Rules needing the declaring subject once, right after discovery."""

    def after_init_attribute(self, subject: object) -> None: ...


@runtime_checkable
class RulesProvider(Protocol):
    """Subjects supplying their own rules instead of declaring them."""

    def get_rules(self) -> Any: ...


class Rule(ABC):
    """Base class for all rules.

    Subclasses implement ``evaluate`` and extend ``get_options`` with their
    own settings.
    """

    def __init__(
        self,
        *,
        skip_on_empty: bool | EmptyPredicate = False,
        skip_on_error: bool = False,
        when: WhenPredicate | None = None,
    ):
        self.skip_on_empty = skip_on_empty
        self.skip_on_error = skip_on_error
        self.when = when

    def get_name(self) -> str:
        return type(self).__name__

    def clone(self) -> Rule:
        """Shallow copy for one discovery.

        Configuration values (callables, targets, patterns) are shared with
        the original. Composite rules also clone their inner rules.
        """
        return copy.copy(self)

    def should_skip_on_empty(self, value: Any, is_missing: bool = False) -> bool:
        if self.skip_on_empty is False:
            return False
        predicate = when_empty if self.skip_on_empty is True else self.skip_on_empty
        return bool(predicate(value, is_missing))

    def get_options(self) -> dict[str, Any]:
        """Serializable rule settings (callables are omitted)."""
        return {
            "skip_on_empty": self.skip_on_empty is not False,
            "skip_on_error": self.skip_on_error,
        }

    @abstractmethod
    def evaluate(self, value: Any, context: ValidationContext) -> Result:
        """Check value. Failures are returned as errors, never raised."""

    def __repr__(self) -> str:
        return f"{self.get_name()}({self.get_options()})"
