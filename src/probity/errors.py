# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Exception hierarchy.

Configuration errors are fatal and surface to the caller of ``validate`` or
``get_rules``. Failed checks are never raised: they are recorded in a
``Result``.
"""

from __future__ import annotations

from typing import Any

__all__ = (
    "ConfigurationError",
    "InvalidCallbackReturnTypeError",
    "InvalidRuleReturnTypeError",
    "MemberAccessError",
    "ProbityError",
    "ValidationDepthError",
)


class ProbityError(Exception):
    """Base error carrying a message and structured details."""

    default_message: str = "probity error"

    def __init__(self, message: str | None = None, *, details: dict[str, Any] | None = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(ProbityError):
    """Rules or subject are set up in a way that cannot be evaluated."""

    default_message = "Invalid validation configuration"


class MemberAccessError(ConfigurationError):
    """A permitted member could not be read from the subject."""

    default_message = "Member value could not be read"


class InvalidRuleReturnTypeError(ConfigurationError):
    """A rule's evaluate() returned something other than a Result."""

    default_message = "Rule must return a Result"


class InvalidCallbackReturnTypeError(InvalidRuleReturnTypeError):
    """A callback rule's function returned something other than a Result."""

    default_message = "Callback must return a Result"


class ValidationDepthError(ConfigurationError):
    """Nested validation went deeper than the configured maximum."""

    default_message = "Maximum validation depth exceeded"
