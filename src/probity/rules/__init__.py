# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Built-in rules.

Composite rules recurse into data: Nested (objects and mappings), Each
(iterables) and Callback (user functions). The rest are leaf checks.
"""

from probity.core.rule import AfterInitAttribute, Rule, when_empty, when_missing, when_null

from .callback import Callback
from .common import Length, Number, Regex, Required
from .compare import (
    Compare,
    Equal,
    GreaterThan,
    GreaterThanOrEqual,
    LessThan,
    LessThanOrEqual,
    NotEqual,
)
from .each import Each
from .nested import Nested

__all__ = (
    "AfterInitAttribute",
    "Callback",
    "Compare",
    "Each",
    "Equal",
    "GreaterThan",
    "GreaterThanOrEqual",
    "Length",
    "LessThan",
    "LessThanOrEqual",
    "Nested",
    "NotEqual",
    "Number",
    "Regex",
    "Required",
    "Rule",
    "when_empty",
    "when_missing",
    "when_null",
)
