# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Validator configuration.

Provides ValidatorConfig, the options a Validator applies when it wraps
objects for validation and when it recurses into nested data.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .members import Visibility

__all__ = ("ValidatorConfig",)


class ValidatorConfig(BaseModel):
    """Options for rule discovery and recursion.

    Attributes:
        visibility: Visibility levels of members to parse.
        skip_static: Skip ClassVar members.
        use_cache: Cache discovery results per (type, visibility, skip_static).
        max_depth: Maximum nesting depth of nested/each validation.
    """

    model_config = ConfigDict(frozen=True)

    visibility: Visibility = Field(default=Visibility.ALL)
    skip_static: bool = Field(default=False)
    use_cache: bool = Field(default=True)
    max_depth: int = Field(default=64, ge=1)
