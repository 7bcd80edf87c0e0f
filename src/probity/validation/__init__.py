# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from .context import ValidationContext
from .result import Error, Index, Result
from .validator import Validator, validate

__all__ = ("Error", "Index", "Result", "ValidationContext", "Validator", "validate")
