# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from ._sentinel import Undefined, UndefinedType, is_sentinel, not_sentinel

__all__ = ("Undefined", "UndefinedType", "is_sentinel", "not_sentinel")
