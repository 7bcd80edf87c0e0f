# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Sentinel for "no value", distinct from ``None``."""

from __future__ import annotations

from typing import Any, Final

__all__ = ("Undefined", "UndefinedType", "is_sentinel", "not_sentinel")


class UndefinedType:
    """Singleton marking a member that does not exist on a subject."""

    __slots__ = ()
    _instance: UndefinedType | None = None

    def __new__(cls) -> UndefinedType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Undefined"

    def __reduce__(self):
        return (UndefinedType, ())

    def __copy__(self) -> UndefinedType:
        return self

    def __deepcopy__(self, memo: dict) -> UndefinedType:
        return self


Undefined: Final = UndefinedType()


def is_sentinel(value: Any) -> bool:
    return value is Undefined


def not_sentinel(value: Any) -> bool:
    return value is not Undefined
