# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Member extraction: data-carrying attributes of a subject.

A member is an annotated attribute of the subject's class or one of its
bases. Visibility follows Python naming:

    name        -> Visibility.PUBLIC
    _name       -> Visibility.PROTECTED
    __name      -> Visibility.PRIVATE  (stored mangled, e.g. _Post__name)

Annotations declared ``ClassVar[...]`` are static members. Dunder names are
never members.

Order is own class first, in declaration order, then every base in MRO
order. When a name is declared more than once, the most-derived declaration
wins.
"""

from __future__ import annotations

import enum
import inspect
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, get_origin

from pydantic import BaseModel

from probity.errors import ConfigurationError, MemberAccessError

__all__ = (
    "Member",
    "Visibility",
    "extract_members",
    "resolve_type_hints",
    "visibility_of",
)

# Framework bases whose own annotations are never subject data
_STOP_CLASSES: frozenset[type] = frozenset({object, Generic, BaseModel})


class Visibility(enum.IntFlag):
    """Visibility levels, combinable as a bitmask."""

    PUBLIC = 1
    PROTECTED = 2
    PRIVATE = 4
    ALL = PUBLIC | PROTECTED | PRIVATE


@dataclass(frozen=True, slots=True)
class Member:
    """One discovered member. Immutable once extracted.

    Attributes:
        name: Attribute name as stored on the subject (mangled for private)
        visibility: Visibility level derived from the name
        is_static: Declared as ClassVar
        declared_in: Most-derived class declaring the member
        annotation: Resolved type hint, Annotated extras included
    """

    name: str
    visibility: Visibility
    is_static: bool
    declared_in: type
    annotation: Any = None

    def read(self, subject: object) -> Any:
        """Read the member value. Raises MemberAccessError if unset."""
        try:
            return getattr(subject, self.name)
        except AttributeError as e:
            raise MemberAccessError(
                f"Member '{self.name}' of {type(subject).__name__} has no value",
                details={
                    "member": self.name,
                    "subject_type": type(subject).__qualname__,
                    "declared_in": self.declared_in.__qualname__,
                },
            ) from e


def visibility_of(name: str, owner: type) -> Visibility:
    """Classify a stored attribute name declared in ``owner``."""
    if name.startswith(f"_{owner.__name__.lstrip('_')}__"):
        return Visibility.PRIVATE
    if name.startswith("_"):
        return Visibility.PROTECTED
    return Visibility.PUBLIC


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _is_class_var(hint: Any) -> bool:
    return hint is ClassVar or get_origin(hint) is ClassVar


def resolve_type_hints(cls: type) -> dict[str, tuple[type, Any]]:
    """Resolve annotations of ``cls`` and its bases, in member order.

    Returns:
        Ordered mapping of name -> (declaring class, resolved hint).

    Raises:
        ConfigurationError: If a string annotation cannot be evaluated.
    """
    resolved: dict[str, tuple[type, Any]] = {}
    for klass in cls.__mro__:
        if klass in _STOP_CLASSES:
            continue
        try:
            own = inspect.get_annotations(klass, eval_str=True)
        except (NameError, SyntaxError, TypeError) as e:
            raise ConfigurationError(
                f"Cannot resolve annotations of {klass.__qualname__}: {e}",
                details={"class": klass.__qualname__, "module": klass.__module__},
            ) from e
        for name, hint in own.items():
            if _is_dunder(name) or name in resolved:
                continue
            resolved[name] = (klass, hint)
    return resolved


def extract_members(
    subject: object,
    visibility: int = Visibility.ALL,
    skip_static: bool = False,
    *,
    hints: dict[str, tuple[type, Any]] | None = None,
) -> dict[str, Member]:
    """Enumerate the subject's members passing the visibility/static filters.

    Args:
        subject: Instance to inspect.
        visibility: Bitmask of allowed Visibility levels.
        skip_static: Exclude ClassVar members.
        hints: Pre-resolved output of resolve_type_hints (cache reuse).

    Returns:
        Ordered mapping of member name -> Member.
    """
    if hints is None:
        hints = resolve_type_hints(type(subject))

    members: dict[str, Member] = {}
    for name, (owner, hint) in hints.items():
        level = visibility_of(name, owner)
        if not level & visibility:
            continue
        is_static = _is_class_var(hint)
        if skip_static and is_static:
            continue
        members[name] = Member(
            name=name,
            visibility=level,
            is_static=is_static,
            declared_in=owner,
            annotation=hint,
        )
    return members
