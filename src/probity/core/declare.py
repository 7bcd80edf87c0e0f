# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Declarative rule metadata.

Member-level rules ride on ``typing.Annotated``; subject-level rules are
attached with the ``@with_rules`` class decorator:

    @with_rules(Callback(method="check_totals"))
    class Invoice:
        number: Annotated[str, Required(), Length(max=32)]
        lines: Annotated[list[Line], Each(Nested())]

        def check_totals(self, value, rule, context) -> Result:
            ...

A declaration is a Rule instance (a template, cloned per instantiation) or a
Rule subclass (instantiated without arguments). Other Annotated metadata is
ignored.
"""

from __future__ import annotations

import types
from collections.abc import Callable
from typing import Annotated, Any, ClassVar, TypeVar, Union, get_args, get_origin

from probity.errors import ConfigurationError

from .rule import Rule

__all__ = (
    "RULES_ATTRIBUTE",
    "class_rule_declarations",
    "instantiate_rule",
    "is_rule_declaration",
    "rule_declarations",
    "with_rules",
)

RULES_ATTRIBUTE = "__probity_rules__"

_T = TypeVar("_T", bound=type)


def is_rule_declaration(obj: Any) -> bool:
    return isinstance(obj, Rule) or (isinstance(obj, type) and issubclass(obj, Rule))


def with_rules(*declarations: Rule | type[Rule]) -> Callable[[_T], _T]:
    """Class decorator attaching subject-level rule declarations.

    Declarations apply to the decorated class only; subclasses do not
    inherit them. Stacked decorators keep top-to-bottom order.

    Raises:
        ConfigurationError: If a declaration is not a Rule or Rule subclass.
    """
    for declaration in declarations:
        if not is_rule_declaration(declaration):
            raise ConfigurationError(
                f"Class rule must be a Rule or Rule subclass, got {type(declaration).__name__}",
                details={"declaration": repr(declaration)},
            )

    def decorator(cls: _T) -> _T:
        # decorators apply bottom-up, so earlier (upper) ones go first
        existing = cls.__dict__.get(RULES_ATTRIBUTE, ())
        setattr(cls, RULES_ATTRIBUTE, (*declarations, *existing))
        return cls

    return decorator


def class_rule_declarations(cls: type) -> tuple[Rule | type[Rule], ...]:
    """Own class-level declarations of ``cls`` (bases excluded)."""
    return tuple(cls.__dict__.get(RULES_ATTRIBUTE, ()))


def rule_declarations(annotation: Any) -> list[Rule | type[Rule]]:
    """Collect rule declarations from an Annotated hint, in order.

    Handles ``Annotated[T, ...]``, unions such as ``Annotated[T, ...] | None``
    and ``ClassVar[Annotated[T, ...]]``.
    """
    found: list[Rule | type[Rule]] = []
    if get_origin(annotation) is ClassVar:
        args = get_args(annotation)
        annotation = args[0] if args else None

    if get_origin(annotation) is Annotated:
        found.extend(m for m in annotation.__metadata__ if is_rule_declaration(m))
        return found

    origin = get_origin(annotation)
    if origin is Union or isinstance(annotation, types.UnionType):
        for member in get_args(annotation):
            if get_origin(member) is Annotated:
                found.extend(m for m in member.__metadata__ if is_rule_declaration(m))
    return found


def instantiate_rule(declaration: Rule | type[Rule]) -> Rule:
    """Create a fresh rule from a declaration.

    Instances are cloned with ``Rule.clone``, so values the template refers
    to (bound methods, target objects) are shared, not copied. Errors raised
    by the rule constructor propagate unchanged.
    """
    if isinstance(declaration, type):
        return declaration()
    return declaration.clone()
