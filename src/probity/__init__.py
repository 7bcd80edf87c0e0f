# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""probity - declarative object validation.

Rules are declared on classes with ``typing.Annotated`` member hints and the
``@with_rules`` class decorator, discovered once per type and cached, then
evaluated recursively through nested objects and collections:

    class Author:
        name: Annotated[str, Required(), Length(max=64)] = ""

    class Post:
        title: Annotated[str, Length(min=1, max=255)] = ""
        author: Annotated[Author, Nested()]
        tags: Annotated[list[str], Each([Length(max=20)])]

    result = probity.validate(post)
    result.get_error_messages_indexed_by_path()
    # {'author.name': ['name cannot be blank.'], 'tags[1]': [...]}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

# Lazy import mapping
_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    # Validation
    "Result": ("probity.validation", "Result"),
    "ValidationContext": ("probity.validation", "ValidationContext"),
    "Validator": ("probity.validation", "Validator"),
    "validate": ("probity.validation", "validate"),
    # Discovery
    "MetadataCache": ("probity.core", "MetadataCache"),
    "ObjectParser": ("probity.core", "ObjectParser"),
    "RuleSet": ("probity.core", "RuleSet"),
    "ValidatorConfig": ("probity.core", "ValidatorConfig"),
    "Visibility": ("probity.core", "Visibility"),
    "with_rules": ("probity.core", "with_rules"),
    # Rules
    "Callback": ("probity.rules", "Callback"),
    "Compare": ("probity.rules", "Compare"),
    "Each": ("probity.rules", "Each"),
    "Equal": ("probity.rules", "Equal"),
    "GreaterThan": ("probity.rules", "GreaterThan"),
    "GreaterThanOrEqual": ("probity.rules", "GreaterThanOrEqual"),
    "Length": ("probity.rules", "Length"),
    "LessThan": ("probity.rules", "LessThan"),
    "LessThanOrEqual": ("probity.rules", "LessThanOrEqual"),
    "Nested": ("probity.rules", "Nested"),
    "NotEqual": ("probity.rules", "NotEqual"),
    "Number": ("probity.rules", "Number"),
    "Regex": ("probity.rules", "Regex"),
    "Required": ("probity.rules", "Required"),
    "Rule": ("probity.rules", "Rule"),
    # Errors
    "ConfigurationError": ("probity.errors", "ConfigurationError"),
    "InvalidCallbackReturnTypeError": ("probity.errors", "InvalidCallbackReturnTypeError"),
    "InvalidRuleReturnTypeError": ("probity.errors", "InvalidRuleReturnTypeError"),
    "MemberAccessError": ("probity.errors", "MemberAccessError"),
    "ProbityError": ("probity.errors", "ProbityError"),
    "ValidationDepthError": ("probity.errors", "ValidationDepthError"),
}

_LOADED: dict[str, object] = {}


def __getattr__(name: str) -> object:
    """Lazy import attributes on first access."""
    if name in _LOADED:
        return _LOADED[name]

    if name in _LAZY_IMPORTS:
        from importlib import import_module

        module_name, attr_name = _LAZY_IMPORTS[name]
        module = import_module(module_name)
        value = getattr(module, attr_name)
        _LOADED[name] = value
        return value

    raise AttributeError(f"module 'probity' has no attribute {name!r}")


def __dir__() -> list[str]:
    """Return all available attributes for autocomplete."""
    return list(__all__)


if TYPE_CHECKING:
    from probity.core import (
        MetadataCache,
        ObjectParser,
        RuleSet,
        ValidatorConfig,
        Visibility,
        with_rules,
    )
    from probity.errors import (
        ConfigurationError,
        InvalidCallbackReturnTypeError,
        InvalidRuleReturnTypeError,
        MemberAccessError,
        ProbityError,
        ValidationDepthError,
    )
    from probity.rules import (
        Callback,
        Compare,
        Each,
        Equal,
        GreaterThan,
        GreaterThanOrEqual,
        Length,
        LessThan,
        LessThanOrEqual,
        Nested,
        NotEqual,
        Number,
        Regex,
        Required,
        Rule,
    )
    from probity.validation import Result, ValidationContext, Validator, validate

__all__ = [
    "__version__",
    *_LAZY_IMPORTS,
]
