# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Result - accumulator of validation errors keyed by value path.

An error path is a tuple of segments: attribute names (``str``) reached via
attribute or nested validation, and ``Index`` segments for elements reached
via each validation. Rendered form joins attributes with ``.`` and wraps
indexes in brackets:

    ("author", "name")            -> "author.name"
    ("files", Index(0), "url")    -> "files[0].url"
    (Index("k1"),)                -> "[k1]"
    ()                            -> ""
"""

from __future__ import annotations

import re
import string
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

__all__ = (
    "Error",
    "Index",
    "PathSegment",
    "Result",
    "format_message",
    "render_path",
)


@dataclass(frozen=True, slots=True)
class Index:
    """Path segment for one element of an iterable."""

    key: Any

    def __str__(self) -> str:
        return f"[{self.key}]"


PathSegment = str | Index


def render_path(path: Sequence[PathSegment]) -> str:
    parts: list[str] = []
    for segment in path:
        if isinstance(segment, Index):
            parts.append(str(segment))
        elif parts:
            parts.append(f".{segment}")
        else:
            parts.append(str(segment))
    return "".join(parts)


class _Formatter(string.Formatter):
    # positional fields (regex quantifiers like \d{5}) and unknown names are
    # rendered back verbatim
    def get_field(self, field_name, args, kwargs):
        first = re.split(r"[.\[]", field_name, maxsplit=1)[0]
        if first.isdigit() or first not in kwargs:
            return f"{{{field_name}}}", field_name
        return super().get_field(field_name, args, kwargs)


_formatter = _Formatter()


def format_message(template: str, parameters: Mapping[str, Any] | None = None) -> str:
    """Substitute ``{name}`` placeholders; unknown names are left as is."""
    if not parameters:
        return template
    try:
        return _formatter.vformat(template, (), dict(parameters))
    except (ValueError, IndexError, KeyError, AttributeError):
        return template


@dataclass(slots=True)
class Error:
    """A single failed check.

    Attributes:
        template: Message template with {placeholders}
        parameters: Values for the placeholders
        value_path: Path of the failing value, relative to the result owner
    """

    template: str
    parameters: dict[str, Any] = field(default_factory=dict)
    value_path: tuple[PathSegment, ...] = ()

    @property
    def message(self) -> str:
        return format_message(self.template, self.parameters)

    @property
    def path(self) -> str:
        return render_path(self.value_path)

    def with_prefix(self, *prefix: PathSegment) -> Error:
        return Error(self.template, self.parameters, (*prefix, *self.value_path))


class Result:
    """Mutable error accumulator.

    Example:
        >>> result = Result()
        >>> result.add_error("Value is too short.", value_path=["name"])
        >>> result.is_valid
        False
        >>> result.get_error_messages_indexed_by_path()
        {'name': ['Value is too short.']}
    """

    __slots__ = ("_errors",)

    def __init__(self) -> None:
        self._errors: list[Error] = []

    @property
    def errors(self) -> list[Error]:
        return list(self._errors)

    @property
    def is_valid(self) -> bool:
        return not self._errors

    def is_attribute_valid(self, attribute: str) -> bool:
        return not any(e.value_path[:1] == (attribute,) for e in self._errors)

    def add_error(
        self,
        message: str,
        parameters: Mapping[str, Any] | None = None,
        value_path: Iterable[PathSegment] | None = None,
    ) -> Result:
        self._errors.append(
            Error(message, dict(parameters or {}), tuple(value_path or ()))
        )
        return self

    def add_errors(self, errors: Iterable[Error], *prefix: PathSegment) -> Result:
        for error in errors:
            self._errors.append(error.with_prefix(*prefix) if prefix else error)
        return self

    def merge(self, *results: Result) -> Result:
        for result in results:
            self._errors.extend(result._errors)
        return self

    def get_error_messages(self) -> list[str]:
        return [e.message for e in self._errors]

    def get_error_messages_indexed_by_path(self) -> dict[str, list[str]]:
        """Map rendered error path -> messages, in first-error order."""
        indexed: dict[str, list[str]] = {}
        for error in self._errors:
            indexed.setdefault(error.path, []).append(error.message)
        return indexed

    def get_attribute_error_messages(self, attribute: str) -> list[str]:
        return [e.message for e in self._errors if e.value_path[:1] == (attribute,)]

    def get_first_error_message(self) -> str | None:
        return self._errors[0].message if self._errors else None

    def __repr__(self) -> str:
        return f"Result(errors={self.get_error_messages_indexed_by_path()})"
