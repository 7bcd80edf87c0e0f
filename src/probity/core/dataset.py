# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Data sets: uniform attribute access over the data being validated.

    ObjectDataSet       structured objects, backed by ObjectParser
    MappingDataSet      dicts and other mappings
    SingleValueDataSet  scalars and builtin collections (no attributes)
"""

from __future__ import annotations

import datetime as dt
import enum
import numbers
import pathlib
import uuid
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from .cache import MetadataCache
from .members import Visibility
from .parser import ObjectParser
from .rule import RulesProvider
from .ruleset import RuleSet
from .types import Undefined

__all__ = (
    "DataSet",
    "MappingDataSet",
    "ObjectDataSet",
    "SingleValueDataSet",
    "create_data_set",
    "is_structured_object",
)

_SINGLE_VALUE_TYPES: tuple[type, ...] = (
    str,
    bytes,
    bytearray,
    bool,
    numbers.Number,
    dt.date,
    dt.time,
    dt.timedelta,
    uuid.UUID,
    enum.Enum,
    pathlib.PurePath,
    list,
    tuple,
    set,
    frozenset,
    type,
)


def is_structured_object(value: Any) -> bool:
    """Whether value is an object with members (not a scalar or collection)."""
    if value is None or isinstance(value, Mapping):
        return False
    return not isinstance(value, _SINGLE_VALUE_TYPES)


class DataSet(ABC):
    """Attribute access over validated data."""

    @property
    @abstractmethod
    def source(self) -> Any:
        """The raw data this data set wraps."""

    @abstractmethod
    def get_attribute_value(self, attribute: str) -> Any:
        """Attribute value, or Undefined when absent."""

    @abstractmethod
    def has_attribute(self, attribute: str) -> bool: ...

    @abstractmethod
    def get_data(self) -> Any: ...


class ObjectDataSet(DataSet):
    """Data set over a structured object.

    Rules come from the object's ``get_rules()`` when it provides one,
    otherwise from its declarative metadata.
    """

    def __init__(
        self,
        subject: object,
        visibility: int = Visibility.ALL,
        skip_static: bool = False,
        use_cache: bool = True,
        cache: MetadataCache | None = None,
    ):
        self.parser = ObjectParser(
            subject,
            visibility=visibility,
            skip_static=skip_static,
            use_cache=use_cache,
            cache=cache,
        )

    @property
    def source(self) -> object:
        return self.parser.subject

    def get_rules(self) -> RuleSet:
        subject = self.parser.subject
        if isinstance(subject, RulesProvider) and not isinstance(subject, DataSet):
            return RuleSet.normalize(subject.get_rules())
        return self.parser.get_rules()

    def get_attribute_value(self, attribute: str) -> Any:
        return self.parser.get_attribute_value(attribute)

    def has_attribute(self, attribute: str) -> bool:
        return self.parser.has_attribute(attribute)

    def get_data(self) -> dict[str, Any]:
        return self.parser.get_data()

    def __repr__(self) -> str:
        return f"ObjectDataSet({self.parser!r})"


class MappingDataSet(DataSet):
    def __init__(self, data: Mapping[str, Any]):
        self.data = data

    @property
    def source(self) -> Mapping[str, Any]:
        return self.data

    def get_attribute_value(self, attribute: str) -> Any:
        return self.data.get(attribute, Undefined)

    def has_attribute(self, attribute: str) -> bool:
        return attribute in self.data

    def get_data(self) -> dict[str, Any]:
        return dict(self.data)


class SingleValueDataSet(DataSet):
    """A value without attributes."""

    def __init__(self, value: Any):
        self.value = value

    @property
    def source(self) -> Any:
        return self.value

    def get_attribute_value(self, attribute: str) -> Any:
        return Undefined

    def has_attribute(self, attribute: str) -> bool:
        return False

    def get_data(self) -> None:
        return None


def create_data_set(
    data: Any,
    *,
    visibility: int = Visibility.ALL,
    skip_static: bool = False,
    use_cache: bool = True,
    cache: MetadataCache | None = None,
) -> DataSet:
    """Wrap data in the matching DataSet. Data sets pass through unchanged."""
    if isinstance(data, DataSet):
        return data
    if isinstance(data, Mapping):
        return MappingDataSet(data)
    if is_structured_object(data):
        return ObjectDataSet(
            data,
            visibility=visibility,
            skip_static=skip_static,
            use_cache=use_cache,
            cache=cache,
        )
    return SingleValueDataSet(data)
