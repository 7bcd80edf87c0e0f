# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Core module - rule discovery primitives.

- cache: MetadataCache, CacheKey
- members: Visibility, Member, member extraction
- rule: Rule base class and capability protocols
- declare: Annotated / @with_rules declarations
- parser: ObjectParser
- dataset: DataSet wrappers over validated data
"""

from .cache import CacheKey, MetadataCache, get_default_cache, reset_default_cache
from .config import ValidatorConfig
from .dataset import (
    DataSet,
    MappingDataSet,
    ObjectDataSet,
    SingleValueDataSet,
    create_data_set,
    is_structured_object,
)
from .declare import with_rules
from .members import Member, Visibility, extract_members
from .parser import ObjectParser
from .rule import AfterInitAttribute, Rule, RulesProvider, when_empty, when_missing, when_null
from .ruleset import RuleSet
from .types import Undefined

__all__ = (
    "AfterInitAttribute",
    "CacheKey",
    "DataSet",
    "MappingDataSet",
    "Member",
    "MetadataCache",
    "ObjectDataSet",
    "ObjectParser",
    "Rule",
    "RuleSet",
    "RulesProvider",
    "SingleValueDataSet",
    "Undefined",
    "ValidatorConfig",
    "Visibility",
    "create_data_set",
    "extract_members",
    "get_default_cache",
    "is_structured_object",
    "reset_default_cache",
    "when_empty",
    "when_missing",
    "when_null",
    "with_rules",
)
