# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""ObjectParser - rule discovery and data extraction for one subject.

Rules come from declarative metadata on the subject's class: the
``@with_rules`` class decorator (subject-level) and ``Annotated`` member
hints (member-level). Data comes from the subject's members.

An example of a parsed object with one-to-one and one-to-many relations:

    class Author:
        name: Annotated[str, Length(min=1)] = ""

    @with_rules(Nested({"url": Regex(r"^https?://")}))
    class File:
        url: str = ""

    class Post:
        title: Annotated[str, Length(max=255)] = ""
        author: Annotated[Author, Nested()]
        files: Annotated[list[File], Each(Nested())]

    rule_set = ObjectParser(post).get_rules()
    # RuleSet(subject_rules=[],
    #         member_rules={"title": [Length], "author": [Nested],
    #                       "files": [Each]})

Which members are parsed is set with ``visibility`` and ``skip_static``.
Members, type hints and rules are cached per (type, visibility,
skip_static); pass ``use_cache=False`` to rediscover on every call.
"""

from __future__ import annotations

import logging
from typing import Any

from .cache import CacheKey, MetadataCache, get_default_cache
from .declare import class_rule_declarations, instantiate_rule, rule_declarations
from .members import Member, Visibility, extract_members, resolve_type_hints
from .rule import AfterInitAttribute, Rule
from .ruleset import RuleSet
from .types import Undefined

logger = logging.getLogger(__name__)

__all__ = ("ObjectParser",)


class ObjectParser:
    """Discover rules and read data of a single subject.

    Args:
        subject: Object to parse.
        visibility: Visibility levels of members to parse. Defaults to all.
        skip_static: Skip ClassVar members.
        use_cache: Reuse discovery results across parsers of the same type
            and options.
        cache: Cache to use. Defaults to the process-wide cache.
    """

    def __init__(
        self,
        subject: object,
        visibility: int = Visibility.ALL,
        skip_static: bool = False,
        use_cache: bool = True,
        cache: MetadataCache | None = None,
    ):
        self.subject = subject
        self.visibility = Visibility(visibility)
        self.skip_static = skip_static
        self.cache = cache if cache is not None else get_default_cache()
        self.cache_key: CacheKey | None = (
            CacheKey.for_subject(subject, self.visibility, skip_static) if use_cache else None
        )

    @property
    def use_cache(self) -> bool:
        return self.cache_key is not None and self.cache.enabled

    def get_rules(self) -> RuleSet:
        """Parse class-level and member-level rule declarations.

        Rules implementing AfterInitAttribute get the subject right after
        creation. Repeated calls reuse the cache when enabled.
        """
        if self.cache.has(self.cache_key, "rules"):
            return self.cache.get(self.cache_key, "rules")

        rule_set = RuleSet()
        for declaration in class_rule_declarations(type(self.subject)):
            rule_set.add(None, self._create_rule(declaration))

        for name, member in self.get_members().items():
            for declaration in rule_declarations(member.annotation):
                rule_set.add(name, self._create_rule(declaration))

        logger.debug(
            f"Discovered {len(rule_set)} rule(s) for {type(self.subject).__qualname__}"
        )
        return self.cache.put(self.cache_key, "rules", rule_set)

    def get_members(self) -> dict[str, Member]:
        """Members passing the visibility and static filters, in order."""
        if self.cache.has(self.cache_key, "members"):
            return self.cache.get(self.cache_key, "members")

        members = extract_members(
            self.subject,
            self.visibility,
            self.skip_static,
            hints=self.get_type_hints(),
        )
        return self.cache.put(self.cache_key, "members", members)

    def get_type_hints(self) -> dict[str, tuple[type, Any]]:
        """Resolved annotations of the subject's type."""
        if self.cache.has(self.cache_key, "type_hints"):
            return self.cache.get(self.cache_key, "type_hints")

        hints = resolve_type_hints(type(self.subject))
        return self.cache.put(self.cache_key, "type_hints", hints)

    def get_attribute_value(self, attribute: str) -> Any:
        """Value of a member, or Undefined if there is no such member.

        Use has_attribute() to tell a missing member from a None value.
        """
        member = self.get_members().get(attribute)
        if member is None:
            return Undefined
        return member.read(self.subject)

    def has_attribute(self, attribute: str) -> bool:
        """Whether the member exists. Empty values count as present."""
        return attribute in self.get_members()

    def get_data(self) -> dict[str, Any]:
        """All member values, keyed by member name in member order."""
        return {name: m.read(self.subject) for name, m in self.get_members().items()}

    def _create_rule(self, declaration: Rule | type[Rule]) -> Rule:
        rule = instantiate_rule(declaration)
        if isinstance(rule, AfterInitAttribute):
            rule.after_init_attribute(self.subject)
        return rule

    def __repr__(self) -> str:
        return (
            f"ObjectParser({type(self.subject).__qualname__}, "
            f"visibility={self.visibility!r}, skip_static={self.skip_static}, "
            f"use_cache={self.use_cache})"
        )
