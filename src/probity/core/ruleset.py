# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""RuleSet - subject-level rules plus ordered member-level rules."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from probity.errors import ConfigurationError

from .rule import Rule

__all__ = ("RuleSet",)


@dataclass
class RuleSet:
    """Rules discovered for (or supplied with) one subject.

    Attributes:
        subject_rules: Rules applied to the subject as a whole, in order
        member_rules: Member name -> ordered rules for that member

    Insertion order of ``member_rules`` is the order members are validated
    in, and so the order errors appear in.
    """

    subject_rules: list[Rule] = field(default_factory=list)
    member_rules: dict[str, list[Rule]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.subject_rules and not any(self.member_rules.values())

    def add(self, member: str | None, rule: Rule) -> None:
        """Append a rule for a member, or for the subject when member is None."""
        if member is None:
            self.subject_rules.append(rule)
        else:
            self.member_rules.setdefault(member, []).append(rule)

    def items(self) -> Iterator[tuple[str | None, list[Rule]]]:
        """Yield (None, subject_rules) first, then (member, rules)."""
        if self.subject_rules:
            yield None, self.subject_rules
        yield from self.member_rules.items()

    def clone(self) -> RuleSet:
        """Copy with every rule cloned, in the same order."""
        return RuleSet(
            subject_rules=[rule.clone() for rule in self.subject_rules],
            member_rules={
                member: [rule.clone() for rule in rules]
                for member, rules in self.member_rules.items()
            },
        )

    def all_rules(self) -> Iterator[Rule]:
        yield from self.subject_rules
        for member_rules in self.member_rules.values():
            yield from member_rules

    def __len__(self) -> int:
        return len(self.subject_rules) + sum(len(r) for r in self.member_rules.values())

    @classmethod
    def normalize(cls, rules: Any) -> RuleSet:
        """Build a RuleSet from the accepted shorthand forms.

        Args:
            rules: RuleSet; a single Rule; an iterable of Rules (subject
                rules); or a mapping of member name -> Rule | iterable of Rules.
                A None key in the mapping targets the subject.

        Raises:
            ConfigurationError: If an entry is not a Rule.
        """
        if rules is None:
            return cls()
        if isinstance(rules, RuleSet):
            return rules
        if isinstance(rules, Rule):
            return cls(subject_rules=[rules])

        rule_set = cls()
        if isinstance(rules, Mapping):
            for member, member_rules in rules.items():
                if member is not None and not isinstance(member, str):
                    raise ConfigurationError(
                        f"Rule keys must be member names, got {type(member).__name__}",
                        details={"key": repr(member)},
                    )
                for rule in _as_rule_list(member_rules, member):
                    rule_set.add(member, rule)
            return rule_set

        if isinstance(rules, Iterable) and not isinstance(rules, (str, bytes)):
            for rule in _as_rule_list(rules, None):
                rule_set.add(None, rule)
            return rule_set

        raise ConfigurationError(
            f"Unsupported rules type: {type(rules).__name__}",
            details={"rules": repr(rules)},
        )


def _as_rule_list(rules: Any, member: str | None) -> list[Rule]:
    if isinstance(rules, Rule):
        return [rules]
    if isinstance(rules, Iterable) and not isinstance(rules, (str, bytes, Mapping)):
        items = list(rules)
    else:
        items = [rules]
    for item in items:
        if not isinstance(item, Rule):
            raise ConfigurationError(
                f"Expected a Rule, got {type(item).__name__}",
                details={"member": member, "value": repr(item)},
            )
    return items
