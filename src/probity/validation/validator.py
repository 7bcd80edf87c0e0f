# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Validator - runs a RuleSet against data and collects a Result.

Evaluation is a depth-first walk: subject rules first (they receive the data
itself), then member rules in member order (each receives the member value).
For every rule of a list, in order:

    skip_on_empty  value is empty        -> this and the remaining rules skipped
    skip_on_error  earlier rule failed   -> skipped
    when           predicate is False    -> skipped
    otherwise      rule.evaluate(value, context) -> Result, merged

Composite rules (Nested, Each) recurse through ``context.validate`` and
their errors come back with paths relative to the value they were given.

Object members are the attributes annotated on the class (or its bases).
An attribute only assigned in ``__init__`` is not a member: a rule naming it
sees it as missing (``Required`` reports "name not passed."). Annotate it,
even with a bare type, to have it validated.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from probity.core.cache import MetadataCache, get_default_cache
from probity.core.config import ValidatorConfig
from probity.core.dataset import DataSet, create_data_set
from probity.core.rule import Rule
from probity.core.ruleset import RuleSet
from probity.core.types import is_sentinel
from probity.errors import InvalidRuleReturnTypeError

from .context import ValidationContext
from .result import Result

logger = logging.getLogger(__name__)

__all__ = ("Validator", "validate")


class Validator:
    """Validate objects, mappings and single values.

    Example:
        >>> validator = Validator()
        >>> result = validator.validate(post)
        >>> result.get_error_messages_indexed_by_path()
        {'author.name': ['name must contain at least 1 character(s).']}

        >>> validator.validate(42, [Number(max=10)]).is_valid
        False

    Args:
        config: Discovery and recursion options.
        cache: Metadata cache. Defaults to the process-wide cache.
    """

    def __init__(
        self,
        config: ValidatorConfig | None = None,
        cache: MetadataCache | None = None,
    ):
        self.config = config if config is not None else ValidatorConfig()
        self.cache = cache if cache is not None else get_default_cache()

    def create_data_set(self, data: Any) -> DataSet:
        return create_data_set(
            data,
            visibility=self.config.visibility,
            skip_static=self.config.skip_static,
            use_cache=self.config.use_cache,
            cache=self.cache,
        )

    def validate(
        self,
        data: Any,
        rules: Any = None,
        context: ValidationContext | None = None,
    ) -> Result:
        """Validate data against rules.

        Args:
            data: Object, mapping, single value or DataSet.
            rules: RuleSet, Rule, iterable of Rules or mapping of attribute
                -> Rule(s). When None, rules are discovered from the data.
                Only annotated attributes of an object are members and can
                be looked up by name.
            context: Parent context when called recursively.

        Returns:
            Result with errors keyed by value path.

        Raises:
            ConfigurationError: On broken rule setup; failed checks are
                reported in the Result, never raised.
        """
        data_set = self.create_data_set(data)
        rule_set = self._resolve_rules(data_set, rules)

        if context is None:
            context = ValidationContext(self, data_set)
        context.data_set = data_set

        result = Result()
        with context.entering(data_set.source, discovered=rules is None):
            for attribute, attribute_rules in rule_set.items():
                if attribute is None:
                    context.attribute = None
                    context.is_attribute_missing = False
                    value = data_set.source
                else:
                    value = data_set.get_attribute_value(attribute)
                    context.attribute = attribute
                    context.is_attribute_missing = is_sentinel(value)
                    if context.is_attribute_missing:
                        value = None

                list_result = self._validate_rules(value, attribute_rules, context)
                if attribute is None:
                    result.merge(list_result)
                else:
                    result.add_errors(list_result.errors, attribute)
        return result

    def _resolve_rules(self, data_set: DataSet, rules: Any) -> RuleSet:
        if rules is not None:
            return RuleSet.normalize(rules)
        get_rules = getattr(data_set, "get_rules", None)
        if get_rules is None:
            return RuleSet()
        return RuleSet.normalize(get_rules())

    def _validate_rules(
        self,
        value: Any,
        rules: Sequence[Rule],
        context: ValidationContext,
    ) -> Result:
        result = Result()
        errored = False
        for rule in rules:
            if rule.should_skip_on_empty(value, context.is_attribute_missing):
                logger.debug(f"{rule.get_name()} skipped on empty {context.attribute_label}")
                break
            if rule.skip_on_error and errored:
                logger.debug(f"{rule.get_name()} skipped on error {context.attribute_label}")
                continue
            if rule.when is not None and not rule.when(value, context):
                logger.debug(f"{rule.get_name()} skipped by when {context.attribute_label}")
                continue

            outcome = rule.evaluate(value, context)
            if not isinstance(outcome, Result):
                raise InvalidRuleReturnTypeError(
                    f'Rule {rule.get_name()} must return an instance of "probity.Result", '
                    f'"{type(outcome).__name__}" returned.',
                    details={"rule": rule.get_name(), "attribute": context.attribute},
                )
            if not outcome.is_valid:
                errored = True
                result.merge(outcome)
        return result


def validate(data: Any, rules: Any = None, *, config: ValidatorConfig | None = None) -> Result:
    """Validate with a Validator using the process-wide cache."""
    return Validator(config=config).validate(data, rules)
