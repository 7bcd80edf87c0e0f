# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Nested rule - validate a sub-object or mapping with its own rules.

Without rules the value must be a structured object and its declared rules
are discovered:

    author: Annotated[Author, Nested()]

With rules the value may be a mapping or an object:

    address: Annotated[dict, Nested({"zip": Regex(r"^\\d{5}$")})]

Errors come back keyed by the inner attribute; the validator prefixes them
with the outer one (``author.name``).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from probity.core.dataset import ObjectDataSet, is_structured_object
from probity.core.rule import AfterInitAttribute, Rule
from probity.core.ruleset import RuleSet
from probity.validation.result import Result

if TYPE_CHECKING:
    from probity.validation.context import ValidationContext

__all__ = ("Nested",)


class Nested(Rule):
    """Recurse into a value with discovered or explicit rules.

    Args:
        rules: Mapping of attribute -> Rule(s), a RuleSet, or None to
            discover rules from the object itself.
            For objects, attributes that are not annotated on the class
            are reported as not passed.
        visibility: Member visibility for discovery. Defaults to the
            validator's configuration.
        skip_static: Skip ClassVar members. Defaults to the validator's
            configuration.
        use_cache: Cache discovery. Defaults to the validator's configuration.
    """

    def __init__(
        self,
        rules: Any = None,
        *,
        visibility: int | None = None,
        skip_static: bool | None = None,
        use_cache: bool | None = None,
        no_rules_with_no_object_message: str = (
            "Nested rule without rules can be used for objects only."
        ),
        incorrect_input_message: str = "{attribute} must be a mapping or an object.",
        skip_on_empty: Any = False,
        skip_on_error: bool = False,
        when: Any = None,
    ):
        super().__init__(skip_on_empty=skip_on_empty, skip_on_error=skip_on_error, when=when)
        self.rules: RuleSet | None = None if rules is None else RuleSet.normalize(rules)
        self.visibility = visibility
        self.skip_static = skip_static
        self.use_cache = use_cache
        self.no_rules_with_no_object_message = no_rules_with_no_object_message
        self.incorrect_input_message = incorrect_input_message

    def clone(self) -> Nested:
        clone = super().clone()
        if self.rules is not None:
            clone.rules = self.rules.clone()
        return clone

    def after_init_attribute(self, subject: object) -> None:
        if self.rules is None:
            return
        for rule in self.rules.all_rules():
            if isinstance(rule, AfterInitAttribute):
                rule.after_init_attribute(subject)

    def evaluate(self, value: Any, context: ValidationContext) -> Result:
        parameters = {"attribute": context.attribute_label, "type": type(value).__name__}

        if self.rules is None:
            if not is_structured_object(value):
                return Result().add_error(self.no_rules_with_no_object_message, parameters)
            return context.validate(self._object_data_set(value, context))

        if isinstance(value, Mapping):
            return context.validate(value, self.rules)
        if is_structured_object(value):
            return context.validate(self._object_data_set(value, context), self.rules)
        return Result().add_error(self.incorrect_input_message, parameters)

    def _object_data_set(self, value: object, context: ValidationContext) -> ObjectDataSet:
        validator = context.validator
        config = validator.config
        return ObjectDataSet(
            value,
            visibility=config.visibility if self.visibility is None else self.visibility,
            skip_static=config.skip_static if self.skip_static is None else self.skip_static,
            use_cache=config.use_cache if self.use_cache is None else self.use_cache,
            cache=validator.cache,
        )

    def get_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {
            "no_rules_with_no_object_message": {"template": self.no_rules_with_no_object_message},
            "incorrect_input_message": {"template": self.incorrect_input_message},
            **super().get_options(),
        }
        if self.rules is not None:
            options["rules"] = {
                member or "": [rule.get_options() for rule in member_rules]
                for member, member_rules in self.rules.items()
            }
        return options
