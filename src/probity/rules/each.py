# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Each rule - apply rules to every element of an iterable."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from probity.core.rule import AfterInitAttribute, Rule
from probity.core.ruleset import RuleSet
from probity.core.types import Undefined, is_sentinel
from probity.validation.result import Index, Result

if TYPE_CHECKING:
    from probity.validation.context import ValidationContext

__all__ = ("Each",)


class Each(Rule):
    """Validate each element of a mapping or iterable.

    Mappings iterate over ``items()``, other iterables over ``enumerate()``.
    While an element is validated its key is available to inner rules as
    ``context.get_parameter(Each.PARAMETER_EACH_KEY)``. Errors are keyed by
    element: ``tags[2]``, ``files[0].url``.

    Example:
        tags: Annotated[list[str], Each([Length(max=20)])]
        files: Annotated[list[File], Each(Nested())]
    """

    PARAMETER_EACH_KEY = "each_key"

    def __init__(
        self,
        rules: Any,
        *,
        incorrect_input_message: str = "{attribute} must be iterable.",
        skip_on_empty: Any = False,
        skip_on_error: bool = False,
        when: Any = None,
    ):
        super().__init__(skip_on_empty=skip_on_empty, skip_on_error=skip_on_error, when=when)
        self.rules = RuleSet.normalize(rules)
        self.incorrect_input_message = incorrect_input_message

    def clone(self) -> Each:
        clone = super().clone()
        clone.rules = self.rules.clone()
        return clone

    def after_init_attribute(self, subject: object) -> None:
        for rule in self.rules.all_rules():
            if isinstance(rule, AfterInitAttribute):
                rule.after_init_attribute(subject)

    def evaluate(self, value: Any, context: ValidationContext) -> Result:
        if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
            return Result().add_error(
                self.incorrect_input_message,
                {"attribute": context.attribute_label, "type": type(value).__name__},
            )

        items = value.items() if isinstance(value, Mapping) else enumerate(value)
        previous_key = context.get_parameter(self.PARAMETER_EACH_KEY, Undefined)
        result = Result()
        try:
            for key, item in items:
                context.set_parameter(self.PARAMETER_EACH_KEY, key)
                item_result = context.validate(item, self.rules)
                result.add_errors(item_result.errors, Index(key))
        finally:
            if is_sentinel(previous_key):
                context.unset_parameter(self.PARAMETER_EACH_KEY)
            else:
                context.set_parameter(self.PARAMETER_EACH_KEY, previous_key)
        return result

    def get_options(self) -> dict[str, Any]:
        return {
            "incorrect_input_message": {"template": self.incorrect_input_message},
            **super().get_options(),
            "rules": [rule.get_options() for rule in self.rules.all_rules()],
        }
