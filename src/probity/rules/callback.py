# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Callback rule - delegate a check to a function or a subject method.

Either a callable or the name of a method of the declaring class is given:

    Callback(lambda value, rule, context: Result())

    class Profile:
        age: Annotated[int, Callback(method="check_age")]

        def check_age(self, value, rule, context) -> Result:
            ...

A method callback is resolved on the declaring class when the rule is
discovered (``after_init_attribute``). At evaluation the method is bound to
the innermost object of that class being validated, so one discovered rule
set serves every instance of the class. Static and class methods are
supported, and so are private ``__name`` methods.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from probity.core.rule import Rule
from probity.errors import ConfigurationError, InvalidCallbackReturnTypeError
from probity.validation.result import Result

if TYPE_CHECKING:
    from probity.validation.context import ValidationContext

__all__ = ("Callback", "CallbackFunction")

CallbackFunction = Callable[[Any, Rule, "ValidationContext"], Result]


class Callback(Rule):
    """Run a user function ``(value, rule, context) -> Result``.

    Args:
        callback: Function to call.
        method: Name of a method on the declaring class. Mutually exclusive
            with callback.

    Raises:
        ValueError: If neither or both of callback and method are given.
    """

    def __init__(
        self,
        callback: CallbackFunction | None = None,
        *,
        method: str | None = None,
        skip_on_empty: Any = False,
        skip_on_error: bool = False,
        when: Any = None,
    ):
        if callback is None and method is None:
            raise ValueError('Either "callback" or "method" must be specified.')
        if callback is not None and method is not None:
            raise ValueError('"callback" and "method" are mutually exclusive.')

        super().__init__(skip_on_empty=skip_on_empty, skip_on_error=skip_on_error, when=when)
        self.callback = callback
        self.method = method

    def after_init_attribute(self, subject: object) -> None:
        """Resolve ``method`` on the subject's class into a callable.

        Raises:
            ConfigurationError: If the class has no such method.
        """
        if self.method is None:
            return

        owner = type(subject)
        try:
            member = _lookup_method(owner, self.method)
        except AttributeError as e:
            raise ConfigurationError(
                f'Method "{self.method}" does not exist in {owner.__qualname__}.',
                details={"method": self.method, "class": owner.__qualname__},
            ) from e
        self.callback = _method_callback(owner, self.method, member)

    def evaluate(self, value: Any, context: ValidationContext) -> Result:
        if self.callback is None:
            raise ConfigurationError(
                "Using method outside of attribute scope is prohibited.",
                details={"method": self.method},
            )

        result = self.callback(value, self, context)
        if not isinstance(result, Result):
            raise InvalidCallbackReturnTypeError(
                'Return value of callback must be an instance of "probity.Result", '
                f'"{type(result).__name__}" returned.',
                details={"method": self.method, "returned": type(result).__name__},
            )
        return result

    def get_options(self) -> dict[str, Any]:
        return {"method": self.method, **super().get_options()}


def _lookup_method(owner: type, name: str) -> Any:
    """Static lookup that also finds private ``__name`` methods.

    Python stores those as ``_<Class>__name`` in the defining class, so each
    class of the MRO is tried with its own mangled name.
    """
    if name.startswith("__") and not name.endswith("__"):
        for klass in owner.__mro__:
            mangled = f"_{klass.__name__.lstrip('_')}{name}"
            if mangled in vars(klass):
                return vars(klass)[mangled]
    return inspect.getattr_static(owner, name)


def _method_callback(owner: type, name: str, member: Any) -> CallbackFunction:
    if isinstance(member, staticmethod):
        func = member.__func__

        def call_static(value: Any, rule: Rule, context: ValidationContext) -> Any:
            return func(value, rule, context)

        return call_static

    if isinstance(member, classmethod):
        bound = member.__get__(None, owner)

        def call_class(value: Any, rule: Rule, context: ValidationContext) -> Any:
            return bound(value, rule, context)

        return call_class

    def call_bound(value: Any, rule: Rule, context: ValidationContext) -> Any:
        subject = context.find_subject(owner)
        if subject is None:
            raise ConfigurationError(
                f'Method "{name}" of {owner.__qualname__} called while no '
                f"{owner.__qualname__} instance is being validated.",
                details={"method": name, "class": owner.__qualname__},
            )
        return member.__get__(subject, owner)(value, rule, context)

    return call_bound
