# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for the probity package surface and error hierarchy."""

from __future__ import annotations

import pytest

import probity
from probity.errors import (
    ConfigurationError,
    InvalidCallbackReturnTypeError,
    InvalidRuleReturnTypeError,
    MemberAccessError,
    ProbityError,
    ValidationDepthError,
)

# =============================================================================
# Tests: lazy exports
# =============================================================================


class TestLazyExports:
    """Tests for top-level lazy attribute access."""

    @pytest.mark.parametrize("name", [n for n in probity.__all__ if n != "__version__"])
    def test_every_export_resolves(self, name):
        assert getattr(probity, name) is not None

    def test_exports_are_the_real_objects(self):
        from probity.rules import Nested
        from probity.validation import Validator

        assert probity.Nested is Nested
        assert probity.Validator is Validator

    def test_unknown_attribute(self):
        with pytest.raises(AttributeError, match="has no attribute 'nope'"):
            probity.nope  # noqa: B018

    def test_dir(self):
        assert "validate" in dir(probity)


# =============================================================================
# Tests: errors
# =============================================================================


class TestErrors:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize(
        "error_cls",
        [MemberAccessError, InvalidRuleReturnTypeError, ValidationDepthError],
    )
    def test_configuration_errors(self, error_cls):
        assert issubclass(error_cls, ConfigurationError)
        assert issubclass(error_cls, ProbityError)

    def test_callback_error_is_rule_return_error(self):
        assert issubclass(InvalidCallbackReturnTypeError, InvalidRuleReturnTypeError)

    def test_default_message(self):
        assert str(ConfigurationError()) == "Invalid validation configuration"

    def test_to_dict(self):
        error = ConfigurationError("bad", details={"member": "x"})
        assert error.to_dict() == {
            "error": "ConfigurationError",
            "message": "bad",
            "details": {"member": "x"},
        }
