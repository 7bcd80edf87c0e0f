# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for probity.validation.result - Result, Error and paths."""

from __future__ import annotations

import pytest

from probity.validation.result import Error, Index, Result, format_message, render_path

# =============================================================================
# Tests: paths and messages
# =============================================================================


class TestRenderPath:
    """Tests for value path rendering."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ((), ""),
            (("author", "name"), "author.name"),
            (("files", Index(0), "url"), "files[0].url"),
            ((Index("k1"),), "[k1]"),
            ((Index(0), Index(1)), "[0][1]"),
        ],
    )
    def test_render(self, path, expected):
        assert render_path(path) == expected


class TestFormatMessage:
    """Tests for template substitution."""

    def test_substitutes(self):
        assert format_message("{attribute} is bad.", {"attribute": "name"}) == "name is bad."

    def test_unknown_placeholder_left_as_is(self):
        assert format_message("{attribute} > {limit}", {"attribute": "x"}) == "x > {limit}"

    def test_no_parameters(self):
        assert format_message("{attribute}") == "{attribute}"

    def test_regex_quantifier_kept(self):
        template = r"{attribute} must match \d{5}."
        assert format_message(template, {"attribute": "zip"}) == r"zip must match \d{5}."

    def test_range_quantifier_kept(self):
        template = "{attribute} must have {2,5} digits."
        assert format_message(template, {"attribute": "pin"}) == "pin must have {2,5} digits."


# =============================================================================
# Tests: Result
# =============================================================================


class TestResult:
    """Tests for Result accumulation and queries."""

    def test_empty_is_valid(self):
        result = Result()
        assert result.is_valid
        assert result.errors == []
        assert result.get_first_error_message() is None

    def test_add_error(self):
        result = Result().add_error("{attribute} is bad.", {"attribute": "name"}, ["name"])
        assert not result.is_valid
        assert result.get_error_messages() == ["name is bad."]
        assert result.get_error_messages_indexed_by_path() == {"name": ["name is bad."]}

    def test_errors_is_a_copy(self):
        result = Result().add_error("x")
        result.errors.clear()
        assert not result.is_valid

    def test_add_errors_with_prefix(self):
        inner = Result().add_error("bad", value_path=["name"]).add_error("root")
        outer = Result().add_errors(inner.errors, "author")
        assert outer.get_error_messages_indexed_by_path() == {
            "author.name": ["bad"],
            "author": ["root"],
        }

    def test_merge_keeps_order(self):
        a = Result().add_error("a")
        b = Result().add_error("b")
        assert Result().merge(a, b).get_error_messages() == ["a", "b"]

    def test_attribute_queries(self):
        result = (
            Result()
            .add_error("one", value_path=["name"])
            .add_error("two", value_path=["name", "first"])
            .add_error("three", value_path=["age"])
        )
        assert result.get_attribute_error_messages("name") == ["one", "two"]
        assert not result.is_attribute_valid("name")
        assert result.is_attribute_valid("email")
        assert result.get_first_error_message() == "one"

    def test_indexed_groups_by_path(self):
        result = Result().add_error("a", value_path=["x"]).add_error("b", value_path=["x"])
        assert result.get_error_messages_indexed_by_path() == {"x": ["a", "b"]}


class TestError:
    """Tests for Error."""

    def test_with_prefix(self):
        error = Error("msg", {}, (Index(1), "url"))
        prefixed = error.with_prefix("files")
        assert prefixed.path == "files[1].url"
        assert error.path == "[1].url"
