"""Tests for built-in rule evaluators.

Each evaluator is called directly with a RuleOptions for a node titled
"value".
"""

import re
from unittest.mock import AsyncMock, MagicMock

import pytest

from form_validate.rules import (
    BUILTIN_RULES,
    RuleOptions,
    callable_param,
    is_empty,
)
from form_validate.schema import ScalarSchema

NODE = ScalarSchema()


def _options(value, param, root_value=None) -> RuleOptions:
    return RuleOptions(
        value=value,
        schema=NODE,
        param=param,
        title="value",
        root_value=root_value,
    )


def run_rule(name, value, param, root_value=None):
    return BUILTIN_RULES[name](_options(value, param, root_value))


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, True), ("", True), (0, False), (False, False), ([], False)],
)
def test_is_empty(value, expected):
    """Test only None and '' are empty."""
    assert is_empty(value) is expected


class TestRequired:
    """Tests for the required rule."""

    def test_not_required(self):
        assert not run_rule("required", None, False)

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_values_fail(self, value):
        assert run_rule("required", value, True) == "value is required"

    @pytest.mark.parametrize("value", [0, 1, False, "string", []])
    def test_present_values_pass(self, value):
        assert not run_rule("required", value, True)


class TestRequiredIf:
    """Tests for the requiredIf rule."""

    @pytest.mark.asyncio
    async def test_predicate_receives_root_value(self):
        """Test the predicate is called with the root value and options."""
        predicate = MagicMock(return_value=True)
        root = {"contact": "email"}
        options = _options(None, predicate, root_value=root)

        message = await BUILTIN_RULES["requiredIf"](options)

        assert message == "value is required"
        predicate.assert_called_once_with(root, options)

    @pytest.mark.asyncio
    async def test_async_predicate(self):
        """Test coroutine predicates are awaited."""
        predicate = AsyncMock(return_value=False)
        assert not await run_rule("requiredIf", "", predicate)
        predicate.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_present_value_skips_predicate(self):
        """Test the predicate is not consulted when a value is present."""
        predicate = MagicMock(return_value=True)
        assert not await run_rule("requiredIf", 0, predicate)
        predicate.assert_not_called()


def test_min():
    assert run_rule("min", 0, 1) == "value must not be less than 1"
    assert not run_rule("min", 1, 1)
    assert not run_rule("min", 1, 0)
    assert not run_rule("min", None, 1)


def test_max_reports_the_limit():
    """Test max interpolates the parameter, not the value."""
    assert run_rule("max", 5, 1) == "value must not be more than 1"
    assert not run_rule("max", 1, 1)
    assert not run_rule("max", 0, 1)
    assert not run_rule("max", None, 1)


def test_min_length():
    assert run_rule("minLength", "", 1) == (
        "value must have at least 1 character"
    )
    assert run_rule("minLength", "f", 2) == (
        "value must have at least 2 characters"
    )
    assert not run_rule("minLength", "fo", 2)
    assert not run_rule("minLength", "foo", 2)

    assert run_rule("minLength", [], 1) == "value must have at least 1 item"
    assert run_rule("minLength", [1], 2) == "value must have at least 2 items"
    assert not run_rule("minLength", (1, 1), 2)
    assert not run_rule("minLength", None, 2)


def test_max_length():
    assert run_rule("maxLength", "foo", 2) == (
        "value must not have more than 2 characters"
    )
    assert run_rule("maxLength", "fo", 1) == (
        "value must not have more than 1 character"
    )
    assert not run_rule("maxLength", "f", 1)
    assert not run_rule("maxLength", "", 1)

    assert run_rule("maxLength", [1, 1, 1], 2) == (
        "value must not have more than 2 items"
    )
    assert run_rule("maxLength", [1, 1], 1) == (
        "value must not have more than 1 item"
    )
    assert not run_rule("maxLength", [1], 1)
    assert not run_rule("maxLength", [], 1)


class TestMatch:
    """Tests for the match rule."""

    def test_compiled_pattern(self):
        pattern = re.compile("foo")
        assert not run_rule("match", "foo", pattern)
        assert not run_rule("match", "a foo b", pattern)
        assert run_rule("match", "bar", pattern) == (
            "value does not match pattern foo"
        )

    def test_string_pattern(self):
        assert not run_rule("match", "2024-01-31", r"^\d{4}-\d{2}-\d{2}$")
        assert run_rule("match", "31/01/2024", r"^\d{4}-") == (
            r"value does not match pattern ^\d{4}-"
        )

    def test_non_string_value_is_converted(self):
        assert not run_rule("match", 12345, r"^\d+$")

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_values_pass(self, value):
        assert not run_rule("match", value, "foo")


class TestCustom:
    """Tests for the custom rule."""

    def test_result_is_returned_verbatim(self):
        """Test the embedded evaluator's result is used as-is."""
        result = {"fieldErrors": {"a": {"message": "taken"}}}
        check = MagicMock(return_value=result)
        options = _options("x", check)

        assert BUILTIN_RULES["custom"](options) is result
        check.assert_called_once_with(options)


def test_callable_param():
    """Test function parameters are checked without calling them."""
    check = MagicMock()
    assert callable_param(check) is None
    check.assert_not_called()
    assert callable_param("not a function") == (
        "parameter must be callable, got str"
    )
