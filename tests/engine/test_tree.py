"""Tests for validate() and validate_sync()."""

import asyncio
import dataclasses
from unittest.mock import MagicMock

import pytest

from form_validate.engine import ValidationContext, validate, validate_sync
from form_validate.exceptions import SchemaConfigurationError
from form_validate.rules import RuleRegistry
from form_validate.schema import (
    ArraySchema,
    ObjectSchema,
    ScalarSchema,
    SchemaNode,
)
from form_validate.schema.loader import load_schema

OBJECT_SCHEMA = {
    "type": "object",
    "rules": {"required": True},
    "schema": {
        "foo": {"type": "string", "rules": {"required": True}},
        "bar": {"type": "string", "rules": {"required": True}},
    },
}


class TestRootScalar:
    """Tests for a scalar at the root."""

    @pytest.mark.asyncio
    async def test_required(self):
        schema = load_schema({"type": "string", "rules": {"required": True}})

        assert await validate(schema, "foo") is None
        assert await validate(schema, None) == {
            "message": "Root string is required"
        }

    @pytest.mark.asyncio
    async def test_zero_is_present(self):
        schema = load_schema({"type": "number", "rules": {"required": True}})
        assert await validate(schema, 0) is None

    @pytest.mark.asyncio
    async def test_schema_title_wins(self):
        schema = load_schema(
            {"type": "number", "title": "Age", "rules": {"min": 18}}
        )
        assert await validate(schema, 3) == {
            "message": "Age must not be less than 18"
        }


class TestRootArray:
    """Tests for an array at the root."""

    @pytest.mark.asyncio
    async def test_min_length(self):
        schema = load_schema(
            {
                "type": "array",
                "rules": {"minLength": 1},
                "schema": {"type": "string"},
            }
        )

        assert await validate(schema, ["foo"]) is None
        assert await validate(schema, []) == {
            "message": "Root array must have at least 1 item"
        }

    @pytest.mark.asyncio
    async def test_max_length_pluralizes(self):
        schema = load_schema(
            {
                "type": "array",
                "rules": {"maxLength": 2},
                "schema": {"type": "number"},
            }
        )
        assert await validate(schema, [1, 2, 3]) == {
            "message": "Root array must not have more than 2 items"
        }

    @pytest.mark.asyncio
    async def test_item_errors_are_keyed_by_index(self):
        """Test item titles are derived from the parent title."""
        schema = load_schema(
            {
                "type": "array",
                "title": "Tags",
                "schema": {"type": "string", "rules": {"minLength": 2}},
            }
        )

        assert await validate(schema, ["ok", "x", "fine", ""]) == {
            "itemErrors": {
                1: {"message": "Tags[1] must have at least 2 characters"},
                3: {"message": "Tags[3] must have at least 2 characters"},
            }
        }

    @pytest.mark.asyncio
    async def test_non_sequence_has_no_items(self):
        """Test strings and other non-sequences are not iterated."""
        schema = ArraySchema(item=ScalarSchema(rules={"required": True}))
        assert await validate(schema, "abc") is None
        assert await validate(schema, None) is None


class TestRootObject:
    """Tests for an object at the root."""

    @pytest.mark.asyncio
    async def test_missing_object(self):
        """Test fields of a missing object are validated as missing."""
        schema = load_schema(OBJECT_SCHEMA)

        assert await validate(schema, None) == {
            "message": "Root object is required",
            "fieldErrors": {
                "foo": {"message": "Foo is required"},
                "bar": {"message": "Bar is required"},
            },
        }

    @pytest.mark.asyncio
    async def test_empty_object(self):
        schema = load_schema(OBJECT_SCHEMA)

        assert await validate(schema, {}) == {
            "fieldErrors": {
                "foo": {"message": "Foo is required"},
                "bar": {"message": "Bar is required"},
            }
        }

    @pytest.mark.asyncio
    async def test_valid_object(self):
        schema = load_schema(OBJECT_SCHEMA)
        assert await validate(schema, {"foo": "a", "bar": "b"}) is None

    @pytest.mark.asyncio
    async def test_non_mapping_value(self):
        """Test fields of a non-mapping value read as missing."""
        schema = load_schema(OBJECT_SCHEMA)
        result = await validate(schema, ["foo", "bar"])
        assert set(result["fieldErrors"]) == {"foo", "bar"}

    @pytest.mark.asyncio
    async def test_field_titles_are_start_cased(self):
        schema = ObjectSchema(
            fields={"firstName": ScalarSchema(rules={"required": True})}
        )
        assert await validate(schema, {}) == {
            "fieldErrors": {"firstName": {"message": "First Name is required"}}
        }

    @pytest.mark.asyncio
    async def test_custom_titleize(self):
        """Test the titleize function can be supplied by the caller."""
        schema = ObjectSchema(
            fields={"first_name": ScalarSchema(rules={"required": True})}
        )
        context = ValidationContext(
            title="Form", root_value={}, titleize=str.upper
        )

        assert await validate(schema, {}, context) == {
            "fieldErrors": {"first_name": {"message": "FIRST_NAME is required"}}
        }


@pytest.mark.asyncio
async def test_custom_error_string():
    schema = load_schema(
        {
            "type": "object",
            "schema": {
                "foo": {
                    "rules": {
                        "required": {
                            "param": True,
                            "errorMessage": "custom error string",
                        }
                    }
                }
            },
        }
    )

    assert await validate(schema, {}) == {
        "fieldErrors": {"foo": {"message": "custom error string"}}
    }


@pytest.mark.asyncio
async def test_custom_error_function_options():
    """Test a callable errorMessage sees the field's options."""
    builder = MagicMock(return_value="custom error function")
    schema = load_schema(
        {
            "type": "object",
            "schema": {
                "foo": {
                    "rules": {
                        "maxLength": {"param": 1, "errorMessage": builder}
                    }
                }
            },
        }
    )
    value = {"foo": "bar"}

    assert await validate(schema, value) == {
        "fieldErrors": {"foo": {"message": "custom error function"}}
    }

    options = builder.call_args.args[0]
    assert options.value == "bar"
    assert options.schema is schema.fields["foo"]
    assert options.param == 1
    assert options.title == "Foo"
    assert options.root_value is value


@pytest.mark.asyncio
async def test_nested_errors_mirror_value_shape():
    """Test nested objects and arrays produce nested error maps."""
    schema = load_schema(
        {
            "type": "object",
            "schema": {
                "people": {
                    "type": "array",
                    "schema": {
                        "type": "object",
                        "schema": {
                            "name": {"rules": {"required": True}},
                            "age": {"type": "number", "rules": {"min": 0}},
                        },
                    },
                }
            },
        }
    )

    result = await validate(
        schema,
        {"people": [{"name": "Ann", "age": 4}, {"name": "", "age": -1}]},
    )

    assert result == {
        "fieldErrors": {
            "people": {
                "itemErrors": {
                    1: {
                        "fieldErrors": {
                            "name": {"message": "Name is required"},
                            "age": {"message": "Age must not be less than 0"},
                        }
                    }
                }
            }
        }
    }


@pytest.mark.asyncio
async def test_required_if_reads_root_value():
    """Test requiredIf sees the whole value from any depth."""
    schema = ObjectSchema(
        fields={
            "contact": ScalarSchema(),
            "email": ScalarSchema(
                rules={
                    "requiredIf": lambda root, options: (
                        root.get("contact") == "email"
                    )
                }
            ),
        }
    )

    assert await validate(schema, {"contact": "phone"}) is None
    assert await validate(schema, {"contact": "email"}) == {
        "fieldErrors": {"email": {"message": "Email is required"}}
    }


@pytest.mark.asyncio
async def test_validate_is_pure():
    """Test repeated calls give equal results and leave input untouched."""
    schema = load_schema(OBJECT_SCHEMA)
    value = {"foo": "", "bar": None}

    first = await validate(schema, value)
    second = await validate(schema, value)

    assert first == second
    assert value == {"foo": "", "bar": None}


@pytest.mark.asyncio
async def test_unknown_rule_raises_before_evaluation(
    registry: RuleRegistry,
):
    """Test no evaluator runs when any rule name is unknown."""
    spy = MagicMock(return_value=None)
    registry.register("spy", spy)
    schema = ObjectSchema(
        fields={
            "a": ScalarSchema(rules={"spy": True}),
            "b": ScalarSchema(rules={"between": (1, 2)}),
        }
    )

    with pytest.raises(SchemaConfigurationError, match="between"):
        await validate(schema, {}, registry=registry)

    spy.assert_not_called()


@pytest.mark.asyncio
async def test_uses_given_registry(registry: RuleRegistry):
    registry.register(
        "even",
        lambda options: options.value % 2 and f"{options.title} must be even",
    )
    schema = ScalarSchema(kind="number", title="Count", rules={"even": True})

    assert await validate(schema, 2, registry=registry) is None
    assert await validate(schema, 3, registry=registry) == {
        "message": "Count must be even"
    }


def test_validate_sync():
    schema = load_schema({"type": "string", "rules": {"required": True}})

    assert validate_sync(schema, "x") is None
    assert validate_sync(schema, "") == {"message": "Root string is required"}


def test_validate_sync_runs_async_rules(registry: RuleRegistry):
    """Test asynchronous evaluators work through the blocking wrapper."""

    async def taken(options):
        await asyncio.sleep(0)
        return options.value == "admin" and "Name is taken"

    registry.register("unique", taken)
    schema = ScalarSchema(rules={"unique": True})

    assert validate_sync(schema, "bob", registry=registry) is None
    assert validate_sync(schema, "admin", registry=registry) == {
        "message": "Name is taken"
    }


@pytest.mark.asyncio
async def test_foreign_node_type_is_rejected():
    """Test node classes outside the scalar/object/array union fail."""

    @dataclasses.dataclass(slots=True, frozen=True, kw_only=True, eq=False)
    class TupleSchema(SchemaNode):
        @property
        def type_name(self) -> str:
            return "tuple"

    with pytest.raises(TypeError, match="TupleSchema"):
        await validate(TupleSchema(), ())


@pytest.mark.asyncio
async def test_non_callable_custom_raises_before_evaluation(
    registry: RuleRegistry,
):
    """Test a broken custom parameter stops the call before any rule runs."""
    spy = MagicMock(return_value=None)
    registry.register("spy", spy)
    schema = ObjectSchema(
        fields={
            "a": ScalarSchema(rules={"spy": True}),
            "b": ScalarSchema(rules={"custom": "not a function"}),
        }
    )

    with pytest.raises(SchemaConfigurationError, match="callable"):
        await validate(schema, {}, registry=registry)

    spy.assert_not_called()
