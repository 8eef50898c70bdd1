"""Recursive tree validation.

validate() walks a schema tree alongside a value. A node's own rules run
concurrently with all of its children, and siblings run concurrently with
each other, so slow asynchronous rules (remote lookups and the like) do
not serialize. Every sibling runs to completion; only a node's own rule
chain stops at its first failure. When an evaluator fails, the call waits
for every sibling to settle and then raises the first failure in schema
order, so no rule is still running once validate() has raised.

Results are assembled in schema order, never completion order, so the
form error lifted to a parent is always the first one in declaration
order.

Usage:
    >>> schema = load_schema({"type": "string", "rules": {"required": True}})
    >>> await validate(schema, None)
    {'message': 'Root string is required'}
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from form_validate.constants import KEY_FIELD_ERRORS, KEY_ITEM_ERRORS
from form_validate.engine.aggregate import ErrorNode, build_error_node
from form_validate.engine.context import ValidationContext
from form_validate.engine.node import validate_node
from form_validate.logger import get_logger
from form_validate.rules.builtin import get_registry
from form_validate.schema.nodes import ArraySchema, ObjectSchema, ScalarSchema

if TYPE_CHECKING:
    from form_validate.config import ValidatorSettings
    from form_validate.rules.registry import RuleRegistry
    from form_validate.schema.nodes import SchemaNode

logger = get_logger(__name__)


def _field_value(value: Any, name: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(name)
    return None


def _items(value: Any) -> Sequence[Any]:
    if isinstance(value, Sequence) and not isinstance(
        value, (str, bytes, bytearray)
    ):
        return value
    return ()


async def _validate_tree(
    schema: SchemaNode,
    value: Any,
    context: ValidationContext,
    registry: RuleRegistry,
    settings: ValidatorSettings | None,
) -> ErrorNode | None:
    if isinstance(schema, ScalarSchema):
        own_result = await validate_node(
            schema, value, context, registry, settings=settings
        )
        return build_error_node(own_result)

    if isinstance(schema, ObjectSchema):
        child_key = KEY_FIELD_ERRORS
        keys: list[Any] = list(schema.fields)
        pending = [
            _validate_tree(
                field_schema,
                _field_value(value, name),
                context.for_field(name),
                registry,
                settings,
            )
            for name, field_schema in schema.fields.items()
        ]
    elif isinstance(schema, ArraySchema):
        child_key = KEY_ITEM_ERRORS
        items = _items(value)
        keys = list(range(len(items)))
        parent_title = context.title_for(schema)
        pending = [
            _validate_tree(
                schema.item,
                item,
                context.for_item(index, parent_title),
                registry,
                settings,
            )
            for index, item in enumerate(items)
        ]
    else:
        msg = f"Unsupported schema node: {type(schema).__name__}"
        raise TypeError(msg)

    own = validate_node(schema, value, context, registry, settings=settings)
    results = await asyncio.gather(own, *pending, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result

    own_result, *child_results = results
    return build_error_node(own_result, child_key, zip(keys, child_results))


async def validate(
    schema: SchemaNode,
    value: Any,
    context: ValidationContext | None = None,
    *,
    registry: RuleRegistry | None = None,
    settings: ValidatorSettings | None = None,
) -> ErrorNode | None:
    """Validate ``value`` against ``schema``.

    Args:
        schema: Root schema node
        value: Value to validate
        context: Context for the root; defaults to title "Root {type}"
            and ``value`` as root value
        registry: Rule registry; defaults to the shared registry
        settings: Optional settings (rule timeout)

    Returns:
        Error tree, or None when the value is valid

    Raises:
        SchemaConfigurationError: If the schema references an unknown
            rule. Raised before any rule runs.
        RuleEvaluationError: If a rule evaluator fails or times out

    """
    if registry is None:
        registry = get_registry()
    registry.check_schema(schema)

    if context is None:
        context = ValidationContext.for_root(schema, value)

    result = await _validate_tree(schema, value, context, registry, settings)
    logger.debug(
        "Validated %s: %s",
        context.title_for(schema),
        "valid" if result is None else "invalid",
    )
    return result


def validate_sync(
    schema: SchemaNode,
    value: Any,
    context: ValidationContext | None = None,
    *,
    registry: RuleRegistry | None = None,
    settings: ValidatorSettings | None = None,
) -> ErrorNode | None:
    """Blocking wrapper around validate() for code without an event loop.

    Raises:
        RuntimeError: If called from a running event loop

    """
    return asyncio.run(
        validate(
            schema, value, context, registry=registry, settings=settings
        )
    )
