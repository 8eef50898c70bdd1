"""Validation of a single schema node's own rules."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from form_validate.exceptions import FormValidateError, RuleEvaluationError
from form_validate.logger import get_logger
from form_validate.rules.registry import RuleOptions

if TYPE_CHECKING:
    from form_validate.config import ValidatorSettings
    from form_validate.engine.context import ValidationContext
    from form_validate.rules.registry import RuleRegistry
    from form_validate.schema.nodes import SchemaNode

logger = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class NodeResult:
    """Outcome of a node's own rule chain.

    Attributes:
        message: Message of the first failing rule
        form_error: Whether the message is a form-level summary
        details: Structured error mapping returned by a rule, used verbatim

    """

    message: str | None = None
    form_error: bool = False
    details: Mapping[str, Any] | None = None


async def _call(
    rule_name: str,
    func: Callable[[RuleOptions], Any],
    options: RuleOptions,
    timeout: float | None,
) -> Any:
    """Call an evaluator and await its result when needed.

    Raises:
        RuleEvaluationError: If the evaluator raises or times out

    """
    try:
        result = func(options)
        if inspect.isawaitable(result):
            result = await asyncio.wait_for(result, timeout)
    except FormValidateError:
        raise
    except asyncio.TimeoutError as e:
        detail = (
            f"timed out after {timeout}s"
            if timeout is not None
            else f"TimeoutError: {e}"
        )
        logger.error("Rule '%s' for %s: %s", rule_name, options.title, detail)
        raise RuleEvaluationError(
            detail, rule=rule_name, target=options.title
        ) from e
    except Exception as e:
        logger.error(
            "Rule '%s' for %s raised %s: %s",
            rule_name,
            options.title,
            type(e).__name__,
            e,
        )
        raise RuleEvaluationError(
            f"{type(e).__name__}: {e}", rule=rule_name, target=options.title
        ) from e
    return result


async def validate_node(
    schema: SchemaNode,
    value: Any,
    context: ValidationContext,
    registry: RuleRegistry,
    *,
    settings: ValidatorSettings | None = None,
) -> NodeResult:
    """Evaluate the node's rules in order, stopping at the first failure.

    Args:
        schema: Node whose rules are evaluated
        value: Value at the node
        context: Context supplying the default title and root value
        registry: Registry resolving rule names
        settings: Optional settings (rule timeout)

    Returns:
        NodeResult, empty when every rule passes

    Raises:
        SchemaConfigurationError: If a rule name is not registered
        RuleEvaluationError: If an evaluator fails

    """
    timeout = settings.rule_timeout if settings is not None else None
    title = context.title_for(schema)

    for rule_name, binding in schema.rules.items():
        evaluator = registry.get(rule_name)
        options = RuleOptions(
            value=value,
            schema=schema,
            param=binding.param,
            title=title,
            root_value=context.root_value,
        )

        message = await _call(rule_name, evaluator, options, timeout)
        if not message:
            continue

        if binding.error_message:
            if callable(binding.error_message):
                message = await _call(
                    rule_name, binding.error_message, options, timeout
                )
            else:
                message = binding.error_message

        logger.debug("Rule '%s' failed for %s", rule_name, title)

        if isinstance(message, Mapping):
            return NodeResult(details=dict(message))
        if not message:
            return NodeResult()
        return NodeResult(
            message=message if isinstance(message, str) else str(message),
            form_error=binding.form_error,
        )

    return NodeResult()
