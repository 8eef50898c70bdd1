"""Built-in rule evaluators.

Empty values: ``required`` treats only ``None`` and ``""`` as empty, so
``0`` and ``False`` count as present. Comparison and length rules skip
``None`` so that optional fields are only checked when a value is given;
pair them with ``required`` to make a field mandatory.
"""

from __future__ import annotations

import inspect
import re
from functools import lru_cache
from typing import Any

from form_validate.constants import (
    MATCH_MESSAGE,
    MAX_LENGTH_MESSAGE,
    MAX_MESSAGE,
    MIN_LENGTH_MESSAGE,
    MIN_MESSAGE,
    REQUIRED_MESSAGE,
    UNIT_CHARACTER,
    UNIT_ITEM,
)
from form_validate.rules.registry import (
    Evaluator,
    ParamCheck,
    RuleOptions,
    RuleRegistry,
    RuleResult,
)
from form_validate.utils.text import pluralize


def is_empty(value: Any) -> bool:
    """Return True for ``None`` and the empty string only."""
    return value is None or (isinstance(value, str) and value == "")


def _length_unit(count: int, value: Any) -> str:
    unit = UNIT_CHARACTER if isinstance(value, str) else UNIT_ITEM
    return pluralize(count, unit)


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


def required(options: RuleOptions) -> str | None:
    if options.param and is_empty(options.value):
        return REQUIRED_MESSAGE.format(title=options.title)
    return None


async def required_if(options: RuleOptions) -> str | None:
    """Require the value when ``param(root_value, options)`` is truthy.

    ``param`` may be a plain function or a coroutine function.
    """
    if not is_empty(options.value):
        return None
    should_require = options.param(options.root_value, options)
    if inspect.isawaitable(should_require):
        should_require = await should_require
    if should_require:
        return REQUIRED_MESSAGE.format(title=options.title)
    return None


def min_value(options: RuleOptions) -> str | None:
    if options.value is not None and options.value < options.param:
        return MIN_MESSAGE.format(title=options.title, param=options.param)
    return None


def max_value(options: RuleOptions) -> str | None:
    if options.value is not None and options.value > options.param:
        return MAX_MESSAGE.format(title=options.title, param=options.param)
    return None


def min_length(options: RuleOptions) -> str | None:
    value, param = options.value, options.param
    if value is not None and len(value) < param:
        return MIN_LENGTH_MESSAGE.format(
            title=options.title, param=param, unit=_length_unit(param, value)
        )
    return None


def max_length(options: RuleOptions) -> str | None:
    value, param = options.value, options.param
    if value is not None and len(value) > param:
        return MAX_LENGTH_MESSAGE.format(
            title=options.title, param=param, unit=_length_unit(param, value)
        )
    return None


def match(options: RuleOptions) -> str | None:
    """Fail when a non-empty value does not contain the pattern.

    ``param`` is a pattern string or a compiled ``re.Pattern``; the value
    is converted with ``str()`` and searched, not fully matched.
    """
    if is_empty(options.value):
        return None
    pattern = options.param
    if not isinstance(pattern, re.Pattern):
        pattern = _compile(str(pattern))
    if pattern.search(str(options.value)) is None:
        return MATCH_MESSAGE.format(
            title=options.title, pattern=pattern.pattern
        )
    return None


def custom(options: RuleOptions) -> RuleResult:
    """Delegate to the evaluator embedded in the schema as ``param``.

    Its result (possibly awaitable) is used verbatim, including structured
    mappings carrying ``message``, ``formError``, ``fieldErrors`` or
    ``itemErrors``.
    """
    return options.param(options)


def callable_param(param: Any) -> str | None:
    """Parameter check for rules whose parameter is a function."""
    if not callable(param):
        return f"parameter must be callable, got {type(param).__name__}"
    return None


BUILTIN_RULES: dict[str, Evaluator] = {
    "required": required,
    "requiredIf": required_if,
    "min": min_value,
    "max": max_value,
    "minLength": min_length,
    "maxLength": max_length,
    "match": match,
    "custom": custom,
}

# Checked by RuleRegistry.check_schema() before any evaluator runs
BUILTIN_PARAM_CHECKS: dict[str, ParamCheck] = {
    "requiredIf": callable_param,
    "custom": callable_param,
}


def build_default_registry() -> RuleRegistry:
    """Return a new registry holding only the built-in rules."""
    return RuleRegistry(BUILTIN_RULES, BUILTIN_PARAM_CHECKS)


_registry: RuleRegistry | None = None


def get_registry() -> RuleRegistry:
    """Get or create the shared registry used when none is passed.

    Rules registered here are visible to every validation call in the
    process that does not supply its own registry.
    """
    global _registry  # noqa: PLW0603
    if _registry is None:
        _registry = build_default_registry()
    return _registry
