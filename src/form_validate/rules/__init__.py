"""Rule registry and built-in rules.

Usage:
    from form_validate.rules import get_registry

    registry = get_registry().copy()

    @registry.rule("even")
    def even(options):
        if options.value % 2:
            return f"{options.title} must be even"
        return None
"""

from form_validate.rules.builtin import (
    BUILTIN_PARAM_CHECKS,
    BUILTIN_RULES,
    build_default_registry,
    callable_param,
    get_registry,
    is_empty,
)
from form_validate.rules.registry import (
    Evaluator,
    ParamCheck,
    RuleOptions,
    RuleRegistry,
    RuleResult,
)

__all__ = [
    "BUILTIN_PARAM_CHECKS",
    "BUILTIN_RULES",
    "Evaluator",
    "ParamCheck",
    "RuleOptions",
    "RuleRegistry",
    "RuleResult",
    "build_default_registry",
    "callable_param",
    "get_registry",
    "is_empty",
]
