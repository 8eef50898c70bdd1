"""Rule parameter normalization.

A schema may declare a rule parameter either as a bare value::

    {"minLength": 3}

or in the extended form carrying presentation options::

    {"minLength": {"param": 3, "errorMessage": "Too short", "formError": True}}

Both become a single RuleBinding so the engine never inspects raw
parameters.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from form_validate.constants import (
    PARAM_KEY,
    PARAM_KEY_ERROR_MESSAGE,
    PARAM_KEY_FORM_ERROR,
)

if TYPE_CHECKING:
    from form_validate.rules.registry import RuleOptions

ErrorMessage = str | Callable[["RuleOptions"], Any]


@dataclass(slots=True, frozen=True)
class RuleBinding:
    """Canonical form of a rule parameter declared in a schema.

    Attributes:
        param: Value handed to the rule evaluator
        error_message: Replacement message, or a callable building one from
            the rule options
        form_error: Whether a failure is surfaced as a form-level summary

    """

    param: Any = None
    error_message: ErrorMessage | None = None
    form_error: bool = False


def is_extended_param(raw: Any) -> bool:
    """Return True when ``raw`` is the extended ``{"param": ...}`` form."""
    return isinstance(raw, Mapping) and PARAM_KEY in raw


def normalize_param(raw: Any) -> RuleBinding:
    """Convert a declared rule parameter into a RuleBinding.

    Args:
        raw: Bare parameter value, extended-form mapping or RuleBinding

    Returns:
        RuleBinding for the parameter

    """
    if isinstance(raw, RuleBinding):
        return raw
    if is_extended_param(raw):
        return RuleBinding(
            param=raw[PARAM_KEY],
            error_message=raw.get(PARAM_KEY_ERROR_MESSAGE),
            form_error=bool(raw.get(PARAM_KEY_FORM_ERROR, False)),
        )
    return RuleBinding(param=raw)


def bind_rules(
    rules: Mapping[str, Any] | None,
) -> Mapping[str, RuleBinding]:
    """Normalize every parameter of a rule mapping, keeping its order.

    Args:
        rules: Mapping of rule name to declared parameter

    Returns:
        Read-only mapping of rule name to RuleBinding

    """
    if not rules:
        return MappingProxyType({})
    return MappingProxyType(
        {name: normalize_param(raw) for name, raw in rules.items()}
    )
