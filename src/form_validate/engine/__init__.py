"""Recursive validation engine."""

from form_validate.engine.aggregate import (
    ErrorNode,
    build_error_node,
    first_form_error,
    normalize_error,
    strip_form_error,
)
from form_validate.engine.context import ValidationContext
from form_validate.engine.node import NodeResult, validate_node
from form_validate.engine.tree import validate, validate_sync

__all__ = [
    "ErrorNode",
    "NodeResult",
    "ValidationContext",
    "build_error_node",
    "first_form_error",
    "normalize_error",
    "strip_form_error",
    "validate",
    "validate_node",
    "validate_sync",
]
