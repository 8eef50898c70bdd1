"""Error tree assembly.

normalize_error() is the only emptiness policy in the engine: a node
whose keys are all falsy is ``None``. build_error_node() combines a node's
own result with its children's results and lifts form errors.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from form_validate.constants import (
    CHILD_ERROR_KEYS,
    KEY_FORM_ERROR,
    KEY_MESSAGE,
)

if TYPE_CHECKING:
    from form_validate.engine.node import NodeResult

ErrorNode = dict[str, Any]


def normalize_error(record: Mapping[Any, Any] | None) -> ErrorNode | None:
    """Drop falsy values; return None when nothing is left."""
    if not record:
        return None
    cleaned = {key: value for key, value in record.items() if value}
    return cleaned or None


def strip_form_error(error: Mapping[str, Any]) -> ErrorNode | None:
    """Return ``error`` without its form error, normalized."""
    return normalize_error(
        {key: value for key, value in error.items() if key != KEY_FORM_ERROR}
    )


def first_form_error(
    children: Iterable[tuple[Any, Mapping[str, Any] | None]],
) -> str | None:
    """Return the first form error among ``children`` in iteration order."""
    for _, error in children:
        if error and error.get(KEY_FORM_ERROR):
            return error[KEY_FORM_ERROR]
    return None


def _merge_details(record: ErrorNode, details: Mapping[str, Any]) -> None:
    for key, value in details.items():
        if not value:
            continue
        current = record.get(key)
        if (
            key in CHILD_ERROR_KEYS
            and isinstance(value, Mapping)
            and isinstance(current, Mapping)
        ):
            record[key] = {**current, **value}
        else:
            record[key] = value


def build_error_node(
    own: NodeResult,
    child_key: str | None = None,
    children: Iterable[tuple[Any, ErrorNode | None]] = (),
) -> ErrorNode | None:
    """Assemble the error node for one schema node.

    Args:
        own: Result of the node's own rules
        child_key: ``fieldErrors`` or ``itemErrors``; None for scalars
        children: ``(field name or index, error)`` pairs in schema order

    Returns:
        Normalized error node, or None when there is nothing to report

    """
    present = [(key, error) for key, error in children if error]
    child_form_error = first_form_error(present)
    child_map = normalize_error(
        {key: strip_form_error(error) for key, error in present}
    )

    record: ErrorNode = {}
    if child_key is not None:
        record[child_key] = child_map
    if own.form_error:
        record[KEY_FORM_ERROR] = own.message
    else:
        record[KEY_MESSAGE] = own.message
        record[KEY_FORM_ERROR] = child_form_error
    if own.details:
        _merge_details(record, own.details)

    return normalize_error(record)
