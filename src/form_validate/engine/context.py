"""Validation context threaded through the recursive traversal."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from form_validate.constants import ITEM_TITLE_TEMPLATE, ROOT_TITLE_TEMPLATE
from form_validate.utils.text import start_case

if TYPE_CHECKING:
    from form_validate.schema.nodes import SchemaNode


@dataclass(slots=True, frozen=True)
class ValidationContext:
    """Per-node context.

    Attributes:
        title: Default title for the node; an explicit schema title wins
        root_value: Top-level value of the call, shared by reference
        titleize: Turns a field name into a default title

    """

    title: str
    root_value: Any = None
    titleize: Callable[[str], str] = start_case

    @classmethod
    def for_root(
        cls,
        schema: SchemaNode,
        value: Any,
        titleize: Callable[[str], str] = start_case,
    ) -> ValidationContext:
        """Create the context for the top of a validation call."""
        return cls(
            title=ROOT_TITLE_TEMPLATE.format(type=schema.type_name),
            root_value=value,
            titleize=titleize,
        )

    def title_for(self, schema: SchemaNode) -> str:
        """Return the effective title of ``schema`` in this context."""
        return schema.title or self.title

    def for_field(self, name: str) -> ValidationContext:
        return replace(self, title=self.titleize(name) or name)

    def for_item(self, index: int, parent_title: str) -> ValidationContext:
        return replace(
            self,
            title=ITEM_TITLE_TEMPLATE.format(title=parent_title, index=index),
        )
