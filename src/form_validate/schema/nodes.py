"""Schema node types.

A schema is a tree of ScalarSchema, ObjectSchema and ArraySchema nodes.
Nodes are immutable: their rule parameters are bound once on construction
and shared by every validation call.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from form_validate.constants import TYPE_ARRAY, TYPE_OBJECT
from form_validate.schema.params import RuleBinding, bind_rules


class ScalarKind(str, Enum):
    """Kinds of leaf values a scalar node may describe."""

    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    DATETIME = "datetime"


@dataclass(slots=True, frozen=True, kw_only=True, eq=False)
class SchemaNode(ABC):
    """Abstract base class for all schema nodes.

    Attributes:
        title: Human readable label used in messages
        rules: Ordered mapping of rule name to RuleBinding. Raw parameters
            are accepted and normalized on construction.

    """

    title: str | None = None
    rules: Mapping[str, RuleBinding] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", bind_rules(self.rules))

    @property
    @abstractmethod
    def type_name(self) -> str:
        """Type name used in default titles and error targets."""

    def children(self) -> Iterator[tuple[Any, SchemaNode]]:
        """Yield ``(key, node)`` pairs for direct children."""
        return iter(())

    def walk(self) -> Iterator[SchemaNode]:
        """Yield this node and all descendants in declaration order."""
        yield self
        for _, child in self.children():
            yield from child.walk()


@dataclass(slots=True, frozen=True, kw_only=True, eq=False)
class ScalarSchema(SchemaNode):
    """Leaf node describing a single value."""

    kind: ScalarKind = ScalarKind.STRING

    def __post_init__(self) -> None:
        SchemaNode.__post_init__(self)
        object.__setattr__(self, "kind", ScalarKind(self.kind))

    @property
    def type_name(self) -> str:
        return self.kind.value


@dataclass(slots=True, frozen=True, kw_only=True, eq=False)
class ObjectSchema(SchemaNode):
    """Node describing a mapping with declared fields."""

    fields: Mapping[str, SchemaNode] = field(default_factory=dict)

    def __post_init__(self) -> None:
        SchemaNode.__post_init__(self)
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def type_name(self) -> str:
        return TYPE_OBJECT

    def children(self) -> Iterator[tuple[Any, SchemaNode]]:
        return iter(self.fields.items())


@dataclass(slots=True, frozen=True, kw_only=True, eq=False)
class ArraySchema(SchemaNode):
    """Node describing a sequence whose items share one schema."""

    item: SchemaNode = field(default_factory=ScalarSchema)

    @property
    def type_name(self) -> str:
        return TYPE_ARRAY

    def children(self) -> Iterator[tuple[Any, SchemaNode]]:
        # The key is unknown until a value is seen
        return iter(((None, self.item),))
