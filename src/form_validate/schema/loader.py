"""Build schema node trees from resolved dict or JSON documents.

The raw document is checked against a bundled JSON Schema before any node
is built, and every rule name is checked against a RuleRegistry, so a
broken schema fails here instead of in the middle of a validation call.

Usage:
    from form_validate.schema.loader import load_schema

    schema = load_schema({
        "type": "object",
        "schema": {
            "email": {"type": "string", "rules": {"required": True}},
        },
    })
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

import orjson
from jsonschema import Draft7Validator, ValidationError
from jsonschema.exceptions import best_match

from form_validate.constants import (
    DEFAULT_SCALAR_KIND,
    SCHEMA_KEY_CHILDREN,
    SCHEMA_KEY_RULES,
    SCHEMA_KEY_TITLE,
    SCHEMA_KEY_TYPE,
    TYPE_ARRAY,
    TYPE_OBJECT,
)
from form_validate.exceptions import SchemaConfigurationError
from form_validate.logger import get_logger
from form_validate.rules.builtin import get_registry
from form_validate.schema.nodes import (
    ArraySchema,
    ObjectSchema,
    ScalarSchema,
    SchemaNode,
)

if TYPE_CHECKING:
    from form_validate.rules.registry import RuleRegistry

logger = get_logger(__name__)

META_SCHEMA_PATH = Path(__file__).parent / "schema_node.schema.json"


def _read_json(path: Path) -> Any:
    """Read a JSON document with orjson.

    Raises:
        SchemaConfigurationError: If the file is missing or not valid JSON

    """
    if not path.exists():
        msg = "Schema file not found"
        raise SchemaConfigurationError(msg, target=str(path))

    try:
        with path.open("rb") as f:
            return orjson.loads(f.read())
    except orjson.JSONDecodeError as e:
        msg = f"Invalid JSON: {e}"
        raise SchemaConfigurationError(msg, target=str(path)) from e


def _error_path(error: ValidationError) -> str:
    if not error.absolute_path:
        return "root"
    return ".".join(str(p) for p in error.absolute_path)


def _resolve_type(raw: Mapping[str, Any]) -> str:
    """Return the declared type, inferring it for untyped nodes."""
    node_type = raw.get(SCHEMA_KEY_TYPE)
    if node_type is not None:
        return node_type
    if isinstance(raw.get(SCHEMA_KEY_CHILDREN), Mapping):
        return TYPE_OBJECT
    return DEFAULT_SCALAR_KIND


class SchemaLoader:
    """Turns resolved schema documents into SchemaNode trees."""

    def __init__(self, meta_schema_path: Path = META_SCHEMA_PATH) -> None:
        """Initialize loader with the meta-schema.

        Args:
            meta_schema_path: JSON Schema describing valid schema documents

        """
        self._meta_validator = Draft7Validator(_read_json(meta_schema_path))

    def check_document(self, raw: Any) -> None:
        """Check a raw schema document against the meta-schema.

        Raises:
            SchemaConfigurationError: With the most relevant problem

        """
        errors = list(self._meta_validator.iter_errors(raw))
        if not errors:
            return
        error = best_match(errors)
        msg = f"{error.message} (at '{_error_path(error)}')"
        raise SchemaConfigurationError(msg)

    def build(self, raw: Mapping[str, Any]) -> SchemaNode:
        """Build nodes from a document that already passed check_document."""
        node_type = _resolve_type(raw)
        title = raw.get(SCHEMA_KEY_TITLE)
        rules = raw.get(SCHEMA_KEY_RULES) or {}
        children = raw.get(SCHEMA_KEY_CHILDREN)

        if node_type == TYPE_OBJECT:
            return ObjectSchema(
                title=title,
                rules=rules,
                fields={
                    name: self.build(child)
                    for name, child in (children or {}).items()
                },
            )
        if node_type == TYPE_ARRAY:
            return ArraySchema(
                title=title, rules=rules, item=self.build(children)
            )
        return ScalarSchema(title=title, rules=rules, kind=node_type)

    def load(
        self,
        raw: Any,
        registry: RuleRegistry | None = None,
    ) -> SchemaNode:
        """Check, build and rule-check a schema document.

        Args:
            raw: Resolved schema document (nested dicts)
            registry: Registry the rule names must resolve in;
                defaults to the shared registry

        Returns:
            Root SchemaNode

        Raises:
            SchemaConfigurationError: If the document is malformed or
                references an unknown rule

        """
        self.check_document(raw)
        schema = self.build(raw)
        if registry is None:
            registry = get_registry()
        registry.check_schema(schema)
        logger.debug("Loaded %s schema", schema.type_name)
        return schema

    def load_file(
        self,
        path: Path,
        registry: RuleRegistry | None = None,
    ) -> SchemaNode:
        """Load a schema document from a JSON file.

        Raises:
            SchemaConfigurationError: If the file is unreadable or invalid

        """
        try:
            return self.load(_read_json(path), registry)
        except SchemaConfigurationError as e:
            if e.target is None:
                e.target = str(path)
            raise


_loader: SchemaLoader | None = None


def get_loader() -> SchemaLoader:
    """Get or create the shared SchemaLoader instance."""
    global _loader  # noqa: PLW0603
    if _loader is None:
        _loader = SchemaLoader()
    return _loader


def load_schema(
    raw: Mapping[str, Any], registry: RuleRegistry | None = None
) -> SchemaNode:
    """Load a schema document (convenience function).

    Raises:
        SchemaConfigurationError: If the document is invalid

    """
    return get_loader().load(raw, registry)


def load_schema_file(
    path: Path | str, registry: RuleRegistry | None = None
) -> SchemaNode:
    """Load a schema document from a JSON file (convenience function).

    Raises:
        SchemaConfigurationError: If the file or document is invalid

    """
    return get_loader().load_file(Path(path), registry)
