"""Schema model for form-validate.

The loader lives in form_validate.schema.loader and is re-exported from
the top-level package; it is not imported here because it depends on the
rule registry, which itself only needs these node types.
"""

from form_validate.schema.nodes import (
    ArraySchema,
    ObjectSchema,
    ScalarKind,
    ScalarSchema,
    SchemaNode,
)
from form_validate.schema.params import (
    RuleBinding,
    bind_rules,
    is_extended_param,
    normalize_param,
)

__all__ = [
    "ArraySchema",
    "ObjectSchema",
    "RuleBinding",
    "ScalarKind",
    "ScalarSchema",
    "SchemaNode",
    "bind_rules",
    "is_extended_param",
    "normalize_param",
]
