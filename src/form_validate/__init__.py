"""form-validate: asynchronous validation of nested data against rule schemas.

Usage:
    from form_validate import load_schema, validate

    schema = load_schema({
        "type": "object",
        "schema": {
            "email": {"rules": {"required": True, "match": "@"}},
            "password": {"rules": {"minLength": 8}},
        },
    })
    errors = await validate(schema, {"email": "", "password": "secret"})
    # {"fieldErrors": {"email": {"message": "Email is required"},
    #                  "password": {"message": "Password must have at least
    #                               8 characters"}}}

A result of None means the value is valid. Broken schemas raise
SchemaConfigurationError and failing evaluators raise RuleEvaluationError;
validation failures themselves are never raised.
"""

from form_validate.config import ValidatorSettings, load_settings
from form_validate.engine import (
    ErrorNode,
    ValidationContext,
    validate,
    validate_sync,
)
from form_validate.exceptions import (
    FormValidateError,
    RuleEvaluationError,
    SchemaConfigurationError,
    SettingsError,
)
from form_validate.rules import (
    RuleOptions,
    RuleRegistry,
    build_default_registry,
    get_registry,
)
from form_validate.schema import (
    ArraySchema,
    ObjectSchema,
    RuleBinding,
    ScalarKind,
    ScalarSchema,
    SchemaNode,
    normalize_param,
)
from form_validate.schema.loader import (
    SchemaLoader,
    load_schema,
    load_schema_file,
)

__version__ = "1.0.0"

__all__ = [
    "ArraySchema",
    "ErrorNode",
    "FormValidateError",
    "ObjectSchema",
    "RuleBinding",
    "RuleEvaluationError",
    "RuleOptions",
    "RuleRegistry",
    "ScalarKind",
    "ScalarSchema",
    "SchemaConfigurationError",
    "SchemaLoader",
    "SchemaNode",
    "SettingsError",
    "ValidationContext",
    "ValidatorSettings",
    "build_default_registry",
    "get_registry",
    "load_schema",
    "load_schema_file",
    "load_settings",
    "normalize_param",
    "validate",
    "validate_sync",
]
