"""Centralized constants module for form-validate.

This module serves as the single source of truth for shared constants
across the form-validate codebase. Constants are organized by logical
categories and use typing.Final annotations to ensure immutability.

Usage:
    from form_validate.constants import REQUIRED_MESSAGE
"""

from typing import Final

# =============================================================================
# Error tree keys
# =============================================================================

KEY_MESSAGE: Final[str] = "message"
KEY_FORM_ERROR: Final[str] = "formError"
KEY_FIELD_ERRORS: Final[str] = "fieldErrors"
KEY_ITEM_ERRORS: Final[str] = "itemErrors"

# Child error map key per structural schema type
CHILD_ERROR_KEYS: Final[tuple[str, ...]] = (KEY_FIELD_ERRORS, KEY_ITEM_ERRORS)

# =============================================================================
# Schema document keys
# =============================================================================

SCHEMA_KEY_TYPE: Final[str] = "type"
SCHEMA_KEY_TITLE: Final[str] = "title"
SCHEMA_KEY_RULES: Final[str] = "rules"
SCHEMA_KEY_CHILDREN: Final[str] = "schema"

PARAM_KEY: Final[str] = "param"
PARAM_KEY_ERROR_MESSAGE: Final[str] = "errorMessage"
PARAM_KEY_FORM_ERROR: Final[str] = "formError"

TYPE_OBJECT: Final[str] = "object"
TYPE_ARRAY: Final[str] = "array"

# Scalar kind assumed for nodes that declare neither a type nor fields
DEFAULT_SCALAR_KIND: Final[str] = "string"

# =============================================================================
# Titles and messages
# =============================================================================

ROOT_TITLE_TEMPLATE: Final[str] = "Root {type}"
ITEM_TITLE_TEMPLATE: Final[str] = "{title}[{index}]"

REQUIRED_MESSAGE: Final[str] = "{title} is required"
MIN_MESSAGE: Final[str] = "{title} must not be less than {param}"
MAX_MESSAGE: Final[str] = "{title} must not be more than {param}"
MIN_LENGTH_MESSAGE: Final[str] = "{title} must have at least {param} {unit}"
MAX_LENGTH_MESSAGE: Final[str] = (
    "{title} must not have more than {param} {unit}"
)
MATCH_MESSAGE: Final[str] = "{title} does not match pattern {pattern}"

UNIT_CHARACTER: Final[str] = "character"
UNIT_ITEM: Final[str] = "item"

# =============================================================================
# Settings
# =============================================================================

SETTINGS_SECTION: Final[str] = "validation"

KEY_RULE_TIMEOUT: Final[str] = "rule_timeout"
KEY_LOG_LEVEL: Final[str] = "log_level"
KEY_CONSOLE_LOG_LEVEL: Final[str] = "console_log_level"

ENV_RULE_TIMEOUT: Final[str] = "FORM_VALIDATE_RULE_TIMEOUT"
ENV_LOG_LEVEL: Final[str] = "FORM_VALIDATE_LOG_LEVEL"
ENV_CONSOLE_LOG_LEVEL: Final[str] = "FORM_VALIDATE_CONSOLE_LOG_LEVEL"
ENV_LOG_DIR: Final[str] = "FORM_VALIDATE_LOG_DIR"

DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DEFAULT_CONSOLE_LOG_LEVEL: Final[str] = "WARNING"

VALID_LOG_LEVELS: Final[tuple[str, ...]] = (
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
)

# =============================================================================
# Logging
# =============================================================================

LOGGER_ROOT_NAME: Final[str] = "form_validate"
LOG_FILE_NAME: Final[str] = "form-validate.log"

LOG_ROTATION_THRESHOLD_BYTES: Final[int] = 10 * 1024 * 1024
LOG_BACKUP_COUNT: Final[int] = 5

LOG_CONSOLE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
LOG_CONSOLE_DATE_FORMAT: Final[str] = "%H:%M:%S"
LOG_FILE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(funcName)s:%(lineno)d] - %(message)s"
)
LOG_FILE_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

LOG_COLORS: Final[dict[str, str]] = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
    "RESET": "\033[0m",
}
