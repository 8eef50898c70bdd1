"""Logging utilities for form-validate.

All loggers are children of the ``form_validate`` logger, which only has a
NullHandler until an application calls setup_logging(). After that the
root owns a single QueueHandler, and a QueueListener thread forwards
records to a console handler and, when FORM_VALIDATE_LOG_DIR is set, a
rotating file handler.

Usage:
    >>> from form_validate.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Validating %s", title)  # Use %-style formatting

Rules for contributors:
    1. Always use: logger = get_logger(__name__)
    2. Never call logging.basicConfig()
    3. Never attach handlers to child loggers
    4. Never use f-strings in log calls
"""

from form_validate.logger.config import (
    update_logger_from_config as _update_config,
)
from form_validate.logger.formatters import (
    ColoredConsoleFormatter,
    HybridConsoleFormatter,
)
from form_validate.logger.handlers import ConfigurationError
from form_validate.logger.logger import (
    clear_logger_state,
    flush_all_handlers,
    get_logger,
    setup_logging,
)
from form_validate.logger.state import _state, get_state

__all__ = [
    "ColoredConsoleFormatter",
    "ConfigurationError",
    "HybridConsoleFormatter",
    "_state",  # For testing only
    "clear_logger_state",
    "flush_all_handlers",
    "get_logger",
    "get_state",
    "setup_logging",
    "update_logger_from_config",
]


def update_logger_from_config() -> None:
    """Apply handler levels from load_settings() to the running listener."""
    _update_config(get_state())
