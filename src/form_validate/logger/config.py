"""Level and destination settings for the logging system.

Bootstrap values come from constants and the environment so the logger can
be created while the settings module is still importing. Settings file
levels are applied afterwards via update_logger_from_config().
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from form_validate.constants import (
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    ENV_LOG_DIR,
    LOG_FILE_NAME,
)

if TYPE_CHECKING:
    from form_validate.logger.state import _LoggerState


def load_log_settings() -> tuple[str, str, Path | None]:
    """Load default console level, file level and log file path.

    File logging is only enabled when FORM_VALIDATE_LOG_DIR is set.

    Returns:
        Tuple of (console_level, file_level, log_path) where log_path is
        None when no log directory is configured.

    """
    env_log_dir = os.getenv(ENV_LOG_DIR)
    log_path = (
        Path(env_log_dir).expanduser() / LOG_FILE_NAME if env_log_dir else None
    )
    return DEFAULT_CONSOLE_LOG_LEVEL, DEFAULT_LOG_LEVEL, log_path


def update_logger_from_config(state: "_LoggerState") -> None:
    """Update handler levels from the validator settings.

    Only updates handler levels, never adds or removes handlers.

    Args:
        state: Logger state object (from logger.state module)

    Note:
        Settings errors are ignored here; load_settings() itself still
        raises for callers that ask for settings directly.

    """
    # Import here to avoid circular dependency
    from form_validate.config import load_settings  # noqa: PLC0415
    from form_validate.exceptions import SettingsError  # noqa: PLC0415

    try:
        settings = load_settings()
    except SettingsError:
        return

    console_level = getattr(
        logging, settings.console_log_level, logging.WARNING
    )
    file_level = getattr(logging, settings.log_level, logging.INFO)

    if state.queue_listener is not None:
        for handler in state.queue_listener.handlers:
            if isinstance(handler, RotatingFileHandler):
                handler.setLevel(file_level)
            elif isinstance(handler, logging.StreamHandler):
                handler.setLevel(console_level)
