"""Public logging API.

- setup_logging(): wire the package root logger once (application opt-in)
- get_logger(): module logger; never installs handlers
- flush_all_handlers(): drain the queue and flush handlers
- clear_logger_state(): reset everything (tests only)
"""

import atexit
import contextlib
import logging
import time
from pathlib import Path

from form_validate.constants import LOGGER_ROOT_NAME
from form_validate.logger.config import load_log_settings
from form_validate.logger.handlers import setup_root_logger
from form_validate.logger.state import get_state

_FLUSH_TIMEOUT_SECONDS = 5.0


def flush_all_handlers() -> None:
    """Wait for queued records to be dequeued and flush every handler."""
    state = get_state()
    if state.queue_listener is None or state.log_queue is None:
        return

    # QueueListener doesn't use task_done(), so poll the queue
    start_time = time.monotonic()
    while not state.log_queue.empty():
        if time.monotonic() - start_time > _FLUSH_TIMEOUT_SECONDS:
            break
        time.sleep(0.01)

    # Records may be dequeued but not yet handled
    time.sleep(0.05)

    for handler in state.queue_listener.handlers:
        with contextlib.suppress(OSError, ValueError):
            handler.flush()


def _cleanup_logging() -> None:
    """Stop the QueueListener on interpreter exit."""
    state = get_state()
    if state.queue_listener is not None:
        flush_all_handlers()
        state.queue_listener.stop()
        state.queue_listener = None


atexit.register(_cleanup_logging)


def _install_null_handler() -> None:
    """Give the package root a NullHandler and let records propagate."""
    root_logger = logging.getLogger(LOGGER_ROOT_NAME)
    root_logger.propagate = True
    if not any(
        isinstance(handler, logging.NullHandler)
        for handler in root_logger.handlers
    ):
        root_logger.addHandler(logging.NullHandler())


_install_null_handler()


def setup_logging(
    name: str = LOGGER_ROOT_NAME,
    console_level: str | None = None,
    file_level: str | None = None,
    log_file: Path | None = None,
) -> logging.Logger:
    """Configure logging and return the named logger.

    Only applications call this. It takes over the package root logger:
    records stop propagating to the host's handlers and go through the
    QueueListener instead. The root is initialised exactly once.

    Args:
        name: Logger name, typically __name__
        console_level: Console log level ("DEBUG", "INFO", "WARNING", ...)
        file_level: File log level
        log_file: Path to log file; defaults to FORM_VALIDATE_LOG_DIR

    Returns:
        Logger instance

    Raises:
        ConfigurationError: If file logging setup fails

    """
    state = get_state()
    with state.lock:
        if not state.root_initialized:
            cfg_console, cfg_file, cfg_path = load_log_settings()
            setup_root_logger(
                state,
                console_level or cfg_console,
                file_level or cfg_file,
                log_file or cfg_path,
            )

    return logging.getLogger(name)


def get_logger(name: str = LOGGER_ROOT_NAME) -> logging.Logger:
    """Get a logger inside the form_validate hierarchy.

    No handlers are installed; until setup_logging() is called, records
    propagate to whatever logging the host application configured.

    Usage:
        >>> logger = get_logger(__name__)
        >>> logger.debug("Rule %s failed for %s", rule_name, title)

    Args:
        name: Logger name, typically __name__

    Returns:
        Logger instance

    """
    return logging.getLogger(name)


def clear_logger_state() -> None:
    """Stop the listener, drop handlers and restore library defaults.

    Intended for test teardown only.
    """
    state = get_state()
    with state.lock:
        if state.queue_listener is not None:
            flush_all_handlers()
            state.queue_listener.stop()
            state.queue_listener = None

        state.log_queue = None
        state.root_initialized = False

        root_logger = logging.getLogger(LOGGER_ROOT_NAME)
        for handler in root_logger.handlers[:]:
            handler.close()
            root_logger.removeHandler(handler)
        root_logger.setLevel(logging.NOTSET)

    _install_null_handler()
