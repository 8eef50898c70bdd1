"""Logging formatters for console output.

- ColoredConsoleFormatter: adds ANSI colour codes to the level name
- HybridConsoleFormatter: bare message for INFO, coloured line otherwise
"""

import logging

from form_validate.constants import LOG_COLORS


class ColoredConsoleFormatter(logging.Formatter):
    """Console formatter with ANSI colour support for log levels.

    The record's levelname is swapped for a coloured copy only for the
    duration of format(), so other handlers see the original record.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with a coloured level name.

        Args:
            record: The log record to format

        Returns:
            Formatted log message

        """
        color = LOG_COLORS.get(record.levelname)
        if color is None:
            return super().format(record)

        original_levelname = record.levelname
        record.levelname = f"{color}{original_levelname}{LOG_COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname


class HybridConsoleFormatter(logging.Formatter):
    """Console formatter with plain INFO lines and structured others.

    Example Output:
        INFO:     "Validated 3 fields"
        WARNING:  "12:30:45 - form_validate.engine - WARNING - ..."
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
    ) -> None:
        """Initialize hybrid formatter.

        Args:
            fmt: Format string for non-INFO records
            datefmt: Date format string for timestamps

        """
        super().__init__(fmt, datefmt)
        self._colored_formatter = ColoredConsoleFormatter(fmt, datefmt)

    def format(self, record: logging.LogRecord) -> str:
        """Format the record according to its level."""
        if record.levelno == logging.INFO:
            return record.getMessage()
        return self._colored_formatter.format(record)
