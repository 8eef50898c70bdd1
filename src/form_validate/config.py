"""Validator settings loaded from an INI file and the environment.

Example settings file::

    [validation]
    rule_timeout = 2.5      # seconds, empty for no limit
    log_level = DEBUG
    console_log_level = WARNING

Environment variables override file values:
FORM_VALIDATE_RULE_TIMEOUT, FORM_VALIDATE_LOG_LEVEL and
FORM_VALIDATE_CONSOLE_LOG_LEVEL.
"""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass
from pathlib import Path

from form_validate.constants import (
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    ENV_CONSOLE_LOG_LEVEL,
    ENV_LOG_LEVEL,
    ENV_RULE_TIMEOUT,
    KEY_CONSOLE_LOG_LEVEL,
    KEY_LOG_LEVEL,
    KEY_RULE_TIMEOUT,
    SETTINGS_SECTION,
    VALID_LOG_LEVELS,
)
from form_validate.exceptions import SettingsError


@dataclass(slots=True, frozen=True)
class ValidatorSettings:
    """Runtime settings for the validation engine.

    Attributes:
        rule_timeout: Seconds an asynchronous evaluator may take before the
            call fails with RuleEvaluationError; None disables the limit.
        log_level: Level for the rotating file handler.
        console_log_level: Level for the console handler.

    """

    rule_timeout: float | None = None
    log_level: str = DEFAULT_LOG_LEVEL
    console_log_level: str = DEFAULT_CONSOLE_LOG_LEVEL


def _parse_timeout(raw: str, source: str) -> float | None:
    raw = raw.strip()
    if not raw or raw.lower() == "none":
        return None
    try:
        timeout = float(raw)
    except ValueError as e:
        msg = f"{KEY_RULE_TIMEOUT} must be a number, got '{raw}'"
        raise SettingsError(msg, target=source) from e
    if timeout <= 0:
        msg = f"{KEY_RULE_TIMEOUT} must be positive, got {timeout}"
        raise SettingsError(msg, target=source)
    return timeout


def _parse_level(raw: str, key: str, source: str) -> str:
    level = raw.strip().upper()
    if level not in VALID_LOG_LEVELS:
        msg = f"{key} must be one of {', '.join(VALID_LOG_LEVELS)}, got '{raw}'"
        raise SettingsError(msg, target=source)
    return level


def _read_settings_file(path: Path) -> dict[str, str]:
    parser = configparser.ConfigParser(
        inline_comment_prefixes=("#", ";"),
        interpolation=None,
    )
    try:
        with path.open(encoding="utf-8") as f:
            parser.read_file(f)
    except (OSError, configparser.Error) as e:
        msg = f"Cannot read settings file: {e}"
        raise SettingsError(msg, target=str(path)) from e

    if not parser.has_section(SETTINGS_SECTION):
        return {}
    return dict(parser.items(SETTINGS_SECTION))


def load_settings(path: Path | None = None) -> ValidatorSettings:
    """Load validator settings.

    Args:
        path: Optional INI settings file. A missing file is not an error.

    Returns:
        ValidatorSettings with file values and environment overrides applied

    Raises:
        SettingsError: If the file cannot be parsed or a value is invalid

    """
    raw: dict[str, str] = {}
    if path is not None and path.exists():
        raw.update(_read_settings_file(path))
    source = str(path) if path is not None else "environment"

    for key, env_name in (
        (KEY_RULE_TIMEOUT, ENV_RULE_TIMEOUT),
        (KEY_LOG_LEVEL, ENV_LOG_LEVEL),
        (KEY_CONSOLE_LOG_LEVEL, ENV_CONSOLE_LOG_LEVEL),
    ):
        env_value = os.getenv(env_name)
        if env_value is not None:
            raw[key] = env_value

    return ValidatorSettings(
        rule_timeout=_parse_timeout(raw.get(KEY_RULE_TIMEOUT, ""), source),
        log_level=_parse_level(
            raw.get(KEY_LOG_LEVEL, DEFAULT_LOG_LEVEL), KEY_LOG_LEVEL, source
        ),
        console_log_level=_parse_level(
            raw.get(KEY_CONSOLE_LOG_LEVEL, DEFAULT_CONSOLE_LOG_LEVEL),
            KEY_CONSOLE_LOG_LEVEL,
            source,
        ),
    )
