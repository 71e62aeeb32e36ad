"""
Environment configuration for cexpr.

The CEXPR_LOG_LEVEL environment variable selects how chatty the library
and CLI loggers are. The library itself never installs handlers; the CLI
calls configure_logging() once at startup.

Values:
    - debug: parse results and assignments are logged
    - info
    - warning (default)
    - error

Usage:
    from cexpr.core.environment import configure_logging, get_log_level

    configure_logging()                  # level from CEXPR_LOG_LEVEL
    configure_logging(LogLevel.DEBUG)    # explicit override
"""

from __future__ import annotations

import logging
import os
from enum import StrEnum


class LogLevel(StrEnum):
    """Supported log levels."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def numeric(self) -> int:
        return logging.getLevelNamesMapping()[self.value.upper()]


_DEFAULT_LEVEL = LogLevel.WARNING

CEXPR_LOG_LEVEL_VAR = "CEXPR_LOG_LEVEL"

_ALIASES = {
    "warn": LogLevel.WARNING,
    "err": LogLevel.ERROR,
}


def get_log_level() -> LogLevel:
    """Get the log level from CEXPR_LOG_LEVEL.

    Returns:
        LogLevel: The configured level. Defaults to warning if the variable
        is not set or invalid.

    Examples:
        >>> import os
        >>> os.environ["CEXPR_LOG_LEVEL"] = "debug"
        >>> get_log_level()
        <LogLevel.DEBUG: 'debug'>
    """
    env_value = os.environ.get(CEXPR_LOG_LEVEL_VAR, "").lower().strip()

    if not env_value:
        return _DEFAULT_LEVEL
    if env_value in _ALIASES:
        return _ALIASES[env_value]
    try:
        return LogLevel(env_value)
    except ValueError:
        logging.getLogger(__name__).warning(
            "Unknown CEXPR_LOG_LEVEL value '%s'. "
            "Valid values: debug, info, warning, error. Defaulting to warning.",
            env_value,
        )
        return _DEFAULT_LEVEL


def configure_logging(level: LogLevel | None = None) -> LogLevel:
    """Configure root logging for command-line use.

    Args:
        level: Explicit level; None means read CEXPR_LOG_LEVEL.

    Returns:
        LogLevel: The level that was applied.
    """
    if level is None:
        level = get_log_level()
    logging.basicConfig(
        level=level.numeric,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logging.getLogger("cexpr").setLevel(level.numeric)
    return level
