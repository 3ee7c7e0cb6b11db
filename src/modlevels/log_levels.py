"""Log level definitions, validation and standard library mapping."""

import logging
from typing import Final, Literal, get_args

LogLevel = Literal["trace", "debug", "info", "warn", "error", "fatal", "silent"]

# Ordered from most to least verbose
LOG_LEVELS: Final[tuple[LogLevel, ...]] = get_args(LogLevel)
VALID_LOG_LEVELS: Final = frozenset(LOG_LEVELS)
DEFAULT_LOG_LEVEL: Final[LogLevel] = "warn"

TRACE: Final = 5
SILENT: Final = logging.CRITICAL + 10

_STDLIB_LEVELS: Final[dict[str, int]] = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
    "silent": SILENT,
}


def validate_level(token: str) -> LogLevel:
    """Resolve a level token to a canonical log level.

    The token is lowercased but not trimmed, so ``" info"`` is not a match.
    Unrecognized tokens are coerced to the default level instead of failing.

    Args:
        token: Raw level token

    Returns:
        The matching log level, or ``DEFAULT_LOG_LEVEL`` if there is none
    """
    normalized = token.lower()
    if normalized in VALID_LOG_LEVELS:
        return normalized
    return DEFAULT_LOG_LEVEL


def severity(level: LogLevel) -> int:
    """Position of a level in severity order (trace is 0, silent is 6)."""
    return LOG_LEVELS.index(level)


def to_stdlib_level(level: LogLevel) -> int:
    """Map a log level onto the numeric levels of the ``logging`` module.

    ``silent`` maps above CRITICAL so that nothing passes it.
    """
    return _STDLIB_LEVELS[level]


def register_level_names() -> None:
    """Register the levels the standard library does not name itself."""
    logging.addLevelName(TRACE, "TRACE")
    logging.addLevelName(SILENT, "SILENT")
