"""Handler creation for module-level logging output.

Console and file handlers share one processor chain, so records from structlog
loggers and from plain ``logging`` loggers are rendered the same way. Level
names are rendered in the vocabulary of ``LogLevel`` ("warn", "fatal").
"""

import logging
import logging.handlers
import sys
from typing import Final

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from .config import ConsoleHandlerConfig, FileHandlerConfig

TIMESTAMP_FORMAT: Final = "%Y-%m-%d %H:%M:%S"

_LEVEL_ALIASES: Final = {
    "warning": "warn",
    "critical": "fatal",
}


def normalize_level_name(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    """Rename standard library level names to their ``LogLevel`` equivalents."""
    level = event_dict.get("level")
    if level in _LEVEL_ALIASES:
        event_dict["level"] = _LEVEL_ALIASES[level]
    return event_dict


def create_shared_processors() -> list[Processor]:
    """Create the processors shared by structlog and foreign log records.

    Returns:
        List of structlog processors for both console and file output
    """
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        normalize_level_name,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt=TIMESTAMP_FORMAT, utc=False),
    ]


def create_console_handler(
        config: ConsoleHandlerConfig,
        shared_processors: list[Processor]
) -> logging.Handler:
    """Create a stdout handler rendering with structlog's console renderer.

    Args:
        config:             Console handler configuration settings
        shared_processors:  Shared structlog processors

    Returns:
        Configured StreamHandler instance
    """
    renderer = structlog.dev.ConsoleRenderer(
        colors=config.colors,
        exception_formatter=(
            structlog.dev.rich_traceback if config.rich_tracebacks
            else structlog.dev.plain_traceback
        ),
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_create_formatter(shared_processors, renderer))
    return handler


def create_file_handler(
        config: FileHandlerConfig,
        shared_processors: list[Processor]
) -> logging.Handler:
    """Create a size-rotated file handler writing one JSON object per line.

    The parent directory is created if needed.

    Args:
        config:             File handler configuration settings
        shared_processors:  Shared structlog processors

    Returns:
        Configured RotatingFileHandler instance
    """
    config.path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        filename=config.path,
        maxBytes=config.max_size,
        backupCount=config.backup_count,
        encoding=config.encoding,
    )
    handler.setFormatter(
        _create_formatter(
            shared_processors,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        )
    )
    return handler


def _create_formatter(
        shared_processors: list[Processor],
        *renderers: Processor
) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *renderers,
        ],
    )
