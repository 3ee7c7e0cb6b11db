"""Per-module log levels from a single configuration string.

This package parses compact level strings such as ``"module1=debug,module2=trace"``
into a lookup of effective log levels, and can apply that lookup to structlog and
the Python standard library logging.

Key Features:
    - Bare levels (``"info"``) or comma-separated ``module=level`` pairs
    - Case-insensitive level names: trace, debug, info, warn, error, fatal, silent
    - Parsing never fails: unknown levels and malformed strings fall back to ``warn``
    - A ``default`` level is always present and used for unconfigured modules
    - Optional integration with structlog and ``logging`` (console and rotating file output)

Basic Usage:
    ```python
    import os

    from modlevels import parse

    levels = parse(os.environ.get("LOG_LEVEL", ""))
    levels.get("database")                   # level configured for "database", or the default
    levels.is_enabled("database", "debug")   # whether a debug message should be emitted
    ```

    Applying the levels to the logging system:

    ```python
    from modlevels import configure_logging, get_logger

    configure_logging("default=info,database=debug").with_file("logs/app.log").build()
    logger = get_logger("database")
    logger.debug("Connection opened", host="localhost")
    ```

Input Grammar:
    ```
    config      := bare-level | module-map
    module-map  := pair ("," pair)*
    pair        := key "=" value       ; key is [A-Za-z0-9]+, value has no "," or "="
    ```

    Anything that is not a module map is read as a single bare level. Later
    pairs override earlier ones, and a missing ``default`` means ``warn``.

Configuration:
    Handler settings and the level string can also come from a TOML file:

    ```toml
    [logging]
    levels = "default=info,database=debug"

    [logging.file]
    path = "logs/app.log"
    max_size = 10485760  # 10MB
    backup_count = 5

    [logging.console]
    colors = true
    rich_tracebacks = true
    ```
"""

from .config import LogConfig
from .factory import configure_logging, get_logger
from .level_map import LevelMap
from .log_levels import DEFAULT_LOG_LEVEL, LOG_LEVELS, LogLevel, validate_level
from .parser import parse

__all__ = [
    "DEFAULT_LOG_LEVEL",
    "LOG_LEVELS",
    "LevelMap",
    "LogConfig",
    "LogLevel",
    "configure_logging",
    "get_logger",
    "parse",
    "validate_level",
]
