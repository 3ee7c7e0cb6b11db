"""Factory module for applying module levels to the logging system.

This module provides the fluent interface that turns a module-level string into
a configured logging setup: the root logger gets the default level, and every
explicitly configured module gets a logger with its own level.

Logging can only be fully configured once. If a logger is requested before
that, a console-only fallback with default levels is installed.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Final

import structlog
from structlog.stdlib import BoundLogger

from .config import FileHandlerConfig, LogConfig
from .handlers import create_console_handler, create_file_handler, create_shared_processors
from .level_map import LevelMap
from .log_levels import LogLevel, register_level_names, to_stdlib_level, validate_level
from .parser import parse


@dataclass(frozen=True)
class RuntimeConfig:
    """Configuration as applied by ``LoggingBuilder.build``.

    Attributes:
        base_config:    Base configuration from TOML or defaults
        file_enabled:   Whether file output was requested
        file_path:      Optional path overriding the configured log file
    """

    base_config: LogConfig
    file_enabled: bool = False
    file_path: Path | None = None

    @property
    def file_config(self) -> FileHandlerConfig | None:
        """Effective file configuration, or None if file output is off."""
        file_config = self.base_config.file
        if self.file_path is not None:
            return file_config.with_path(self.file_path)

        if self.file_enabled or file_config.enabled:
            return file_config.enable()

        return None


class ConfigurationState:
    """Thread-safe holder of the global logging configuration.

    Attributes:
        _state:     Applied configuration, None until ``build`` runs
        _fallback:  Whether the console-only fallback has been installed
        _lock:      Guards modifications of the state
    """

    def __init__(self) -> None:
        self._state: RuntimeConfig | None = None
        self._fallback = False
        self._lock: Final = threading.Lock()

    def is_configured(self) -> bool:
        return self._state is not None

    def get_config(self) -> RuntimeConfig:
        """Get the applied configuration.

        Raises:
            RuntimeError: If logging hasn't been configured yet
        """
        if self._state is None:
            msg = (
                "Logging hasn't been configured. "
                "Call configure_logging() first or use default console-only logging."
            )
            raise RuntimeError(msg)
        return self._state

    def configure_once(
            self,
            config: RuntimeConfig,
            apply: Callable[[RuntimeConfig], None]
    ) -> None:
        """Apply and record the configuration.

        ``apply`` runs under the lock, so it cannot interleave with the
        console-only fallback.

        Args:
            config: Configuration to apply
            apply:  Function configuring the logging system

        Raises:
            RuntimeError: If logging has already been configured
        """
        with self._lock:
            if self.is_configured():
                msg = (
                    "Logging has already been configured. "
                    "configure_logging() should only be called once."
                )
                raise RuntimeError(msg)
            apply(config)
            self._state = config

    def install_fallback(self, apply: Callable[[], None]) -> None:
        """Run ``apply`` once, unless logging has been configured.

        Args:
            apply: Function installing the console-only configuration
        """
        with self._lock:
            if self._state is not None or self._fallback:
                return
            apply()
            self._fallback = True


# Global configuration state
_config_state: Final = ConfigurationState()


@dataclass
class LoggingBuilder:
    """Builder for module-level logging configuration.

    Attributes:
        _base_config:   Configuration being built
        _file_enabled:  Whether file output was requested
        _file_path:     Optional custom path for file output
    """

    _base_config: LogConfig
    _file_enabled: bool = False
    _file_path: Path | None = None

    @property
    def levels(self) -> LevelMap:
        return self._base_config.levels

    def with_levels(self, levels: str | LevelMap) -> "LoggingBuilder":
        """Replace the module levels.

        Args:
            levels: A module-level string such as ``"default=info,db=debug"``,
                    or an already parsed LevelMap

        Returns:
            Self for method chaining
        """
        level_map = levels if isinstance(levels, LevelMap) else parse(levels)
        self._base_config = self._base_config.with_levels(level_map)
        return self

    def with_module_level(self, module: str, level: LogLevel | str) -> "LoggingBuilder":
        """Set the level of a single module, overriding any earlier entry.

        Passing ``"default"`` as the module changes the default level.
        Unrecognized levels become ``warn``.

        Args:
            module: Module (logger) name
            level:  Level token

        Returns:
            Self for method chaining
        """
        entries = self.levels.as_dict()
        entries[module] = validate_level(level)
        self._base_config = self._base_config.with_levels(LevelMap(entries))
        return self

    def with_file(self, path: str | Path | None = None) -> "LoggingBuilder":
        """Enable file output, optionally at a custom path.

        Relative paths are resolved from the current working directory.

        Returns:
            Self for method chaining
        """
        self._file_enabled = True
        if path is not None:
            self._file_path = Path(path)
        return self

    def build(self) -> None:
        """Apply the configuration to structlog and the standard library.

        Can only be called once per process.

        Raises:
            RuntimeError: If logging has already been configured
        """
        config = RuntimeConfig(
            base_config=self._base_config,
            file_enabled=self._file_enabled,
            file_path=self._file_path,
        )
        _config_state.configure_once(config, _configure_logging)

        get_logger(__name__).info(
            "Logging configured",
            default=config.base_config.levels.default,
            modules=config.base_config.levels.modules,
        )


def configure_logging(
        levels: str | LevelMap | None = None,
        config_path: str | Path | None = None
) -> LoggingBuilder:
    """Start configuring module-level logging.

    Levels passed here take precedence over the ``levels`` key of the
    configuration file.

    Args:
        levels:         Optional module-level string or parsed LevelMap
        config_path:    Optional path to a TOML config file

    Returns:
        LoggingBuilder instance for method chaining
    """
    config = (
        LogConfig.from_toml(Path(config_path))
        if config_path is not None
        else LogConfig.create_default()
    )

    builder = LoggingBuilder(config)
    if levels is not None:
        builder.with_levels(levels)
    return builder


def get_logger(name: str | None = None) -> BoundLogger:
    """Get a structlog logger bound to the standard library.

    Installs the console-only fallback if logging hasn't been configured.

    Args:
        name: Optional logger name (typically __name__)

    Returns:
        BoundLogger instance
    """
    if not _config_state.is_configured():
        _config_state.install_fallback(_configure_console_only)
    return structlog.stdlib.get_logger(name)


def _configure_console_only() -> None:
    config = LogConfig.create_default()
    handler = create_console_handler(config.console, create_shared_processors())
    _configure_structlog()
    _configure_logging_system(config.levels, [handler])


def _configure_logging(config: RuntimeConfig) -> None:
    shared_processors = create_shared_processors()
    handlers = [create_console_handler(config.base_config.console, shared_processors)]

    if file_config := config.file_config:
        handlers.append(create_file_handler(file_config, shared_processors))

    _configure_structlog()
    _configure_logging_system(config.base_config.levels, handlers)


def _configure_structlog() -> None:
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *create_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _configure_logging_system(levels: LevelMap, handlers: list[logging.Handler]) -> None:
    """Apply a level map and handlers to the standard library loggers.

    The root logger carries the handlers and the default level. Existing
    loggers are reset so they propagate to the root and inherit its level,
    then each configured module gets its own level.

    Args:
        levels:     Module levels to apply
        handlers:   Handlers to attach to the root logger
    """
    register_level_names()

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(to_stdlib_level(levels.default))

    for logger in list(logging.Logger.manager.loggerDict.values()):
        if not isinstance(logger, logging.Logger):
            continue
        logger.handlers.clear()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)

    for module, level in levels.modules.items():
        logging.getLogger(module).setLevel(to_stdlib_level(level))
