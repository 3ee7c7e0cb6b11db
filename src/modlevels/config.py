"""Configuration handling for module-level logging.

This module provides the configuration classes used when applying a level map
to the logging system, and the TOML loading of those settings. The module
levels themselves are kept as a configuration string and go through the same
never-failing parser as any other input.
"""

import os
from dataclasses import dataclass, field, replace
from pathlib import Path

import tomllib

from .level_map import LevelMap
from .parser import parse

DEFAULT_MAX_SIZE = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5


@dataclass(frozen=True, slots=True)
class FileHandlerConfig:
    """Configuration for file-based logging output.

    Attributes:
        path:           Path to the log file
        max_size:       Maximum size of the log file in bytes before rotating
        backup_count:   Number of rotated files to keep
        encoding:       Character encoding for the log file (default: utf-8)
        enabled:        Enable file-based logging (default: False)
    """

    path: Path
    max_size: int = DEFAULT_MAX_SIZE
    backup_count: int = DEFAULT_BACKUP_COUNT
    encoding: str = "utf-8"
    enabled: bool = field(default=False)

    def __post_init__(self) -> None:
        """Validate configuration values after initialization.

        Raises:
            ValueError: If max_size is not positive or backup_count is negative
        """
        if self.max_size <= 0:
            msg = "max_size must be a positive integer (bytes)"
            raise ValueError(msg)

        if self.backup_count < 0:
            msg = "backup_count must be a non-negative integer"
            raise ValueError(msg)

    def with_path(self, new_path: Path) -> "FileHandlerConfig":
        """Create an enabled copy writing to another path.

        Raises:
            ValueError: If the parent directory exists but is not writable
        """
        parent = (new_path if new_path.is_absolute() else Path.cwd() / new_path).parent
        if parent.exists() and not os.access(parent, os.W_OK):
            msg = f"Log directory is not writable: {parent}"
            raise ValueError(msg)

        return replace(self, path=new_path, enabled=True)

    def enable(self) -> "FileHandlerConfig":
        return replace(self, enabled=True)


@dataclass(frozen=True, slots=True)
class ConsoleHandlerConfig:
    """Configuration for console-based logging output.

    Attributes:
        colors:             Colored output (requires 'colorama' on Windows)
        rich_tracebacks:    Render exceptions with 'rich'
    """

    colors: bool = True
    rich_tracebacks: bool = True


@dataclass(frozen=True, slots=True)
class LogConfig:
    """Complete logging configuration settings.

    Attributes:
        levels:     Per-module levels, including the default level
        file:       File output settings
        console:    Console output settings
    """

    levels: LevelMap
    file: FileHandlerConfig
    console: ConsoleHandlerConfig

    @classmethod
    def from_toml(cls, config_path: Path) -> "LogConfig":
        """Create LogConfig instance from a TOML configuration file.

        The expected layout is::

            [logging]
            levels = "default=info,database=debug"

            [logging.file]
            path = "logs/app.log"
            max_size = 10485760
            backup_count = 5

            [logging.console]
            colors = true
            rich_tracebacks = true

        All sections and keys are optional, except that ``path`` is required
        once a ``[logging.file]`` table is present.

        Args:
            config_path: Path to the TOML configuration file

        Returns:
            Configured LogConfig instance

        Raises:
            FileNotFoundError:  If the configuration file doesn't exist
            TOMLDecodeError:    If the TOML file is malformed
            ValueError:         If a value has the wrong type or is out of range
        """
        config_data = cls._load_toml(config_path)

        try:
            return cls._parse_config(config_data.get("logging", {}))

        except KeyError as e:
            msg = f"Missing required configuration key: {e.args[0]}"
            raise ValueError(msg) from e

        except (TypeError, ValueError) as e:
            msg = f"Invalid value in configuration file: {e!s}"
            raise ValueError(msg) from e

    @staticmethod
    def _load_toml(config_path: Path) -> dict:
        try:
            with config_path.open("rb") as f:
                return tomllib.load(f)

        except FileNotFoundError as e:
            msg = f"Configuration file not found: {config_path}"
            raise FileNotFoundError(msg) from e

    @classmethod
    def _parse_config(cls, logging_config: dict) -> "LogConfig":
        levels = logging_config.get("levels", "")
        if not isinstance(levels, str):
            msg = f"'levels' must be a string, got {type(levels).__name__}"
            raise TypeError(msg)

        return cls(
            levels=parse(levels),
            file=cls._create_file_config(logging_config.get("file", {})),
            console=cls._create_console_config(logging_config.get("console", {})),
        )

    @staticmethod
    def _create_file_config(file_config: dict) -> FileHandlerConfig:
        """Create a FileHandlerConfig from the configuration dictionary.

        File output stays disabled when the section is missing.
        """
        if not file_config:
            return FileHandlerConfig(path=Path("logs/app.log"))

        return FileHandlerConfig(
            path=Path(file_config["path"]),
            max_size=int(file_config.get("max_size", DEFAULT_MAX_SIZE)),
            backup_count=int(file_config.get("backup_count", DEFAULT_BACKUP_COUNT)),
            encoding=file_config.get("encoding", "utf-8"),
            enabled=True,
        )

    @staticmethod
    def _create_console_config(console_config: dict) -> ConsoleHandlerConfig:
        options = {key: console_config.get(key, True) for key in ("colors", "rich_tracebacks")}
        for key, value in options.items():
            if not isinstance(value, bool):
                msg = f"'{key}' must be a boolean, got {type(value).__name__}"
                raise TypeError(msg)

        return ConsoleHandlerConfig(**options)

    @classmethod
    def create_default(cls, log_dir: Path = Path("logs")) -> "LogConfig":
        """Create a default LogConfig instance.

        The default is ``warn`` for every module, colored console output with
        rich tracebacks, and file logging disabled.

        Args:
            log_dir: Directory where log files will be stored if enabled

        Returns:
            LogConfig instance with default settings
        """
        return cls(
            levels=LevelMap(),
            file=FileHandlerConfig(path=log_dir / "app.log"),
            console=ConsoleHandlerConfig(),
        )

    def with_levels(self, levels: LevelMap) -> "LogConfig":
        return replace(self, levels=levels)
