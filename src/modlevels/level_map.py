"""Lookup of effective log levels by module name.

A ``LevelMap`` is the result of parsing a module-level string. It always holds
a ``default`` entry, which is used for every module that was not configured
explicitly.
"""

from collections.abc import ItemsView, Iterator, KeysView, Mapping, ValuesView
from dataclasses import dataclass, field
from types import MappingProxyType

from .log_levels import DEFAULT_LOG_LEVEL, VALID_LOG_LEVELS, LogLevel, severity, validate_level

DEFAULT_KEY = "default"


@dataclass(frozen=True, slots=True)
class LevelMap:
    """Read-only mapping from module name to log level.

    Attributes:
        levels: Module name to level entries, including ``default``
    """

    levels: Mapping[str, LogLevel] = field(default_factory=lambda: {DEFAULT_KEY: DEFAULT_LOG_LEVEL})

    def __post_init__(self) -> None:
        """Validate and freeze the entries.

        Raises:
            ValueError: If ``default`` is missing or a level is invalid
        """
        if DEFAULT_KEY not in self.levels:
            msg = f"Level map must contain a {DEFAULT_KEY!r} entry"
            raise ValueError(msg)

        invalid = {key: level for key, level in self.levels.items() if level not in VALID_LOG_LEVELS}
        if invalid:
            msg = (
                f"Invalid logging level(s): {invalid!r}. "
                f"Must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}"
            )
            raise ValueError(msg)

        object.__setattr__(self, "levels", MappingProxyType(dict(self.levels)))

    @property
    def default(self) -> LogLevel:
        """Level applied to modules without an explicit entry."""
        return self.levels.get(DEFAULT_KEY, DEFAULT_LOG_LEVEL)

    @property
    def modules(self) -> dict[str, LogLevel]:
        """Explicitly configured modules, without the ``default`` entry."""
        return {key: level for key, level in self.levels.items() if key != DEFAULT_KEY}

    def get(self, module_name: str) -> LogLevel:
        """Resolve the effective level of a module.

        Falls back to the ``default`` entry, and to ``warn`` if even that
        is absent.

        Args:
            module_name: Name of the module to look up

        Returns:
            Effective log level for the module
        """
        return self.levels.get(module_name) or self.levels.get(DEFAULT_KEY) or DEFAULT_LOG_LEVEL

    def is_enabled(self, module_name: str, level: LogLevel) -> bool:
        """Check whether a message at ``level`` from a module should be emitted.

        Nothing is emitted for a module whose effective level is ``silent``,
        and ``silent`` itself is never a message level. The message level goes
        through ``validate_level``, so an unknown level counts as ``warn``.

        Args:
            module_name:    Name of the emitting module
            level:          Level of the message

        Returns:
            True if the message passes the module's effective level
        """
        threshold = self.get(module_name)
        level = validate_level(level)
        if threshold == "silent" or level == "silent":
            return False
        return severity(level) >= severity(threshold)

    def as_dict(self) -> dict[str, LogLevel]:
        """Return a plain, mutable copy of the entries."""
        return dict(self.levels)

    def keys(self) -> KeysView[str]:
        return self.levels.keys()

    def values(self) -> ValuesView[LogLevel]:
        return self.levels.values()

    def items(self) -> ItemsView[str, LogLevel]:
        return self.levels.items()

    def __getitem__(self, module_name: str) -> LogLevel:
        return self.levels[module_name]

    def __contains__(self, module_name: object) -> bool:
        return module_name in self.levels

    def __iter__(self) -> Iterator[str]:
        return iter(self.levels)

    def __len__(self) -> int:
        return len(self.levels)
