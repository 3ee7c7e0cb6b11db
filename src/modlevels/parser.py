"""Parsing of module-level configuration strings.

Two input shapes are accepted:

    - A bare level, such as ``"info"``, which sets only the default level
    - A comma-separated list of ``module=level`` pairs, such as
      ``"module1=debug,module2=trace"``, optionally including ``default=...``

Parsing never fails. Unrecognized level tokens become ``warn``, and a string
that does not match the module-map grammar is validated as a single bare level.
"""

import re
from typing import Final

from .level_map import DEFAULT_KEY, LevelMap
from .log_levels import DEFAULT_LOG_LEVEL, LogLevel, validate_level

# Values may not contain "=" in any pair
LEVEL_MAP_PATTERN: Final = re.compile(r"[a-zA-Z0-9]+=[^,=]+(?:,[a-zA-Z0-9]+=[^,=]+)*")


def parse(raw: str | None) -> LevelMap:
    """Parse a configuration string into a level map.

    Args:
        raw: Configuration string, typically taken from an environment variable.
             ``None`` is treated as an empty string.

    Returns:
        LevelMap that always contains a ``default`` entry
    """
    if raw is None:
        raw = ""

    if LEVEL_MAP_PATTERN.fullmatch(raw):
        return LevelMap(_parse_module_levels(raw))

    return LevelMap({DEFAULT_KEY: validate_level(raw)})


def _parse_module_levels(raw: str) -> dict[str, LogLevel]:
    """Build the level entries of a string matching ``LEVEL_MAP_PATTERN``.

    Later pairs overwrite earlier ones with the same key, ``default`` included.
    A missing ``default`` is filled in with ``warn``.
    """
    levels: dict[str, LogLevel] = {}
    for pair in raw.split(","):
        key, _, value = pair.partition("=")
        levels[key] = validate_level(value)

    levels[DEFAULT_KEY] = validate_level(levels.get(DEFAULT_KEY, DEFAULT_LOG_LEVEL))
    return levels
