import logging

import pytest

from modlevels.log_levels import (
    DEFAULT_LOG_LEVEL,
    LOG_LEVELS,
    SILENT,
    TRACE,
    register_level_names,
    severity,
    to_stdlib_level,
    validate_level,
)


def test_levels_are_ordered_by_severity():
    assert LOG_LEVELS == ("trace", "debug", "info", "warn", "error", "fatal", "silent")
    assert [severity(level) for level in LOG_LEVELS] == list(range(7))


@pytest.mark.parametrize("level", LOG_LEVELS)
def test_validate_level_accepts_any_casing(level):
    assert validate_level(level) == level
    assert validate_level(level.upper()) == level
    assert validate_level(level.title()) == level


@pytest.mark.parametrize("token", ["", "bla", "warning", "critical", " info", "info ", "in fo", "ínfo"])
def test_validate_level_coerces_unknown_tokens_to_warn(token):
    assert validate_level(token) == DEFAULT_LOG_LEVEL == "warn"


def test_stdlib_levels_keep_severity_order():
    numeric = [to_stdlib_level(level) for level in LOG_LEVELS]
    assert numeric == sorted(numeric)
    assert to_stdlib_level("trace") == TRACE
    assert to_stdlib_level("warn") == logging.WARNING
    assert to_stdlib_level("fatal") == logging.CRITICAL
    assert to_stdlib_level("silent") == SILENT > logging.CRITICAL


def test_register_level_names():
    register_level_names()
    register_level_names()
    assert logging.getLevelName(TRACE) == "TRACE"
    assert logging.getLevelName(SILENT) == "SILENT"
