"""Shared fixtures resetting the global logging state between tests."""

import logging
from collections.abc import Iterator

import pytest
import structlog

from modlevels import factory


@pytest.fixture
def fresh_logging(monkeypatch) -> Iterator[None]:
    """Give each test an unconfigured ``modlevels`` and restore the root logger afterwards."""
    root_logger = logging.getLogger()
    saved_handlers = list(root_logger.handlers)
    saved_level = root_logger.level

    monkeypatch.setattr(factory, "_config_state", factory.ConfigurationState())
    structlog.reset_defaults()
    yield

    for handler in root_logger.handlers:
        if handler not in saved_handlers:
            handler.close()
    root_logger.handlers[:] = saved_handlers
    root_logger.setLevel(saved_level)
    structlog.reset_defaults()
