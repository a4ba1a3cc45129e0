"""
Pytest configuration and shared fixtures for logsmith tests.
"""

import io
import logging

import pytest
from rich.console import Console

from logsmith import Log, ObserverRegistry, global_observers


class FakeClock:
    """Manually advanced clock for stopwatch tests."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def clean_global_observers():
    """Keep handlers registered by one test out of the next."""
    yield
    global_observers.clear()


@pytest.fixture
def channel(request):
    """A stdlib logger unique to the test, at INFO, propagating to caplog."""
    logger = logging.getLogger(f"logsmith_tests.{request.node.name}")
    logger.setLevel(logging.INFO)
    yield logger
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def registry():
    """Stand-in for the process-wide observer registry."""
    return ObserverRegistry()


@pytest.fixture
def stdout():
    return Console(file=io.StringIO(), color_system=None, highlight=False, emoji=False)


@pytest.fixture
def stderr():
    return Console(file=io.StringIO(), color_system=None, highlight=False, emoji=False)


@pytest.fixture
def log(channel, registry, stdout, stderr):
    return Log(channel, observers=registry, stdout=stdout, stderr=stderr)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def restore_root_logger():
    """Restore root handlers and level after tests that configure logging."""
    root_logger = logging.getLogger()
    original_handlers = root_logger.handlers[:]
    original_level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers[:]:
        if handler not in original_handlers:
            handler.close()
    root_logger.handlers[:] = original_handlers
    root_logger.setLevel(original_level)
