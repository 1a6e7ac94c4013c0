"""Unit tests for src/core/logging_config.py"""

import logging
from typing import Generator

import pytest

from src.core.logging_config import configure_logging
from src.rules import game
from src.rules.position import Position


@pytest.fixture
def clean_root_logger() -> Generator[logging.Logger, None, None]:
    """Detach (and afterwards restore) whatever handlers the test runner installed"""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = logging.getLogger("src").level
    root.handlers.clear()
    try:
        yield root
    finally:
        root.handlers[:] = saved_handlers
        logging.getLogger("src").setLevel(saved_level)


def test_handler_is_attached_once(clean_root_logger: logging.Logger) -> None:
    configure_logging("DEBUG")
    configure_logging("DEBUG")
    assert len(clean_root_logger.handlers) == 1


def test_level_applies_to_application_loggers(clean_root_logger: logging.Logger) -> None:
    configure_logging(logging.WARNING)
    assert logging.getLogger("src").level == logging.WARNING
    assert logging.getLogger("src.rules.executor").getEffectiveLevel() == logging.WARNING


def test_executor_logs_status_changes(caplog: pytest.LogCaptureFixture) -> None:
    state = game.initialize()
    with caplog.at_level(logging.INFO, logger="src.rules"):
        game.make_move(state, Position.from_algebraic("e2"), Position.from_algebraic("e4"))
    assert "Game status changed: waiting -> active" in caplog.text
