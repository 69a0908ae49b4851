"""Tests for logging setup."""

import logging

import pytest

from musicthread_feed.logging_config import setup_logging


@pytest.fixture(autouse=True)
def restore_loggers():
    names = ["musicthread_feed", "musicthread_feed.server", "httpx", "httpcore"]
    saved = {name: (logging.getLogger(name).level, list(logging.getLogger(name).handlers)) for name in names}
    yield
    for name, (level, handlers) in saved.items():
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.handlers[:] = handlers


class TestSetupLogging:
    def test_info_by_default(self):
        setup_logging()
        assert logging.getLogger("musicthread_feed").level == logging.INFO
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_debug(self):
        setup_logging(debug=True)
        assert logging.getLogger("musicthread_feed").level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.DEBUG

    def test_repeated_calls_do_not_stack_handlers(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger("musicthread_feed").handlers) == 1

    def test_access_log_can_be_silenced(self):
        setup_logging(access_log=False)
        assert logging.getLogger("musicthread_feed.server").level == logging.WARNING
