"""Tests for logging setup."""

import logging

from rich.logging import RichHandler

from ts_expect_error.logging_config import get_logger, setup_logging


def test_levels():
    assert setup_logging("verbose").level == logging.DEBUG
    assert setup_logging("normal").level == logging.WARNING
    assert setup_logging("quiet").level == logging.ERROR


def test_rich_handler_installed():
    setup_logging()
    assert any(isinstance(h, RichHandler) for h in logging.getLogger().handlers)


def test_log_file(tmp_path):
    log_file = tmp_path / "run.log"
    setup_logging("verbose", log_file=str(log_file))
    get_logger("tests").debug("hello from the test")
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "hello from the test" in log_file.read_text(encoding="utf-8")
    setup_logging()


def test_get_logger_namespacing():
    assert get_logger().name == "ts_expect_error"
    assert get_logger("ts_expect_error.walker").name == "ts_expect_error.walker"
    assert get_logger("custom").name == "ts_expect_error.custom"
