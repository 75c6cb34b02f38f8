"""Tests for logging utilities."""

import logging
from io import StringIO

import pytest

from fdbench.logging import (
    configure_logging,
    get_logger,
    set_log_level,
)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    configure_logging(level=logging.WARNING)


def test_get_logger_returns_namespaced_logger():
    """Test that get_logger returns a logger under the fdbench namespace."""
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "fdbench.test_module"


def test_get_logger_keeps_package_names():
    assert get_logger("fdbench.experiments.sweep").name == "fdbench.experiments.sweep"
    assert get_logger().name == "fdbench"
    assert get_logger("fdbench") is get_logger()


def test_get_logger_caching():
    """Test that get_logger caches loggers."""
    logger1 = get_logger("test_module")
    logger2 = get_logger("test_module")
    assert logger1 is logger2


def test_get_logger_different_modules():
    logger1 = get_logger("module1")
    logger2 = get_logger("module2")
    assert logger1 is not logger2
    assert logger1.name != logger2.name


def test_configure_logging_redirects_output():
    stream = StringIO()
    configure_logging(level=logging.INFO, stream=stream)
    logger = get_logger("test_module")
    logger.info("Test message")
    logger.debug("hidden")

    output = stream.getvalue()
    assert "Test message" in output
    assert "fdbench.test_module" in output
    assert "hidden" not in output


def test_configure_logging_applies_to_new_loggers():
    stream = StringIO()
    configure_logging(level=logging.DEBUG, format_string="%(levelname)s|%(message)s", stream=stream)
    logger = get_logger("created_after_configure")
    logger.debug("late logger")
    assert "DEBUG|late logger" in stream.getvalue()


def test_set_log_level():
    logger = get_logger("test_module")

    set_log_level(logging.INFO)
    assert logger.level == logging.INFO

    set_log_level(logging.WARNING)
    assert logger.level == logging.WARNING


def test_set_log_level_string():
    """Test that set_log_level accepts string levels."""
    logger = get_logger("test_module")

    set_log_level("DEBUG")
    assert logger.level == logging.DEBUG

    set_log_level("error")
    assert logger.level == logging.ERROR


def test_logger_does_not_propagate():
    """Test that loggers don't propagate to root logger."""
    logger = get_logger("test_module")
    assert logger.propagate is False
