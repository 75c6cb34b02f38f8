"""Logging helpers for the fdbench harness layer.

Loggers live under the ``fdbench.`` namespace, write to stderr and do not
propagate to the root logger. The initial level comes from the
``FDBENCH_LOG_LEVEL`` environment variable (default ``WARNING``).

The numerical core in :mod:`fdbench.pde` never logs; only the benchmark and
sweep drivers in :mod:`fdbench.experiments` do.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, TextIO

_LOG_LEVEL_ENV_VAR = "FDBENCH_LOG_LEVEL"
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def _coerce_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.strip().upper(), logging.WARNING)
    return int(level)


_DEFAULT_LEVEL = _coerce_level(os.getenv(_LOG_LEVEL_ENV_VAR, "WARNING"))
_DEFAULT_STREAM: Optional[TextIO] = None
_DEFAULT_FORMATTER = logging.Formatter(_DEFAULT_FORMAT)

_loggers: dict[str, logging.Logger] = {}


def _make_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(_DEFAULT_STREAM or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_DEFAULT_FORMATTER)
    return handler


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the cached fdbench logger for ``name``.

    Args:
        name: Usually ``__name__`` of the calling module. Names outside the
            ``fdbench`` namespace are prefixed with ``fdbench.``. ``None``
            returns the package logger.

    Returns:
        A configured :class:`logging.Logger`.

    Example:
        >>> from fdbench.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("sweep finished")
    """
    if name is None or name == "fdbench":
        logger_name = "fdbench"
    elif name.startswith("fdbench."):
        logger_name = name
    else:
        logger_name = f"fdbench.{name}"

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)
        logger.addHandler(_make_handler(_DEFAULT_LEVEL))
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the level of every fdbench logger, existing and future.

    Args:
        level: A :mod:`logging` level constant or its name (``"DEBUG"``,
            ``"INFO"``, ...). Unknown names fall back to ``WARNING``.
    """
    global _DEFAULT_LEVEL
    level = _coerce_level(level)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)

    _DEFAULT_LEVEL = level


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Reconfigure level, format and output stream of all fdbench loggers.

    Existing handlers are replaced. Typically called once by the application
    that drives the benchmarks.

    Args:
        level: Logging level (default ``WARNING``).
        format_string: Format for records; defaults to
            ``"[%(levelname)s] %(name)s: %(message)s"``.
        stream: Destination stream (default ``sys.stderr``).
    """
    global _DEFAULT_LEVEL, _DEFAULT_STREAM, _DEFAULT_FORMATTER
    _DEFAULT_LEVEL = _coerce_level(level)
    _DEFAULT_STREAM = stream
    _DEFAULT_FORMATTER = logging.Formatter(format_string or _DEFAULT_FORMAT)

    for logger in _loggers.values():
        logger.setLevel(_DEFAULT_LEVEL)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        logger.addHandler(_make_handler(_DEFAULT_LEVEL))


__all__ = ["get_logger", "set_log_level", "configure_logging"]
