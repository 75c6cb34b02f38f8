"""
Field diagnostics shared by the run controller and the tests.

Besides the field checks this module owns the debug switch. With debug on,
the run controller also calls :func:`assert_edges` after every step. The
switch starts from the ``FDBENCH_DEBUG`` environment variable.
"""

from __future__ import annotations

import math
import os
from contextlib import contextmanager
from typing import Iterator, Optional

import numpy as np

from ..errors import NumericalError

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_debug = {"enabled": os.getenv("FDBENCH_DEBUG", "").strip().lower() in _TRUTHY}


def is_debug_enabled() -> bool:
    return _debug["enabled"]


def set_debug_enabled(enabled: bool) -> bool:
    """Switch debug checks on or off; return the previous setting."""
    previous = _debug["enabled"]
    _debug["enabled"] = bool(enabled)
    return previous


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Run a block with debug checks switched to ``enabled``.

    Example
    -------
    >>> with debug_context():
    ...     outcome = run_simulation(config)  # doctest: +SKIP
    """
    previous = set_debug_enabled(enabled)
    try:
        yield
    finally:
        set_debug_enabled(previous)


def is_finite_field(field: np.ndarray) -> bool:
    """
    Return True if every sample of ``field`` is finite.

    The cheap path sums the field first; only when the sum is not finite is
    the element-wise check performed, so a healthy field costs one reduction.
    """
    if math.isfinite(float(np.sum(field))):
        return True
    return bool(np.isfinite(field).all())


def assert_finite(field: np.ndarray, *, step: Optional[int] = None) -> None:
    """
    Raise :class:`NumericalError` if ``field`` holds NaN or infinite values.

    Parameters
    ----------
    field:
        1D array of samples.
    step:
        Optional step index reported in the error message.
    """
    if is_finite_field(field):
        return
    bad = np.flatnonzero(~np.isfinite(field))
    raise NumericalError(
        f"non-finite value in field at index {int(bad[0])} "
        f"({bad.size} of {field.size} samples affected)",
        step=step,
    )


def assert_edges(
    field: np.ndarray, left: float, right: float, *, step: Optional[int] = None
) -> None:
    """Raise :class:`NumericalError` unless the edge samples equal ``left`` and ``right`` exactly."""
    if field[0] != left or field[-1] != right:
        raise NumericalError(
            f"edge values ({field[0]!r}, {field[-1]!r}) differ from "
            f"the pinned values ({left!r}, {right!r})",
            step=step,
        )


def field_mass(field: np.ndarray, dx: float = 1.0) -> float:
    """Return ``dx * sum(field)``, the discrete integral of the field."""
    return float(dx) * float(np.sum(field))


def total_variation(field: np.ndarray) -> float:
    """Return ``sum |field[i+1] - field[i]|``."""
    arr = np.asarray(field, dtype=float)
    if arr.ndim != 1:
        raise ValueError("total_variation expects a 1D array.")
    return float(np.sum(np.abs(np.diff(arr))))
