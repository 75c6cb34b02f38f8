"""
Uniform 1D grid owning the simulated field.

The grid holds a double buffer: kernels read ``current``, write the next
state into ``scratch`` and call :meth:`Grid.swap`. Implicit schemes borrow
rows of ``work`` for their tridiagonal coefficients. All buffers are
allocated once in the constructor.
"""

from __future__ import annotations

import math

import numpy as np

from ..errors import ConfigurationError

# Rows of the implicit-solve workspace: sub, diag, sup, rhs, plus the
# solver's own scratch (modified super-diagonal, cyclic correction vectors).
WORK_ROWS = 8


def point_count(nx) -> int:
    """Validate a grid point count: a whole number, at least 3."""
    if isinstance(nx, bool):
        raise ConfigurationError(f"nx must be an integer, got {nx!r}.")
    try:
        value = float(nx)
    except (TypeError, ValueError):
        raise ConfigurationError(f"nx must be an integer, got {nx!r}.") from None
    if not math.isfinite(value) or not value.is_integer():
        raise ConfigurationError(f"nx must be an integer, got {nx!r}.")
    if value < 3:
        raise ConfigurationError("nx must be at least 3 to support three-point stencils.")
    return int(value)


class Grid:
    """
    ``nx`` samples over ``[0, length]`` with spacing ``dx = length / (nx - 1)``.

    Parameters
    ----------
    nx:
        Number of grid points including both edges; at least 3.
    length:
        Domain length ``L > 0``.
    """

    def __init__(self, nx: int, length: float = 1.0) -> None:
        nx = point_count(nx)
        length = float(length)
        if not math.isfinite(length) or length <= 0.0:
            raise ConfigurationError("length must be a positive finite number.")

        self.nx = nx
        self.length = length
        self.dx = length / (nx - 1)
        self.x = np.linspace(0.0, length, nx)
        self.x.setflags(write=False)

        self.current = np.zeros(nx, dtype=float)
        self.scratch = np.zeros(nx, dtype=float)
        self.work = np.zeros((WORK_ROWS, nx), dtype=float)

    @property
    def period(self) -> float:
        """Wrap length of a periodic domain: ``nx * dx`` (index ``nx`` is index 0)."""
        return self.nx * self.dx

    def swap(self) -> None:
        """Exchange ``current`` and ``scratch`` without copying."""
        self.current, self.scratch = self.scratch, self.current

    def load(self, values: np.ndarray) -> None:
        """Copy ``values`` into ``current``."""
        arr = np.asarray(values, dtype=float)
        if arr.shape != (self.nx,):
            raise ConfigurationError(
                f"field must have shape ({self.nx},), got {arr.shape}."
            )
        self.current[...] = arr

    def snapshot(self) -> np.ndarray:
        """Return a read-only copy of the current field."""
        out = self.current.copy()
        out.setflags(write=False)
        return out

    def __repr__(self) -> str:
        return f"Grid(nx={self.nx}, length={self.length}, dx={self.dx:.6g})"
