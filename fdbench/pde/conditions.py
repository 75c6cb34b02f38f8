"""
Initial conditions and grid initialisation.

Each variant is a frozen dataclass with an ``evaluate(x, length)`` method that
returns the field at ``t = 0``. The analytic variants are also used by
:mod:`fdbench.pde.reference` to build exact solutions.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple, Union

import numpy as np

from ..errors import ConfigurationError
from .grid import Grid


def _finite(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise ConfigurationError(f"{name} must be finite, got {value!r}.")
    return value


@dataclass(frozen=True)
class Gaussian:
    """``amplitude * exp(-(x - center)^2 / (2 width^2))``."""

    center: float
    width: float
    amplitude: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", _finite("center", self.center))
        object.__setattr__(self, "amplitude", _finite("amplitude", self.amplitude))
        width = _finite("width", self.width)
        if width <= 0.0:
            raise ConfigurationError("Gaussian width must be positive.")
        object.__setattr__(self, "width", width)

    def evaluate(self, x: np.ndarray, length: float) -> np.ndarray:
        x = np.asarray(x, dtype=float)
        return self.amplitude * np.exp(-((x - self.center) ** 2) / (2.0 * self.width**2))


@dataclass(frozen=True)
class Sine:
    """``amplitude * sin(2 pi frequency x / L)``; ``frequency`` counts periods per domain."""

    frequency: float
    amplitude: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "frequency", _finite("frequency", self.frequency))
        object.__setattr__(self, "amplitude", _finite("amplitude", self.amplitude))

    def wavenumber(self, length: float) -> float:
        return 2.0 * math.pi * self.frequency / float(length)

    def evaluate(self, x: np.ndarray, length: float) -> np.ndarray:
        x = np.asarray(x, dtype=float)
        return self.amplitude * np.sin(self.wavenumber(length) * x)


@dataclass(frozen=True)
class Step:
    """``left_value`` for ``x < location``, ``right_value`` otherwise."""

    location: float
    left_value: float = 1.0
    right_value: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "location", _finite("location", self.location))
        object.__setattr__(self, "left_value", _finite("left_value", self.left_value))
        object.__setattr__(self, "right_value", _finite("right_value", self.right_value))

    def evaluate(self, x: np.ndarray, length: float) -> np.ndarray:
        x = np.asarray(x, dtype=float)
        return np.where(x < self.location, self.left_value, self.right_value).astype(float)


@dataclass(frozen=True)
class ExternalSamples:
    """Samples supplied by the caller; their count must equal the grid size."""

    values: Tuple[float, ...]

    def __post_init__(self) -> None:
        arr = np.asarray(self.values, dtype=float)
        if arr.ndim != 1:
            raise ConfigurationError("ExternalSamples values must be a 1D sequence.")
        if not np.isfinite(arr).all():
            raise ConfigurationError("ExternalSamples values must all be finite.")
        object.__setattr__(self, "values", tuple(float(v) for v in arr))

    @classmethod
    def from_array(cls, values: Sequence[float]) -> "ExternalSamples":
        return cls(tuple(np.asarray(values, dtype=float).ravel()))

    def __len__(self) -> int:
        return len(self.values)

    def evaluate(self, x: np.ndarray, length: float) -> np.ndarray:
        n = np.asarray(x).shape[0]
        if len(self.values) != n:
            raise ConfigurationError(
                f"ExternalSamples has {len(self.values)} values but the grid has {n} points."
            )
        return np.asarray(self.values, dtype=float)


InitialCondition = Union[Gaussian, Sine, Step, ExternalSamples]
ANALYTIC_CONDITIONS = (Gaussian, Sine, Step)


def initialize(grid: Grid, initial: InitialCondition) -> Grid:
    """
    Fill ``grid.current`` from ``initial`` and return the grid.

    The boundary condition is not applied here: the field at ``t = 0`` is
    exactly the sampled initial condition.
    """
    if not isinstance(initial, (Gaussian, Sine, Step, ExternalSamples)):
        raise ConfigurationError(f"Unsupported initial condition: {initial!r}.")
    grid.load(initial.evaluate(grid.x, grid.length))
    return grid
