"""
Closed-form reference solutions and error norms.

A reference exists only where the continuous problem has an exact solution
that matches the discrete setup:

* heat, ``Sine`` with ``2 * frequency`` integral, homogeneous Dirichlet:
  the mode decays as ``exp(-alpha k^2 t)``;
* heat, ``Gaussian``, homogeneous Dirichlet: odd image sum with period ``2L``;
* heat, ``Gaussian``, periodic: image sum with the grid's wrap length;
* advection, any analytic initial condition, periodic: ``u0(x - c t)``
  wrapped onto ``[0, period)``.

Every other combination returns ``None`` and no error is reported.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..errors import ConfigurationError
from .boundary import BoundaryCondition, Dirichlet, Periodic
from .conditions import ANALYTIC_CONDITIONS, Gaussian, InitialCondition, Sine
from .equations import AdvectionParameters, EquationParameters, HeatParameters
from .grid import Grid

# Images are summed out to this many spread widths beyond the domain.
_IMAGE_SPREAD_WIDTHS = 12.0


@dataclass(frozen=True)
class ErrorNorms:
    """Pointwise deviation from a reference field.

    Attributes:
        l2: Root-mean-square error ``sqrt(sum((s - r)^2) / N)``.
        linf: Maximum absolute error.
    """

    l2: float
    linf: float

    def as_dict(self) -> dict:
        return {"l2": self.l2, "linf": self.linf}


def compute_errors(simulated: np.ndarray, reference: np.ndarray) -> ErrorNorms:
    """Return the L2 (RMS) and L-infinity errors of ``simulated`` against ``reference``."""
    sim = np.asarray(simulated, dtype=float)
    ref = np.asarray(reference, dtype=float)
    if sim.ndim != 1 or sim.shape != ref.shape:
        raise ConfigurationError(
            f"simulated and reference must be 1D with equal shapes, got {sim.shape} and {ref.shape}."
        )
    if sim.size == 0:
        raise ConfigurationError("cannot compute errors of an empty field.")
    diff = sim - ref
    l2 = math.sqrt(float(np.sum(diff * diff)) / sim.size)
    linf = float(np.max(np.abs(diff)))
    return ErrorNorms(l2=l2, linf=linf)


def _spread_gaussian(ic: Gaussian, alpha: float, t: float, x: np.ndarray, center: float) -> np.ndarray:
    var0 = ic.width**2
    var_t = var0 + 2.0 * alpha * t
    scale = ic.amplitude * math.sqrt(var0 / var_t)
    return scale * np.exp(-((x - center) ** 2) / (2.0 * var_t))


def _image_count(spread: float, reach: float, span: float) -> int:
    return int(math.ceil((_IMAGE_SPREAD_WIDTHS * spread + reach) / span)) + 1


def _heat_reference(
    params: HeatParameters,
    initial: InitialCondition,
    boundary: BoundaryCondition,
    x: np.ndarray,
    t: float,
    length: float,
    period: float,
) -> Optional[np.ndarray]:
    alpha = params.alpha

    if isinstance(initial, Sine):
        if not (isinstance(boundary, Dirichlet) and boundary.is_homogeneous):
            return None
        if not float(2.0 * initial.frequency).is_integer():
            return None
        k = initial.wavenumber(length)
        return initial.amplitude * math.exp(-alpha * k * k * t) * np.sin(k * x)

    if isinstance(initial, Gaussian):
        spread = math.sqrt(initial.width**2 + 2.0 * alpha * t)
        x0 = initial.center
        if isinstance(boundary, Dirichlet):
            if not boundary.is_homogeneous:
                return None
            span = 2.0 * length
            n_img = _image_count(spread, length + abs(x0), span)
            out = np.zeros_like(x)
            for k in range(-n_img, n_img + 1):
                out += _spread_gaussian(initial, alpha, t, x, x0 + k * span)
                out -= _spread_gaussian(initial, alpha, t, x, -x0 + k * span)
            return out
        if isinstance(boundary, Periodic):
            n_img = _image_count(spread, period + abs(x0), period)
            out = np.zeros_like(x)
            for k in range(-n_img, n_img + 1):
                out += _spread_gaussian(initial, alpha, t, x, x0 + k * period)
            return out

    return None


def analytic_reference(
    params: EquationParameters,
    initial: InitialCondition,
    boundary: BoundaryCondition,
    x,
    t: float,
    *,
    length: float,
    period: float,
) -> Optional[np.ndarray]:
    """
    Evaluate the exact solution at positions ``x`` and time ``t``.

    Parameters
    ----------
    params, initial, boundary:
        The problem definition.
    x:
        Scalar or array of positions.
    t:
        Time (``>= 0``).
    length:
        Domain length ``L``.
    period:
        Wrap length of the periodic domain (``Grid.period``).

    Returns
    -------
    numpy.ndarray or None
        ``None`` when the configuration has no closed-form solution.
    """
    t = float(t)
    if t < 0.0:
        raise ConfigurationError("reference time must be non-negative.")
    if not isinstance(initial, ANALYTIC_CONDITIONS):
        return None
    x = np.asarray(x, dtype=float)

    if isinstance(params, HeatParameters):
        return _heat_reference(params, initial, boundary, x, t, float(length), float(period))

    if isinstance(params, AdvectionParameters):
        if not isinstance(boundary, Periodic):
            return None
        shifted = np.mod(x - params.c * t, period)
        return initial.evaluate(shifted, length)

    raise ConfigurationError(f"Unsupported equation parameters: {params!r}.")


def reference_field(
    grid: Grid,
    params: EquationParameters,
    initial: InitialCondition,
    boundary: BoundaryCondition,
    t: float,
) -> Optional[np.ndarray]:
    """Exact solution sampled on ``grid`` at time ``t``, or ``None``."""
    return analytic_reference(
        params, initial, boundary, grid.x, t, length=grid.length, period=grid.period
    )
