"""
CFL stability validation.

Limits are equation- and scheme-specific: explicit heat needs
``dt <= dx^2 / (2 alpha)``, both advection schemes need ``dt <= dx / |c|``,
and the implicit heat schemes are unconditionally stable. The verdict is
reported, never enforced: callers decide whether to run.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from ..errors import ConfigurationError
from .equations import AdvectionParameters, EquationParameters, HeatParameters, Scheme, validate_scheme

# ratio in (1, 1 + MARGINAL_TOLERANCE] is reported as MARGINAL
MARGINAL_TOLERANCE = 0.05


class StabilityStatus(Enum):
    """Classification of ``dt / dt_max``."""

    STABLE = "stable"
    MARGINAL = "marginal"
    UNSTABLE = "unstable"


@dataclass(frozen=True)
class StabilityVerdict:
    """
    Result of :func:`check_stability`.

    Attributes:
        dt_max: Largest stable time step (``inf`` for unconditionally stable schemes).
        ratio: ``dt / dt_max``.
        status: STABLE, MARGINAL or UNSTABLE.
    """

    dt_max: float
    ratio: float
    status: StabilityStatus

    @property
    def runnable(self) -> bool:
        """True unless the verdict is UNSTABLE."""
        return self.status is not StabilityStatus.UNSTABLE

    def as_dict(self) -> dict:
        return {"dt_max": self.dt_max, "ratio": self.ratio, "status": self.status.value}


def _check_step_sizes(dx: float, dt: float) -> None:
    if not (math.isfinite(dx) and dx > 0.0):
        raise ConfigurationError("dx must be positive and finite.")
    if not (math.isfinite(dt) and dt > 0.0):
        raise ConfigurationError("dt must be positive and finite.")


def courant_number(dx: float, dt: float, c: float) -> float:
    """Return the signed Courant number ``c dt / dx``."""
    _check_step_sizes(float(dx), float(dt))
    return float(c) * float(dt) / float(dx)


def diffusion_number(dx: float, dt: float, alpha: float) -> float:
    """Return ``alpha dt / dx^2``."""
    _check_step_sizes(float(dx), float(dt))
    return float(alpha) * float(dt) / (float(dx) ** 2)


def classify_ratio(ratio: float) -> StabilityStatus:
    """Map ``dt / dt_max`` to a :class:`StabilityStatus`."""
    if ratio <= 1.0:
        return StabilityStatus.STABLE
    if ratio <= 1.0 + MARGINAL_TOLERANCE:
        return StabilityStatus.MARGINAL
    return StabilityStatus.UNSTABLE


def max_stable_dt(params: EquationParameters, scheme: Scheme, dx: float) -> float:
    """Return the CFL limit on ``dt`` for ``scheme`` at spacing ``dx``."""
    validate_scheme(params, scheme)
    if isinstance(params, HeatParameters):
        if scheme is Scheme.EXPLICIT:
            return dx * dx / (2.0 * params.alpha)
        return math.inf
    if isinstance(params, AdvectionParameters):
        return dx / abs(params.c)
    raise ConfigurationError(f"Unsupported equation parameters: {params!r}.")


def check_stability(
    params: EquationParameters,
    scheme: Scheme,
    dx: float,
    dt: float,
) -> StabilityVerdict:
    """
    Classify the time step ``dt`` for ``scheme`` on a grid of spacing ``dx``.

    Parameters
    ----------
    params:
        ``HeatParameters`` or ``AdvectionParameters``.
    scheme:
        Scheme valid for ``params``; a mismatch raises ``ConfigurationError``.
    dx, dt:
        Positive grid spacing and time step.

    Returns
    -------
    StabilityVerdict
        ``ratio = dt / dt_max``; ``ratio <= 1`` is STABLE,
        ``ratio <= 1.05`` MARGINAL, anything larger UNSTABLE.
    """
    dx = float(dx)
    dt = float(dt)
    _check_step_sizes(dx, dt)
    dt_max = max_stable_dt(params, scheme, dx)
    ratio = 0.0 if math.isinf(dt_max) else dt / dt_max
    return StabilityVerdict(dt_max=dt_max, ratio=ratio, status=classify_ratio(ratio))
