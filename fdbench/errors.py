"""
Exception taxonomy for fdbench.

Configuration problems are detected before any numerical work and surface as
:class:`ConfigurationError`. Failures that only show up while stepping (a
near-singular tridiagonal pivot, a field that stops being finite) surface as
:class:`NumericalError`. Stability verdicts are data, not exceptions; the
:class:`StabilityWarning` category exists for callers that want to turn them
into warnings.
"""

from __future__ import annotations

import warnings
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .pde.stability import StabilityVerdict


class FdbenchError(Exception):
    """Base class for every error raised by fdbench."""


class ConfigurationError(FdbenchError, ValueError):
    """Invalid or incompatible run parameters."""


class UnstableConfigurationError(ConfigurationError):
    """A run refused because its stability verdict is UNSTABLE."""

    def __init__(self, message: str, verdict: "StabilityVerdict") -> None:
        super().__init__(message)
        self.verdict = verdict


class NumericalError(FdbenchError, ArithmeticError):
    """A numerical failure detected while a run was executing."""

    def __init__(self, message: str, step: Optional[int] = None) -> None:
        if step is not None:
            message = f"{message} (step {step})"
        super().__init__(message)
        self.step = step


class StabilityWarning(UserWarning):
    """Warning category for MARGINAL or UNSTABLE stability verdicts."""


def warn_if_unstable(verdict: "StabilityVerdict", stacklevel: int = 2) -> bool:
    """
    Emit a :class:`StabilityWarning` when ``verdict`` is not STABLE.

    Returns True if a warning was issued.
    """
    from .pde.stability import StabilityStatus

    if verdict.status is StabilityStatus.STABLE:
        return False
    warnings.warn(
        f"{verdict.status.value} time step: dt/dt_max = {verdict.ratio:.4g} "
        f"(dt_max = {verdict.dt_max:.6g})",
        StabilityWarning,
        stacklevel=stacklevel + 1,
    )
    return True


__all__ = [
    "FdbenchError",
    "ConfigurationError",
    "UnstableConfigurationError",
    "NumericalError",
    "StabilityWarning",
    "warn_if_unstable",
]
