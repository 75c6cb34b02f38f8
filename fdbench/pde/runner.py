"""
Run controller: validate, step, time and evaluate one simulation.

A :class:`RunController` moves through
``CONFIGURED -> VALIDATED -> RUNNING -> COMPLETED | ABORTED``. Stability
refusals and numerical failures are returned as a :class:`RunOutcome`
rather than raised; configuration errors are raised by :class:`RunConfig`
before anything runs.
"""

from __future__ import annotations

import dataclasses
import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

import numpy as np

from ..diagnostics.core import assert_edges, assert_finite, is_debug_enabled
from ..errors import ConfigurationError, FdbenchError, NumericalError, UnstableConfigurationError
from .boundary import BoundaryCondition, Dirichlet, Periodic, apply_boundary
from .conditions import ExternalSamples, Gaussian, InitialCondition, Sine, Step, initialize
from .equations import AdvectionParameters, EquationParameters, HeatParameters, Scheme, validate_scheme
from .grid import Grid, point_count
from .reference import ErrorNorms, compute_errors, reference_field
from .schemes import kernel_for
from .stability import StabilityStatus, StabilityVerdict, check_stability

_STEP_TOLERANCE = 1e-9


def steps_for(tmax: float, dt: float) -> int:
    """
    Number of steps needed to reach ``tmax``.

    A horizon shorter than one step runs no steps; otherwise the count is
    ``ceil(tmax / dt)``, ignoring relative float noise below 1e-9.
    """
    if tmax < dt * (1.0 - _STEP_TOLERANCE):
        return 0
    ratio = tmax / dt
    return int(math.ceil(ratio * (1.0 - _STEP_TOLERANCE)))


@dataclass(frozen=True)
class RunConfig:
    """
    Fully parsed description of one run.

    Attributes:
        params: ``HeatParameters`` or ``AdvectionParameters``.
        scheme: A :class:`Scheme` (or its name) valid for ``params``.
        nx: Number of grid points (``>= 3``).
        length: Domain length ``L > 0``.
        dt: Time step (``> 0``).
        tmax: Simulated horizon (``>= 0``).
        initial: Initial condition.
        boundary: Boundary condition (homogeneous Dirichlet by default).
    """

    params: EquationParameters
    scheme: Union[Scheme, str]
    nx: int
    length: float
    dt: float
    tmax: float
    initial: InitialCondition
    boundary: BoundaryCondition = Dirichlet()

    def __post_init__(self) -> None:
        if not isinstance(self.params, (HeatParameters, AdvectionParameters)):
            raise ConfigurationError(f"Unsupported equation parameters: {self.params!r}.")
        scheme = Scheme.from_name(self.scheme)
        validate_scheme(self.params, scheme)
        object.__setattr__(self, "scheme", scheme)

        object.__setattr__(self, "nx", point_count(self.nx))

        for name in ("length", "dt"):
            value = float(getattr(self, name))
            if not math.isfinite(value) or value <= 0.0:
                raise ConfigurationError(f"{name} must be positive and finite, got {value!r}.")
            object.__setattr__(self, name, value)
        tmax = float(self.tmax)
        if not math.isfinite(tmax) or tmax < 0.0:
            raise ConfigurationError(f"tmax must be non-negative and finite, got {tmax!r}.")
        object.__setattr__(self, "tmax", tmax)

        if not isinstance(self.initial, (Gaussian, Sine, Step, ExternalSamples)):
            raise ConfigurationError(f"Unsupported initial condition: {self.initial!r}.")
        if isinstance(self.initial, ExternalSamples) and len(self.initial) != self.nx:
            raise ConfigurationError(
                f"ExternalSamples has {len(self.initial)} values but nx = {self.nx}."
            )
        if not isinstance(self.boundary, (Dirichlet, Periodic)):
            raise ConfigurationError(f"Unsupported boundary condition: {self.boundary!r}.")

    @property
    def dx(self) -> float:
        return self.length / (self.nx - 1)

    @property
    def steps(self) -> int:
        return steps_for(self.tmax, self.dt)

    def replace(self, **changes) -> "RunConfig":
        """Return a validated copy with ``changes`` applied."""
        return dataclasses.replace(self, **changes)

    def describe(self) -> dict:
        """Plain-value summary for logs and result tables."""
        return {
            "equation": self.params.name,
            "scheme": self.scheme.value,
            "nx": self.nx,
            "length": self.length,
            "dx": self.dx,
            "dt": self.dt,
            "tmax": self.tmax,
            "initial": type(self.initial).__name__,
            "boundary": type(self.boundary).__name__,
        }


class RunState(Enum):
    CONFIGURED = "configured"
    VALIDATED = "validated"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass(frozen=True)
class RunResult:
    """
    Output of a completed run.

    Attributes:
        final_field: Read-only array of the ``nx`` samples at the end of the run.
        steps_taken: Number of time steps executed.
        wall_time_seconds: Monotonic wall time of the step loop alone.
        error: Error norms against the closed-form reference, or ``None``.
        stability: Verdict computed before the run.
    """

    final_field: np.ndarray
    steps_taken: int
    wall_time_seconds: float
    error: Optional[ErrorNorms]
    stability: StabilityVerdict

    def as_dict(self) -> dict:
        """Plain Python values for CSV/JSON writers."""
        return {
            "final_field": [float(v) for v in self.final_field],
            "steps_taken": self.steps_taken,
            "wall_time_seconds": self.wall_time_seconds,
            "error": None if self.error is None else self.error.as_dict(),
            "stability": self.stability.as_dict(),
        }


@dataclass(frozen=True)
class RunOutcome:
    """
    What :meth:`RunController.execute` returns.

    ``result`` is set only when ``state`` is COMPLETED. An ABORTED outcome
    either carries the ``failure`` that stopped it or, when ``failure`` is
    ``None``, was refused because the verdict is UNSTABLE.
    """

    state: RunState
    stability: Optional[StabilityVerdict]
    result: Optional[RunResult] = None
    failure: Optional[FdbenchError] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.state is RunState.COMPLETED

    @property
    def refused(self) -> bool:
        return self.state is RunState.ABORTED and self.failure is None

    @property
    def steps_taken(self) -> int:
        return 0 if self.result is None else self.result.steps_taken

    def unwrap(self) -> RunResult:
        """Return the result or raise the reason the run did not complete."""
        if self.result is not None:
            return self.result
        if self.failure is not None:
            raise self.failure
        raise UnstableConfigurationError(self.message, self.stability)


class RunController:
    """
    Drives one run of ``config``.

    Parameters
    ----------
    config:
        The run description.
    allow_unstable:
        Execute even when the verdict is UNSTABLE.
    """

    def __init__(self, config: RunConfig, allow_unstable: bool = False) -> None:
        self.config = config
        self.allow_unstable = bool(allow_unstable)
        self.state = RunState.CONFIGURED
        self.verdict: Optional[StabilityVerdict] = None

    def validate(self) -> StabilityVerdict:
        """Compute the stability verdict and move to VALIDATED or ABORTED."""
        if self.state is not RunState.CONFIGURED:
            raise RuntimeError(f"cannot validate a run in state {self.state.value}.")
        cfg = self.config
        verdict = check_stability(cfg.params, cfg.scheme, cfg.dx, cfg.dt)
        self.verdict = verdict
        if verdict.status is StabilityStatus.UNSTABLE and not self.allow_unstable:
            self.state = RunState.ABORTED
        else:
            self.state = RunState.VALIDATED
        return verdict

    def execute(self) -> RunOutcome:
        """Validate if needed, run the step loop and evaluate errors."""
        if self.state is RunState.CONFIGURED:
            self.validate()
        if self.state is RunState.ABORTED:
            return RunOutcome(
                state=RunState.ABORTED,
                stability=self.verdict,
                message=(
                    f"refused: dt/dt_max = {self.verdict.ratio:.4g} exceeds the stability "
                    f"limit (dt_max = {self.verdict.dt_max:.6g})"
                ),
            )
        if self.state is not RunState.VALIDATED:
            raise RuntimeError(f"cannot execute a run in state {self.state.value}.")

        cfg = self.config
        grid = initialize(Grid(cfg.nx, cfg.length), cfg.initial)
        kernel = kernel_for(cfg.params, cfg.scheme)
        n_steps = cfg.steps

        self.state = RunState.RUNNING
        try:
            elapsed = self._step_loop(grid, kernel, n_steps)
        except NumericalError as exc:
            self.state = RunState.ABORTED
            return RunOutcome(
                state=RunState.ABORTED,
                stability=self.verdict,
                failure=exc,
                message=str(exc),
            )

        reference = reference_field(grid, cfg.params, cfg.initial, cfg.boundary, n_steps * cfg.dt)
        error = None if reference is None else compute_errors(grid.current, reference)
        result = RunResult(
            final_field=grid.snapshot(),
            steps_taken=n_steps,
            wall_time_seconds=elapsed,
            error=error,
            stability=self.verdict,
        )
        self.state = RunState.COMPLETED
        return RunOutcome(
            state=RunState.COMPLETED,
            stability=self.verdict,
            result=result,
            message=f"completed {n_steps} steps",
        )

    def _step_loop(self, grid: Grid, kernel, n_steps: int) -> float:
        cfg = self.config
        params, boundary, dt = cfg.params, cfg.boundary, cfg.dt
        debug = is_debug_enabled()

        start = time.perf_counter()
        for i in range(1, n_steps + 1):
            kernel(grid, params, boundary, dt)
            apply_boundary(grid, boundary)
            assert_finite(grid.current, step=i)
            if debug and isinstance(boundary, Dirichlet):
                assert_edges(grid.current, boundary.left, boundary.right, step=i)
        return time.perf_counter() - start


def run_simulation(config: RunConfig, allow_unstable: bool = False) -> RunOutcome:
    """Run ``config`` to completion and return the outcome."""
    return RunController(config, allow_unstable=allow_unstable).execute()


def simulate(config: RunConfig, allow_unstable: bool = False) -> RunResult:
    """Like :func:`run_simulation` but raise instead of returning a failed outcome."""
    return run_simulation(config, allow_unstable=allow_unstable).unwrap()
