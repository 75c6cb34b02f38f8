"""
Finite-difference simulation core for the 1D heat and advection equations.

The module provides:

* `Grid`: uniform 1D grid with a preallocated current/scratch double buffer.
* Initial conditions (`Gaussian`, `Sine`, `Step`, `ExternalSamples`) and
  boundary conditions (`Dirichlet`, `Periodic`).
* `check_stability`: CFL verdicts (STABLE / MARGINAL / UNSTABLE).
* Scheme kernels: explicit, implicit and Crank-Nicolson heat; upwind and
  Lax-Friedrichs advection.
* `solve_tridiagonal` / `solve_cyclic_tridiagonal`: Thomas algorithm and its
  Sherman-Morrison periodic variant.
* `analytic_reference` / `compute_errors`: closed-form references, L2 and
  L-infinity errors.
* `RunController` / `run_simulation`: validate, step, time and evaluate.

Limitations: grids are uniform, domains are 1D, time steps are fixed and
computations run on CPU with NumPy only. The core never logs or prints.

Example
-------
>>> from fdbench.pde import (
...     Dirichlet, Gaussian, HeatParameters, RunConfig, Scheme, run_simulation,
... )
>>> config = RunConfig(
...     params=HeatParameters(alpha=0.01),
...     scheme=Scheme.CRANK_NICOLSON,
...     nx=101,
...     length=1.0,
...     dt=1e-3,
...     tmax=0.1,
...     initial=Gaussian(center=0.5, width=0.05),
...     boundary=Dirichlet(0.0, 0.0),
... )
>>> outcome = run_simulation(config)
>>> outcome.result.steps_taken
100
"""

from .boundary import BoundaryCondition, Dirichlet, Periodic, apply_boundary
from .conditions import ExternalSamples, Gaussian, InitialCondition, Sine, Step, initialize
from .equations import (
    ADVECTION_SCHEMES,
    HEAT_SCHEMES,
    AdvectionParameters,
    EquationParameters,
    HeatParameters,
    Scheme,
    schemes_for,
    validate_scheme,
)
from .grid import Grid
from .reference import ErrorNorms, analytic_reference, compute_errors, reference_field
from .runner import (
    RunConfig,
    RunController,
    RunOutcome,
    RunResult,
    RunState,
    run_simulation,
    simulate,
    steps_for,
)
from .schemes import (
    advection_lax_friedrichs_step,
    advection_upwind_step,
    heat_crank_nicolson_step,
    heat_explicit_step,
    heat_implicit_step,
    kernel_for,
    step,
)
from .stability import (
    MARGINAL_TOLERANCE,
    StabilityStatus,
    StabilityVerdict,
    check_stability,
    classify_ratio,
    courant_number,
    diffusion_number,
    max_stable_dt,
)
from .tridiagonal import solve_cyclic_tridiagonal, solve_tridiagonal, tridiagonal_matvec

__all__ = [
    # Grid and conditions
    "Grid",
    "BoundaryCondition",
    "Dirichlet",
    "Periodic",
    "apply_boundary",
    "InitialCondition",
    "Gaussian",
    "Sine",
    "Step",
    "ExternalSamples",
    "initialize",
    # Equations
    "EquationParameters",
    "HeatParameters",
    "AdvectionParameters",
    "Scheme",
    "HEAT_SCHEMES",
    "ADVECTION_SCHEMES",
    "schemes_for",
    "validate_scheme",
    # Stability
    "MARGINAL_TOLERANCE",
    "StabilityStatus",
    "StabilityVerdict",
    "check_stability",
    "classify_ratio",
    "courant_number",
    "diffusion_number",
    "max_stable_dt",
    # Schemes
    "step",
    "kernel_for",
    "heat_explicit_step",
    "heat_implicit_step",
    "heat_crank_nicolson_step",
    "advection_upwind_step",
    "advection_lax_friedrichs_step",
    # Linear algebra
    "solve_tridiagonal",
    "solve_cyclic_tridiagonal",
    "tridiagonal_matvec",
    # Reference
    "ErrorNorms",
    "analytic_reference",
    "compute_errors",
    "reference_field",
    # Runs
    "RunConfig",
    "RunController",
    "RunOutcome",
    "RunResult",
    "RunState",
    "run_simulation",
    "simulate",
    "steps_for",
]
