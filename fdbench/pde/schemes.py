"""
Time-stepping kernels for the heat and advection equations.

Every kernel has the signature ``kernel(grid, params, boundary, dt)``: it reads
``grid.current``, writes the next state into ``grid.scratch`` (implicit
kernels let the tridiagonal solver write there) and swaps the buffers. Edge
samples under a Dirichlet boundary are carried over unchanged and left to
:func:`fdbench.pde.boundary.apply_boundary`; under a periodic boundary the
kernels wrap indices modulo ``nx``.

Kernels use in-place NumPy operations on views of the preallocated grid
buffers, so a step performs no array allocation.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

from ..errors import ConfigurationError
from .boundary import BoundaryCondition, Dirichlet, Periodic
from .equations import AdvectionParameters, EquationParameters, HeatParameters, Scheme, validate_scheme
from .grid import Grid
from .tridiagonal import solve_cyclic_tridiagonal, solve_tridiagonal

Kernel = Callable[[Grid, EquationParameters, BoundaryCondition, float], None]


def _is_periodic(boundary: BoundaryCondition) -> bool:
    if isinstance(boundary, Periodic):
        return True
    if isinstance(boundary, Dirichlet):
        return False
    raise ConfigurationError(f"Unsupported boundary condition: {boundary!r}.")


def _diffuse_into(old: np.ndarray, out: np.ndarray, coeff: float, periodic: bool) -> None:
    """``out = old + coeff * (old[i+1] - 2 old[i] + old[i-1])``."""
    inner = out[1:-1]
    np.subtract(old[2:], old[1:-1], out=inner)
    inner -= old[1:-1]
    inner += old[:-2]
    inner *= coeff
    inner += old[1:-1]

    if periodic:
        out[0] = old[0] + coeff * (old[1] - 2.0 * old[0] + old[-1])
        out[-1] = old[-1] + coeff * (old[0] - 2.0 * old[-1] + old[-2])
    else:
        out[0] = old[0]
        out[-1] = old[-1]


# ----------------------------------------------------------------------
# Heat equation
# ----------------------------------------------------------------------

def heat_explicit_step(
    grid: Grid, params: HeatParameters, boundary: BoundaryCondition, dt: float
) -> None:
    """Forward-time, centred-space (FTCS) update."""
    r = params.alpha * dt / (grid.dx * grid.dx)
    _diffuse_into(grid.current, grid.scratch, r, _is_periodic(boundary))
    grid.swap()


def _implicit_solve(grid: Grid, boundary: BoundaryCondition, coeff: float) -> None:
    """Solve ``(I - coeff D) new = grid.work[3]`` into ``grid.scratch``."""
    sub, diag, sup, rhs = grid.work[0], grid.work[1], grid.work[2], grid.work[3]
    sub.fill(-coeff)
    diag.fill(1.0 + 2.0 * coeff)
    sup.fill(-coeff)

    if _is_periodic(boundary):
        solve_cyclic_tridiagonal(sub, diag, sup, rhs, out=grid.scratch, work=grid.work[4:8])
    else:
        # identity rows pin the boundary values
        diag[0] = 1.0
        sup[0] = 0.0
        rhs[0] = boundary.left
        sub[-1] = 0.0
        diag[-1] = 1.0
        rhs[-1] = boundary.right
        solve_tridiagonal(sub, diag, sup, rhs, out=grid.scratch, work=grid.work[4])
    grid.swap()


def heat_implicit_step(
    grid: Grid, params: HeatParameters, boundary: BoundaryCondition, dt: float
) -> None:
    """Backward-Euler update: ``(I - r D) new = old``."""
    r = params.alpha * dt / (grid.dx * grid.dx)
    grid.work[3][...] = grid.current
    _implicit_solve(grid, boundary, r)


def heat_crank_nicolson_step(
    grid: Grid, params: HeatParameters, boundary: BoundaryCondition, dt: float
) -> None:
    """Crank-Nicolson update: ``(I - r/2 D) new = (I + r/2 D) old``."""
    half = 0.5 * params.alpha * dt / (grid.dx * grid.dx)
    _diffuse_into(grid.current, grid.work[3], half, _is_periodic(boundary))
    _implicit_solve(grid, boundary, half)


# ----------------------------------------------------------------------
# Advection equation
# ----------------------------------------------------------------------

def advection_upwind_step(
    grid: Grid, params: AdvectionParameters, boundary: BoundaryCondition, dt: float
) -> None:
    """
    First-order upwind update.

    The one-sided difference always points towards the incoming flow:
    backward for ``c > 0``, forward for ``c < 0``.
    """
    nu = params.c * dt / grid.dx
    old, new = grid.current, grid.scratch
    inner = new[1:-1]
    if params.c > 0.0:
        np.subtract(old[1:-1], old[:-2], out=inner)
    else:
        np.subtract(old[2:], old[1:-1], out=inner)
    inner *= -nu
    inner += old[1:-1]

    if _is_periodic(boundary):
        if params.c > 0.0:
            new[0] = old[0] - nu * (old[0] - old[-1])
            new[-1] = old[-1] - nu * (old[-1] - old[-2])
        else:
            new[0] = old[0] - nu * (old[1] - old[0])
            new[-1] = old[-1] - nu * (old[0] - old[-1])
    else:
        new[0] = old[0]
        new[-1] = old[-1]
    grid.swap()


def advection_lax_friedrichs_step(
    grid: Grid, params: AdvectionParameters, boundary: BoundaryCondition, dt: float
) -> None:
    """Lax-Friedrichs update: neighbour average minus a centred flux difference."""
    half_nu = 0.5 * params.c * dt / grid.dx
    old, new = grid.current, grid.scratch
    inner = new[1:-1]
    flux = grid.work[0][1:-1]

    np.subtract(old[2:], old[:-2], out=flux)
    flux *= half_nu
    np.add(old[2:], old[:-2], out=inner)
    inner *= 0.5
    inner -= flux

    if _is_periodic(boundary):
        new[0] = 0.5 * (old[1] + old[-1]) - half_nu * (old[1] - old[-1])
        new[-1] = 0.5 * (old[0] + old[-2]) - half_nu * (old[0] - old[-2])
    else:
        new[0] = old[0]
        new[-1] = old[-1]
    grid.swap()


# ----------------------------------------------------------------------
# Dispatch
# ----------------------------------------------------------------------

def kernel_for(params: EquationParameters, scheme: Scheme) -> Kernel:
    """Return the kernel for ``scheme`` after checking it applies to ``params``."""
    validate_scheme(params, scheme)
    if scheme is Scheme.EXPLICIT:
        return heat_explicit_step
    if scheme is Scheme.IMPLICIT:
        return heat_implicit_step
    if scheme is Scheme.CRANK_NICOLSON:
        return heat_crank_nicolson_step
    if scheme is Scheme.UPWIND:
        return advection_upwind_step
    if scheme is Scheme.LAX_FRIEDRICHS:
        return advection_lax_friedrichs_step
    raise ConfigurationError(f"Unhandled scheme {scheme!r}.")


def step(
    grid: Grid,
    params: EquationParameters,
    scheme: Scheme,
    boundary: BoundaryCondition,
    dt: float,
) -> Grid:
    """Advance ``grid`` by one time step of ``scheme`` and return it.

    The boundary condition is not re-applied here; the run controller calls
    :func:`fdbench.pde.boundary.apply_boundary` right after.
    """
    kernel = kernel_for(params, scheme)
    kernel(grid, params, boundary, float(dt))
    return grid
