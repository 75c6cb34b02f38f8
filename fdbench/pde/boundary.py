"""
Boundary conditions for 1D runs.

``Dirichlet`` pins both edge samples to fixed values after every interior
update. ``Periodic`` identifies index ``nx`` with index 0; the stencil kernels
perform the wraparound themselves, so applying it afterwards is a no-op.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from ..errors import ConfigurationError
from .grid import Grid


@dataclass(frozen=True)
class Dirichlet:
    """Fixed values at ``x = 0`` (``left``) and ``x = L`` (``right``)."""

    left: float = 0.0
    right: float = 0.0

    def __post_init__(self) -> None:
        left, right = float(self.left), float(self.right)
        if not (math.isfinite(left) and math.isfinite(right)):
            raise ConfigurationError("Dirichlet boundary values must be finite.")
        object.__setattr__(self, "left", left)
        object.__setattr__(self, "right", right)

    @property
    def is_homogeneous(self) -> bool:
        return self.left == 0.0 and self.right == 0.0


@dataclass(frozen=True)
class Periodic:
    """Wraparound boundary: neighbours of the edges come from the opposite end."""


BoundaryCondition = Union[Dirichlet, Periodic]


def apply_boundary(grid: Grid, boundary: BoundaryCondition) -> None:
    """Mutate ``grid.current`` in place so it satisfies ``boundary``."""
    if isinstance(boundary, Dirichlet):
        field = grid.current
        field[0] = boundary.left
        field[-1] = boundary.right
    elif isinstance(boundary, Periodic):
        return
    else:
        raise ConfigurationError(f"Unsupported boundary condition: {boundary!r}.")
