"""
Equation parameters and the scheme selector.

The set of schemes is closed: each equation accepts a fixed subset of
:class:`Scheme` and the pairing is checked once, before a run starts.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Union

from ..errors import ConfigurationError


@dataclass(frozen=True)
class HeatParameters:
    """Heat equation ``u_t = alpha * u_xx``."""

    alpha: float

    def __post_init__(self) -> None:
        alpha = float(self.alpha)
        if not math.isfinite(alpha) or alpha <= 0.0:
            raise ConfigurationError("Heat equation requires a positive finite alpha.")
        object.__setattr__(self, "alpha", alpha)

    @property
    def name(self) -> str:
        return "heat"


@dataclass(frozen=True)
class AdvectionParameters:
    """Linear advection ``u_t + c * u_x = 0``."""

    c: float

    def __post_init__(self) -> None:
        c = float(self.c)
        if not math.isfinite(c):
            raise ConfigurationError("Advection speed c must be finite.")
        if c == 0.0:
            raise ConfigurationError("Advection requires a non-zero transport speed c.")
        object.__setattr__(self, "c", c)

    @property
    def name(self) -> str:
        return "advection"


EquationParameters = Union[HeatParameters, AdvectionParameters]


class Scheme(Enum):
    """Finite-difference time-stepping schemes."""

    EXPLICIT = "explicit"
    IMPLICIT = "implicit"
    CRANK_NICOLSON = "crank-nicolson"
    UPWIND = "upwind"
    LAX_FRIEDRICHS = "lax-friedrichs"

    @classmethod
    def from_name(cls, name: Union[str, "Scheme"]) -> "Scheme":
        """Parse a scheme name; accepts common aliases such as ``"cn"`` or ``"lax"``."""
        if isinstance(name, Scheme):
            return name
        key = str(name).strip().lower().replace("_", "-").replace(" ", "-")
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise ConfigurationError(f"Unknown scheme '{name}'. Expected one of: {valid}.") from None

    @property
    def is_implicit(self) -> bool:
        return self in (Scheme.IMPLICIT, Scheme.CRANK_NICOLSON)


_ALIASES = {
    "ftcs": "explicit",
    "forward-euler": "explicit",
    "backward-euler": "implicit",
    "cn": "crank-nicolson",
    "cranknicolson": "crank-nicolson",
    "crank-nicholson": "crank-nicolson",
    "lax": "lax-friedrichs",
    "laxfriedrichs": "lax-friedrichs",
}

HEAT_SCHEMES: FrozenSet[Scheme] = frozenset(
    {Scheme.EXPLICIT, Scheme.IMPLICIT, Scheme.CRANK_NICOLSON}
)
ADVECTION_SCHEMES: FrozenSet[Scheme] = frozenset({Scheme.UPWIND, Scheme.LAX_FRIEDRICHS})


def schemes_for(params: EquationParameters) -> FrozenSet[Scheme]:
    """Return the schemes valid for ``params``."""
    if isinstance(params, HeatParameters):
        return HEAT_SCHEMES
    if isinstance(params, AdvectionParameters):
        return ADVECTION_SCHEMES
    raise ConfigurationError(f"Unsupported equation parameters: {params!r}.")


def validate_scheme(params: EquationParameters, scheme: Scheme) -> None:
    """Raise :class:`ConfigurationError` if ``scheme`` does not apply to ``params``."""
    if not isinstance(scheme, Scheme):
        raise ConfigurationError(f"scheme must be a Scheme, got {scheme!r}.")
    allowed = schemes_for(params)
    if scheme not in allowed:
        valid = ", ".join(sorted(s.value for s in allowed))
        raise ConfigurationError(
            f"Scheme '{scheme.value}' is not valid for the {params.name} equation "
            f"(expected one of: {valid})."
        )
