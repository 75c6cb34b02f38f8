from __future__ import annotations

import numpy as np
import pytest

from fdbench.errors import ConfigurationError
from fdbench.pde import (
    ADVECTION_SCHEMES,
    HEAT_SCHEMES,
    AdvectionParameters,
    ExternalSamples,
    Gaussian,
    Grid,
    HeatParameters,
    Scheme,
    Sine,
    Step,
    initialize,
    schemes_for,
    validate_scheme,
)


def test_grid_spacing_and_coordinates() -> None:
    grid = Grid(nx=5, length=2.0)
    assert grid.dx == pytest.approx(0.5)
    np.testing.assert_allclose(grid.x, [0.0, 0.5, 1.0, 1.5, 2.0])
    assert grid.period == pytest.approx(2.5)
    assert grid.current.shape == (5,)
    assert grid.work.shape[1] == 5
    assert not grid.x.flags.writeable


@pytest.mark.parametrize("nx", [0, 2, 2.5, True, float("nan"), float("inf"), "ten", None])
def test_grid_rejects_bad_point_counts(nx) -> None:
    with pytest.raises(ConfigurationError):
        Grid(nx=nx)


@pytest.mark.parametrize("length", [0.0, -1.0, float("inf"), float("nan")])
def test_grid_rejects_bad_length(length: float) -> None:
    with pytest.raises(ConfigurationError):
        Grid(nx=11, length=length)


def test_grid_swap_exchanges_buffers_without_copy() -> None:
    grid = Grid(nx=4)
    current, scratch = grid.current, grid.scratch
    grid.swap()
    assert grid.current is scratch
    assert grid.scratch is current


def test_grid_load_and_snapshot() -> None:
    grid = Grid(nx=3)
    grid.load([1.0, 2.0, 3.0])
    snap = grid.snapshot()
    grid.current[0] = 10.0
    assert snap[0] == 1.0
    assert not snap.flags.writeable

    with pytest.raises(ConfigurationError):
        grid.load([1.0, 2.0])


def test_initial_conditions_evaluate() -> None:
    grid = Grid(nx=5, length=1.0)

    initialize(grid, Gaussian(center=0.5, width=0.1, amplitude=2.0))
    assert grid.current[2] == pytest.approx(2.0)
    assert grid.current[0] == pytest.approx(2.0 * np.exp(-12.5))

    initialize(grid, Sine(frequency=0.5))
    np.testing.assert_allclose(grid.current, np.sin(np.pi * grid.x), atol=1e-15)

    initialize(grid, Step(location=0.5, left_value=1.0, right_value=-1.0))
    np.testing.assert_array_equal(grid.current, [1.0, 1.0, -1.0, -1.0, -1.0])


def test_initialize_does_not_apply_boundary() -> None:
    grid = initialize(Grid(nx=3), Step(location=2.0, left_value=4.0))
    np.testing.assert_array_equal(grid.current, [4.0, 4.0, 4.0])


def test_external_samples() -> None:
    samples = ExternalSamples.from_array(np.array([1.0, 2.0, 3.0]))
    assert len(samples) == 3
    assert samples.values == (1.0, 2.0, 3.0)

    grid = initialize(Grid(nx=3), samples)
    np.testing.assert_array_equal(grid.current, [1.0, 2.0, 3.0])

    with pytest.raises(ConfigurationError):
        initialize(Grid(nx=4), samples)
    with pytest.raises(ConfigurationError):
        ExternalSamples((1.0, float("nan"), 0.0))


def test_initial_condition_validation() -> None:
    with pytest.raises(ConfigurationError):
        Gaussian(center=0.5, width=0.0)
    with pytest.raises(ConfigurationError):
        Sine(frequency=float("inf"))
    with pytest.raises(ConfigurationError):
        Step(location=float("nan"))


def test_equation_parameter_validation() -> None:
    assert HeatParameters(alpha=1).alpha == 1.0
    with pytest.raises(ConfigurationError):
        HeatParameters(alpha=0.0)
    with pytest.raises(ConfigurationError):
        HeatParameters(alpha=-1.0)
    with pytest.raises(ConfigurationError):
        AdvectionParameters(c=0.0)
    with pytest.raises(ConfigurationError):
        AdvectionParameters(c=float("nan"))
    assert AdvectionParameters(c=-2.0).c == -2.0


def test_scheme_names_and_aliases() -> None:
    assert Scheme.from_name("explicit") is Scheme.EXPLICIT
    assert Scheme.from_name("FTCS") is Scheme.EXPLICIT
    assert Scheme.from_name("cn") is Scheme.CRANK_NICOLSON
    assert Scheme.from_name("Crank_Nicolson") is Scheme.CRANK_NICOLSON
    assert Scheme.from_name("lax") is Scheme.LAX_FRIEDRICHS
    assert Scheme.from_name(Scheme.UPWIND) is Scheme.UPWIND
    assert Scheme.IMPLICIT.is_implicit and not Scheme.EXPLICIT.is_implicit

    with pytest.raises(ConfigurationError, match="Unknown scheme"):
        Scheme.from_name("leapfrog")


def test_scheme_equation_pairing() -> None:
    heat = HeatParameters(alpha=0.1)
    adv = AdvectionParameters(c=1.0)
    assert schemes_for(heat) == HEAT_SCHEMES
    assert schemes_for(adv) == ADVECTION_SCHEMES

    validate_scheme(heat, Scheme.CRANK_NICOLSON)
    validate_scheme(adv, Scheme.UPWIND)
    with pytest.raises(ConfigurationError):
        validate_scheme(heat, Scheme.UPWIND)
    with pytest.raises(ConfigurationError):
        validate_scheme(adv, Scheme.IMPLICIT)
