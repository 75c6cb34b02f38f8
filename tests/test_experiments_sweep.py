"""Tests for parameter sweeps and convergence studies."""

from __future__ import annotations

import numpy as np
import pytest

from fdbench.errors import ConfigurationError
from fdbench.experiments import (
    SweepResult,
    convergence_study,
    grid_sweep,
    run_sweep,
)
from fdbench.pde import (
    AdvectionParameters,
    Gaussian,
    HeatParameters,
    Periodic,
    RunConfig,
    RunState,
    Scheme,
    Sine,
)


@pytest.fixture
def advection_config() -> RunConfig:
    return RunConfig(
        params=AdvectionParameters(c=1.0),
        scheme=Scheme.UPWIND,
        nx=51,
        length=1.0,
        dt=0.01,
        tmax=0.1,
        initial=Gaussian(center=0.5, width=0.1),
        boundary=Periodic(),
    )


class TestSweepResult:
    """Tests for SweepResult."""

    def test_metadata_is_copied(self, heat_config):
        metadata = {"key": "value"}
        res = run_sweep([heat_config], metadata=metadata)
        metadata["key"] = "changed"
        assert res.metadata == {"key": "value"}

    def test_rejects_non_dict_metadata(self):
        with pytest.raises(ValueError, match="metadata must be a dict"):
            SweepResult(records=(), metadata=[("a", "b")])

    def test_table_rows(self, heat_config):
        res = run_sweep([heat_config], trials=2)
        (row,) = res.table()
        assert row["state"] == "completed"
        assert row["scheme"] == "crank-nicolson"
        assert row["nx"] == 41
        assert row["steps"] == 50
        assert row["trials"] == 2
        assert row["l2"] is not None and row["l2"] >= 0.0
        assert row["time_median"] >= 0.0


class TestRunSweep:
    """Tests for run_sweep."""

    def test_records_refused_runs_without_raising(self, advection_config):
        unstable = advection_config.replace(dt=0.05)
        res = run_sweep([advection_config, unstable])

        assert len(res) == 2
        assert [r.config for r in res.completed()] == [advection_config]
        (aborted,) = res.aborted()
        assert aborted.config == unstable
        assert aborted.outcome.state is RunState.ABORTED
        assert aborted.stats is None

        row = res.table()[1]
        assert row["state"] == "aborted"
        assert row["stability"] == "unstable"
        assert row["steps"] == 0
        assert row["trials"] == 0
        assert row["l2"] is None

    def test_allow_unstable_runs_everything(self, advection_config):
        unstable = advection_config.replace(dt=0.021, tmax=0.042)
        res = run_sweep([unstable], allow_unstable=True)
        assert len(res.completed()) == 1

    def test_rejects_bad_trial_counts(self, advection_config):
        with pytest.raises(ConfigurationError):
            run_sweep([advection_config], trials=0)
        with pytest.raises(ConfigurationError):
            run_sweep([advection_config], warmup=-1)


class TestGridSweep:
    """Tests for grid_sweep."""

    def test_cartesian_product_ordering(self, advection_config):
        res = grid_sweep(
            advection_config,
            nx_values=[21, 81],
            dt_values=[0.01, 0.02],
            schemes=[Scheme.UPWIND, "lax-friedrichs"],
        )
        assert len(res) == 8
        keys = [(r.config.scheme, r.config.nx, r.config.dt) for r in res.records]
        assert keys[0] == (Scheme.UPWIND, 21, 0.01)
        assert keys[1] == (Scheme.UPWIND, 21, 0.02)
        assert keys[2] == (Scheme.UPWIND, 81, 0.01)
        assert keys[-1] == (Scheme.LAX_FRIEDRICHS, 81, 0.02)
        assert res.metadata["swept"] == "scheme,nx,dt"
        assert res.metadata["equation"] == "advection"

        # dx = 1/80, so dt = 0.02 exceeds the Courant limit
        refused = [r for r in res.aborted() if r.outcome.refused]
        assert len(refused) == 2
        assert {(r.config.nx, r.config.dt) for r in refused} == {(81, 0.02)}

    def test_unspecified_axes_keep_base_values(self, advection_config):
        res = grid_sweep(advection_config, nx_values=[31])
        (record,) = res.records
        assert record.config.dt == advection_config.dt
        assert record.config.scheme is advection_config.scheme
        assert res.metadata["swept"] == "nx"

    def test_incompatible_scheme_raises(self, advection_config):
        with pytest.raises(ConfigurationError):
            grid_sweep(advection_config, schemes=[Scheme.IMPLICIT])

    def test_empty_axis_raises(self, advection_config):
        with pytest.raises(ConfigurationError):
            grid_sweep(advection_config, nx_values=[])


class TestConvergenceStudy:
    """Tests for convergence_study."""

    def test_explicit_heat_is_second_order(self):
        base = RunConfig(
            params=HeatParameters(alpha=0.1),
            scheme=Scheme.EXPLICIT,
            nx=11,
            length=1.0,
            dt=0.04,
            tmax=0.2,
            initial=Sine(frequency=0.5),
        )
        study = convergence_study(base, [11, 21, 41])

        ratios = [r.outcome.stability.ratio for r in study.sweep.records]
        assert ratios == pytest.approx([0.8, 0.8, 0.8])
        assert study.dx == pytest.approx([0.1, 0.05, 0.025])
        assert np.all(np.diff(study.l2) < 0.0)
        assert study.orders.shape == (2,)
        assert np.all(np.abs(study.orders - 2.0) < 0.3)

    def test_upwind_is_first_order(self, advection_config):
        base = advection_config.replace(nx=101, dt=0.005, tmax=0.2)
        study = convergence_study(base, [101, 201, 401])

        ratios = [r.outcome.stability.ratio for r in study.sweep.records]
        assert ratios == pytest.approx([0.5, 0.5, 0.5])
        assert np.all(np.abs(study.orders - 1.0) < 0.2)

    def test_needs_two_grids(self, heat_config):
        with pytest.raises(ConfigurationError):
            convergence_study(heat_config, [41])
