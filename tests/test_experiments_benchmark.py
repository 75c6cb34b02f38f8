"""Tests for repeated-trial benchmarking."""

from __future__ import annotations

import logging
from io import StringIO

import numpy as np
import pytest

from fdbench.errors import ConfigurationError, UnstableConfigurationError
from fdbench.experiments import TimingStats, benchmark_run
from fdbench.logging import configure_logging
from fdbench.pde import AdvectionParameters, Gaussian, Periodic, RunConfig, Scheme


class TestTimingStats:
    """Tests for TimingStats."""

    def test_from_samples(self):
        stats = TimingStats.from_samples([1.0, 2.0, 3.0, 6.0])
        assert stats.trials == 4
        assert stats.mean == pytest.approx(3.0)
        assert stats.median == pytest.approx(2.5)
        assert stats.minimum == 1.0
        assert stats.maximum == 6.0
        assert stats.std == pytest.approx(np.std([1.0, 2.0, 3.0, 6.0]))

    def test_single_sample_has_zero_spread(self):
        stats = TimingStats.from_samples([0.25])
        assert stats.std == 0.0
        assert stats.median == 0.25

    def test_as_dict_keys(self):
        data = TimingStats.from_samples([1.0]).as_dict()
        assert set(data) == {"trials", "mean", "std", "median", "min", "max"}

    @pytest.mark.parametrize("samples", [[], [[1.0, 2.0]], [1.0, float("nan")], [-1.0]])
    def test_rejects_bad_samples(self, samples):
        with pytest.raises(ValueError):
            TimingStats.from_samples(samples)


class TestBenchmarkRun:
    """Tests for benchmark_run."""

    def test_collects_one_timing_per_trial(self, heat_config):
        bench = benchmark_run(heat_config, trials=3, warmup=1)
        assert bench.timings.shape == (3,)
        assert bench.stats.trials == 3
        assert np.all(bench.timings >= 0.0)
        assert bench.result.steps_taken == 50
        assert bench.config is heat_config
        assert bench.steps_per_second > 0.0

    def test_zero_warmup_is_allowed(self, heat_config):
        bench = benchmark_run(heat_config, trials=1, warmup=0)
        assert bench.stats.trials == 1

    @pytest.mark.parametrize("trials,warmup", [(0, 0), (1, -1)])
    def test_rejects_bad_trial_counts(self, heat_config, trials, warmup):
        with pytest.raises(ConfigurationError):
            benchmark_run(heat_config, trials=trials, warmup=warmup)

    def test_unstable_configuration_raises(self):
        config = RunConfig(
            params=AdvectionParameters(c=1.0),
            scheme=Scheme.UPWIND,
            nx=3,
            length=1.0,
            dt=0.6,
            tmax=1.0,
            initial=Gaussian(center=0.5, width=0.2),
            boundary=Periodic(),
        )
        with pytest.raises(UnstableConfigurationError):
            benchmark_run(config, trials=2)

    def test_logs_summary_at_info(self, heat_config):
        stream = StringIO()
        configure_logging(level=logging.INFO, stream=stream)
        try:
            benchmark_run(heat_config, trials=2, warmup=0)
        finally:
            configure_logging(level=logging.WARNING)
        output = stream.getvalue()
        assert "heat/crank-nicolson" in output
        assert "2 trials" in output
