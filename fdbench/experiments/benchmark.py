"""Repeated-trial timing of a single run configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ..errors import ConfigurationError, NumericalError
from ..logging import get_logger
from ..pde.runner import RunConfig, RunResult, run_simulation

logger = get_logger(__name__)


@dataclass(frozen=True)
class TimingStats:
    """
    Summary statistics of wall-clock samples, in seconds.

    ``std`` is the population standard deviation, so a single trial reports 0.
    """

    trials: int
    mean: float
    std: float
    median: float
    minimum: float
    maximum: float

    @classmethod
    def from_samples(cls, samples: Sequence[float]) -> "TimingStats":
        arr = np.asarray(samples, dtype=float)
        if arr.ndim != 1 or arr.size == 0:
            raise ValueError("samples must be a non-empty 1D sequence")
        if not np.isfinite(arr).all() or np.any(arr < 0.0):
            raise ValueError("samples must be finite and non-negative")
        return cls(
            trials=int(arr.size),
            mean=float(np.mean(arr)),
            std=float(np.std(arr)),
            median=float(np.median(arr)),
            minimum=float(np.min(arr)),
            maximum=float(np.max(arr)),
        )

    def as_dict(self) -> dict:
        return {
            "trials": self.trials,
            "mean": self.mean,
            "std": self.std,
            "median": self.median,
            "min": self.minimum,
            "max": self.maximum,
        }


@dataclass(frozen=True)
class BenchmarkResult:
    """
    Timings of repeated runs of one configuration.

    Attributes:
        config: The configuration that was timed.
        timings: Per-trial step-loop wall times, shape ``(trials,)``.
        stats: Summary of ``timings``.
        result: Result of the last timed trial.
    """

    config: RunConfig
    timings: np.ndarray
    stats: TimingStats
    result: RunResult

    @property
    def steps_per_second(self) -> float:
        if self.stats.median <= 0.0:
            return float("inf")
        return self.result.steps_taken / self.stats.median


def benchmark_run(
    config: RunConfig,
    trials: int = 5,
    warmup: int = 1,
    allow_unstable: bool = False,
) -> BenchmarkResult:
    """
    Run ``config`` ``warmup + trials`` times and aggregate the timed trials.

    Args:
        config: Run configuration.
        trials: Number of timed runs (``>= 1``).
        warmup: Untimed runs executed first (``>= 0``).
        allow_unstable: Forwarded to the run controller.

    Returns:
        BenchmarkResult with per-trial timings and their statistics.

    Raises:
        UnstableConfigurationError: If the run is refused on stability grounds.
        NumericalError: If a trial fails numerically, or if two trials
            produce different final fields.

    Example:
        >>> bench = benchmark_run(config, trials=3)  # doctest: +SKIP
        >>> bench.stats.median  # doctest: +SKIP
    """
    if int(trials) < 1:
        raise ConfigurationError("trials must be at least 1.")
    if int(warmup) < 0:
        raise ConfigurationError("warmup must be non-negative.")

    logger.debug("benchmark %s: %d warmup, %d trials", config.describe(), warmup, trials)

    for _ in range(int(warmup)):
        run_simulation(config, allow_unstable=allow_unstable).unwrap()

    timings = np.empty(int(trials), dtype=float)
    reference_field = None
    result = None
    for i in range(int(trials)):
        result = run_simulation(config, allow_unstable=allow_unstable).unwrap()
        timings[i] = result.wall_time_seconds
        if reference_field is None:
            reference_field = result.final_field
        elif not np.array_equal(reference_field, result.final_field):
            raise NumericalError("trials produced different final fields", step=result.steps_taken)

    stats = TimingStats.from_samples(timings)
    logger.info(
        "%s/%s nx=%d: %d steps, median %.3e s over %d trials",
        config.params.name,
        config.scheme.value,
        config.nx,
        result.steps_taken,
        stats.median,
        stats.trials,
    )
    return BenchmarkResult(config=config, timings=timings, stats=stats, result=result)
