"""Benchmark harness: repeated-trial timing, parameter sweeps, convergence studies."""

from .benchmark import BenchmarkResult, TimingStats, benchmark_run
from .sweep import (
    ConvergenceStudy,
    SweepRecord,
    SweepResult,
    convergence_study,
    grid_sweep,
    run_sweep,
)

__all__ = [
    "BenchmarkResult",
    "TimingStats",
    "benchmark_run",
    "ConvergenceStudy",
    "SweepRecord",
    "SweepResult",
    "convergence_study",
    "grid_sweep",
    "run_sweep",
]
