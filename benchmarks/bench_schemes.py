"""Benchmark time-stepping throughput of every scheme."""

from typing import Dict

from fdbench.experiments import benchmark_run
from fdbench.pde import (
    AdvectionParameters,
    Gaussian,
    HeatParameters,
    Periodic,
    RunConfig,
    Scheme,
)


def benchmark_scheme(
    scheme: Scheme,
    nx: int = 1001,
    n_steps: int = 1000,
    trials: int = 5,
) -> Dict[str, float]:
    """Benchmark one scheme on a periodic Gaussian pulse.

    Args:
        scheme: Scheme to time.
        nx: Number of grid points.
        n_steps: Number of time steps per trial.
        trials: Number of timed trials.

    Returns:
        Dictionary with timing results.
    """
    dx = 1.0 / (nx - 1)
    if scheme in (Scheme.UPWIND, Scheme.LAX_FRIEDRICHS):
        params = AdvectionParameters(c=1.0)
        dt = 0.5 * dx
    else:
        params = HeatParameters(alpha=0.01)
        dt = 0.4 * dx * dx / params.alpha

    config = RunConfig(
        params=params,
        scheme=scheme,
        nx=nx,
        length=1.0,
        dt=dt,
        tmax=n_steps * dt,
        initial=Gaussian(center=0.5, width=0.05),
        boundary=Periodic(),
    )
    bench = benchmark_run(config, trials=trials, warmup=1)

    return {
        "nx": nx,
        "n_steps": bench.result.steps_taken,
        "median_time_sec": bench.stats.median,
        "time_per_step_sec": bench.stats.median / max(bench.result.steps_taken, 1),
        "steps_per_sec": bench.steps_per_second,
    }


if __name__ == "__main__":
    print("Benchmarking finite-difference schemes...")

    for scheme in Scheme:
        for nx in (101, 1001, 10001):
            results = benchmark_scheme(scheme, nx=nx, n_steps=500)
            print(f"{scheme.value} (nx={nx}, {results['n_steps']} steps):")
            print(f"  Time per step: {results['time_per_step_sec']*1e6:.2f} μs")
            print(f"  Steps per second: {results['steps_per_sec']:.0f}")
