"""fdbench - benchmarking engine for 1D finite-difference heat and advection solvers."""

__version__ = "0.1.0"

from .diagnostics import (
    assert_finite,
    debug_context,
    field_mass,
    is_debug_enabled,
    set_debug_enabled,
)
from .errors import (
    ConfigurationError,
    FdbenchError,
    NumericalError,
    StabilityWarning,
    UnstableConfigurationError,
    warn_if_unstable,
)
from .experiments import (
    BenchmarkResult,
    SweepResult,
    TimingStats,
    benchmark_run,
    convergence_study,
    grid_sweep,
    run_sweep,
)
from .logging import configure_logging, get_logger, set_log_level
from .pde import (
    AdvectionParameters,
    Dirichlet,
    ErrorNorms,
    ExternalSamples,
    Gaussian,
    Grid,
    HeatParameters,
    Periodic,
    RunConfig,
    RunController,
    RunOutcome,
    RunResult,
    RunState,
    Scheme,
    Sine,
    StabilityStatus,
    StabilityVerdict,
    Step,
    analytic_reference,
    check_stability,
    compute_errors,
    run_simulation,
    simulate,
    solve_cyclic_tridiagonal,
    solve_tridiagonal,
)

__all__ = [
    "__version__",
    # Errors
    "FdbenchError",
    "ConfigurationError",
    "UnstableConfigurationError",
    "NumericalError",
    "StabilityWarning",
    "warn_if_unstable",
    # Core
    "Grid",
    "HeatParameters",
    "AdvectionParameters",
    "Scheme",
    "Dirichlet",
    "Periodic",
    "Gaussian",
    "Sine",
    "Step",
    "ExternalSamples",
    "StabilityStatus",
    "StabilityVerdict",
    "check_stability",
    "solve_tridiagonal",
    "solve_cyclic_tridiagonal",
    "ErrorNorms",
    "analytic_reference",
    "compute_errors",
    "RunConfig",
    "RunController",
    "RunOutcome",
    "RunResult",
    "RunState",
    "run_simulation",
    "simulate",
    # Harness
    "BenchmarkResult",
    "TimingStats",
    "SweepResult",
    "benchmark_run",
    "run_sweep",
    "grid_sweep",
    "convergence_study",
    # Diagnostics and logging
    "assert_finite",
    "field_mass",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    "get_logger",
    "set_log_level",
    "configure_logging",
]
