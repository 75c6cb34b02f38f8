"""Parameter sweeps over run configurations.

Every configuration in a sweep is an independent run with its own grid.
Sweeps execute sequentially; failed or refused runs are recorded, not raised.
"""

from __future__ import annotations

import itertools
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from ..errors import ConfigurationError
from ..logging import get_logger
from ..pde.equations import HeatParameters, Scheme
from ..pde.runner import RunConfig, RunOutcome, run_simulation
from .benchmark import TimingStats

logger = get_logger(__name__)


@dataclass(frozen=True)
class SweepRecord:
    """One configuration of a sweep, its outcome and (if completed) timing stats."""

    config: RunConfig
    outcome: RunOutcome
    stats: Optional[TimingStats] = None

    def row(self) -> Dict[str, object]:
        """Flat row of plain values, ready for a CSV writer."""
        row: Dict[str, object] = dict(self.config.describe())
        row["state"] = self.outcome.state.value
        verdict = self.outcome.stability
        row["stability"] = None if verdict is None else verdict.status.value
        row["cfl_ratio"] = None if verdict is None else verdict.ratio
        row["steps"] = self.outcome.steps_taken
        result = self.outcome.result
        error = None if result is None else result.error
        row["l2"] = None if error is None else error.l2
        row["linf"] = None if error is None else error.linf
        if self.stats is not None:
            row["time_median"] = self.stats.median
            row["time_mean"] = self.stats.mean
            row["time_std"] = self.stats.std
            row["trials"] = self.stats.trials
        else:
            row["time_median"] = row["time_mean"] = row["time_std"] = None
            row["trials"] = 0
        row["message"] = self.outcome.message
        return row


@dataclass(frozen=True)
class SweepResult:
    """
    Records of a sweep in execution order.

    Attributes:
        records: One :class:`SweepRecord` per configuration.
        metadata: Free-form labels (e.g. which parameter was swept).
    """

    records: Tuple[SweepRecord, ...]
    metadata: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "records", tuple(self.records))
        if not isinstance(self.metadata, dict):
            raise ValueError(f"metadata must be a dict, got {type(self.metadata)}")
        object.__setattr__(self, "metadata", dict(self.metadata))

    def __len__(self) -> int:
        return len(self.records)

    def completed(self) -> List[SweepRecord]:
        return [r for r in self.records if r.outcome.ok]

    def aborted(self) -> List[SweepRecord]:
        return [r for r in self.records if not r.outcome.ok]

    def table(self) -> List[Dict[str, object]]:
        return [r.row() for r in self.records]


def _run_one(config: RunConfig, trials: int, warmup: int, allow_unstable: bool) -> SweepRecord:
    for _ in range(warmup):
        outcome = run_simulation(config, allow_unstable=allow_unstable)
        if not outcome.ok:
            return SweepRecord(config=config, outcome=outcome)

    timings = []
    outcome = None
    for _ in range(trials):
        outcome = run_simulation(config, allow_unstable=allow_unstable)
        if not outcome.ok:
            return SweepRecord(config=config, outcome=outcome)
        timings.append(outcome.result.wall_time_seconds)
    return SweepRecord(config=config, outcome=outcome, stats=TimingStats.from_samples(timings))


def run_sweep(
    configs: Iterable[RunConfig],
    trials: int = 1,
    warmup: int = 0,
    allow_unstable: bool = False,
    metadata: Optional[Dict[str, str]] = None,
) -> SweepResult:
    """
    Run every configuration in ``configs`` and collect the outcomes.

    Args:
        configs: Configurations to run, in order.
        trials: Timed runs per configuration (``>= 1``).
        warmup: Untimed runs per configuration before timing.
        allow_unstable: Forwarded to each run controller.
        metadata: Optional labels stored on the result.

    Returns:
        SweepResult with one record per configuration.
    """
    trials, warmup = int(trials), int(warmup)
    if trials < 1:
        raise ConfigurationError("trials must be at least 1.")
    if warmup < 0:
        raise ConfigurationError("warmup must be non-negative.")

    records = []
    for config in configs:
        record = _run_one(config, trials, warmup, allow_unstable)
        if record.outcome.ok:
            logger.info(
                "%s/%s nx=%d dt=%.3g: %s",
                config.params.name,
                config.scheme.value,
                config.nx,
                config.dt,
                record.outcome.message,
            )
        else:
            logger.warning(
                "%s/%s nx=%d dt=%.3g aborted: %s",
                config.params.name,
                config.scheme.value,
                config.nx,
                config.dt,
                record.outcome.message,
            )
        records.append(record)
    return SweepResult(records=tuple(records), metadata=metadata or {})


def grid_sweep(
    base: RunConfig,
    nx_values: Optional[Sequence[int]] = None,
    dt_values: Optional[Sequence[float]] = None,
    schemes: Optional[Sequence[Scheme]] = None,
    trials: int = 1,
    warmup: int = 0,
    allow_unstable: bool = False,
) -> SweepResult:
    """
    Sweep the Cartesian product of ``nx``, ``dt`` and scheme overrides.

    Unspecified axes keep the value of ``base``. Ordering is scheme-major,
    then ``nx``, then ``dt``.
    """
    nx_axis = list(nx_values) if nx_values is not None else [base.nx]
    dt_axis = list(dt_values) if dt_values is not None else [base.dt]
    scheme_axis = [Scheme.from_name(s) for s in schemes] if schemes is not None else [base.scheme]
    if not nx_axis or not dt_axis or not scheme_axis:
        raise ConfigurationError("sweep axes must be non-empty.")

    configs = [
        base.replace(scheme=scheme, nx=nx, dt=dt)
        for scheme, nx, dt in itertools.product(scheme_axis, nx_axis, dt_axis)
    ]
    metadata = {
        "swept": ",".join(
            name
            for name, values in (("scheme", schemes), ("nx", nx_values), ("dt", dt_values))
            if values is not None
        ),
        "equation": base.params.name,
    }
    return run_sweep(
        configs, trials=trials, warmup=warmup, allow_unstable=allow_unstable, metadata=metadata
    )


@dataclass(frozen=True)
class ConvergenceStudy:
    """
    Errors of a grid-refinement sweep.

    Attributes:
        sweep: The underlying sweep.
        dx: Grid spacing of each record.
        l2: L2 error of each record (``nan`` when unavailable).
        orders: Observed order between consecutive records with errors.
    """

    sweep: SweepResult
    dx: np.ndarray
    l2: np.ndarray
    orders: np.ndarray


def _observed_orders(dx: np.ndarray, err: np.ndarray) -> np.ndarray:
    orders = np.full(max(dx.size - 1, 0), np.nan)
    for i in range(dx.size - 1):
        e0, e1 = err[i], err[i + 1]
        if np.isfinite(e0) and np.isfinite(e1) and e0 > 0.0 and e1 > 0.0 and dx[i] != dx[i + 1]:
            orders[i] = math.log(e0 / e1) / math.log(dx[i] / dx[i + 1])
    return orders


def convergence_study(
    base: RunConfig,
    nx_values: Sequence[int],
    trials: int = 1,
) -> ConvergenceStudy:
    """
    Refine the grid while holding the scheme's mesh ratio fixed.

    Heat runs keep ``dt / dx^2`` constant, advection runs keep ``dt / dx``
    constant, so every refinement has the same stability ratio as ``base``.
    """
    nx_values = [int(n) for n in nx_values]
    if len(nx_values) < 2:
        raise ConfigurationError("a convergence study needs at least two grid sizes.")

    power = 2.0 if isinstance(base.params, HeatParameters) else 1.0
    configs = []
    for nx in nx_values:
        dx = base.length / (nx - 1)
        dt = base.dt * (dx / base.dx) ** power
        configs.append(base.replace(nx=nx, dt=dt))

    sweep = run_sweep(configs, trials=trials, metadata={"swept": "nx", "mesh_ratio_power": str(power)})
    dx = np.array([c.dx for c in configs], dtype=float)
    l2 = np.array(
        [
            r.outcome.result.error.l2
            if r.outcome.ok and r.outcome.result.error is not None
            else np.nan
            for r in sweep.records
        ],
        dtype=float,
    )
    return ConvergenceStudy(sweep=sweep, dx=dx, l2=l2, orders=_observed_orders(dx, l2))
