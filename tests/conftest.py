"""Pytest configuration and shared fixtures for fdbench tests.

This module provides:
- A deterministic numpy RNG fixture
- Common run configurations used across the pde and experiments tests
"""

import os

import numpy as np
import pytest

from fdbench.diagnostics import is_debug_enabled, set_debug_enabled
from fdbench.pde import Dirichlet, Gaussian, HeatParameters, RunConfig, Scheme


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).

    Returns:
        A seeded numpy.random.Generator instance.
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function", autouse=True)
def restore_debug_mode():
    """Leave the global debug switch as each test found it."""
    original = is_debug_enabled()
    yield
    set_debug_enabled(original)


@pytest.fixture
def heat_config() -> RunConfig:
    """Small stable Crank-Nicolson heat run with a closed-form reference."""
    return RunConfig(
        params=HeatParameters(alpha=0.01),
        scheme=Scheme.CRANK_NICOLSON,
        nx=41,
        length=1.0,
        dt=1e-3,
        tmax=0.05,
        initial=Gaussian(center=0.5, width=0.05),
        boundary=Dirichlet(0.0, 0.0),
    )
