"""Tests for the exception taxonomy."""

import warnings

import pytest

from fdbench.errors import (
    ConfigurationError,
    FdbenchError,
    NumericalError,
    StabilityWarning,
    UnstableConfigurationError,
    warn_if_unstable,
)
from fdbench.pde import StabilityStatus, StabilityVerdict


def test_error_hierarchy() -> None:
    assert issubclass(ConfigurationError, FdbenchError)
    assert issubclass(ConfigurationError, ValueError)
    assert issubclass(UnstableConfigurationError, ConfigurationError)
    assert issubclass(NumericalError, FdbenchError)
    assert issubclass(NumericalError, ArithmeticError)


def test_numerical_error_carries_step() -> None:
    err = NumericalError("pivot vanished", step=3)
    assert err.step == 3
    assert str(err) == "pivot vanished (step 3)"

    assert NumericalError("no step").step is None
    assert str(NumericalError("no step")) == "no step"


def test_unstable_configuration_error_keeps_verdict() -> None:
    verdict = StabilityVerdict(dt_max=0.5, ratio=1.2, status=StabilityStatus.UNSTABLE)
    err = UnstableConfigurationError("refused", verdict)
    assert err.verdict is verdict


def test_warn_if_unstable() -> None:
    stable = StabilityVerdict(dt_max=1.0, ratio=0.5, status=StabilityStatus.STABLE)
    marginal = StabilityVerdict(dt_max=1.0, ratio=1.03, status=StabilityStatus.MARGINAL)

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert warn_if_unstable(stable) is False

    with pytest.warns(StabilityWarning, match="marginal"):
        assert warn_if_unstable(marginal) is True
