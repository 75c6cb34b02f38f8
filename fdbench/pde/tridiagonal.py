"""
Tridiagonal linear solves for the implicit heat schemes.

Row ``i`` of a system is ``sub[i] x[i-1] + diag[i] x[i] + sup[i] x[i+1] = rhs[i]``.
For the plain solver ``sub[0]`` and ``sup[n-1]`` are ignored. For the cyclic
solver the indices wrap, so ``sub[0]`` is the ``A[0, n-1]`` corner and
``sup[n-1]`` the ``A[n-1, 0]`` corner.

References:
    - Press et al., *Numerical Recipes*, 3rd ed., sections 2.4 and 2.7.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..errors import ConfigurationError, NumericalError

_EPS = float(np.finfo(float).eps)


def _check_lengths(sub, diag, sup, rhs, minimum: int) -> int:
    n = len(diag)
    if n < minimum:
        raise ConfigurationError(f"tridiagonal system needs at least {minimum} rows, got {n}.")
    for name, arr in (("sub", sub), ("sup", sup), ("rhs", rhs)):
        if len(arr) != n:
            raise ConfigurationError(f"{name} has length {len(arr)}, expected {n}.")
    return n


def _thomas(sub, diag, sup, rhs, out: np.ndarray, cp: np.ndarray, n: int) -> np.ndarray:
    pivot = diag[0]
    if abs(pivot) <= _EPS:
        raise NumericalError(f"near-singular tridiagonal pivot {pivot!r} at row 0")
    cp[0] = sup[0] / pivot if n > 1 else 0.0
    out[0] = rhs[0] / pivot

    for i in range(1, n):
        pivot = diag[i] - sub[i] * cp[i - 1]
        if abs(pivot) <= _EPS:
            raise NumericalError(f"near-singular tridiagonal pivot {pivot!r} at row {i}")
        cp[i] = sup[i] / pivot if i < n - 1 else 0.0
        out[i] = (rhs[i] - sub[i] * out[i - 1]) / pivot

    for i in range(n - 2, -1, -1):
        out[i] -= cp[i] * out[i + 1]
    return out


def solve_tridiagonal(
    sub: np.ndarray,
    diag: np.ndarray,
    sup: np.ndarray,
    rhs: np.ndarray,
    out: Optional[np.ndarray] = None,
    work: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    Solve a tridiagonal system with the Thomas algorithm.

    Parameters
    ----------
    sub, diag, sup:
        Sub-, main and super-diagonal coefficients, each of length ``n``.
    rhs:
        Right-hand side of length ``n``. ``out`` may alias ``rhs``.
    out:
        Optional output array of length ``n``.
    work:
        Optional scratch array of length ``n`` holding the modified
        super-diagonal. This is the only O(n) storage besides ``out``; the
        implicit heat kernels pass a row of ``Grid.work``, allocated once per
        grid, so with ``out`` and ``work`` supplied the solve allocates nothing
        and the coefficient rows are left untouched.

    Returns
    -------
    numpy.ndarray
        The solution ``x``.

    Raises
    ------
    NumericalError
        If an elimination pivot is within machine epsilon of zero.
    """
    n = _check_lengths(sub, diag, sup, rhs, minimum=1)
    if out is None:
        out = np.empty(n, dtype=float)
    if work is None:
        work = np.empty(n, dtype=float)
    return _thomas(sub, diag, sup, rhs, out, work, n)


def solve_cyclic_tridiagonal(
    sub: np.ndarray,
    diag: np.ndarray,
    sup: np.ndarray,
    rhs: np.ndarray,
    out: Optional[np.ndarray] = None,
    work: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    Solve a cyclic (periodic) tridiagonal system via Sherman-Morrison.

    The corner entries are folded into a rank-one correction so the system
    reduces to two plain Thomas solves.

    Parameters
    ----------
    sub, diag, sup, rhs:
        Length-``n`` arrays, ``n >= 3``, with ``sub[0]`` and ``sup[n-1]``
        holding the corner coefficients.
    out:
        Optional output array; must not alias ``rhs``.
    work:
        Optional scratch of shape ``(4, n)``.

    Raises
    ------
    NumericalError
        If the reduced system or the correction is near-singular.
    """
    n = _check_lengths(sub, diag, sup, rhs, minimum=3)
    if out is None:
        out = np.empty(n, dtype=float)
    if work is None:
        work = np.empty((4, n), dtype=float)
    elif work.shape[0] < 4 or work.shape[1] != n:
        raise ConfigurationError(f"work must have shape (4, {n}), got {work.shape}.")

    bb, u, z, cp = work[0], work[1], work[2], work[3]
    beta = sub[0]
    alpha = sup[n - 1]
    gamma = -diag[0]
    if abs(gamma) <= _EPS:
        raise NumericalError(f"near-singular cyclic system: diag[0] = {diag[0]!r}")

    bb[...] = diag
    bb[0] = diag[0] - gamma
    bb[n - 1] = diag[n - 1] - alpha * beta / gamma

    _thomas(sub, bb, sup, rhs, out, cp, n)

    u.fill(0.0)
    u[0] = gamma
    u[n - 1] = alpha
    _thomas(sub, bb, sup, u, z, cp, n)

    denom = 1.0 + z[0] + beta * z[n - 1] / gamma
    if abs(denom) <= _EPS:
        raise NumericalError("near-singular Sherman-Morrison correction in cyclic solve")
    fact = (out[0] + beta * out[n - 1] / gamma) / denom

    z *= fact
    out -= z
    return out


def tridiagonal_matvec(
    sub: np.ndarray,
    diag: np.ndarray,
    sup: np.ndarray,
    x: np.ndarray,
    cyclic: bool = False,
) -> np.ndarray:
    """Return ``A @ x`` for the (optionally cyclic) tridiagonal matrix ``A``."""
    sub = np.asarray(sub, dtype=float)
    diag = np.asarray(diag, dtype=float)
    sup = np.asarray(sup, dtype=float)
    x = np.asarray(x, dtype=float)
    _check_lengths(sub, diag, sup, x, minimum=3 if cyclic else 1)

    y = diag * x
    y[1:] += sub[1:] * x[:-1]
    y[:-1] += sup[:-1] * x[1:]
    if cyclic:
        y[0] += sub[0] * x[-1]
        y[-1] += sup[-1] * x[0]
    return y
