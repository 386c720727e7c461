"""Chebyshev grid, value/coefficient transforms, evaluation and chopping.

Samples live at the Chebyshev points of the second kind (the extrema of
``T_N``), stored in ascending order. The map between the N+1 samples and
the N+1 coefficients of ``p(x) = sum_k c_k T_k(x)`` is a type-I discrete
cosine transform, computed in O(N log N) by ``scipy.fft.dct`` for any N.

References
----------
- Trefethen (2013), "Approximation Theory and Approximation Practice",
  SIAM, Chapters 2-3.
- Clenshaw (1955), "A note on the summation of Chebyshev series",
  Mathematical Tables and Other Aids to Computation 9(51):118-120.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np
from numpy.polynomial.chebyshev import chebpts2

from chebfunpy.exceptions import AllocationError


def chebpts(degree: int, domain: Tuple[float, float] = (-1.0, 1.0)) -> np.ndarray:
    """Return the ``degree + 1`` Chebyshev points of the second kind on *domain*.

    Parameters
    ----------
    degree : int
        Polynomial degree N (N + 1 points).
    domain : (float, float), optional
        Interval ``[a, b]``. Default is ``[-1, 1]``.

    Returns
    -------
    ndarray of shape (degree + 1,)
        Points in ascending order with ``x[0] == a`` and ``x[-1] == b``.
        Degree 0 gives the midpoint.
    """
    if degree < 0:
        raise ValueError(f"degree must be >= 0, got {degree}")
    a, b = domain
    if degree == 0:
        return np.array([0.5 * (a + b)])
    try:
        nodes = 0.5 * (a + b) + 0.5 * (b - a) * chebpts2(degree + 1)
    except MemoryError as exc:
        raise AllocationError(f"Cannot allocate a grid of degree {degree}") from exc
    nodes[0] = a
    nodes[-1] = b
    return nodes


def values_to_coeffs(values: np.ndarray) -> np.ndarray:
    """Chebyshev coefficients of the interpolant through *values*.

    Parameters
    ----------
    values : ndarray of shape (n + 1,)
        Samples at ascending second-kind Chebyshev points.

    Returns
    -------
    ndarray of shape (n + 1,)
        Coefficients c_0, c_1, ..., c_n.
    """
    from scipy.fft import dct

    values = np.asarray(values, dtype=float)
    n = len(values) - 1
    if n == 0:
        return values.copy()
    try:
        # DCT-I expects decreasing nodes cos(pi*j/n)
        coeffs = dct(values[::-1], type=1) / n
    except MemoryError as exc:
        raise AllocationError(f"Cannot allocate transform of length {n + 1}") from exc
    coeffs[0] /= 2
    coeffs[-1] /= 2
    return coeffs


def coeffs_to_values(coeffs: np.ndarray) -> np.ndarray:
    """Samples at ascending Chebyshev points of the series *coeffs*.

    Inverse of :func:`values_to_coeffs`.
    """
    from scipy.fft import dct

    coeffs = np.asarray(coeffs, dtype=float)
    n = len(coeffs) - 1
    if n == 0:
        return coeffs.copy()
    try:
        scaled = coeffs.copy()
        scaled[0] *= 2
        scaled[-1] *= 2
        values_desc = dct(scaled, type=1) / 2
    except MemoryError as exc:
        raise AllocationError(f"Cannot allocate transform of length {n + 1}") from exc
    return values_desc[::-1].copy()


def clenshaw(t: np.ndarray, coeffs: np.ndarray) -> np.ndarray:
    """Evaluate ``sum_k c_k T_k(t)`` at points *t* in ``[-1, 1]``.

    Parameters
    ----------
    t : ndarray
        Evaluation points on the reference interval.
    coeffs : ndarray
        Chebyshev coefficients.

    Returns
    -------
    ndarray
        Values, same shape as *t*.
    """
    t = np.asarray(t, dtype=float)
    b1 = np.zeros_like(t)
    b2 = np.zeros_like(t)
    for c in coeffs[:0:-1]:
        b1, b2 = 2.0 * t * b1 - b2 + c, b1
    return t * b1 - b2 + coeffs[0]


def _cutoff(n: int, scale: float, tol: float) -> float:
    return tol * scale * max(n, 1)


def tail_resolved(coeffs: np.ndarray, scale: float, tol: float) -> bool:
    """Return True if the trailing coefficients are negligible.

    The last ``max(2, round(n / 8))`` coefficients must all lie below
    ``tol * scale * n``. Two or more are checked so that the zero odd (or
    even) coefficients of a symmetric function cannot pass on their own.
    """
    if scale == 0.0:
        return True
    n = len(coeffs) - 1
    tail = max(2, int(round(n / 8)))
    return bool(np.all(np.abs(coeffs[-tail:]) <= _cutoff(n, scale, tol)))


def chop_coeffs(coeffs: np.ndarray, scale: float, tol: float) -> np.ndarray:
    """Drop trailing coefficients below ``tol * scale * n``.

    Returns the exact zero series ``[0.0]`` if nothing survives.
    """
    n = len(coeffs) - 1
    above = np.nonzero(np.abs(coeffs) > _cutoff(n, scale, tol))[0]
    if len(above) == 0:
        return np.zeros(1)
    return np.array(coeffs[: above[-1] + 1], dtype=float)
