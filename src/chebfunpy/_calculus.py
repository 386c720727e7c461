"""Shared helpers for Chebyshev calculus operations (integration, roots, optimization).

All routines work on coefficient vectors of a single fun and its domain.

References
----------
- Good (1961), "The colleague matrix, a Chebyshev analogue of the companion
  matrix", Quarterly J. Mech. 14:195–196.
- Trefethen (2013), "Approximation Theory and Approximation Practice",
  SIAM, Chapters 18–21.
- Boyd (2002), "Computing zeros on a real interval through Chebyshev
  expansion and polynomial rootfinding", SIAM J. Numer. Anal. 40(5).
"""

from __future__ import annotations

import numpy as np

from chebfunpy._transform import (
    chebpts,
    chop_coeffs,
    clenshaw,
    coeffs_to_values,
    values_to_coeffs,
)

_EPS = float(np.finfo(float).eps)

# Colleague matrices above this size are solved piecewise
_SPLIT_DEGREE = 100
# Slightly off-centre so that roots at the midpoint of symmetric
# functions are not cut in half
_SPLIT_POINT = -0.004849834917525

_IMAG_TOL = 1e-10


def _integral_moments(n: int) -> np.ndarray:
    """Return ``I_k = ∫_{-1}^{1} T_k(x) dx`` for ``k = 0..n-1``.

    ``I_k = 2 / (1 - k²)`` for even k, 0 for odd k.
    """
    moments = np.zeros(n)
    for k in range(0, n, 2):
        moments[k] = 2.0 / (1.0 - k * k)
    return moments


def _integrate_coeffs(coeffs: np.ndarray, domain: tuple) -> float:
    """Integral over *domain* of the Chebyshev series *coeffs*."""
    a, b = domain
    return float(0.5 * (b - a) * np.dot(_integral_moments(len(coeffs)), coeffs))


def _norm2_squared(coeffs: np.ndarray, domain: tuple) -> float:
    """Return ``∫_a^b p(x)² dx`` for the series *coeffs*.

    The square has degree 2n, so sampling ``p`` on the degree-2n grid and
    transforming the squared samples gives its coefficients exactly.
    """
    n = len(coeffs) - 1
    padded = np.zeros(2 * n + 1)
    padded[: n + 1] = coeffs
    squared = values_to_coeffs(coeffs_to_values(padded) ** 2)
    return _integrate_coeffs(squared, domain)


def _derivative_coeffs(coeffs: np.ndarray, domain: tuple, order: int = 1) -> np.ndarray:
    """Coefficients of the *order*-th derivative on *domain*.

    Uses the backward recurrence ``c'_{k-1} = c'_{k+1} + 2k c_k``
    (``numpy.polynomial.chebyshev.chebder``) with the chain-rule factor
    ``2 / (b - a)`` per derivative.
    """
    from numpy.polynomial.chebyshev import chebder

    a, b = domain
    deriv = chebder(coeffs, m=order, scl=2.0 / (b - a))
    if len(deriv) == 0:
        return np.zeros(1)
    return deriv


def _trim_trailing(coeffs: np.ndarray, scale: float) -> np.ndarray:
    """Strip trailing coefficients at rounding level before building a colleague matrix."""
    scale = max(scale, float(np.max(np.abs(coeffs))))
    above = np.nonzero(np.abs(coeffs) > _EPS * scale)[0]
    if len(above) == 0:
        return np.zeros(1)
    return coeffs[: above[-1] + 1]


def _restrict_coeffs(coeffs: np.ndarray, lo: float, hi: float, scale: float) -> np.ndarray:
    """Re-expand the series *coeffs* on ``[lo, hi] ⊂ [-1, 1]`` and chop it."""
    n = len(coeffs) - 1
    local = values_to_coeffs(clenshaw(chebpts(n, (lo, hi)), coeffs))
    return chop_coeffs(local, scale, _EPS)


def _colleague_roots(coeffs: np.ndarray) -> np.ndarray:
    """Real eigenvalues in ``[-1, 1]`` of the colleague matrix of *coeffs*."""
    from numpy.polynomial.chebyshev import chebcompanion
    from scipy.linalg import eigvals

    raw_roots = eigvals(chebcompanion(coeffs))

    real_roots = []
    for r in raw_roots:
        if abs(r.imag) < _IMAG_TOL:
            t = r.real
            if -1.0 - _IMAG_TOL <= t <= 1.0 + _IMAG_TOL:
                real_roots.append(np.clip(t, -1.0, 1.0))
    return np.array(real_roots, dtype=float)


def _roots_unit(coeffs: np.ndarray, scale: float) -> np.ndarray:
    """Unsorted real roots in ``[-1, 1]`` of a Chebyshev series.

    Constants, including zero, contribute no roots here; callers decide
    what an identically-zero fun means.
    """
    coeffs = _trim_trailing(coeffs, scale)
    n = len(coeffs) - 1
    if n == 0:
        return np.array([], dtype=float)
    if n <= _SPLIT_DEGREE:
        return _colleague_roots(coeffs)

    pieces = []
    for lo, hi in ((-1.0, _SPLIT_POINT), (_SPLIT_POINT, 1.0)):
        local = _restrict_coeffs(coeffs, lo, hi, scale)
        local_roots = _roots_unit(local, scale)
        pieces.append(lo + 0.5 * (hi - lo) * (local_roots + 1.0))
    return np.concatenate(pieces)


def _roots_1d(coeffs: np.ndarray, domain: tuple, scale: float) -> np.ndarray:
    """Find all real roots of a Chebyshev series within its domain.

    Parameters
    ----------
    coeffs : ndarray of shape (n + 1,)
        Chebyshev coefficients on ``[-1, 1]``.
    domain : (float, float)
        Physical domain ``[a, b]``.
    scale : float
        Magnitude of the function values, used to trim rounding noise.

    Returns
    -------
    ndarray
        Sorted real roots in ``[a, b]``.
    """
    roots = _roots_unit(coeffs, scale)
    if len(roots) == 0:
        return np.array([], dtype=float)

    # Map from [-1, 1] to [a, b]
    a, b = domain
    physical = 0.5 * (a + b) + 0.5 * (b - a) * roots

    # Sort and deduplicate (tolerance for near-identical roots)
    physical = np.sort(physical)
    if len(physical) > 1:
        mask = np.concatenate([[True], np.diff(physical) > 1e-10 * (b - a + 1)])
        physical = physical[mask]

    return physical


def _optimize_1d(coeffs: np.ndarray, domain: tuple, evaluate,
                 mode: str = "min") -> tuple:
    """Find the minimum or maximum of a Chebyshev series on its domain.

    Parameters
    ----------
    coeffs : ndarray of shape (n + 1,)
        Chebyshev coefficients.
    domain : (float, float)
        Physical domain ``[a, b]``.
    evaluate : callable
        Vectorized evaluator of the fun at physical points.
    mode : {'min', 'max'}
        Whether to find the minimum or maximum.

    Returns
    -------
    (value, location) : (float, float)
        Ties resolve to the leftmost location.
    """
    deriv = _derivative_coeffs(coeffs, domain)
    deriv_scale = float(np.max(np.abs(coeffs_to_values(deriv))))

    # Critical points: roots of the derivative
    critical = _roots_1d(deriv, domain, deriv_scale)

    # Candidates: critical points + domain endpoints
    a, b = domain
    candidates = np.concatenate([[a], critical, [b]])

    vals = np.asarray(evaluate(candidates), dtype=float)

    idx = np.argmin(vals) if mode == "min" else np.argmax(vals)
    return float(vals[idx]), float(candidates[idx])
