"""Adaptive one-dimensional Chebyshev interpolants ("funs").

A :class:`Fun` represents a smooth function on a closed interval ``[a, b]``
by its samples at the Chebyshev points of the second kind together with
the matching Chebyshev coefficients. The adaptive constructor doubles the
degree until the coefficient tail falls to rounding level and then chops
the series to its minimal length.

References
----------
- Battles & Trefethen (2004), "An Extension of MATLAB to Continuous
  Functions and Operators", SIAM J. Sci. Comput. 25(5):1743-1770
- Trefethen (2013), "Approximation Theory and Approximation Practice",
  SIAM
"""

from __future__ import annotations

import math
import time
import warnings
from typing import Callable, Tuple

import numpy as np

from chebfunpy._transform import (
    chebpts,
    chop_coeffs,
    clenshaw,
    coeffs_to_values,
    tail_resolved,
    values_to_coeffs,
)
from chebfunpy.exceptions import (
    AmbiguousRootsError,
    CallbackError,
    DomainMismatchError,
    ResolutionWarning,
    UninitializedFunError,
)
from chebfunpy.options import DEFAULT_OPTS, ChebOpts


def _check_domain(a: float, b: float) -> Tuple[float, float]:
    a, b = float(a), float(b)
    if not (math.isfinite(a) and math.isfinite(b)) or a >= b:
        raise DomainMismatchError(
            f"Domain must be finite with a < b, got [{a}, {b}]"
        )
    return a, b


def _sample(function: Callable, xs: np.ndarray, data) -> np.ndarray:
    """Call a vectorized user function at *xs* and validate the samples.

    A scalar return value is broadcast, so ``lambda x, _: 1.0`` works.
    """
    try:
        out = function(xs, data)
    except Exception as exc:
        raise CallbackError(
            f"Function raised {type(exc).__name__} on {len(xs)} points: {exc}"
        ) from exc
    try:
        out = np.asarray(out, dtype=float)
    except (TypeError, ValueError) as exc:
        raise CallbackError(f"Function returned non-numeric output: {exc}") from exc
    if out.ndim == 0:
        out = np.full(xs.shape, float(out))
    if out.shape != xs.shape:
        raise CallbackError(
            f"Function returned shape {out.shape} for {len(xs)} points"
        )
    if not np.isfinite(out).all():
        raise CallbackError("Function returned NaN or Inf")
    return out


def _vectorize_scalar(function: Callable) -> Callable:
    """Present a scalar ``f(x, data)`` as a vectorized ``f(xs, data)``."""
    def vectorized(xs, data):
        return [function(float(x), data) for x in xs]
    return vectorized


class Fun:
    """Chebyshev interpolant of a scalar function on one interval.

    ``Fun()`` is empty: it holds no data and every operation except
    :meth:`copy_from` raises :class:`UninitializedFunError`. Valid funs
    come from :meth:`build_vec`, :meth:`build_fixed`, :meth:`from_values`,
    :meth:`from_coefficients`, :meth:`combine` and :meth:`restrict`.

    Attributes
    ----------
    degree : int or None
        Polynomial degree N.
    domain : (float, float) or None
        Interval ``(a, b)``.
    values : ndarray or None
        N + 1 samples at ascending Chebyshev points on ``[a, b]``.
    coefficients : ndarray or None
        N + 1 Chebyshev coefficients of the interpolant.
    scale : float or None
        ``max |values|``.
    resolved : bool or None
        False when adaptive construction hit ``max_degree`` unconverged.

    Examples
    --------
    >>> import numpy as np
    >>> f = Fun.build_vec(lambda x, _: np.cos(np.pi * x), -1, 1)
    >>> np.round(f.roots(), 12)
    array([-0.5,  0.5])
    """

    def __init__(self):
        self.degree: int | None = None
        self.domain: Tuple[float, float] | None = None
        self.values: np.ndarray | None = None
        self.coefficients: np.ndarray | None = None
        self.scale: float | None = None
        self.resolved: bool | None = None
        self.build_time: float = 0.0
        self.n_evaluations: int = 0

    def _assign(self, coeffs: np.ndarray, domain: Tuple[float, float],
                values: np.ndarray | None = None, resolved: bool = True) -> "Fun":
        """Overwrite this fun with *coeffs* on *domain*.

        *values* must be the transform of *coeffs* when given; otherwise it
        is computed.
        """
        if values is None:
            values = coeffs_to_values(coeffs)
        self.coefficients = coeffs
        self.values = values
        self.degree = len(coeffs) - 1
        self.domain = (float(domain[0]), float(domain[1]))
        self.scale = float(np.max(np.abs(values)))
        self.resolved = resolved
        return self

    def _check_built(self) -> None:
        if self.coefficients is None:
            raise UninitializedFunError(
                "Fun is empty. Build it with build_vec() or build_fixed() first."
            )

    @property
    def is_empty(self) -> bool:
        """True if the fun holds no data (never built, or cleaned)."""
        return self.coefficients is None

    @property
    def nodes(self) -> np.ndarray:
        """Chebyshev points on which :attr:`values` are sampled."""
        self._check_built()
        return chebpts(self.degree, self.domain)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def build_vec(
        cls,
        function: Callable,
        a: float,
        b: float,
        opts: ChebOpts | None = None,
        data=None,
        verbose: bool = False,
        out: "Fun | None" = None,
    ) -> "Fun":
        """Adaptively construct a fun from a vectorized function.

        Samples *function* on Chebyshev grids of doubling degree until the
        trailing coefficients are negligible relative to the sample scale,
        then chops the series to the minimal degree.

        Parameters
        ----------
        function : callable
            ``function(xs, data) -> array-like`` returning one value per
            point of the 1-D array ``xs``.
        a, b : float
            Interval bounds, ``a < b``.
        opts : ChebOpts, optional
            Construction options. Defaults to :data:`DEFAULT_OPTS`.
        data : object, optional
            Passed through to *function* unchanged.
        verbose : bool, optional
            If True, print build progress. Default is False.
        out : Fun, optional
            Existing fun (typically empty) to build into.

        Returns
        -------
        Fun
            The constructed fun (*out* if given).

        Raises
        ------
        DomainMismatchError
            If ``[a, b]`` is not a finite interval with ``a < b``.
        CallbackError
            If *function* raises or returns unusable samples.

        Warns
        -----
        ResolutionWarning
            If the tail criterion is not met by ``opts.max_degree``. The
            returned fun is then unchopped with ``resolved = False``.
        """
        opts = DEFAULT_OPTS if opts is None else opts
        domain = _check_domain(a, b)
        if verbose:
            print(f"Building fun on [{domain[0]}, {domain[1]}] "
                  f"(max degree {opts.max_degree})...")

        start = time.time()
        n = min(opts.min_degree, opts.max_degree)
        nodes = chebpts(n, domain)
        values = _sample(function, nodes, data)
        n_evaluations = len(nodes)

        while True:
            coeffs = values_to_coeffs(values)
            scale = float(np.max(np.abs(values)))
            if verbose:
                print(f"  degree {n}: |c_N| = {abs(coeffs[-1]):.2e}, "
                      f"scale = {scale:.2e}")
            if tail_resolved(coeffs, scale, opts.tol):
                resolved = True
                break
            if n >= opts.max_degree:
                resolved = False
                break

            n_next = min(max(2 * n, 1), opts.max_degree)
            if n_next == 2 * n and not opts.resampling:
                # Old grid is the even-index subset of the doubled grid
                new_nodes = chebpts(n_next, domain)[1::2]
                merged = np.empty(n_next + 1)
                merged[0::2] = values
                merged[1::2] = _sample(function, new_nodes, data)
                values = merged
                n_evaluations += len(new_nodes)
            else:
                nodes = chebpts(n_next, domain)
                values = _sample(function, nodes, data)
                n_evaluations += len(nodes)
            n = n_next

        fun = cls() if out is None else out
        if resolved:
            chopped = chop_coeffs(coeffs, scale, opts.tol)
            fun._assign(chopped, domain,
                        values=values if len(chopped) == len(coeffs) else None)
        else:
            warnings.warn(
                f"Function not resolved on [{domain[0]}, {domain[1]}] at "
                f"max_degree={opts.max_degree}; accuracy is not guaranteed.",
                ResolutionWarning,
                stacklevel=2,
            )
            fun._assign(coeffs, domain, values=values, resolved=False)
        fun.build_time = time.time() - start
        fun.n_evaluations = n_evaluations

        if verbose:
            print(f"  Built in {fun.build_time:.3f}s "
                  f"(degree {fun.degree}, {n_evaluations} evaluations)")
        return fun

    @classmethod
    def build_fixed(
        cls,
        function: Callable,
        a: float,
        b: float,
        degree: int,
        data=None,
        out: "Fun | None" = None,
    ) -> "Fun":
        """Construct a fun of fixed degree from a scalar function.

        Parameters
        ----------
        function : callable
            ``function(x, data) -> float``, called once per grid point.
        a, b : float
            Interval bounds, ``a < b``.
        degree : int
            Degree of the interpolant (``degree + 1`` samples).
        data : object, optional
            Passed through to *function* unchanged.
        out : Fun, optional
            Existing fun to build into.

        Returns
        -------
        Fun
            Unchopped interpolant of exactly *degree*.
        """
        if degree < 0:
            raise ValueError(f"degree must be >= 0, got {degree}")
        domain = _check_domain(a, b)
        start = time.time()
        nodes = chebpts(degree, domain)
        values = _sample(_vectorize_scalar(function), nodes, data)

        fun = cls() if out is None else out
        fun._assign(values_to_coeffs(values), domain, values=values)
        fun.build_time = time.time() - start
        fun.n_evaluations = len(nodes)
        return fun

    @staticmethod
    def nodes_for(degree: int, domain: Tuple[float, float]) -> np.ndarray:
        """Chebyshev points of *degree* on *domain*, for external sampling.

        Evaluate your function at these points and pass the results to
        :meth:`from_values`.

        Examples
        --------
        >>> Fun.nodes_for(2, (0.0, 1.0))
        array([0. , 0.5, 1. ])
        """
        return chebpts(degree, _check_domain(*domain))

    @classmethod
    def from_values(cls, values, domain: Tuple[float, float]) -> "Fun":
        """Create a fun from samples at the points of :meth:`nodes_for`.

        Raises
        ------
        ValueError
            If *values* is empty, not 1-D, or contains NaN or Inf.
        """
        values = np.array(values, dtype=float)
        if values.ndim != 1 or len(values) == 0:
            raise ValueError(f"values must be a non-empty 1-D array, got shape {values.shape}")
        if not np.isfinite(values).all():
            raise ValueError("values contains NaN or Inf")
        return cls()._assign(values_to_coeffs(values), _check_domain(*domain), values=values)

    @classmethod
    def from_coefficients(cls, coeffs, domain: Tuple[float, float]) -> "Fun":
        """Create a fun from Chebyshev coefficients ``c_0, ..., c_N``."""
        coeffs = np.array(coeffs, dtype=float)
        if coeffs.ndim != 1 or len(coeffs) == 0:
            raise ValueError(f"coeffs must be a non-empty 1-D array, got shape {coeffs.shape}")
        if not np.isfinite(coeffs).all():
            raise ValueError("coeffs contains NaN or Inf")
        return cls()._assign(coeffs, _check_domain(*domain))

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def eval(self, x):
        """Evaluate the interpolant by Clenshaw's recurrence.

        Points that coincide with a grid node return the stored sample.
        Points outside the domain are extrapolated.

        Parameters
        ----------
        x : float or array-like
            Query point(s).

        Returns
        -------
        float or ndarray
            A float for scalar input, otherwise an array shaped like *x*.
        """
        self._check_built()
        x_arr = np.asarray(x, dtype=float)
        flat = np.atleast_1d(x_arr).ravel()

        a, b = self.domain
        result = clenshaw((2.0 * flat - (a + b)) / (b - a), self.coefficients)

        nodes = self.nodes
        idx = np.searchsorted(nodes, flat)
        lo = np.clip(idx - 1, 0, len(nodes) - 1)
        hi = np.clip(idx, 0, len(nodes) - 1)
        nearest = np.where(np.abs(flat - nodes[lo]) <= np.abs(flat - nodes[hi]), lo, hi)
        exact = np.abs(flat - nodes[nearest]) < 1e-14 * (b - a)
        result[exact] = self.values[nearest[exact]]

        if x_arr.ndim == 0:
            return float(result[0])
        return result.reshape(x_arr.shape)

    def __call__(self, x):
        return self.eval(x)

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------

    @classmethod
    def combine(
        cls,
        alpha: float,
        f: "Fun",
        beta: float,
        g: "Fun",
        out: "Fun | None" = None,
        opts: ChebOpts | None = None,
    ) -> "Fun":
        """Return ``alpha * f + beta * g``, chopped to its minimal degree.

        The shorter coefficient series is zero-padded. *out* may be one of
        the operands; the result is fully computed before *out* is touched.

        Parameters
        ----------
        alpha, beta : float
            Scalar weights.
        f, g : Fun
            Operands on the same domain.
        out : Fun, optional
            Fun to receive the result (new fun if None).
        opts : ChebOpts, optional
            Supplies the chopping tolerance.

        Raises
        ------
        UninitializedFunError
            If either operand is empty.
        DomainMismatchError
            If the operands live on different domains.
        """
        from chebfunpy._algebra import _check_compatible, _linear_combination

        opts = DEFAULT_OPTS if opts is None else opts
        _check_compatible(f, g)
        coeffs = _linear_combination(alpha, f.coefficients, beta, g.coefficients)
        scale = max(abs(alpha) * f.scale, abs(beta) * g.scale)
        coeffs = chop_coeffs(coeffs, scale, opts.tol)
        domain = f.domain

        result = cls() if out is None else out
        return result._assign(coeffs, domain)

    def _shifted(self, shift: float) -> "Fun":
        coeffs = self.coefficients.copy()
        coeffs[0] += shift
        return Fun()._assign(coeffs, self.domain)

    def __add__(self, other):
        from chebfunpy._algebra import _is_scalar
        if _is_scalar(other):
            self._check_built()
            return self._shifted(float(other))
        if not isinstance(other, Fun):
            return NotImplemented
        return Fun.combine(1.0, self, 1.0, other)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        from chebfunpy._algebra import _is_scalar
        if _is_scalar(other):
            self._check_built()
            return self._shifted(-float(other))
        if not isinstance(other, Fun):
            return NotImplemented
        return Fun.combine(1.0, self, -1.0, other)

    def __rsub__(self, other):
        from chebfunpy._algebra import _is_scalar
        if not _is_scalar(other):
            return NotImplemented
        return (-self)._shifted(float(other))

    def __mul__(self, scalar):
        from chebfunpy._algebra import _is_scalar
        if not _is_scalar(scalar):
            return NotImplemented
        return Fun.combine(float(scalar), self, 0.0, self)

    def __rmul__(self, scalar):
        return self.__mul__(scalar)

    def __truediv__(self, scalar):
        from chebfunpy._algebra import _is_scalar
        if not _is_scalar(scalar):
            return NotImplemented
        return self.__mul__(1.0 / float(scalar))

    def __neg__(self):
        return self.__mul__(-1.0)

    def __iadd__(self, other):
        from chebfunpy._algebra import _is_scalar
        if _is_scalar(other):
            self._check_built()
            return self.copy_from(self._shifted(float(other)))
        Fun.combine(1.0, self, 1.0, other, out=self)
        return self

    def __isub__(self, other):
        from chebfunpy._algebra import _is_scalar
        if _is_scalar(other):
            self._check_built()
            return self.copy_from(self._shifted(-float(other)))
        Fun.combine(1.0, self, -1.0, other, out=self)
        return self

    def __imul__(self, scalar):
        from chebfunpy._algebra import _is_scalar
        if not _is_scalar(scalar):
            return NotImplemented
        Fun.combine(float(scalar), self, 0.0, self, out=self)
        return self

    def __itruediv__(self, scalar):
        from chebfunpy._algebra import _is_scalar
        if not _is_scalar(scalar):
            return NotImplemented
        return self.__imul__(1.0 / float(scalar))

    # ------------------------------------------------------------------
    # Restriction
    # ------------------------------------------------------------------

    def restrict(self, c: float, d: float, opts: ChebOpts | None = None) -> "Fun":
        """Re-express the fun on the subinterval ``[c, d]``.

        By default the fun is resampled on the grid of the same degree on
        ``[c, d]``. With ``opts.resampling`` the restriction is rebuilt
        adaptively, using this fun as the function.

        Raises
        ------
        DomainMismatchError
            Unless ``a <= c < d <= b``.
        """
        self._check_built()
        a, b = self.domain
        if not (a <= c < d <= b):
            raise DomainMismatchError(
                f"Cannot restrict [{a}, {b}] to [{c}, {d}]"
            )
        opts = DEFAULT_OPTS if opts is None else opts
        if opts.resampling:
            return Fun.build_vec(lambda xs, _: self.eval(xs), c, d, opts=opts)

        domain = (float(c), float(d))
        values = self.eval(chebpts(self.degree, domain))
        return Fun()._assign(values_to_coeffs(values), domain, values=values)

    # ------------------------------------------------------------------
    # Calculus: roots, extrema, norms
    # ------------------------------------------------------------------

    def roots(self) -> np.ndarray:
        """Find all real roots in the domain via the colleague matrix.

        Returns
        -------
        ndarray
            Sorted roots; its length is the root count (at most ``degree``).

        Raises
        ------
        AmbiguousRootsError
            If the fun is identically zero.

        References
        ----------
        Good (1961), "The colleague matrix", Quarterly J. Mech. 14:195–196.
        """
        self._check_built()
        from chebfunpy._calculus import _roots_1d

        if not np.any(self.coefficients):
            raise AmbiguousRootsError(
                "Fun is identically zero; its roots are not isolated."
            )
        return _roots_1d(self.coefficients, self.domain, self.scale)

    def diff(self, order: int = 1) -> "Fun":
        """Return the *order*-th derivative as a new fun."""
        self._check_built()
        if order < 0:
            raise ValueError(f"order must be >= 0, got {order}")
        from chebfunpy._calculus import _derivative_coeffs

        if order == 0:
            return self.copy()
        return Fun()._assign(
            _derivative_coeffs(self.coefficients, self.domain, order), self.domain
        )

    def max(self) -> Tuple[float, float]:
        """Return ``(value, x)`` of the global maximum on the domain.

        Critical points are the roots of the derivative; the domain
        endpoints are always candidates. Ties go to the leftmost point.
        """
        self._check_built()
        from chebfunpy._calculus import _optimize_1d

        return _optimize_1d(self.coefficients, self.domain, self.eval, mode="max")

    def min(self) -> Tuple[float, float]:
        """Return ``(value, x)`` of the global minimum on the domain."""
        self._check_built()
        from chebfunpy._calculus import _optimize_1d

        return _optimize_1d(self.coefficients, self.domain, self.eval, mode="min")

    def norm_inf(self) -> float:
        """Maximum absolute value on the domain."""
        max_val, _ = self.max()
        min_val, _ = self.min()
        return max(abs(max_val), abs(min_val))

    def norm2(self) -> float:
        """L2 norm ``sqrt(∫_a^b f(x)² dx)``, computed from the coefficients."""
        self._check_built()
        from chebfunpy._calculus import _norm2_squared

        return math.sqrt(max(_norm2_squared(self.coefficients, self.domain), 0.0))

    def integrate(self) -> float:
        """Definite integral over the domain (Clenshaw–Curtis moments)."""
        self._check_built()
        from chebfunpy._calculus import _integrate_coeffs

        return _integrate_coeffs(self.coefficients, self.domain)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def copy(self) -> "Fun":
        """Return an independent deep copy."""
        return Fun().copy_from(self)

    def copy_from(self, src: "Fun") -> "Fun":
        """Overwrite this fun with a deep copy of *src* and return self."""
        if not isinstance(src, Fun):
            raise TypeError(f"Expected a Fun, got {type(src).__name__}")
        src._check_built()
        self._assign(src.coefficients.copy(), src.domain,
                     values=src.values.copy(), resolved=src.resolved)
        self.build_time = src.build_time
        self.n_evaluations = src.n_evaluations
        return self

    def clean(self) -> None:
        """Release the data and return the fun to the empty state."""
        self.__init__()

    # ------------------------------------------------------------------
    # Printing
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        if self.is_empty:
            return "Fun(empty)"
        return f"Fun(domain={list(self.domain)}, degree={self.degree})"

    def __str__(self) -> str:
        if self.is_empty:
            return "Fun (empty)"
        status = "resolved" if self.resolved else "NOT resolved"
        lines = [
            f"Fun ({status})",
            f"  Domain:  [{self.domain[0]}, {self.domain[1]}]",
            f"  Degree:  {self.degree}",
            f"  Scale:   {self.scale:.2e}",
            f"  Tail:    |c_N| = {abs(self.coefficients[-1]):.2e}",
        ]
        if self.n_evaluations:
            lines.append(
                f"  Build:   {self.build_time:.3f}s, "
                f"{self.n_evaluations:,} evaluations"
            )
        return "\n".join(lines)
