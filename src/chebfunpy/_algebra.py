"""Shared helpers for arithmetic on funs."""

from __future__ import annotations

import numpy as np

from chebfunpy.exceptions import DomainMismatchError, UninitializedFunError


def _is_scalar(value) -> bool:
    """Return True if *value* is a numeric scalar (int, float, or numpy scalar)."""
    return isinstance(value, (int, float, np.integer, np.floating))


def _check_compatible(f, g) -> None:
    """Validate that two funs can be combined arithmetically.

    Both operands must be built funs on the same domain. Degrees may differ.
    """
    from chebfunpy.fun import Fun

    for name, operand in (("Left", f), ("Right", g)):
        if not isinstance(operand, Fun):
            raise TypeError(
                f"{name} operand must be a Fun, got {type(operand).__name__}"
            )
        if operand.is_empty:
            raise UninitializedFunError(f"{name} operand is an empty Fun.")

    if f.domain != g.domain:
        raise DomainMismatchError(
            f"Domain mismatch: {list(f.domain)} vs {list(g.domain)}"
        )


def _linear_combination(alpha: float, f_coeffs: np.ndarray,
                        beta: float, g_coeffs: np.ndarray) -> np.ndarray:
    """Return ``alpha * f_coeffs + beta * g_coeffs`` with zero-padding.

    Always allocates a fresh array, so either input may belong to the
    fun that receives the result.
    """
    n = max(len(f_coeffs), len(g_coeffs))
    result = np.zeros(n)
    result[: len(f_coeffs)] += alpha * f_coeffs
    result[: len(g_coeffs)] += beta * g_coeffs
    return result
