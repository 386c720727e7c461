"""Construction options for adaptive Chebyshev interpolants."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class ChebOpts:
    """Read-only options consumed by the fun constructors.

    Parameters
    ----------
    max_degree : int, optional
        Largest degree the adaptive loop will sample. Default is 65536.
    min_degree : int, optional
        Degree of the first sampling round. Default is 16.
    tol : float, optional
        Relative resolution tolerance. Default is machine epsilon.
    resampling : bool, optional
        If False (default), doubling the degree reuses the previous samples
        and only evaluates the new points. If True, every round samples the
        full grid, and :meth:`Fun.restrict` re-resolves adaptively.

    Examples
    --------
    >>> from dataclasses import replace
    >>> opts = replace(DEFAULT_OPTS, max_degree=128)
    >>> opts.max_degree
    128
    """

    max_degree: int = 65536
    min_degree: int = 16
    tol: float = float(np.finfo(float).eps)
    resampling: bool = False

    def __post_init__(self):
        if self.max_degree < 1:
            raise ValueError(f"max_degree must be >= 1, got {self.max_degree}")
        if self.min_degree < 0:
            raise ValueError(f"min_degree must be >= 0, got {self.min_degree}")
        if not self.tol > 0:
            raise ValueError(f"tol must be positive, got {self.tol}")


DEFAULT_OPTS = ChebOpts()
