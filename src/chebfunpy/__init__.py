"""chebfunpy: adaptive Chebyshev interpolants of one-dimensional functions.

Provides the :class:`Fun` class, which represents a smooth function on an
interval ``[a, b]`` by a Chebyshev series of automatically chosen degree,
together with linear combination, restriction, rootfinding, extrema,
norms and integration on that representation. Construction is
controlled by the immutable :class:`ChebOpts` record.

Example
-------
>>> import numpy as np
>>> from chebfunpy import Fun
>>> f = Fun.build_vec(lambda x, _: np.cos(np.pi * x), -1, 1)
>>> np.round(f.roots(), 12)
array([-0.5,  0.5])
>>> round(f.max()[0], 12)
1.0
"""

from chebfunpy._version import __version__
from chebfunpy.exceptions import (
    AllocationError,
    AmbiguousRootsError,
    CallbackError,
    ChebfunError,
    DomainMismatchError,
    ResolutionWarning,
    UninitializedFunError,
)
from chebfunpy.fun import Fun
from chebfunpy.options import DEFAULT_OPTS, ChebOpts

__all__ = [
    "Fun",
    "ChebOpts",
    "DEFAULT_OPTS",
    "ChebfunError",
    "AllocationError",
    "AmbiguousRootsError",
    "CallbackError",
    "DomainMismatchError",
    "ResolutionWarning",
    "UninitializedFunError",
    "__version__",
]
