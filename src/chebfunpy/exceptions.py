"""Exception and warning classes raised by chebfunpy.

Each error also derives from the builtin exception that matches its
meaning, so ``except ValueError`` or ``except RuntimeError`` keeps working
for callers that do not import this module.
"""


class ChebfunError(Exception):
    """Base class for all chebfunpy errors."""


class AllocationError(ChebfunError, MemoryError):
    """Coefficient or sample buffers could not be allocated."""


class DomainMismatchError(ChebfunError, ValueError):
    """Operands live on different intervals, or an interval is invalid."""


class AmbiguousRootsError(ChebfunError, ValueError):
    """Root finding was asked of the identically-zero function."""


class UninitializedFunError(ChebfunError, RuntimeError):
    """An operation was attempted on an empty (unbuilt or cleaned) fun."""


class CallbackError(ChebfunError, RuntimeError):
    """The user-supplied function failed or returned unusable samples."""


class ResolutionWarning(UserWarning):
    """Adaptive construction did not converge within ``max_degree``.

    The best fun obtained at the maximum degree is still returned; its
    ``resolved`` attribute is ``False``.
    """
