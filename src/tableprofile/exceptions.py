"""Exceptions raised by the profiling accumulators."""


class ProfilingError(Exception):
    """Base class for profiling contract violations."""


class InvalidArgumentError(ProfilingError, ValueError):
    """Raised when an operation receives an argument outside its contract."""


class SchemaMismatchError(ProfilingError, ValueError):
    """Raised when two states describing different columns are combined."""

    def __init__(self, message: str, left: object = None, right: object = None) -> None:
        super().__init__(message)
        self.left = left
        self.right = right


class FrozenStateError(ProfilingError, RuntimeError):
    """Raised when a state is mutated after it has been exported."""


__all__ = [
    "FrozenStateError",
    "InvalidArgumentError",
    "ProfilingError",
    "SchemaMismatchError",
]
