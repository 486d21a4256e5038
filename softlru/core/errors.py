"""
Cache error taxonomy.

Input-validation errors subclass ValueError so callers that already guard
against bad arguments keep working. Sizing errors subclass RuntimeError:
they mean a weight function is broken and are never caught internally.
"""

from typing import Any, Optional


class CacheError(Exception):
    """Base class for all cache errors."""

    pass


class InvalidCapacityError(CacheError, ValueError):
    """Capacity (or resize target) is not a positive integer."""

    def __init__(self, capacity: Any):
        self.capacity = capacity
        super().__init__(f"capacity must be a positive integer, got {capacity!r}")


class InvalidKeyError(CacheError, ValueError):
    """A None key was passed where a key is required."""

    def __init__(self, message: str = "key must not be None"):
        super().__init__(message)


class InvalidValueError(CacheError, ValueError):
    """A None value was passed to put(); the cache never stores None."""

    def __init__(self, message: str = "value must not be None"):
        super().__init__(message)


class InconsistentSizingError(CacheError, RuntimeError):
    """Size accounting diverged from the map contents.

    Raised when a weight function returns a negative number, when the
    running size drops below zero, or when the map is empty while the
    running size is not.
    """

    def __init__(
        self,
        message: str,
        *,
        size: Optional[int] = None,
        key: Any = None,
        weight: Optional[int] = None,
    ):
        self.size = size
        self.key = key
        self.weight = weight
        super().__init__(message)
