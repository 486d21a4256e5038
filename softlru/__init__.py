"""Weighted, thread-safe LRU cache with create-on-miss and removal hooks."""

from .core.errors import (
    CacheError,
    InconsistentSizingError,
    InvalidCapacityError,
    InvalidKeyError,
    InvalidValueError,
)
from .utils.hooks import CacheHooks, CallbackHooks
from .utils.lru_cache import CacheStats, LRUCache
from .version import __version__

__all__ = [
    "CacheError",
    "CacheHooks",
    "CacheStats",
    "CallbackHooks",
    "InconsistentSizingError",
    "InvalidCapacityError",
    "InvalidKeyError",
    "InvalidValueError",
    "LRUCache",
    "__version__",
]
