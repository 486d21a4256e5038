"""
Byte-bounded cache for decoded resources (images, buffers, file handles).

Entries are weighed by their size in bytes, a loader fills misses, and
values that own external resources are closed when they leave the cache.
"""

import logging
import sys
import threading
from typing import Any, Callable, Hashable, Optional

from ..utils.hooks import CacheHooks
from ..utils.lru_cache import LRUCache

logger = logging.getLogger(__name__)


def resource_nbytes(value: Any) -> int:
    """Best-effort size of a resource in bytes."""
    nbytes = getattr(value, "nbytes", None)
    if isinstance(nbytes, int):
        return nbytes
    if isinstance(value, (bytes, bytearray, memoryview)):
        return len(value)
    return sys.getsizeof(value)


class ResourceHooks(CacheHooks[Hashable, Any]):
    """Load on miss, weigh in bytes, close on removal."""

    def __init__(self, loader: Optional[Callable[[Hashable], Any]] = None):
        self._loader = loader
        self._closed = 0
        self._closed_lock = threading.Lock()

    def create(self, key: Hashable) -> Any:
        if self._loader is None:
            return None
        return self._loader(key)

    def weight_of(self, key: Hashable, value: Any) -> int:
        return resource_nbytes(value)

    def on_entry_removed(
        self, evicted: bool, key: Hashable, old_value: Any, new_value: Any
    ) -> None:
        # Re-putting the same object must not close the live value
        if old_value is new_value:
            return
        close = getattr(old_value, "close", None)
        if not callable(close):
            return
        close()
        with self._closed_lock:
            self._closed += 1
        logger.debug(f"Closed resource {key!r} (evicted={evicted})")

    @property
    def closed_count(self) -> int:
        with self._closed_lock:
            return self._closed


class ResourceCache(LRUCache[Hashable, Any]):
    """LRUCache whose capacity is a byte budget."""

    def __init__(
        self,
        max_bytes: int,
        loader: Optional[Callable[[Hashable], Any]] = None,
        name: Optional[str] = None,
    ):
        self._resource_hooks = ResourceHooks(loader)
        super().__init__(capacity=max_bytes, hooks=self._resource_hooks, name=name)

    def closed_count(self) -> int:
        """Number of removed values whose close() has been called."""
        return self._resource_hooks.closed_count
