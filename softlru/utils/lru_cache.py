"""
Weighted, thread-safe LRU cache.

Capacity is measured by a weight function supplied through CacheHooks
(default: one unit per entry). A single re-entrant lock guards the map,
the running size, the capacity and the statistics counters. The create() and
on_entry_removed() hooks always run with the lock released, so they can
call back into the cache and slow hooks do not block other callers.

Hook errors are not transactional with cache state: an exception raised
by a hook propagates to the caller of the operation that triggered it,
and whatever bookkeeping that operation had not finished yet is skipped.
"""

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Generic, List, Optional, Tuple, TypeVar

from ..core.config import get_settings
from ..core.errors import (
    InconsistentSizingError,
    InvalidCapacityError,
    InvalidKeyError,
    InvalidValueError,
)
from ..core.typed_config import CacheConfig
from .hooks import CacheHooks

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")


@dataclass(frozen=True)
class CacheStats:
    """Point-in-time copy of a cache's counters, taken atomically."""

    size: int
    capacity: int
    hits: int
    misses: int
    puts: int
    created: int
    evictions: int

    @property
    def hit_rate(self) -> float:
        """Percentage of lookups that hit, 0.0 before any lookup."""
        accesses = self.hits + self.misses
        if accesses == 0:
            return 0.0
        return 100.0 * self.hits / accesses


def _check_capacity(capacity) -> int:
    if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
        raise InvalidCapacityError(capacity)
    return capacity


class LRUCache(Generic[K, V]):
    """
    Thread-safe LRU cache bounded by total entry weight.

    When the summed weight exceeds capacity, the least recently used
    entries are evicted until it fits again. None is never stored: it is
    rejected as a key or value and means "not found" as a result.
    """

    def __init__(
        self,
        capacity: Optional[int] = None,
        hooks: Optional[CacheHooks[K, V]] = None,
        name: Optional[str] = None,
    ):
        settings = get_settings()
        if capacity is None:
            capacity = settings.default_capacity
        self._capacity = _check_capacity(capacity)
        self._cache: OrderedDict[K, V] = OrderedDict()
        self._hooks: CacheHooks[K, V] = hooks if hooks is not None else CacheHooks()
        self._name = name or type(self).__name__
        self._log_evictions = settings.log_evictions
        self._lock = threading.RLock()

        self._size = 0
        self._hit_count = 0
        self._miss_count = 0
        self._put_count = 0
        self._create_count = 0
        self._eviction_count = 0

    @classmethod
    def from_config(
        cls, config: CacheConfig, hooks: Optional[CacheHooks[K, V]] = None
    ) -> "LRUCache[K, V]":
        """Build a cache from a validated CacheConfig."""
        return cls(capacity=config.capacity, hooks=hooks, name=config.name)

    # ------------------------------------------------------------------
    # Size accounting
    # ------------------------------------------------------------------

    def _weigh(self, key: K, value: V) -> int:
        weight = self._hooks.weight_of(key, value)
        if isinstance(weight, bool) or not isinstance(weight, int):
            logger.error(
                f"Non-integer weight {weight!r} for key {key!r} in cache {self._name}"
            )
            raise InconsistentSizingError(
                f"Weight must be an int: {key!r}={weight!r}", key=key, weight=weight
            )
        if weight < 0:
            logger.error(
                f"Negative weight {weight} for key {key!r} in cache {self._name}"
            )
            raise InconsistentSizingError(
                f"Negative weight: {key!r}={weight}", key=key, weight=weight
            )
        return weight

    def _check_consistency(self) -> None:
        """Must be called with the lock held."""
        if self._size < 0 or (not self._cache and self._size != 0):
            logger.error(
                f"Cache {self._name} reports inconsistent size {self._size} "
                f"with {len(self._cache)} entries"
            )
            raise InconsistentSizingError(
                f"{type(self._hooks).__name__}.weight_of() is reporting "
                f"inconsistent results (size={self._size})",
                size=self._size,
            )

    # ------------------------------------------------------------------
    # Core operations
    # ------------------------------------------------------------------

    def resize(self, new_capacity: int) -> None:
        """Change capacity and evict down to it if needed."""
        _check_capacity(new_capacity)
        with self._lock:
            old_capacity = self._capacity
            self._capacity = new_capacity
        logger.info(f"Resized cache {self._name}: {old_capacity} -> {new_capacity}")
        self.trim()

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """Get item and move to end (most recently used).

        On a miss the create() hook is asked for a value outside the lock.
        If another thread stored the key in the meantime, the stored value
        wins and the created one is handed to on_entry_removed() as a
        non-eviction removal.
        """
        if key is None:
            raise InvalidKeyError()

        with self._lock:
            if key in self._cache:
                self._cache.move_to_end(key)
                self._hit_count += 1
                return self._cache[key]
            self._miss_count += 1

        created = self._hooks.create(key)
        if created is None:
            return default

        with self._lock:
            self._create_count += 1
            existing = self._cache.get(key)
            if existing is not None:
                self._cache.move_to_end(key)
            else:
                weight = self._weigh(key, created)
                self._cache[key] = created
                self._size += weight

        if existing is not None:
            self._hooks.on_entry_removed(False, key, created, existing)
            return existing

        self.trim()
        return created

    def put(self, key: K, value: V) -> Optional[V]:
        """Store value as most recently used; return the value it replaced."""
        if key is None:
            raise InvalidKeyError()
        if value is None:
            raise InvalidValueError()

        with self._lock:
            weight = self._weigh(key, value)
            previous = self._cache.get(key)
            previous_weight = self._weigh(key, previous) if previous is not None else 0

            self._put_count += 1
            if previous is not None:
                self._cache.move_to_end(key)
            self._cache[key] = value
            self._size += weight - previous_weight

        if previous is not None:
            self._hooks.on_entry_removed(False, key, previous, value)

        self.trim()
        return previous

    def trim(self, target: Optional[int] = None) -> None:
        """Evict least recently used entries until size <= target.

        Args:
            target: Size to trim down to; defaults to the current capacity
        """
        while True:
            with self._lock:
                self._check_consistency()
                limit = self._capacity if target is None else target
                if self._size <= limit or not self._cache:
                    break
                key, value = self._cache.popitem(last=False)
                self._size -= self._weigh(key, value)
                self._eviction_count += 1

            if self._log_evictions:
                logger.debug(f"Evicted {key!r} from cache {self._name}")
            self._hooks.on_entry_removed(True, key, value, None)

    def evict_all(self) -> None:
        """Evict every entry, zero-weight ones included."""
        self.trim(-1)

    def remove(self, key: K) -> Optional[V]:
        """Remove key if present; return the removed value."""
        if key is None:
            raise InvalidKeyError()

        with self._lock:
            previous = self._cache.pop(key, None)
            if previous is not None:
                self._size -= self._weigh(key, previous)

        if previous is not None:
            self._hooks.on_entry_removed(False, key, previous, None)
        return previous

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def name(self) -> str:
        return self._name

    def size(self) -> int:
        with self._lock:
            return self._size

    def capacity(self) -> int:
        with self._lock:
            return self._capacity

    def hit_count(self) -> int:
        with self._lock:
            return self._hit_count

    def miss_count(self) -> int:
        with self._lock:
            return self._miss_count

    def create_count(self) -> int:
        with self._lock:
            return self._create_count

    def put_count(self) -> int:
        with self._lock:
            return self._put_count

    def eviction_count(self) -> int:
        with self._lock:
            return self._eviction_count

    def stats(self) -> CacheStats:
        """Return all counters captured in one critical section."""
        with self._lock:
            return CacheStats(
                size=self._size,
                capacity=self._capacity,
                hits=self._hit_count,
                misses=self._miss_count,
                puts=self._put_count,
                created=self._create_count,
                evictions=self._eviction_count,
            )

    def snapshot(self) -> "OrderedDict[K, V]":
        """Return a copy of the contents, least recently used first."""
        with self._lock:
            return OrderedDict(self._cache)

    def __str__(self) -> str:
        stats = self.stats()
        return (
            f"{type(self).__name__}[capacity={stats.capacity},hits={stats.hits},"
            f"misses={stats.misses},hitRate={int(stats.hit_rate)}%]"
        )

    __repr__ = __str__

    # ------------------------------------------------------------------
    # Mapping-style access
    # ------------------------------------------------------------------

    def __contains__(self, key: K) -> bool:
        with self._lock:
            return key in self._cache

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def __getitem__(self, key: K) -> V:
        value = self.get(key)
        if value is None:
            raise KeyError(key)
        return value

    def __setitem__(self, key: K, value: V) -> None:
        self.put(key, value)

    def __delitem__(self, key: K) -> None:
        if self.remove(key) is None:
            raise KeyError(key)

    def pop(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """Remove and return item."""
        previous = self.remove(key)
        return default if previous is None else previous

    def clear(self) -> None:
        """Clear all items."""
        self.evict_all()

    def keys(self) -> List[K]:
        """Return snapshot of keys."""
        with self._lock:
            return list(self._cache.keys())

    def items(self) -> List[Tuple[K, V]]:
        """Return snapshot of items."""
        with self._lock:
            return list(self._cache.items())
