"""Extension points an embedding application implements to specialize a cache."""

from typing import Callable, Generic, Optional, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class CacheHooks(Generic[K, V]):
    """
    Default hooks: no value creation, unit weight, no removal handling.

    Subclass and override any of the three methods. The cache calls
    create() and on_entry_removed() without holding its lock, so both may
    call back into the cache. weight_of() is called under the lock; the
    lock is re-entrant, so reading the cache from it is safe, but it must
    not mutate the cache.
    """

    def create(self, key: K) -> Optional[V]:
        """Compute a value for a missed key, or None to report a miss."""
        return None

    def weight_of(self, key: K, value: V) -> int:
        """Return the non-negative cost of one entry."""
        return 1

    def on_entry_removed(
        self, evicted: bool, key: K, old_value: V, new_value: Optional[V]
    ) -> None:
        """Called for every entry leaving the cache.

        Args:
            evicted: True only when the entry was dropped to enforce capacity
            key: Key of the removed entry
            old_value: The value that left the cache
            new_value: The value that replaced it, when removal was a
                replacement; otherwise None
        """
        pass


class CallbackHooks(CacheHooks[K, V]):
    """Hooks assembled from plain callables; missing ones fall back to defaults."""

    def __init__(
        self,
        create: Optional[Callable[[K], Optional[V]]] = None,
        weight_of: Optional[Callable[[K, V], int]] = None,
        on_entry_removed: Optional[
            Callable[[bool, K, V, Optional[V]], None]
        ] = None,
    ):
        self._create = create
        self._weight_of = weight_of
        self._on_entry_removed = on_entry_removed

    def create(self, key: K) -> Optional[V]:
        if self._create is None:
            return None
        return self._create(key)

    def weight_of(self, key: K, value: V) -> int:
        if self._weight_of is None:
            return 1
        return self._weight_of(key, value)

    def on_entry_removed(
        self, evicted: bool, key: K, old_value: V, new_value: Optional[V]
    ) -> None:
        if self._on_entry_removed is not None:
            self._on_entry_removed(evicted, key, old_value, new_value)
