"""In-process LRU implementation of CacheStore.

Backed by an ``OrderedDict`` whose order is access order: the first key
is the least recently used, the last key the most recently used. Not
thread-safe; callers serialize access.
"""

from collections import OrderedDict
from collections.abc import Hashable, Iterator
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LRUCacheStore(Generic[K, V]):
    """Bounded least-recently-used store.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(self, capacity: int) -> None:
        """Initialize the store.

        Args:
            capacity: Maximum number of entries (must be positive).
        """
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._store: OrderedDict[K, V] = OrderedDict()

    @property
    def capacity(self) -> int:
        return self._capacity

    def get(self, key: K) -> V | None:
        if key not in self._store:
            return None
        self._store.move_to_end(key)
        return self._store[key]

    def set(self, key: K, value: V) -> K | None:
        if key in self._store:
            self._store[key] = value
            self._store.move_to_end(key)
            return None

        evicted = None
        if len(self._store) >= self._capacity:
            evicted, _ = self._store.popitem(last=False)
        self._store[key] = value
        return evicted

    def clear(self) -> int:
        count = len(self._store)
        self._store.clear()
        return count

    def keys(self) -> Iterator[K]:
        return iter(list(self._store))

    def __contains__(self, key: object) -> bool:
        # Membership does not count as a use
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)
