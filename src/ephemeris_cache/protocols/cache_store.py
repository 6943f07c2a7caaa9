"""Cache storage protocol.

Defines the interface for the bounded key/value stores the ephemeris
cache layers on top of each other. The default implementation is an
in-process LRU (``LRUCacheStore``).
"""

from collections.abc import Hashable, Iterator
from typing import Protocol, TypeVar, runtime_checkable

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@runtime_checkable
class CacheStore(Protocol[K, V]):
    """Protocol for bounded cache stores.

    Any type that implements these methods satisfies the protocol, no
    explicit inheritance needed.
    """

    @property
    def capacity(self) -> int:
        """Return the maximum number of entries the store may hold."""
        ...

    def get(self, key: K) -> V | None:
        """Look up an entry and mark it most recently used.

        Args:
            key: The cache key

        Returns:
            The stored value, or None on a miss
        """
        ...

    def set(self, key: K, value: V) -> K | None:
        """Insert or refresh an entry.

        Args:
            key: The cache key
            value: The value to store

        Returns:
            The key evicted to make room, or None if nothing was evicted
        """
        ...

    def clear(self) -> int:
        """Remove every entry.

        Returns:
            Number of entries removed
        """
        ...

    def keys(self) -> Iterator[K]:
        """Iterate keys from least to most recently used."""
        ...

    def __contains__(self, key: object) -> bool: ...

    def __len__(self) -> int: ...
