"""Repository layer for storage and external calculations.

This layer puts the in-process LRU store and the ERFA ephemeris behind
protocol-based interfaces. The repositories are protocol-based (structural
typing), not inheritance-based. Any class implementing the required
methods will satisfy the protocol.
"""

from ephemeris_cache.protocols import CacheStore, EphemerisProvider

from .erfa_ephemeris_provider import ErfaEphemerisProvider
from .lru_store import LRUCacheStore

__all__ = [
    "CacheStore",
    "EphemerisProvider",
    "ErfaEphemerisProvider",
    "LRUCacheStore",
]
