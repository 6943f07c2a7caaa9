"""Service layer for cache orchestration.

This layer contains the memoization logic in front of the ephemeris.
Services depend on protocols (interfaces), not concrete implementations,
making them testable with stub providers.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Cache)  -> (LRU store / ephemeris)

Usage:
    ```python
    from ephemeris_cache.services import EphemerisCache

    # Using factory method (recommended)
    cache = EphemerisCache.create(provider=ErfaEphemerisProvider())
    cache = EphemerisCache.create(provider=provider, time_tolerance_ms=20)

    # Or manual creation
    cache = EphemerisCache(
        provider=provider,
        vector_store=LRUCacheStore(1000),
        position_store=LRUCacheStore(1000),
        velocity_store=LRUCacheStore(500),
    )
    ```
"""

from .ephemeris_cache import EphemerisCache, orbital_velocity_km_s, quantize_ms, to_display_position

__all__ = [
    "EphemerisCache",
    "orbital_velocity_km_s",
    "quantize_ms",
    "to_display_position",
]
