"""Ephemeris Cache - time-quantized LRU caching for planet positions.

This package provides a layered architecture around an expensive
heliocentric position calculation:

Layers:
    - protocols: Interface contracts (CacheStore, EphemerisProvider)
    - repositories: LRU store and ERFA ephemeris implementations
    - services: The ephemeris cache itself
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from ephemeris_cache.repositories import ErfaEphemerisProvider
    from ephemeris_cache.services import EphemerisCache

    # Using class method (recommended)
    cache = EphemerisCache.create(provider=ErfaEphemerisProvider())
    cache = EphemerisCache.create(provider=ErfaEphemerisProvider(), time_tolerance_ms=20)
    ```

For HTTP API:
    ```python
    from ephemeris_cache.api.app import app
    ```
"""

from ephemeris_cache.bodies import PLANET_ORDER, is_planet_name
from ephemeris_cache.config import settings
from ephemeris_cache.constants import ASTRONOMICAL_CONSTANTS
from ephemeris_cache.entities import BodyState, CacheMetrics, CacheStats, HelioVector
from ephemeris_cache.errors import CalculationError, InvalidInputError, OrbitError
from ephemeris_cache.protocols import CacheStore, EphemerisProvider
from ephemeris_cache.repositories import ErfaEphemerisProvider, LRUCacheStore
from ephemeris_cache.services import EphemerisCache
from ephemeris_cache.validation import validate_body, validate_instant

__all__ = [
    # Configuration
    "settings",
    "ASTRONOMICAL_CONSTANTS",
    # Bodies and validation
    "PLANET_ORDER",
    "is_planet_name",
    "validate_body",
    "validate_instant",
    # Protocols (interfaces)
    "CacheStore",
    "EphemerisProvider",
    # Services
    "EphemerisCache",
    # Repositories
    "ErfaEphemerisProvider",
    "LRUCacheStore",
    # Entities (domain models)
    "BodyState",
    "CacheMetrics",
    "CacheStats",
    "HelioVector",
    # Errors
    "OrbitError",
    "CalculationError",
    "InvalidInputError",
]
