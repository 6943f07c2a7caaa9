"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (ERFA → Skyfield, SPICE, etc.)
- Unit testing with stub providers instead of the real ephemeris
- Clear separation of concerns

Usage:
    ```python
    from ephemeris_cache.protocols import CacheStore, EphemerisProvider

    # Type hints work with any implementation
    provider: EphemerisProvider = ErfaEphemerisProvider()
    provider: EphemerisProvider = StubEphemerisProvider()
    ```
"""

from .cache_store import CacheStore
from .ephemeris_provider import EphemerisProvider

__all__ = [
    "CacheStore",
    "EphemerisProvider",
]
