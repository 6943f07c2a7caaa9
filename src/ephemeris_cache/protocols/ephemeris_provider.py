"""Ephemeris provider protocol.

Defines the interface for any point-in-time heliocentric position
calculation that the cache can wrap.

Implementations can include:
- PyERFA's plan94 analytical theory (default)
- Skyfield with a JPL DE kernel
- SPICE via spiceypy
- Deterministic stubs for tests
"""

from datetime import datetime
from typing import Protocol, runtime_checkable

from ephemeris_cache.entities import HelioVector


@runtime_checkable
class EphemerisProvider(Protocol):
    """Protocol for heliocentric vector calculations.

    Implementations must be pure: the same (body, instant) always yields
    the same vector. They need no knowledge of caching.
    """

    @property
    def name(self) -> str:
        """Return the name/identifier of the ephemeris theory.

        Returns:
            Provider name (e.g., "erfa-plan94")
        """
        ...

    def compute_helio_vector(self, body: str, instant: datetime) -> HelioVector:
        """Compute a body's position relative to the Sun.

        Args:
            body: Planet name
            instant: Aware UTC datetime, unquantized

        Returns:
            The heliocentric vector in AU
        """
        ...

    def is_available(self) -> bool:
        """Check if the provider can compute positions.

        Returns:
            True if available, False otherwise
        """
        ...
