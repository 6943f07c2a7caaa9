"""Shared fixtures: a deterministic ephemeris stub and caches built on it."""

import math
from datetime import datetime, timezone

import pytest

from ephemeris_cache.entities import HelioVector
from ephemeris_cache.services import EphemerisCache
from ephemeris_cache.validation import to_epoch_ms

# Semi-major axis (AU) and sidereal period (days)
CIRCULAR_ORBITS = {
    "Mercury": (0.387, 87.97),
    "Venus": (0.723, 224.70),
    "Earth": (1.000, 365.256),
    "Mars": (1.524, 686.98),
    "Jupiter": (5.203, 4332.59),
    "Saturn": (9.537, 10759.22),
    "Uranus": (19.19, 30688.5),
    "Neptune": (30.07, 60195.0),
}

J2000_MS = to_epoch_ms(datetime(2000, 1, 1, 12, tzinfo=timezone.utc))

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


class StubEphemerisProvider:
    """Circular coplanar orbits; records every call."""

    name = "stub-circular"

    def __init__(self) -> None:
        self.calls: list[tuple[str, datetime]] = []
        self.fail_bodies: set[str] = set()
        self.nan_bodies: set[str] = set()
        self.available = True

    def compute_helio_vector(self, body: str, instant: datetime) -> HelioVector:
        self.calls.append((body, instant))
        if body in self.fail_bodies:
            raise RuntimeError(f"ephemeris unavailable for {body}")
        if body in self.nan_bodies:
            return HelioVector(x=math.nan, y=0.0, z=0.0, t=instant)

        radius, period = CIRCULAR_ORBITS[body]
        days = (to_epoch_ms(instant) - J2000_MS) / 86_400_000
        angle = 2 * math.pi * days / period
        return HelioVector(x=radius * math.cos(angle), y=radius * math.sin(angle), z=0.0, t=instant)

    def is_available(self) -> bool:
        return self.available


@pytest.fixture
def stub_provider():
    """Create a fresh stub provider."""
    return StubEphemerisProvider()


@pytest.fixture
def cache(stub_provider):
    """Create a cache over the stub with explicit sizes."""
    return EphemerisCache.create(
        provider=stub_provider,
        vector_cache_size=100,
        position_cache_size=100,
        velocity_cache_size=50,
        time_tolerance_ms=50,
        scale_factor=10,
    )
