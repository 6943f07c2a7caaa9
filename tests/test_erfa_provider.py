"""
Tests against the real ERFA plan94 provider.

plan94 is analytic, so these run offline.
"""

import math
from datetime import datetime, timedelta, timezone

import pytest

from ephemeris_cache.bodies import PLANET_ORDER
from ephemeris_cache.repositories import ErfaEphemerisProvider
from ephemeris_cache.services import EphemerisCache

NEW_YEAR_2024 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _magnitude(position):
    return math.sqrt(sum(c**2 for c in position))


@pytest.fixture(scope="module")
def provider():
    return ErfaEphemerisProvider.create()


@pytest.fixture
def erfa_cache(provider):
    return EphemerisCache.create(
        provider=provider,
        vector_cache_size=100,
        position_cache_size=100,
        velocity_cache_size=50,
        time_tolerance_ms=50,
        scale_factor=10,
    )


def test_provider_is_available(provider):
    assert provider.is_available()
    assert provider.name == "erfa-plan94"


def test_earth_is_about_ten_units_from_origin(erfa_cache):
    """1 AU is 10 render units."""
    position = erfa_cache.get_position("Earth", NEW_YEAR_2024)

    assert _magnitude(position) == pytest.approx(10.0, abs=1.0)


def test_earth_velocity_is_plausible(erfa_cache):
    velocity = erfa_cache.get_velocity("Earth", NEW_YEAR_2024)

    assert 28 < velocity < 32


def test_mercury_is_within_its_orbit_range(erfa_cache):
    position = erfa_cache.get_position("Mercury", datetime(2024, 6, 15, tzinfo=timezone.utc))

    assert 3 <= _magnitude(position) <= 5


def test_distances_follow_planet_order(erfa_cache):
    """Mercury is closest and Neptune farthest; speeds fall outward."""
    states = erfa_cache.snapshot(PLANET_ORDER, NEW_YEAR_2024)

    assert not any(state.degraded for state in states.values())
    assert states["Mercury"].distance_au < states["Neptune"].distance_au
    assert states["Mercury"].velocity_km_s > states["Earth"].velocity_km_s
    assert states["Earth"].velocity_km_s > states["Neptune"].velocity_km_s


def test_batch_of_inner_planets_is_finite(erfa_cache):
    positions = erfa_cache.batch_compute(["Mercury", "Venus", "Earth", "Mars"], NEW_YEAR_2024)

    assert len(positions) == 4
    for position in positions.values():
        assert all(math.isfinite(c) for c in position)


def test_cached_vector_matches_direct_computation(provider, erfa_cache):
    cached = erfa_cache.get_helio_vector("Jupiter", NEW_YEAR_2024)
    direct = provider.compute_helio_vector("Jupiter", NEW_YEAR_2024)

    assert (cached.x, cached.y, cached.z) == (direct.x, direct.y, direct.z)


def test_earth_moves_over_one_day(erfa_cache):
    today = erfa_cache.get_position("Earth", NEW_YEAR_2024)
    tomorrow = erfa_cache.get_position("Earth", NEW_YEAR_2024 + timedelta(days=1))

    # About one degree of arc at 10 units
    assert math.dist(today, tomorrow) == pytest.approx(0.17, abs=0.03)


def test_far_future_dates_still_compute(erfa_cache):
    """plan94 degrades outside 1000-3000 AD but still returns a position."""
    position = erfa_cache.get_position("Saturn", datetime(3500, 1, 1, tzinfo=timezone.utc))

    assert all(math.isfinite(c) for c in position)
