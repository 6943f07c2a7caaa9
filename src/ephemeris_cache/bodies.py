"""Planets known to the ephemeris cache."""

from typing import Literal

PlanetName = Literal[
    "Mercury",
    "Venus",
    "Earth",
    "Mars",
    "Jupiter",
    "Saturn",
    "Uranus",
    "Neptune",
]

PLANET_ORDER: tuple[PlanetName, ...] = (
    "Mercury",
    "Venus",
    "Earth",
    "Mars",
    "Jupiter",
    "Saturn",
    "Uranus",
    "Neptune",
)

_PLANET_SET = frozenset(PLANET_ORDER)


def is_planet_name(value: object) -> bool:
    """Check whether a value names one of the eight planets (case-sensitive)."""
    return isinstance(value, str) and value in _PLANET_SET
