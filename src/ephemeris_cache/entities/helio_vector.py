"""Heliocentric vector domain entity."""

import math
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class HelioVector:
    """Position of a body relative to the Sun.

    Attributes:
        x: X component in astronomical units (J2000 equatorial)
        y: Y component in astronomical units
        z: Z component in astronomical units
        t: The instant the vector was computed for
    """

    x: float
    y: float
    z: float
    t: datetime

    @property
    def magnitude(self) -> float:
        """Distance from the Sun in AU."""
        return math.sqrt(self.x**2 + self.y**2 + self.z**2)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)
