"""Per-body snapshot entity."""

from dataclasses import dataclass

Position = tuple[float, float, float]

FALLBACK_POSITION: Position = (0.0, 0.0, 0.0)
FALLBACK_VELOCITY = 0.0


@dataclass(frozen=True)
class BodyState:
    """Display state of one body at one instant.

    When the ephemeris computation fails the fallback values are used and
    ``degraded`` is set. Fallbacks are never written to a cache store.

    Attributes:
        body: Planet name
        position: Display position in render units
        velocity_km_s: Orbital speed estimate in km/s
        distance_au: Distance from the Sun in AU (0.0 when degraded)
        degraded: True when fallback values were substituted
    """

    body: str
    position: Position
    velocity_km_s: float
    distance_au: float
    degraded: bool = False

    @classmethod
    def fallback(cls, body: str) -> "BodyState":
        return cls(
            body=body,
            position=FALLBACK_POSITION,
            velocity_km_s=FALLBACK_VELOCITY,
            distance_au=0.0,
            degraded=True,
        )
