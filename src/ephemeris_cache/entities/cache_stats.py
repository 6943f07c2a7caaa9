"""Cache size snapshot entity."""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class CacheStats:
    """Current entry counts of the three ephemeris stores."""

    vector_cache_size: int
    position_cache_size: int
    velocity_cache_size: int

    def to_dict(self) -> dict[str, int]:
        return asdict(self)
