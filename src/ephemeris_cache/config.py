import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

from ephemeris_cache.constants import SCALE_FACTOR

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Cache capacities (entries per store)
    vector_cache_size: int = int(os.getenv("EPHEMERIS_VECTOR_CACHE_SIZE", "1000"))
    position_cache_size: int = int(os.getenv("EPHEMERIS_POSITION_CACHE_SIZE", "1000"))
    velocity_cache_size: int = int(os.getenv("EPHEMERIS_VELOCITY_CACHE_SIZE", "500"))

    # Instants within half of this window share a cache key
    time_tolerance_ms: float = float(os.getenv("EPHEMERIS_TIME_TOLERANCE_MS", "50"))

    # Render units per astronomical unit
    scale_factor: float = float(os.getenv("EPHEMERIS_SCALE_FACTOR", str(SCALE_FACTOR)))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        for name in ("vector_cache_size", "position_cache_size", "velocity_cache_size"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name.upper()} must be a positive integer, got {getattr(self, name)}")

        if not self.time_tolerance_ms > 0:
            raise ValueError(
                f"EPHEMERIS_TIME_TOLERANCE_MS must be positive, got {self.time_tolerance_ms}"
            )

        if not self.scale_factor > 0:
            raise ValueError(f"EPHEMERIS_SCALE_FACTOR must be positive, got {self.scale_factor}")

        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"LOG_LEVEL must be a standard logging level, got {self.log_level!r}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
