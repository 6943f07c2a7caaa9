"""Response DTOs for API endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

PositionTuple = tuple[float, float, float]


class HelioVectorItem(BaseModel):
    """Heliocentric vector in astronomical units."""

    x: float
    y: float
    z: float
    distance_au: float = Field(..., description="Distance from the Sun in AU", ge=0.0)


class PositionsResponse(BaseModel):
    """Response DTO for batch display positions."""

    instant: datetime = Field(..., description="The instant positions were computed for")
    positions: dict[str, PositionTuple] = Field(
        default_factory=dict,
        description="Display position per body (render units, y-up)",
    )
    missing: list[str] = Field(
        default_factory=list,
        description="Requested bodies whose computation failed for this instant",
    )


class BodyDetailResponse(BaseModel):
    """Response DTO for a single body's details panel."""

    body: str
    instant: datetime
    helio_vector: HelioVectorItem
    position: PositionTuple
    velocity_km_s: float = Field(..., description="Circular-orbit speed estimate", gt=0.0)


class BodyStateItem(BaseModel):
    """One body in a snapshot."""

    body: str
    position: PositionTuple
    velocity_km_s: float = Field(..., ge=0.0)
    distance_au: float = Field(..., ge=0.0)
    degraded: bool = Field(False, description="True when fallback values were substituted")


class SnapshotResponse(BaseModel):
    """Response DTO for a time jump."""

    instant: datetime
    bodies: list[BodyStateItem] = Field(default_factory=list)


class CacheStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    vector_cache_size: int = Field(..., ge=0)
    position_cache_size: int = Field(..., ge=0)
    velocity_cache_size: int = Field(..., ge=0)
    time_tolerance_ms: float = Field(..., gt=0.0)
    metrics: dict[str, dict[str, float]] = Field(
        default_factory=dict,
        description="Hits, misses, evictions and hit rate per store",
    )


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    provider: str = Field(..., description="Name of the ephemeris provider")
    provider_healthy: bool
