"""HTTP handlers for ephemeris cache operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, validation, and error handling.
"""

import logging
from datetime import datetime, timezone

from fastapi import HTTPException, status

from ephemeris_cache.bodies import PLANET_ORDER
from ephemeris_cache.dto import (
    BodyDetailResponse,
    BodyStateItem,
    CacheStatsResponse,
    HealthCheckResponse,
    HelioVectorItem,
    JumpToDateRequest,
    PositionsResponse,
    SnapshotResponse,
)
from ephemeris_cache.errors import CalculationError, InvalidInputError
from ephemeris_cache.services import EphemerisCache
from ephemeris_cache.validation import validate_body, validate_instant

logger = logging.getLogger(__name__)


def _invalid_input(e: InvalidInputError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=e.to_dict(),
    )


class EphemerisHandler:
    """HTTP handlers for ephemeris cache operations.

    This handler delegates to EphemerisCache and handles HTTP-specific
    concerns like:
    - Validating bodies and instants at the boundary
    - Converting entities to DTOs
    - Mapping InvalidInputError to 400 and CalculationError to 500

    Example:
        ```python
        cache = EphemerisCache.create(provider=ErfaEphemerisProvider())
        handler = EphemerisHandler(cache=cache)

        @app.get("/positions", response_model=PositionsResponse)
        async def positions(date: datetime | None = None):
            return await handler.get_positions(date, None)
        ```
    """

    def __init__(self, cache: EphemerisCache) -> None:
        """Initialize the handler.

        Args:
            cache: The ephemeris cache service (required).
        """
        self._cache = cache

    async def get_positions(
        self,
        date: datetime | None,
        bodies: list[str] | None,
    ) -> PositionsResponse:
        """Handle GET /positions requests.

        Args:
            date: Instant to compute for (defaults to now)
            bodies: Planet names (defaults to all planets)

        Returns:
            PositionsResponse; bodies that failed are listed under ``missing``

        Raises:
            HTTPException: 400 for unknown bodies or unusable instants
        """
        try:
            instant = validate_instant(date or datetime.now(timezone.utc))
            requested = [validate_body(b) for b in (bodies or PLANET_ORDER)]
        except InvalidInputError as e:
            raise _invalid_input(e) from e

        positions = self._cache.batch_compute(requested, instant)
        missing = [b for b in dict.fromkeys(requested) if b not in positions]

        return PositionsResponse(instant=instant, positions=positions, missing=missing)

    async def get_body(self, body: str, date: datetime | None) -> BodyDetailResponse:
        """Handle GET /bodies/{body} requests.

        Raises:
            HTTPException: 400 for invalid input, 500 if the calculation fails
        """
        try:
            body = validate_body(body)
            instant = validate_instant(date or datetime.now(timezone.utc))
        except InvalidInputError as e:
            raise _invalid_input(e) from e

        try:
            vector = self._cache.get_helio_vector(body, instant)
            position = self._cache.get_position(body, instant)
            velocity = self._cache.get_velocity(body, instant)
        except CalculationError as e:
            logger.error("Details for %s at %s failed: %s", body, instant.isoformat(), e.message)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to calculate {body}: {e.message}",
            ) from e

        return BodyDetailResponse(
            body=body,
            instant=instant,
            helio_vector=HelioVectorItem(
                x=vector.x,
                y=vector.y,
                z=vector.z,
                distance_au=vector.magnitude,
            ),
            position=position,
            velocity_km_s=velocity,
        )

    async def jump_to_date(self, request: JumpToDateRequest) -> SnapshotResponse:
        """Handle POST /time/jump requests.

        Clears every cache, then returns the snapshot of all planets at the
        new instant. Failing bodies carry fallback values and ``degraded``.
        """
        try:
            instant = self._cache.jump_to(request.date)
        except InvalidInputError as e:
            raise _invalid_input(e) from e

        states = self._cache.snapshot(PLANET_ORDER, instant)

        return SnapshotResponse(
            instant=instant,
            bodies=[
                BodyStateItem(
                    body=state.body,
                    position=state.position,
                    velocity_km_s=state.velocity_km_s,
                    distance_au=state.distance_au,
                    degraded=state.degraded,
                )
                for state in states.values()
            ],
        )

    async def get_stats(self) -> CacheStatsResponse:
        """Handle GET /cache/stats requests."""
        stats = self._cache.get_stats()

        return CacheStatsResponse(
            vector_cache_size=stats.vector_cache_size,
            position_cache_size=stats.position_cache_size,
            velocity_cache_size=stats.velocity_cache_size,
            time_tolerance_ms=self._cache.time_tolerance_ms,
            metrics=self._cache.get_metrics(),
        )

    async def clear_cache(self) -> dict:
        """Handle DELETE /cache/clear requests.

        Returns:
            Dict with clear operation result
        """
        self._cache.clear_all()

        return {
            "success": True,
            "message": "Cache cleared successfully",
        }

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests.

        Raises:
            HTTPException: 503 if the ephemeris provider is unavailable
        """
        provider = self._cache.provider
        healthy = provider.is_available()

        if not healthy:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=f"Ephemeris provider {provider.name} unavailable",
            )

        return HealthCheckResponse(status="healthy", provider=provider.name, provider_healthy=True)
