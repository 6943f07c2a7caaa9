import logging
from datetime import datetime
from typing import Any

from fastapi import FastAPI, Query, Response
from fastapi.middleware.cors import CORSMiddleware

from ephemeris_cache.api.dependencies import CacheDep, HandlerDep, build_lifespan
from ephemeris_cache.bodies import PLANET_ORDER
from ephemeris_cache.config import settings
from ephemeris_cache.dto import (
    BodyDetailResponse,
    CacheStatsResponse,
    HealthCheckResponse,
    JumpToDateRequest,
    PositionsResponse,
    SnapshotResponse,
)
from ephemeris_cache.protocols import EphemerisProvider

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

API_VERSION = "0.1.0"


def create_app(provider: EphemerisProvider | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        provider: Ephemeris provider to wrap. Defaults to ERFA plan94.

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Ephemeris Cache API",
        description="Time-quantized LRU cache for heliocentric planet positions",
        version=API_VERSION,
        lifespan=build_lifespan(provider),
    )

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": "Ephemeris Cache API",
            "version": API_VERSION,
            "bodies": list(PLANET_ORDER),
            "endpoints": {
                "positions": "/positions",
                "body": "/bodies/{body}",
                "jump": "/time/jump",
                "stats": "/cache/stats",
                "health": "/health",
                "ready": "/ready",
                "docs": "/docs",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: HandlerDep) -> HealthCheckResponse:
        """Health check endpoint."""
        return await handler.health_check()

    @app.get("/ready")
    async def ready(cache: CacheDep, response: Response) -> dict[str, Any]:
        """Lightweight readiness check; never touches the provider."""
        response.headers["Cache-Control"] = "no-store"
        return {"status": "ready", "time_tolerance_ms": cache.time_tolerance_ms}

    @app.get("/positions", response_model=PositionsResponse)
    async def positions(
        handler: HandlerDep,
        date: datetime | None = None,
        bodies: list[str] | None = Query(None),
    ) -> PositionsResponse:
        """Display positions for several bodies at one instant."""
        return await handler.get_positions(date, bodies)

    @app.get("/bodies/{body}", response_model=BodyDetailResponse)
    async def body_detail(
        body: str,
        handler: HandlerDep,
        date: datetime | None = None,
    ) -> BodyDetailResponse:
        """Heliocentric vector, position and velocity of one body."""
        return await handler.get_body(body, date)

    @app.post("/time/jump", response_model=SnapshotResponse)
    async def jump(request: JumpToDateRequest, handler: HandlerDep) -> SnapshotResponse:
        """Clear the cache and compute all planets at a new instant."""
        return await handler.jump_to_date(request)

    @app.get("/cache/stats", response_model=CacheStatsResponse)
    async def cache_stats(handler: HandlerDep) -> CacheStatsResponse:
        """Get cache sizes and hit/miss metrics."""
        return await handler.get_stats()

    @app.delete("/cache/clear")
    async def cache_clear(handler: HandlerDep) -> dict[str, Any]:
        """Clear all entries from the cache."""
        return await handler.clear_cache()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "ephemeris_cache.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
