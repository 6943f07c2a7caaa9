"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from ephemeris_cache.config import settings
from ephemeris_cache.handlers import EphemerisHandler
from ephemeris_cache.protocols import EphemerisProvider
from ephemeris_cache.repositories import ErfaEphemerisProvider
from ephemeris_cache.services import EphemerisCache

logger = logging.getLogger(__name__)


def get_ephemeris_cache(request: Request) -> EphemerisCache:
    """Dependency injection for EphemerisCache from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The EphemerisCache instance from app.state

    Raises:
        RuntimeError: If the cache is not initialized
    """
    cache = getattr(request.app.state, "ephemeris_cache", None)
    if cache is None:
        raise RuntimeError("EphemerisCache not initialized. Check lifespan setup.")
    return cache


def get_handler(request: Request) -> EphemerisHandler:
    """Dependency injection for EphemerisHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "ephemeris_handler", None)
    if handler is None:
        raise RuntimeError("EphemerisHandler not initialized. Check lifespan setup.")
    return handler


def build_lifespan(
    provider: EphemerisProvider | None = None,
) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
    """Create the lifespan context manager for a FastAPI app.

    Args:
        provider: Ephemeris provider to wrap. Defaults to ERFA plan94.

    Returns:
        Lifespan callable that initializes the layers and stores them in app.state:
        1. Provider (external calculation)
        2. Cache service - app.state.ephemeris_cache
        3. Handler (HTTP endpoints) - app.state.ephemeris_handler
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        ephemeris = provider or ErfaEphemerisProvider.create()
        cache = EphemerisCache.create(provider=ephemeris)

        app.state.ephemeris_cache = cache
        app.state.ephemeris_handler = EphemerisHandler(cache=cache)

        logger.info(
            "Ephemeris cache initialized (provider=%s, tolerance=%sms, sizes=%d/%d/%d)",
            ephemeris.name,
            cache.time_tolerance_ms,
            settings.vector_cache_size,
            settings.position_cache_size,
            settings.velocity_cache_size,
        )

        yield

        # Cleanup - drop cached entries and remove from app.state
        cache.clear_all()
        del app.state.ephemeris_handler
        del app.state.ephemeris_cache
        logger.info("Ephemeris cache shut down")

    return lifespan


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[EphemerisHandler, Depends(get_handler)]
CacheDep = Annotated[EphemerisCache, Depends(get_ephemeris_cache)]
