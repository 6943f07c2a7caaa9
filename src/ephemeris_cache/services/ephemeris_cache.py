"""Ephemeris cache service.

Wraps an EphemerisProvider with three independent, bounded LRU stores:

- vector:   (body, quantized ms) -> HelioVector
- position: (body, quantized ms) -> display position
- velocity: (body, quantized ms) -> orbital speed (km/s)

Quantization affects only the cache key. The provider always receives
the caller's original instant.

Position and velocity are derived from the vector store but evicted
independently of it. Re-deriving after the source vector was evicted
costs one extra provider call and is still correct.
"""

import logging
import math
from collections.abc import Iterable
from datetime import datetime

from ephemeris_cache.bodies import PLANET_ORDER
from ephemeris_cache.config import settings
from ephemeris_cache.constants import AU_TO_METERS, SUN_GM
from ephemeris_cache.entities import BodyState, CacheMetrics, CacheStats, HelioVector
from ephemeris_cache.entities.body_state import Position
from ephemeris_cache.errors import CalculationError
from ephemeris_cache.protocols import CacheStore, EphemerisProvider
from ephemeris_cache.repositories import LRUCacheStore
from ephemeris_cache.validation import Instant, to_datetime, to_epoch_ms

logger = logging.getLogger(__name__)

CacheKey = tuple[str, float]


def quantize_ms(epoch_ms: float, tolerance_ms: float) -> float:
    """Round epoch milliseconds to the nearest multiple of the tolerance.

    Halves round up, so the mapping is monotonic and idempotent.
    """
    return math.floor(epoch_ms / tolerance_ms + 0.5) * tolerance_ms


def to_display_position(vector: HelioVector, scale: float) -> Position:
    """Scale AU to render units and switch to a y-up frame."""
    return (vector.x * scale, vector.z * scale, -vector.y * scale)


def orbital_velocity_km_s(distance_au: float) -> float:
    """Circular-orbit speed ``sqrt(GM / r)`` in km/s."""
    return math.sqrt(SUN_GM / (distance_au * AU_TO_METERS)) / 1000


class EphemerisCache:
    """Memoizing wrapper around an ephemeris provider.

    Single-threaded: all calls must come from one logical thread (the
    simulation loop, or the event loop serving the API).

    Example:
        ```python
        from ephemeris_cache.repositories import ErfaEphemerisProvider
        from ephemeris_cache.services import EphemerisCache

        cache = EphemerisCache.create(provider=ErfaEphemerisProvider())
        positions = cache.batch_compute(["Mercury", "Venus", "Earth"], datetime.now(timezone.utc))

        # User jumped far away in time
        cache.clear_all()
        ```
    """

    def __init__(
        self,
        provider: EphemerisProvider,
        vector_store: CacheStore[CacheKey, HelioVector],
        position_store: CacheStore[CacheKey, Position],
        velocity_store: CacheStore[CacheKey, float],
        time_tolerance_ms: float | None = None,
        scale_factor: float | None = None,
    ) -> None:
        """Initialize the ephemeris cache.

        Args:
            provider: Heliocentric vector calculation (required).
            vector_store: Store for raw vectors (required).
            position_store: Store for display positions (required).
            velocity_store: Store for orbital speeds (required).
            time_tolerance_ms: Quantization window. Defaults to settings.
            scale_factor: Render units per AU. Defaults to settings.
        """
        tolerance = time_tolerance_ms if time_tolerance_ms is not None else settings.time_tolerance_ms
        if not tolerance > 0:
            raise ValueError(f"time_tolerance_ms must be positive, got {tolerance}")

        self._provider = provider
        self._vectors = vector_store
        self._positions = position_store
        self._velocities = velocity_store
        self._tolerance_ms = float(tolerance)
        self._scale = scale_factor if scale_factor is not None else settings.scale_factor
        self._metrics = {
            "vector": CacheMetrics(),
            "position": CacheMetrics(),
            "velocity": CacheMetrics(),
        }

    @classmethod
    def create(
        cls,
        provider: EphemerisProvider,
        vector_cache_size: int | None = None,
        position_cache_size: int | None = None,
        velocity_cache_size: int | None = None,
        time_tolerance_ms: float | None = None,
        scale_factor: float | None = None,
    ) -> "EphemerisCache":
        """Factory method to create an EphemerisCache backed by LRU stores.

        Args:
            provider: Heliocentric vector calculation (required).
            vector_cache_size: Raw vector capacity. If None, uses settings.
            position_cache_size: Display position capacity. If None, uses settings.
            velocity_cache_size: Velocity capacity. If None, uses settings.
            time_tolerance_ms: Quantization window. If None, uses settings.
            scale_factor: Render units per AU. If None, uses settings.

        Returns:
            Configured EphemerisCache instance
        """
        if vector_cache_size is None:
            vector_cache_size = settings.vector_cache_size
        if position_cache_size is None:
            position_cache_size = settings.position_cache_size
        if velocity_cache_size is None:
            velocity_cache_size = settings.velocity_cache_size

        return cls(
            provider=provider,
            vector_store=LRUCacheStore(vector_cache_size),
            position_store=LRUCacheStore(position_cache_size),
            velocity_store=LRUCacheStore(velocity_cache_size),
            time_tolerance_ms=time_tolerance_ms,
            scale_factor=scale_factor,
        )

    def cache_key(self, body: str, instant: Instant) -> CacheKey:
        """Composite key of body and quantized instant."""
        return body, quantize_ms(to_epoch_ms(to_datetime(instant)), self._tolerance_ms)

    def get_helio_vector(self, body: str, instant: Instant) -> HelioVector:
        """Return the heliocentric vector, computing it on a miss.

        Raises:
            CalculationError: If the provider fails or returns non-finite values
        """
        dt = to_datetime(instant)
        key = self.cache_key(body, dt)

        vector = self._vectors.get(key)
        if vector is not None:
            self._metrics["vector"].record_hit()
            return vector
        self._metrics["vector"].record_miss()

        try:
            vector = self._provider.compute_helio_vector(body, dt)
        except Exception as e:
            raise CalculationError(
                f"Failed to calculate heliocentric vector for {body}: {e}",
                body=body,
                instant=dt,
                context={"provider": self._provider.name},
            ) from e

        if not vector.is_finite():
            raise CalculationError(
                f"Non-finite heliocentric vector for {body}",
                body=body,
                instant=dt,
                context={"provider": self._provider.name, "vector": (vector.x, vector.y, vector.z)},
            )

        self._store(self._vectors, "vector", key, vector)
        return vector

    def get_position(self, body: str, instant: Instant) -> Position:
        """Return the display position (render units, y-up).

        Raises:
            CalculationError: If the underlying vector cannot be computed
        """
        dt = to_datetime(instant)
        key = self.cache_key(body, dt)

        position = self._positions.get(key)
        if position is not None:
            self._metrics["position"].record_hit()
            return position
        self._metrics["position"].record_miss()

        position = to_display_position(self.get_helio_vector(body, dt), self._scale)
        if not all(math.isfinite(c) for c in position):
            raise CalculationError(f"Non-finite display position for {body}", body=body, instant=dt)

        self._store(self._positions, "position", key, position)
        return position

    def get_velocity(self, body: str, instant: Instant) -> float:
        """Return the circular-orbit speed estimate in km/s.

        Raises:
            CalculationError: If the vector cannot be computed or lies at the origin
        """
        dt = to_datetime(instant)
        key = self.cache_key(body, dt)

        velocity = self._velocities.get(key)
        if velocity is not None:
            self._metrics["velocity"].record_hit()
            return velocity
        self._metrics["velocity"].record_miss()

        distance = self.get_helio_vector(body, dt).magnitude
        if distance <= 0:
            raise CalculationError(f"Zero heliocentric distance for {body}", body=body, instant=dt)
        velocity = orbital_velocity_km_s(distance)
        if not math.isfinite(velocity):
            raise CalculationError(f"Non-finite velocity for {body}", body=body, instant=dt)

        self._store(self._velocities, "velocity", key, velocity)
        return velocity

    def batch_compute(self, bodies: Iterable[str], instant: Instant) -> dict[str, Position]:
        """Display positions for several bodies at one instant.

        Bodies whose computation fails are omitted from the result and
        logged; the rest of the batch still completes.

        Args:
            bodies: Planet names (duplicates collapse to one entry)
            instant: The shared instant

        Returns:
            Mapping of body to display position
        """
        dt = to_datetime(instant)
        results: dict[str, Position] = {}
        for body in dict.fromkeys(bodies):
            try:
                results[body] = self.get_position(body, dt)
            except CalculationError as e:
                logger.warning("Omitting %s from batch at %s: %s", body, dt.isoformat(), e.message)
        return results

    def snapshot(self, bodies: Iterable[str] | None, instant: Instant) -> dict[str, BodyState]:
        """Position, velocity and distance for each body.

        Failing bodies get fallback values with ``degraded=True``. The
        fallback is never cached.
        """
        dt = to_datetime(instant)
        states: dict[str, BodyState] = {}
        for body in dict.fromkeys(bodies if bodies is not None else PLANET_ORDER):
            try:
                states[body] = BodyState(
                    body=body,
                    position=self.get_position(body, dt),
                    velocity_km_s=self.get_velocity(body, dt),
                    distance_au=self.get_helio_vector(body, dt).magnitude,
                )
            except CalculationError as e:
                logger.error("Using fallback state for %s at %s: %s", body, dt.isoformat(), e.message)
                states[body] = BodyState.fallback(body)
        return states

    def jump_to(self, instant: Instant) -> datetime:
        """Discard all entries before a discontinuous time jump.

        Returns:
            The normalized target instant
        """
        dt = to_datetime(instant)
        self.clear_all()
        logger.info("Jumped to %s", dt.isoformat())
        return dt

    def clear_all(self) -> None:
        """Empty all three stores."""
        removed = self._vectors.clear() + self._positions.clear() + self._velocities.clear()
        logger.info("Cleared ephemeris caches (%d entries)", removed)

    def get_stats(self) -> CacheStats:
        """Current entry counts of the three stores."""
        return CacheStats(
            vector_cache_size=len(self._vectors),
            position_cache_size=len(self._positions),
            velocity_cache_size=len(self._velocities),
        )

    def get_metrics(self) -> dict[str, dict[str, float | int]]:
        """Hit/miss/eviction counters per store."""
        return {name: metrics.to_dict() for name, metrics in self._metrics.items()}

    def reset_metrics(self) -> None:
        for metrics in self._metrics.values():
            metrics.reset()

    def _store(self, store: CacheStore, name: str, key: CacheKey, value: object) -> None:
        evicted = store.set(key, value)
        if evicted is not None:
            self._metrics[name].record_eviction()
            logger.debug("Evicted %s entry %s", name, evicted)

    @property
    def time_tolerance_ms(self) -> float:
        """Get the quantization window in milliseconds."""
        return self._tolerance_ms

    @property
    def scale_factor(self) -> float:
        return self._scale

    @property
    def provider(self) -> EphemerisProvider:
        """Get the underlying provider (for testing)."""
        return self._provider
