"""
Evaluation utilities for the ephemeris cache.

This module replays a simulated animation loop against the cache to tune
the quantization tolerance: a wider window coalesces more jittered
per-frame queries, but lets the cached instant lag further behind the
true simulated instant. Lag is measured against the instant the served
value was actually computed for, which can be up to a full window away.
"""

import random
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import numpy as np

from ephemeris_cache.bodies import PLANET_ORDER
from ephemeris_cache.entities import HelioVector
from ephemeris_cache.protocols import EphemerisProvider
from ephemeris_cache.services import EphemerisCache
from ephemeris_cache.validation import to_epoch_ms


@dataclass
class EvalResult:
    """Result of one frame-loop replay at a fixed tolerance."""

    tolerance_ms: float
    total_queries: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    provider_calls: int = 0
    max_lag_ms: float = 0.0
    avg_lookup_time_ms: float = 0.0

    @property
    def hit_rate(self) -> float:
        """Calculate position cache hit rate."""
        if self.total_queries == 0:
            return 0.0
        return self.cache_hits / self.total_queries

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary."""
        return {
            "tolerance_ms": self.tolerance_ms,
            "hit_rate": self.hit_rate,
            "total_queries": self.total_queries,
            "cache_hits": self.cache_hits,
            "cache_misses": self.cache_misses,
            "provider_calls": self.provider_calls,
            "max_lag_ms": self.max_lag_ms,
            "avg_lookup_time_ms": self.avg_lookup_time_ms,
        }


@dataclass
class FrameLoop:
    """Shape of the simulated animation loop.

    Attributes:
        frames: Number of frames to replay
        fps: Frames per wall-clock second
        time_speed: Simulated milliseconds per wall-clock millisecond
        jitter_ms: Max absolute jitter added to each repeated query's instant
        queries_per_frame: How many times each body is queried per frame
    """

    frames: int = 120
    fps: float = 60.0
    time_speed: float = 1.0
    jitter_ms: float = 2.0
    queries_per_frame: int = 3


class _CountingProvider:
    """Wraps a provider and counts calls that reach it."""

    def __init__(self, inner: EphemerisProvider) -> None:
        self._inner = inner
        self.calls = 0

    @property
    def name(self) -> str:
        return self._inner.name

    def compute_helio_vector(self, body: str, instant: datetime) -> HelioVector:
        self.calls += 1
        return self._inner.compute_helio_vector(body, instant)

    def is_available(self) -> bool:
        return self._inner.is_available()


class ToleranceEvaluator:
    """Evaluator for quantization tolerance choices."""

    def __init__(
        self,
        provider: EphemerisProvider,
        bodies: tuple[str, ...] = PLANET_ORDER,
        start: datetime | None = None,
        seed: int = 0,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            provider: The provider every replay wraps.
            bodies: Bodies queried each frame.
            start: First simulated instant. Defaults to 2024-01-01T00:00Z.
            seed: Seed for the jitter generator, so replays are repeatable.
        """
        self.provider = provider
        self.bodies = bodies
        self.start = start or datetime(2024, 1, 1, tzinfo=timezone.utc)
        self.seed = seed
        self.results: list[EvalResult] = []

    def evaluate_tolerance(self, tolerance_ms: float, loop: FrameLoop | None = None) -> EvalResult:
        """
        Replay the frame loop against a fresh cache at one tolerance.

        Args:
            tolerance_ms: The quantization window to test.
            loop: Frame loop shape. Defaults to FrameLoop().

        Returns:
            EvalResult with metrics for this tolerance.
        """
        loop = loop or FrameLoop()
        counting = _CountingProvider(self.provider)
        cache = EphemerisCache.create(provider=counting, time_tolerance_ms=tolerance_ms)
        rng = random.Random(self.seed)

        result = EvalResult(tolerance_ms=tolerance_ms)
        total_lookup_time = 0.0
        frame_step_ms = 1000.0 / loop.fps * loop.time_speed

        for frame in range(loop.frames):
            frame_instant = self.start + timedelta(milliseconds=frame * frame_step_ms)
            for _ in range(loop.queries_per_frame):
                jitter = rng.uniform(-loop.jitter_ms, loop.jitter_ms)
                instant = frame_instant + timedelta(milliseconds=jitter)

                calls_before = counting.calls
                start_time = time.perf_counter()
                positions = cache.batch_compute(self.bodies, instant)
                total_lookup_time += (time.perf_counter() - start_time) * 1000
                result.provider_calls += counting.calls - calls_before

                # Served values carry the instant of the query that filled the bucket
                epoch_ms = to_epoch_ms(instant)
                for body in positions:
                    served = cache.get_helio_vector(body, instant).t
                    lag = abs(epoch_ms - to_epoch_ms(served))
                    result.max_lag_ms = max(result.max_lag_ms, lag)

        position = cache.get_metrics()["position"]
        result.cache_hits = int(position["hits"])
        result.cache_misses = int(position["misses"])
        result.total_queries = result.cache_hits + result.cache_misses
        if result.total_queries > 0:
            result.avg_lookup_time_ms = total_lookup_time / result.total_queries

        self.results.append(result)
        return result

    def sweep_tolerances(
        self,
        min_tolerance_ms: float = 5.0,
        max_tolerance_ms: float = 100.0,
        steps: int = 10,
        loop: FrameLoop | None = None,
    ) -> list[EvalResult]:
        """
        Sweep across multiple tolerance values.

        Args:
            min_tolerance_ms: Smallest window to test.
            max_tolerance_ms: Largest window to test.
            steps: Number of windows to test.
            loop: Frame loop shape shared by every replay.

        Returns:
            List of EvalResult for each tolerance tested.
        """
        # Clear previous results
        self.results = []

        for tolerance in np.linspace(min_tolerance_ms, max_tolerance_ms, steps):
            self.evaluate_tolerance(float(tolerance), loop)

        return self.results

    def find_optimal_tolerance(self, max_lag_ms: float) -> tuple[float, EvalResult]:
        """
        Pick the highest hit rate whose lag stays within budget.

        Args:
            max_lag_ms: Largest acceptable distance between the cached and
                the true instant.

        Returns:
            Tuple of (tolerance, result).

        Raises:
            ValueError: If there are no results, or none fits the budget.
        """
        if not self.results:
            raise ValueError("No evaluation results available. Run sweep_tolerances first.")

        within_budget = [r for r in self.results if r.max_lag_ms <= max_lag_ms]
        if not within_budget:
            raise ValueError(f"No tolerance keeps lag within {max_lag_ms} ms")

        best = max(within_budget, key=lambda r: (r.hit_rate, -r.tolerance_ms))
        return best.tolerance_ms, best

    def print_summary(self) -> None:
        """Print a summary of all evaluation results."""
        if not self.results:
            print("No evaluation results available.")
            return

        print("\n" + "=" * 80)
        print("Tolerance Evaluation Summary")
        print("=" * 80)
        print(
            f"{'Tolerance':<12} {'Hit Rate':<12} {'Provider':<12} {'Max Lag':<12} {'Avg Lookup':<12}"
        )
        print("-" * 80)

        for result in self.results:
            print(
                f"{result.tolerance_ms:<12.1f} "
                f"{result.hit_rate:<12.2%} "
                f"{result.provider_calls:<12d} "
                f"{result.max_lag_ms:<12.2f} "
                f"{result.avg_lookup_time_ms:<12.4f}"
            )

        print("=" * 80)
