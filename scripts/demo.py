#!/usr/bin/env python3
"""
Demo script for the ephemeris cache.

This script replays a short animation loop against the ERFA-backed cache,
shows a details-panel lookup, a time jump, and a tolerance sweep.
"""

import time
from datetime import datetime, timedelta, timezone

from ephemeris_cache import PLANET_ORDER, EphemerisCache, ErfaEphemerisProvider
from ephemeris_cache.evaluator import FrameLoop, ToleranceEvaluator


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def demo_frame_loop(cache: EphemerisCache) -> None:
    """Query every planet for 60 frames of simulated time."""
    print_section("Frame Loop")

    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    t0 = time.perf_counter()
    for frame in range(60):
        instant = start + timedelta(milliseconds=frame * 1000 / 60)
        # Three consumers read the same frame
        for _ in range(3):
            cache.batch_compute(PLANET_ORDER, instant)
    duration = (time.perf_counter() - t0) * 1000

    print(f"\n  180 batches in {duration:.1f}ms")
    print(f"  Stats: {cache.get_stats().to_dict()}")
    for name, metrics in cache.get_metrics().items():
        print(f"  {name:<9} hit rate {metrics['hit_rate']:.1%}")


def demo_details_panel(cache: EphemerisCache) -> None:
    """Read one body's details, as a UI panel would."""
    print_section("Details Panel")

    instant = datetime(2024, 1, 1, tzinfo=timezone.utc)
    for body in ("Mercury", "Earth", "Neptune"):
        vector = cache.get_helio_vector(body, instant)
        velocity = cache.get_velocity(body, instant)
        print(f"\n  {body}")
        print(f"    Distance: {vector.magnitude:.3f} AU")
        print(f"    Position: {tuple(round(c, 3) for c in cache.get_position(body, instant))}")
        print(f"    Velocity: {velocity:.2f} km/s")


def demo_time_jump(cache: EphemerisCache) -> None:
    """Jump far ahead and show the caches start over."""
    print_section("Time Jump")

    target = cache.jump_to(datetime(2150, 6, 1, tzinfo=timezone.utc))
    print(f"\n  After jump: {cache.get_stats().to_dict()}")

    for state in cache.snapshot(PLANET_ORDER, target).values():
        flag = " (degraded)" if state.degraded else ""
        print(f"  {state.body:<8} {state.distance_au:7.3f} AU  {state.velocity_km_s:6.2f} km/s{flag}")


def demo_tolerance_sweep(provider: ErfaEphemerisProvider) -> None:
    """Sweep quantization windows over a jittery frame loop."""
    print_section("Tolerance Sweep")

    evaluator = ToleranceEvaluator(provider)
    evaluator.sweep_tolerances(1.0, 100.0, steps=6, loop=FrameLoop(frames=60, jitter_ms=3.0))
    evaluator.print_summary()

    tolerance, result = evaluator.find_optimal_tolerance(max_lag_ms=30.0)
    print(f"Best within 30ms lag: {tolerance:.1f}ms ({result.hit_rate:.2%} hit rate)")


def main() -> None:
    """Run all demos."""
    print("\n🚀 Ephemeris Cache Demo")
    print("=" * 70)

    provider = ErfaEphemerisProvider.create()
    cache = EphemerisCache.create(provider=provider)

    try:
        demo_frame_loop(cache)
        demo_details_panel(cache)
        demo_time_jump(cache)
        demo_tolerance_sweep(provider)

        print("\n" + "=" * 70)
        print("✅ Demo completed successfully!")
        print("=" * 70)

    except Exception as e:
        print(f"\n❌ Error: {e}")
        print("\nMake sure pyerfa is installed:")
        print("  pip install -e .")


if __name__ == "__main__":
    main()
