"""
Tests for the tolerance evaluator.
"""

import pytest
from conftest import T0

from ephemeris_cache.evaluator import EvalResult, FrameLoop, ToleranceEvaluator

BODIES = ("Mercury", "Earth", "Jupiter")


@pytest.fixture
def evaluator(stub_provider):
    return ToleranceEvaluator(stub_provider, bodies=BODIES, start=T0, seed=42)


def test_repeated_queries_in_a_frame_are_hits(evaluator):
    """Without jitter only the first query of each frame reaches the provider."""
    loop = FrameLoop(frames=10, jitter_ms=0.0, queries_per_frame=3)

    result = evaluator.evaluate_tolerance(5.0, loop)

    assert result.total_queries == 10 * 3 * len(BODIES)
    assert result.hit_rate == pytest.approx(2 / 3)
    assert result.provider_calls == 10 * len(BODIES)


def test_lag_is_measured_against_the_served_instant(evaluator):
    """At 60 fps a 50 ms bucket can serve a value computed two frames earlier."""
    loop = FrameLoop(frames=6, jitter_ms=0.0, queries_per_frame=1)

    result = evaluator.evaluate_tolerance(50.0, loop)

    # Frame 4 (66.67 ms) is served the vector computed at frame 2 (33.33 ms)
    assert result.max_lag_ms == pytest.approx(100 / 3, abs=1e-2)
    assert result.max_lag_ms > 50.0 / 2


def test_lag_stays_within_one_window(evaluator):
    loop = FrameLoop(frames=30, jitter_ms=4.0)

    for tolerance in (5.0, 20.0, 50.0):
        result = evaluator.evaluate_tolerance(tolerance, loop)
        assert result.max_lag_ms <= tolerance + 1e-3


def test_sweep_replaces_previous_results(evaluator):
    loop = FrameLoop(frames=5)
    evaluator.evaluate_tolerance(10.0, loop)

    results = evaluator.sweep_tolerances(5.0, 100.0, steps=3, loop=loop)

    assert [r.tolerance_ms for r in results] == [5.0, 52.5, 100.0]
    assert evaluator.results == results


def test_wider_window_coalesces_more_frames(evaluator):
    loop = FrameLoop(frames=30, jitter_ms=0.0)

    narrow, _, wide = evaluator.sweep_tolerances(5.0, 100.0, steps=3, loop=loop)

    assert wide.hit_rate > narrow.hit_rate
    assert wide.provider_calls < narrow.provider_calls


def test_find_optimal_tolerance_respects_lag_budget(evaluator):
    evaluator.sweep_tolerances(5.0, 100.0, steps=3, loop=FrameLoop(frames=30, jitter_ms=0.0))

    tolerance, result = evaluator.find_optimal_tolerance(max_lag_ms=1000.0)
    assert tolerance == 100.0
    assert result.tolerance_ms == 100.0

    with pytest.raises(ValueError):
        evaluator.find_optimal_tolerance(max_lag_ms=0.001)


def test_find_optimal_tolerance_requires_results(evaluator):
    with pytest.raises(ValueError):
        evaluator.find_optimal_tolerance(max_lag_ms=10.0)


def test_eval_result_defaults():
    result = EvalResult(tolerance_ms=50.0)

    assert result.hit_rate == 0.0
    assert result.to_dict()["tolerance_ms"] == 50.0
