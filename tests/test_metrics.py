import math

import pytest

from romancache.core.metrics import (
    count_calls,
    get_counters,
    get_metrics,
    inc_counter,
    measure_time,
    metrics_registry,
    set_instrumentation_enabled,
    timer,
)


def test_timer_records_duration(fresh_metrics):
    with timer("metrics.test.timer"):
        pass
    entry = get_metrics()["metrics.test.timer"]
    assert entry["count"] == 1.0
    assert entry["total_ms"] >= 0.0
    assert entry["variance_ms"] == 0.0


def test_measure_time_decorator_records(fresh_metrics):
    @measure_time("metrics.test.decorator")
    def _fn() -> int:
        return 42

    assert _fn() == 42
    assert get_metrics()["metrics.test.decorator"]["count"] == 1.0


def test_registry_tracks_min_max_variance_and_stddev(fresh_metrics):
    metrics_registry.record("metrics.var", 10.0)
    metrics_registry.record("metrics.var", 30.0)

    entry = get_metrics()["metrics.var"]
    assert entry["count"] == 2.0
    assert entry["min_ms"] == 10.0
    assert entry["max_ms"] == 30.0
    assert entry["avg_ms"] == pytest.approx(20.0, rel=1e-3)
    assert entry["variance_ms"] == pytest.approx(200.0, rel=1e-3)
    assert entry["stddev_ms"] == pytest.approx(math.sqrt(200.0), rel=1e-3)


def test_counters_and_reset(fresh_metrics):
    @count_calls("metrics.calls")
    def _noop() -> None:
        return None

    _noop()
    _noop()
    inc_counter("metrics.items", 5)
    assert get_counters(reset=True) == {"metrics.calls": 2.0, "metrics.items": 5.0}
    assert get_counters() == {}


def test_disabled_instrumentation_records_nothing(fresh_metrics):
    set_instrumentation_enabled(False)
    try:
        with timer("metrics.disabled"):
            pass
        inc_counter("metrics.disabled")
    finally:
        set_instrumentation_enabled(True)
    assert "metrics.disabled" not in get_metrics()
    assert "metrics.disabled" not in get_counters()
