from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from functools import wraps
from math import sqrt
from time import perf_counter
from typing import Any, Callable, Dict, Iterator, TypeVar, cast

_F = TypeVar("_F", bound=Callable[..., Any])

try:  # pragma: no cover - import guard for early initialization
    from romancache.core.config import settings as _settings
except Exception:  # pragma: no cover - settings unavailable during bootstrap
    _settings = None


@dataclass(slots=True)
class TimingStats:
    """Running aggregates for one timing label (Welford variance)."""

    count: float = 0.0
    total_ms: float = 0.0
    min_ms: float = 0.0
    max_ms: float = 0.0
    avg_ms: float = 0.0
    variance_ms: float = 0.0
    stddev_ms: float = 0.0
    _m2: float = 0.0

    def update(self, elapsed_ms: float) -> None:
        value = float(elapsed_ms)
        self.count += 1.0
        self.total_ms += value
        if self.count == 1.0 or value < self.min_ms:
            self.min_ms = value
        if value > self.max_ms:
            self.max_ms = value

        delta = value - self.avg_ms
        self.avg_ms += delta / self.count
        self._m2 += delta * (value - self.avg_ms)
        self.variance_ms = self._m2 / (self.count - 1.0) if self.count > 1.0 else 0.0
        self.stddev_ms = sqrt(self.variance_ms) if self.variance_ms > 0.0 else 0.0

    def snapshot(self) -> Dict[str, float]:
        return {
            "count": self.count,
            "total_ms": self.total_ms,
            "min_ms": self.min_ms,
            "max_ms": self.max_ms,
            "avg_ms": self.avg_ms,
            "variance_ms": self.variance_ms,
            "stddev_ms": self.stddev_ms,
        }


class _MetricsRegistry:
    """Thread-safe in-process store for timings and counters."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._timings: Dict[str, TimingStats] = {}
        self._counters: Dict[str, float] = {}

    def record(self, label: str, elapsed_ms: float) -> None:
        if not label:
            return
        with self._lock:
            self._timings.setdefault(label, TimingStats()).update(elapsed_ms)

    def inc(self, label: str, amount: float = 1.0) -> None:
        if not label:
            return
        with self._lock:
            self._counters[label] = self._counters.get(label, 0.0) + float(amount)

    def timings_snapshot(self, reset: bool = False) -> Dict[str, Dict[str, float]]:
        with self._lock:
            data = {label: stats.snapshot() for label, stats in self._timings.items()}
            if reset:
                self._timings.clear()
            return data

    def counters_snapshot(self, reset: bool = False) -> Dict[str, float]:
        with self._lock:
            data = dict(self._counters)
            if reset:
                self._counters.clear()
            return data

    def reset(self) -> None:
        with self._lock:
            self._timings.clear()
            self._counters.clear()


metrics_registry = _MetricsRegistry()


_INSTRUMENTATION_ENABLED: bool = bool(
    getattr(_settings, "instrumentation_enabled", True) if _settings else True
)


def set_instrumentation_enabled(enabled: bool) -> None:
    global _INSTRUMENTATION_ENABLED
    _INSTRUMENTATION_ENABLED = bool(enabled)


def instrumentation_enabled() -> bool:
    return _INSTRUMENTATION_ENABLED


@contextmanager
def timer(label: str) -> Iterator[None]:
    """Time the enclosed block and record it under ``label``."""
    if not instrumentation_enabled():
        yield
        return
    t0 = perf_counter()
    try:
        yield
    finally:
        metrics_registry.record(label, (perf_counter() - t0) * 1000.0)


def measure_time(label: str) -> Callable[[_F], _F]:
    """Decorator variant of :func:`timer`."""

    def _wrap(func: _F) -> _F:
        @wraps(func)
        def _inner(*args: Any, **kwargs: Any):
            if not instrumentation_enabled():
                return func(*args, **kwargs)
            t0 = perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                metrics_registry.record(label, (perf_counter() - t0) * 1000.0)

        return cast(_F, _inner)

    return _wrap


def count_calls(label: str) -> Callable[[_F], _F]:
    """Decorator that increments a counter each time the function is invoked."""

    def _wrap(func: _F) -> _F:
        @wraps(func)
        def _inner(*args: Any, **kwargs: Any):
            if instrumentation_enabled():
                metrics_registry.inc(label)
            return func(*args, **kwargs)

        return cast(_F, _inner)

    return _wrap


def inc_counter(label: str, amount: float = 1.0) -> None:
    if instrumentation_enabled():
        metrics_registry.inc(label, amount)


def get_metrics(reset: bool = False) -> Dict[str, Dict[str, float]]:
    """Return recorded timing metrics, optionally resetting them."""

    return metrics_registry.timings_snapshot(reset=reset)


def get_counters(reset: bool = False) -> Dict[str, float]:
    return metrics_registry.counters_snapshot(reset=reset)


__all__ = [
    "timer",
    "measure_time",
    "count_calls",
    "inc_counter",
    "get_metrics",
    "get_counters",
    "metrics_registry",
    "set_instrumentation_enabled",
    "instrumentation_enabled",
]
