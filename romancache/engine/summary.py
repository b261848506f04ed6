from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Sequence

from romancache.core.errors import ValidationError
from romancache.core.metrics import timer
from romancache.core.profiling import slow_operation_logger
from romancache.engine.cache import LabelCache, ensure_cache
from romancache.engine.ranking import count_occurrences, plain_values
from romancache.numerals.types import SummaryRow, Value

__all__ = ["summarize", "summarize_grouped", "summarize_scan", "SUMMARY_METHODS"]


def summarize_grouped(
    source: Sequence[Value],
    cache: LabelCache,
    *,
    workers: int = 1,
) -> List[SummaryRow]:
    """Count per value, then emit rows for the keys in ascending order."""

    counts = count_occurrences(source, workers=workers)
    return [SummaryRow(value, cache.lookup(value), counts[value]) for value in sorted(counts)]


def summarize_scan(source: Sequence[Value], cache: LabelCache, *, workers: int = 1) -> List[SummaryRow]:
    """Sort a copy, then scan runs of equal values.

    ``workers`` is accepted for signature parity with the grouped method and
    ignored: the scan is inherently sequential.
    """
    ordered = sorted(plain_values(source))
    rows: List[SummaryRow] = []
    if not ordered:
        return rows

    run_value = ordered[0]
    run_start = 0
    for idx in range(1, len(ordered)):
        value = ordered[idx]
        if value != run_value:
            rows.append(SummaryRow(run_value, cache.lookup(run_value), idx - run_start))
            run_value = value
            run_start = idx
    # Final run is never closed inside the loop.
    rows.append(SummaryRow(run_value, cache.lookup(run_value), len(ordered) - run_start))
    return rows


SUMMARY_METHODS: Dict[str, Callable[..., List[SummaryRow]]] = {
    "grouped": summarize_grouped,
    "scan": summarize_scan,
}


@slow_operation_logger(operation_name="summarize")
def summarize(
    source: Sequence[Value],
    cache: Mapping[Any, Any],
    *,
    method: str = "grouped",
    workers: int = 1,
) -> List[SummaryRow]:
    """One row per distinct value of ``source``, ascending by value.

    Raises:
        LookupMissError: a distinct value is not covered by ``cache``.
        ValidationError: ``method`` is not one of :data:`SUMMARY_METHODS`.
    """
    impl = SUMMARY_METHODS.get(method)
    if impl is None:
        raise ValidationError(
            f"Unknown summary method '{method}'. Available: {', '.join(sorted(SUMMARY_METHODS))}",
            detail={"method": method},
        )
    label_cache = ensure_cache(cache)
    with timer(f"summary.{method}"):
        return impl(source, label_cache, workers=workers)
