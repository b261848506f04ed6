"""Occurrence counting and top-N ranking.

Ranking order is descending count; equal counts are ordered by ascending
value so the output is reproducible whether counting ran on one thread or
was merged from several partitions.
"""

from __future__ import annotations

import heapq
from collections import Counter
from typing import Iterable, List, Mapping, Sequence

from romancache.core.config import get_settings
from romancache.core.errors import ValidationError
from romancache.core.metrics import measure_time, timer
from romancache.engine.cache import build_cache
from romancache.engine.mapping import map_all
from romancache.engine.parallel import run_partitioned
from romancache.engine.strategies.base import MappingStrategy
from romancache.numerals.types import FrequencyCount, Label, Value

__all__ = [
    "count_occurrences",
    "merge_counts",
    "plain_values",
    "rank_frequencies",
    "top_n",
    "top_n_labels",
]


def plain_values(source: Sequence[Value]) -> Sequence[Value]:
    # NumPy arrays become lists so counted keys are plain ints.
    tolist = getattr(source, "tolist", None)
    return tolist() if callable(tolist) else source


def _validate_n(n: int) -> int:
    if isinstance(n, bool) or not isinstance(n, int) or n < 1:
        raise ValidationError(f"n must be a positive integer, got {n!r}", detail={"n": n})
    return n


def merge_counts(partials: Iterable[Mapping[Value, int]]) -> Counter:
    """Sum per-key counts from independent partial tallies."""

    merged: Counter = Counter()
    for partial in partials:
        merged.update(partial)
    return merged


def count_occurrences(
    source: Sequence[Value],
    *,
    workers: int = 1,
    chunk_size: int | None = None,
) -> Counter:
    """Tally occurrences per value, optionally per partition on ``workers`` threads."""

    values = plain_values(source)
    if workers <= 1:
        return Counter(values)
    partials = run_partitioned(
        values,
        lambda _offset, chunk: Counter(chunk),
        max_workers=workers,
        chunk_size=chunk_size or get_settings().parallel_chunk_size,
    )
    return merge_counts(partials)


def _rank(counts: Mapping[Value, int], n: int) -> List[FrequencyCount]:
    best = heapq.nsmallest(n, counts.items(), key=lambda item: (-item[1], item[0]))
    return [FrequencyCount(value=value, count=count) for value, count in best]


@measure_time("ranking.rank_frequencies")
def rank_frequencies(
    source: Sequence[Value],
    n: int,
    *,
    workers: int = 1,
    chunk_size: int | None = None,
) -> List[FrequencyCount]:
    """Return the ``n`` most frequent values with their counts."""

    _validate_n(n)
    counts = count_occurrences(source, workers=workers, chunk_size=chunk_size)
    return _rank(counts, n)


def top_n(
    source: Sequence[Value],
    n: int,
    *,
    workers: int = 1,
    chunk_size: int | None = None,
) -> List[Value]:
    """Return up to ``n`` values ordered by descending frequency (ties: ascending value).

    Fewer distinct values than ``n`` yields all of them; an empty source
    yields an empty list.
    """
    return [fc.value for fc in rank_frequencies(source, n, workers=workers, chunk_size=chunk_size)]


def top_n_labels(
    source: Sequence[Value],
    n: int | None = None,
    *,
    strategy: str | MappingStrategy | None = None,
    workers: int = 1,
) -> List[Label]:
    """Labels of the ``n`` most frequent values, converted through a reduced cache.

    Only the ranked values are ever converted: the cache is built over that
    subset alone.
    """
    size = n if n is not None else get_settings().top_n
    ranked = top_n(source, size, workers=workers)
    with timer("ranking.top_n_labels"):
        reduced = build_cache(ranked)
        return map_all(ranked, reduced, strategy=strategy)
