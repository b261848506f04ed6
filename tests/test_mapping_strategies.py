from __future__ import annotations

import numpy as np
import pytest

from romancache.core.errors import LookupMissError, OutOfDomainError, StrategyNotFoundError, ValidationError
from romancache.data.generator import generate_values
from romancache.engine.cache import LabelCache, build_cache
from romancache.engine.mapping import map_all
from romancache.engine.strategies.parallel import ParallelStrategy
from romancache.engine.strategy_registry import list_strategies
from romancache.numerals.converter import convert

STRATEGIES = ["sequential", "parallel", "local", "vectorized"]


def test_builtin_strategies_are_registered():
    assert set(STRATEGIES) <= set(list_strategies())


@pytest.mark.parametrize("strategy", STRATEGIES)
def test_mapping_preserves_length_and_order(strategy: str, full_cache: LabelCache):
    source = generate_values(2_000, seed=7)
    labels = map_all(source, full_cache, strategy=strategy)
    assert len(labels) == len(source)
    assert labels == [convert(v) for v in source]


@pytest.mark.parametrize("strategy", STRATEGIES)
def test_mapping_empty_source(strategy: str, full_cache: LabelCache):
    assert map_all([], full_cache, strategy=strategy) == []


@pytest.mark.parametrize("strategy", STRATEGIES)
def test_value_outside_cache_raises_lookup_miss(strategy: str, full_cache: LabelCache):
    with pytest.raises(LookupMissError) as exc_info:
        map_all([51], full_cache, strategy=strategy)
    assert exc_info.value.value == 51
    assert exc_info.value.index == 0


@pytest.mark.parametrize("strategy", STRATEGIES)
def test_reduced_cache_miss_reports_first_offending_index(strategy: str):
    reduced = build_cache([1, 3, 10])
    with pytest.raises(LookupMissError) as exc_info:
        map_all([1, 3, 10, 3, 7, 8], reduced, strategy=strategy)
    assert exc_info.value.value == 7
    assert exc_info.value.index == 4


@pytest.mark.parametrize("strategy", STRATEGIES)
@pytest.mark.parametrize("source, index", [([True], 0), ([1, True], 1), ([1, np.bool_(True)], 1)])
def test_bools_never_alias_integer_labels(strategy: str, source, index: int, full_cache: LabelCache):
    with pytest.raises(LookupMissError) as exc_info:
        map_all(source, full_cache, strategy=strategy)
    assert exc_info.value.index == index


def test_vectorized_strategy_rejects_bool_arrays(full_cache: LabelCache):
    with pytest.raises(LookupMissError) as exc_info:
        map_all(np.array([True, False]), full_cache, strategy="vectorized")
    assert exc_info.value.index == 0


def test_local_strategy_without_cache_rejects_bools():
    with pytest.raises(OutOfDomainError):
        map_all([1, True], None, strategy="local")


def test_parallel_strategy_reassembles_chunks_in_order(full_cache: LabelCache):
    source = generate_values(1_003, seed=11)
    strategy = ParallelStrategy(max_workers=4, chunk_size=100)
    assert strategy.map(source, full_cache) == [convert(v) for v in source]


def test_parallel_strategy_miss_index_is_absolute():
    reduced = build_cache([1, 2])
    source = [1, 2] * 50 + [9] + [1] * 20
    strategy = ParallelStrategy(max_workers=3, chunk_size=16)
    with pytest.raises(LookupMissError) as exc_info:
        strategy.map(source, reduced)
    assert exc_info.value.index == 100


def test_parallel_strategy_reads_settings(env_settings, full_cache: LabelCache):
    env_settings(parallel_workers=2, parallel_chunk_size=3)
    assert map_all([1, 2, 3, 4, 5, 6, 7], full_cache, strategy="parallel") == [
        "I", "II", "III", "IV", "V", "VI", "VII",
    ]


def test_vectorized_strategy_accepts_numpy_arrays(full_cache: LabelCache):
    source = np.array([50, 1, 49, 10], dtype=np.int32)
    assert map_all(source, full_cache, strategy="vectorized") == ["L", "I", "XLIX", "X"]


def test_vectorized_strategy_rejects_negative_values(full_cache: LabelCache):
    with pytest.raises(LookupMissError) as exc_info:
        map_all([3, -1], full_cache, strategy="vectorized")
    assert exc_info.value.index == 1


def test_local_strategy_without_cache_uses_converter():
    assert map_all([2, 2, 40], None, strategy="local") == ["II", "II", "XL"]


def test_local_strategy_counts_memo_hits(fresh_metrics, full_cache: LabelCache):
    map_all([5, 5, 5, 6], full_cache, strategy="local")
    counters = fresh_metrics.counters_snapshot()
    assert counters["mapping.local.memo_miss"] == 2.0
    assert counters["mapping.local.memo_hit"] == 2.0


def test_cache_bound_strategy_requires_cache():
    with pytest.raises(ValidationError):
        map_all([1], None, strategy="sequential")


def test_unknown_strategy_is_rejected(full_cache: LabelCache):
    with pytest.raises(StrategyNotFoundError) as exc_info:
        map_all([1], full_cache, strategy="span-loop")
    assert "Available strategies" in str(exc_info.value)


def test_default_strategy_comes_from_settings(env_settings, fresh_metrics, full_cache: LabelCache):
    env_settings(default_strategy="Local")
    map_all([1, 2], full_cache)
    assert "mapping.local" in fresh_metrics.timings_snapshot()


def test_plain_dict_cache_is_verified_and_used():
    assert map_all([4, 4, 9], {4: "IV", 9: "IX"}) == ["IV", "IV", "IX"]
    with pytest.raises(ValidationError):
        map_all([4], {4: "IIII"})


def test_mapping_records_timing_per_strategy(fresh_metrics, full_cache: LabelCache):
    map_all([1, 2, 3], full_cache, strategy="sequential")
    map_all([1, 2, 3], full_cache, strategy="vectorized")
    timings = fresh_metrics.timings_snapshot()
    assert timings["mapping.sequential"]["count"] == 1.0
    assert timings["mapping.vectorized"]["count"] == 1.0
