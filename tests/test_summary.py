from __future__ import annotations

from collections import Counter

import numpy as np
import pytest

from romancache.core.errors import LookupMissError, ValidationError
from romancache.data.generator import generate_values
from romancache.engine.cache import LabelCache, build_cache
from romancache.engine.summary import summarize

METHODS = ["grouped", "scan"]


@pytest.mark.parametrize("method", METHODS)
def test_summary_scenario(method: str, full_cache: LabelCache):
    rows = summarize([1, 1, 1, 2, 2, 3], full_cache, method=method)
    assert [row.as_tuple() for row in rows] == [(1, "I", 3), (2, "II", 2), (3, "III", 1)]


@pytest.mark.parametrize("method", METHODS)
def test_summary_empty_source(method: str, full_cache: LabelCache):
    assert summarize([], full_cache, method=method) == []


@pytest.mark.parametrize("method", METHODS)
def test_single_repeated_value_flushes_final_run(method: str, full_cache: LabelCache):
    rows = summarize([7] * 50, full_cache, method=method)
    assert [row.as_tuple() for row in rows] == [(7, "VII", 50)]


@pytest.mark.parametrize("method", METHODS)
def test_two_runs_are_both_emitted(method: str, full_cache: LabelCache):
    rows = summarize([2, 1, 1], full_cache, method=method)
    assert [(row.value, row.count) for row in rows] == [(1, 2), (2, 1)]


@pytest.mark.parametrize("method", METHODS)
def test_single_value_source(method: str, full_cache: LabelCache):
    rows = summarize([50], full_cache, method=method)
    assert [row.as_tuple() for row in rows] == [(50, "L", 1)]


def test_methods_agree_on_random_sample(full_cache: LabelCache):
    source = generate_values(20_000, seed=5)
    grouped = summarize(source, full_cache, method="grouped")
    assert summarize(source, full_cache, method="scan") == grouped
    assert summarize(source, full_cache, method="grouped", workers=4) == grouped

    counts = Counter(source)
    assert [row.value for row in grouped] == sorted(counts)
    assert sum(row.count for row in grouped) == len(source)


@pytest.mark.parametrize("method", METHODS)
def test_uncovered_value_raises_lookup_miss(method: str):
    reduced = build_cache([1, 2])
    with pytest.raises(LookupMissError) as exc_info:
        summarize([1, 2, 3, 3], reduced, method=method)
    assert exc_info.value.value == 3


def test_unknown_method_is_rejected(full_cache: LabelCache):
    with pytest.raises(ValidationError):
        summarize([1], full_cache, method="linq")


def test_summary_leaves_source_untouched(full_cache: LabelCache):
    source = [3, 1, 2]
    summarize(source, full_cache, method="scan")
    assert source == [3, 1, 2]


@pytest.mark.parametrize("method", METHODS)
def test_numpy_source_yields_plain_int_rows(method: str, full_cache: LabelCache):
    rows = summarize(np.array([7, 3, 7], dtype=np.int64), full_cache, method=method)
    assert [row.as_tuple() for row in rows] == [(3, "III", 1), (7, "VII", 2)]
    assert all(type(row.value) is int for row in rows)
