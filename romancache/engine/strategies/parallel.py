from __future__ import annotations

from itertools import chain
from typing import List, Sequence

from romancache.core.config import get_settings
from romancache.engine.cache import LabelCache
from romancache.engine.parallel import run_partitioned
from romancache.engine.strategies.base import MappingStrategy
from romancache.engine.strategies.sequential import map_sequential
from romancache.numerals.types import Label, Value


class ParallelStrategy(MappingStrategy):
    """Partition the source, map partitions on a thread pool, concatenate in order.

    ``max_workers``/``chunk_size`` default to the configured values when left
    as ``None``.
    """

    code = "parallel"
    requires_cache = True

    def __init__(self, *, max_workers: int | None = None, chunk_size: int | None = None) -> None:
        self.max_workers = max_workers
        self.chunk_size = chunk_size

    def map(self, source: Sequence[Value], cache: LabelCache) -> List[Label]:
        cfg = get_settings()
        parts = run_partitioned(
            source,
            lambda offset, chunk: map_sequential(chunk, cache, offset=offset),
            max_workers=self.max_workers or cfg.parallel_workers,
            chunk_size=self.chunk_size or cfg.parallel_chunk_size,
        )
        return list(chain.from_iterable(parts))
