from __future__ import annotations

from typing import List, Sequence

from romancache.engine.cache import LabelCache
from romancache.engine.strategies.base import MappingStrategy
from romancache.numerals.types import Label, Value


def map_sequential(source: Sequence[Value], cache: LabelCache, *, offset: int = 0) -> List[Label]:
    """Single pass of cache lookups; ``offset`` shifts reported miss indexes."""

    lookup = cache.lookup
    return [lookup(value, index=offset + idx) for idx, value in enumerate(source)]


class SequentialStrategy(MappingStrategy):
    code = "sequential"
    requires_cache = True

    def map(self, source: Sequence[Value], cache: LabelCache) -> List[Label]:
        return map_sequential(source, cache)
