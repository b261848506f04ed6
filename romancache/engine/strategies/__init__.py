from __future__ import annotations

from romancache.engine.strategy_registry import register_strategy

from .local_cache import LocalCacheStrategy
from .parallel import ParallelStrategy
from .sequential import SequentialStrategy
from .vectorized import VectorizedStrategy

register_strategy(SequentialStrategy(), is_default=True)
register_strategy(ParallelStrategy())
register_strategy(LocalCacheStrategy())
register_strategy(VectorizedStrategy())
