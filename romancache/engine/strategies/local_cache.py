from __future__ import annotations

from typing import Dict, List, Sequence

from romancache.core.errors import LookupMissError
from romancache.core.metrics import inc_counter
from romancache.engine.cache import LabelCache, is_cache_key
from romancache.engine.strategies.base import MappingStrategy
from romancache.numerals.converter import convert
from romancache.numerals.types import Label, Value


class LocalCacheStrategy(MappingStrategy):
    """Build the cache lazily during the traversal.

    Each distinct value is converted on first encounter and memoized for the
    rest of the pass. A supplied cache only bounds the domain: values it does
    not cover still raise ``LookupMissError``. Without a cache the converter's
    own domain applies.
    """

    code = "local"
    requires_cache = False

    def map(self, source: Sequence[Value], cache: LabelCache | None) -> List[Label]:
        domain = cache.domain if cache is not None else None
        memo: Dict[Value, Label] = {}
        result: List[Label] = []
        misses = 0
        for idx, value in enumerate(source):
            # Reject before the memo, or ``True`` would hit the entry for ``1``.
            if not is_cache_key(value):
                if domain is not None:
                    raise LookupMissError(value, index=idx)
                convert(value)  # raises OutOfDomainError
            label = memo.get(value)
            if label is None:
                if domain is not None and value not in domain:
                    raise LookupMissError(value, index=idx)
                label = convert(value)
                memo[value] = label
                misses += 1
            result.append(label)
        inc_counter("mapping.local.memo_miss", misses)
        inc_counter("mapping.local.memo_hit", len(result) - misses)
        return result
