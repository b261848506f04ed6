"""romancache: bounded-domain Roman numeral caching, ranking and summaries.

Public surface::

    convert(value)                    -> label
    build_cache(values)               -> LabelCache
    map_all(source, cache, strategy=) -> [label, ...]
    top_n(source, n)                  -> [value, ...]
    summarize(source, cache)          -> [SummaryRow, ...]
"""

from romancache.core.errors import (
    ConfigurationError,
    DomainError,
    DuplicateKeyError,
    LookupMissError,
    OutOfDomainError,
    StrategyNotFoundError,
    ValidationError,
)
from romancache.engine.cache import LabelCache, build_cache, full_domain_cache
from romancache.engine.mapping import map_all
from romancache.engine.ranking import count_occurrences, merge_counts, rank_frequencies, top_n, top_n_labels
from romancache.engine.strategy_registry import list_strategies
from romancache.engine.summary import summarize
from romancache.numerals.converter import convert, is_in_domain
from romancache.numerals.types import FrequencyCount, SummaryRow

__version__ = "0.1.0"

__all__ = [
    "convert",
    "is_in_domain",
    "build_cache",
    "full_domain_cache",
    "LabelCache",
    "map_all",
    "list_strategies",
    "count_occurrences",
    "merge_counts",
    "rank_frequencies",
    "top_n",
    "top_n_labels",
    "summarize",
    "FrequencyCount",
    "SummaryRow",
    "DomainError",
    "ValidationError",
    "OutOfDomainError",
    "LookupMissError",
    "DuplicateKeyError",
    "StrategyNotFoundError",
    "ConfigurationError",
]
