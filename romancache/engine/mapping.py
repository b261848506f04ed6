from __future__ import annotations

import logging
from typing import Any, List, Mapping, Sequence

from romancache.core.config import get_settings
from romancache.core.errors import ValidationError
from romancache.core.metrics import timer
from romancache.core.profiling import slow_operation_logger
from romancache.engine.cache import ensure_cache
from romancache.engine.strategies.base import MappingStrategy
from romancache.engine.strategy_registry import get_strategy
from romancache.numerals.types import Label, Value

__all__ = ["map_all", "resolve_strategy"]

logger = logging.getLogger(__name__)


def resolve_strategy(strategy: str | MappingStrategy | None) -> MappingStrategy:
    if strategy is None:
        return get_strategy(get_settings().default_strategy)
    if isinstance(strategy, str):
        return get_strategy(strategy.strip().lower())
    return strategy


@slow_operation_logger(operation_name="map_all")
def map_all(
    source: Sequence[Value],
    cache: Mapping[Any, Any] | None,
    *,
    strategy: str | MappingStrategy | None = None,
) -> List[Label]:
    """Map every value of ``source`` to its label, preserving order.

    Args:
        source: Values to map. Any sliceable sequence (list, tuple, range, array).
        cache: Read-only cache bounding the domain; a plain mapping is verified
            and promoted. ``None`` is accepted only by strategies that convert
            on their own (``local``).
        strategy: Strategy code or instance; defaults to ``settings.default_strategy``.

    Raises:
        LookupMissError: a value of ``source`` is not covered by ``cache``.
        StrategyNotFoundError: ``strategy`` names no registered strategy.
    """
    impl = resolve_strategy(strategy)
    if cache is None:
        if getattr(impl, "requires_cache", True):
            raise ValidationError(f"Mapping strategy '{impl.code}' requires a cache")
        label_cache = None
    else:
        label_cache = ensure_cache(cache)

    with timer(f"mapping.{impl.code}"):
        result = impl.map(source, label_cache)
    logger.debug(
        "mapping_completed",
        extra={"structured_data": {"strategy": impl.code, "size": len(result)}},
    )
    return result
