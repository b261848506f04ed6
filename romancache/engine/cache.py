"""Read-only value→label caches.

A :class:`LabelCache` is built once for a *domain of interest* (all values, or
a reduced top-N subset) and never mutated afterwards, so any number of
threads may read it during a batch operation.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import lru_cache
from numbers import Integral
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator

from romancache.core.errors import DuplicateKeyError, LookupMissError, ValidationError
from romancache.core.metrics import count_calls, timer
from romancache.numerals.converter import convert, domain_values
from romancache.numerals.types import Label, Value

__all__ = ["LabelCache", "build_cache", "full_domain_cache", "ensure_cache", "is_cache_key"]

logger = logging.getLogger(__name__)


def is_cache_key(value: object) -> bool:
    """Only genuine integers address a cache; ``True`` must not alias ``1``."""

    return isinstance(value, Integral) and not isinstance(value, bool)


class LabelCache(Mapping):
    """Immutable mapping from value to its precomputed label."""

    __slots__ = ("_labels", "_domain")

    def __init__(self, labels: Dict[Value, Label]) -> None:
        self._labels = MappingProxyType(dict(labels))
        self._domain = frozenset(self._labels)

    @classmethod
    def from_mapping(cls, mapping: Mapping[Any, Any]) -> "LabelCache":
        """Promote a plain mapping, checking every entry against the converter."""

        labels: Dict[Value, Label] = {}
        for value, label in mapping.items():
            expected = convert(value)
            if label != expected:
                raise ValidationError(
                    f"Cache entry {value!r} -> {label!r} diverges from {expected!r}",
                    detail={"value": value, "label": label, "expected": expected},
                )
            labels[int(value)] = expected
        return cls(labels)

    @property
    def domain(self) -> frozenset[Value]:
        return self._domain

    def lookup(self, value: Value, *, index: int | None = None) -> Label:
        if not is_cache_key(value):
            raise LookupMissError(value, index=index)
        try:
            return self._labels[value]
        except (KeyError, TypeError):
            raise LookupMissError(value, index=index) from None

    def __getitem__(self, value: Value) -> Label:
        return self.lookup(value)

    def __contains__(self, value: object) -> bool:
        if not is_cache_key(value):
            return False
        try:
            return value in self._domain
        except TypeError:
            return False

    def __iter__(self) -> Iterator[Value]:
        return iter(sorted(self._labels))

    def __len__(self) -> int:
        return len(self._labels)

    def __repr__(self) -> str:
        return f"LabelCache(size={len(self)})"


@count_calls("cache.build.calls")
def build_cache(values: Iterable[Value], *, strict: bool = False) -> LabelCache:
    """Build a cache holding the label of every distinct value in ``values``.

    Repeated values are an idempotent upsert. With ``strict=True`` a repeat
    raises :class:`DuplicateKeyError` instead. Values outside the numeral
    domain raise :class:`OutOfDomainError`.
    """
    labels: Dict[Value, Label] = {}
    with timer("cache.build"):
        for value in values:
            label = convert(value)
            key = int(value)
            if key in labels:
                if strict:
                    raise DuplicateKeyError(value)
                continue
            labels[key] = label
    logger.debug("cache_built", extra={"structured_data": {"size": len(labels)}})
    return LabelCache(labels)


@lru_cache(maxsize=1)
def full_domain_cache() -> LabelCache:
    """Cache over every convertible value (shared, since caches are immutable)."""

    return build_cache(domain_values())


def ensure_cache(cache: Mapping[Any, Any]) -> LabelCache:
    if isinstance(cache, LabelCache):
        return cache
    return LabelCache.from_mapping(cache)
