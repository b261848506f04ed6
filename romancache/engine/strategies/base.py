from __future__ import annotations

from typing import TYPE_CHECKING, List, Protocol, Sequence

from romancache.numerals.types import Label, Value

if TYPE_CHECKING:  # pragma: no cover
    from romancache.engine.cache import LabelCache


class MappingStrategy(Protocol):
    """Execution strategy for mapping a value sequence through a read-only cache.

    Implementations must return one label per input value, in input order,
    and raise ``LookupMissError`` for any value the cache does not cover.
    """

    code: str
    requires_cache: bool

    def map(self, source: Sequence[Value], cache: "LabelCache | None") -> List[Label]: ...
