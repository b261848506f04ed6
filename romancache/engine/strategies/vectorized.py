from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Sequence

from romancache.core.errors import LookupMissError, ValidationError
from romancache.engine.cache import LabelCache, is_cache_key
from romancache.engine.strategies.base import MappingStrategy
from romancache.engine.strategies.sequential import map_sequential
from romancache.numerals.types import Label, Value

if TYPE_CHECKING:  # pragma: no cover
    import numpy as _np
    from numpy.typing import NDArray as _NDArray

    ObjectArray = _NDArray[_np.object_]
else:  # Runtime fallback keeps import lazy until needed
    ObjectArray = Any  # type: ignore[assignment]

_NUMPY_MODULE = None


def _require_numpy():
    """Import numpy lazily so the other strategies never pay for it."""

    global _NUMPY_MODULE
    if _NUMPY_MODULE is None:
        import numpy as np  # type: ignore[import-not-found]

        _NUMPY_MODULE = np
    return _NUMPY_MODULE


def label_table(cache: LabelCache) -> tuple[ObjectArray, Any]:
    """Return ``(labels, covered)`` arrays indexed directly by value."""

    np_mod = _require_numpy()
    size = max(cache.domain) + 1 if cache.domain else 0
    labels = np_mod.empty(size, dtype=object)
    covered = np_mod.zeros(size, dtype=bool)
    for value in cache.domain:
        labels[value] = cache.lookup(value)
        covered[value] = True
    return labels, covered


class VectorizedStrategy(MappingStrategy):
    """Map the whole source with one NumPy fancy-indexing gather."""

    code = "vectorized"
    requires_cache = True

    def map(self, source: Sequence[Value], cache: LabelCache) -> List[Label]:
        np_mod = _require_numpy()
        if not isinstance(source, np_mod.ndarray) and not all(map(is_cache_key, source)):
            # asarray would silently coerce a stray bool into the integer array.
            return map_sequential(source, cache)
        values = np_mod.asarray(source)
        if values.size == 0:
            return []
        if values.ndim != 1:
            raise ValidationError("source must be one-dimensional")
        if not np_mod.issubdtype(values.dtype, np_mod.integer):
            # Bool, mixed or non-integer input: defer to plain lookups for identical errors.
            return map_sequential(source, cache)

        labels, covered = label_table(cache)
        in_range = (values >= 0) & (values < labels.shape[0])
        hit = np_mod.zeros(values.shape[0], dtype=bool)
        hit[in_range] = covered[values[in_range]]
        if not hit.all():
            idx = int(np_mod.flatnonzero(~hit)[0])
            raise LookupMissError(int(values[idx]), index=idx)
        return labels[values].tolist()
