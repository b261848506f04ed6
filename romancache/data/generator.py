from __future__ import annotations

import random
from typing import List

from romancache.core.errors import ValidationError
from romancache.numerals import load_tables


def generate_values(length: int, *, seed: int | None = None) -> List[int]:
    """Uniform-random values across the numeral domain.

    Pass ``seed`` for a reproducible sample; benchmarks compare strategies on
    identical input.
    """
    if length < 0:
        raise ValidationError(f"length must be >= 0, got {length}")
    tables = load_tables()
    rng = random.Random(seed)
    return [rng.randint(tables.low, tables.high) for _ in range(length)]


__all__ = ["generate_values"]
