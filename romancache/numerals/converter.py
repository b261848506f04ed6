from __future__ import annotations

from numbers import Integral
from typing import Any

from romancache.core.errors import OutOfDomainError
from romancache.numerals import load_tables
from romancache.numerals.types import Label


def is_in_domain(value: Any) -> bool:
    """Return True when ``value`` is an integer the converter accepts (bools excluded)."""

    if isinstance(value, bool) or not isinstance(value, Integral):
        return False
    return load_tables().contains(int(value))


def convert(value: int) -> Label:
    """Return the Roman numeral for ``value``.

    Raises:
        OutOfDomainError: ``value`` is not an integer inside the table domain.
    """
    tables = load_tables()
    if not is_in_domain(value):
        raise OutOfDomainError(value, low=tables.low, high=tables.high)
    number = int(value)
    return tables.tens[number // 10] + tables.ones[number % 10]


def domain_values() -> range:
    return load_tables().values()


__all__ = ["convert", "is_in_domain", "domain_values"]
