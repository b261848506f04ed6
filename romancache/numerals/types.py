from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Tuple, TypeAlias

from romancache.core.errors import ConfigurationError

Value: TypeAlias = int
Label: TypeAlias = str


@dataclass(frozen=True, slots=True)
class NumeralTables:
    """Tens/ones lookup tables plus the inclusive domain they cover."""

    low: int
    high: int
    tens: Tuple[str, ...]
    ones: Tuple[str, ...]

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "NumeralTables":
        try:
            domain = raw["domain"]
            low, high = int(domain["min"]), int(domain["max"])
            tens = tuple(str(item) for item in raw["tens"])
            ones = tuple(str(item) for item in raw["ones"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ConfigurationError(f"Malformed numeral tables: {exc}") from exc

        if len(ones) != 10:
            raise ConfigurationError("ones table must hold exactly 10 entries")
        if low < 1 or high < low:
            raise ConfigurationError(f"Invalid numeral domain [{low}, {high}]")
        if high // 10 >= len(tens):
            raise ConfigurationError(f"tens table too short for domain max {high}")
        return cls(low=low, high=high, tens=tens, ones=ones)

    def contains(self, value: int) -> bool:
        return self.low <= value <= self.high

    def values(self) -> range:
        return range(self.low, self.high + 1)


@dataclass(frozen=True, slots=True)
class FrequencyCount:
    """Occurrence count of one value in a source sequence."""

    value: Value
    count: int

    def as_tuple(self) -> tuple[Value, int]:
        return self.value, self.count


@dataclass(frozen=True, slots=True)
class SummaryRow:
    """One line of the grouped summary: value, its label and how often it occurs."""

    value: Value
    label: Label
    count: int

    def as_tuple(self) -> tuple[Value, Label, int]:
        return self.value, self.label, self.count


__all__ = ["Value", "Label", "NumeralTables", "FrequencyCount", "SummaryRow"]
