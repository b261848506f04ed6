from __future__ import annotations

"""Domain-specific exception hierarchy for numeral caching and aggregation."""

from typing import Any

__all__ = [
    "DomainError",
    "ValidationError",
    "OutOfDomainError",
    "LookupMissError",
    "DuplicateKeyError",
    "StrategyNotFoundError",
    "ConfigurationError",
]


class DomainError(Exception):
    """Base class for caller-facing errors raised by romancache."""

    error_code: str = "domain_error"
    default_message: str = "Domain error"

    def __init__(self, message: str | None = None, *, detail: Any | None = None) -> None:
        final_message = message or self.default_message
        super().__init__(final_message)
        self.message = final_message
        self.detail = detail

    def __str__(self) -> str:
        return self.message


class ValidationError(DomainError, ValueError):
    """Raised when an argument fails validation."""

    error_code = "validation_error"
    default_message = "Invalid argument"


class OutOfDomainError(ValidationError):
    """Raised when a value falls outside the convertible range."""

    error_code = "out_of_domain"
    default_message = "Value outside numeral domain"

    def __init__(self, value: Any, *, low: int, high: int) -> None:
        super().__init__(
            f"Value {value!r} is outside the numeral domain [{low}, {high}]",
            detail={"value": value, "low": low, "high": high},
        )
        self.value = value


class LookupMissError(DomainError, KeyError):
    """Raised when a batch source holds a value the supplied cache does not cover."""

    error_code = "lookup_miss"
    default_message = "Value missing from cache"

    def __init__(self, value: Any, *, index: int | None = None) -> None:
        where = f" at index {index}" if index is not None else ""
        super().__init__(
            f"Value {value!r}{where} is not covered by the cache",
            detail={"value": value, "index": index},
        )
        self.value = value
        self.index = index


class DuplicateKeyError(DomainError):
    """Raised by strict cache construction when a value is inserted twice."""

    error_code = "duplicate_key"
    default_message = "Value inserted into cache twice"

    def __init__(self, value: Any) -> None:
        super().__init__(f"Value {value!r} already present in cache", detail={"value": value})
        self.value = value


class StrategyNotFoundError(DomainError, KeyError):
    """Raised when a mapping strategy code is not registered."""

    error_code = "strategy_not_found"
    default_message = "Mapping strategy not registered"


class ConfigurationError(DomainError):
    """Raised when packaged numeral tables or settings are inconsistent."""

    error_code = "configuration_error"
    default_message = "Invalid configuration"
