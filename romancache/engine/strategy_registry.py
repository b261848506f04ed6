"""Mapping strategy registry keyed by strategy code."""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass, field
from threading import RLock
from typing import TYPE_CHECKING, Dict, Protocol

from romancache.core.errors import StrategyNotFoundError

if TYPE_CHECKING:  # pragma: no cover - typing only
    from romancache.engine.strategies.base import MappingStrategy as _MappingStrategy
else:

    class _MappingStrategy(Protocol):
        code: str

        def map(self, source, cache): ...  # pragma: no cover - typing stub

MappingStrategy = _MappingStrategy

__all__ = [
    "StrategyRegistry",
    "register_strategy",
    "get_strategy",
    "get_default_strategy",
    "list_strategies",
    "ensure_default_strategies_loaded",
]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class StrategyRegistry:
    """Thread-safe registry of mapping strategies keyed by ``code``."""

    _strategies: Dict[str, MappingStrategy] = field(default_factory=dict)
    _default_code: str | None = None
    _lock: RLock = field(default_factory=RLock)

    def register(
        self,
        strategy: MappingStrategy,
        *,
        is_default: bool = False,
        allow_replace: bool = False,
    ) -> None:
        with self._lock:
            if not allow_replace and strategy.code in self._strategies:
                raise ValueError(
                    f"Strategy '{strategy.code}' already registered; "
                    "pass allow_replace=True to swap it"
                )
            self._strategies[strategy.code] = strategy
            if is_default:
                self._default_code = strategy.code
                logger.debug("default_strategy_set", extra={"structured_data": {"code": strategy.code}})

    def get(self, code: str) -> MappingStrategy:
        with self._lock:
            strategy = self._strategies.get(code)
            if strategy is not None:
                return strategy
            available = sorted(self._strategies) or ["none"]
        raise StrategyNotFoundError(
            f"Mapping strategy '{code}' is not registered. "
            f"Available strategies: {', '.join(available)}",
            detail={"code": code, "available": available},
        )

    def get_default(self) -> MappingStrategy | None:
        with self._lock:
            if self._default_code is None:
                return None
            return self._strategies.get(self._default_code)

    def list(self) -> list[str]:
        with self._lock:
            return sorted(self._strategies)


_REGISTRY = StrategyRegistry()
_DEFAULTS_LOADED = False


def ensure_default_strategies_loaded() -> None:
    """Import the built-in strategy registrations on first use."""

    global _DEFAULTS_LOADED
    if _DEFAULTS_LOADED:
        return
    importlib.import_module("romancache.engine.strategies")
    _DEFAULTS_LOADED = True


def register_strategy(
    strategy: MappingStrategy,
    *,
    is_default: bool = False,
    allow_replace: bool = False,
) -> None:
    _REGISTRY.register(strategy, is_default=is_default, allow_replace=allow_replace)


def get_strategy(code: str) -> MappingStrategy:
    ensure_default_strategies_loaded()
    return _REGISTRY.get(code)


def get_default_strategy() -> MappingStrategy | None:
    ensure_default_strategies_loaded()
    return _REGISTRY.get_default()


def list_strategies() -> list[str]:
    ensure_default_strategies_loaded()
    return _REGISTRY.list()
