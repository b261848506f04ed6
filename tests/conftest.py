import pytest

from romancache.core.config import get_settings
from romancache.core.metrics import metrics_registry, set_instrumentation_enabled
from romancache.engine.cache import LabelCache, full_domain_cache


@pytest.fixture()
def full_cache() -> LabelCache:
    return full_domain_cache()


@pytest.fixture()
def fresh_metrics():
    set_instrumentation_enabled(True)
    metrics_registry.reset()
    yield metrics_registry
    metrics_registry.reset()


@pytest.fixture()
def env_settings(monkeypatch):
    """Apply ROMANCACHE_* overrides and rebuild the cached settings object."""

    def _apply(**overrides):
        for key, value in overrides.items():
            monkeypatch.setenv(f"ROMANCACHE_{key.upper()}", str(value))
        get_settings.cache_clear()
        return get_settings()

    yield _apply
    get_settings.cache_clear()
