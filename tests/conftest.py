import pytest

from case_analytics.cache import ResultCache


@pytest.fixture
def cache():
    return ResultCache(8)


@pytest.fixture(autouse=True)
def _default_settings(monkeypatch):
    for name in ("ANALYTICS_LOCALE", "ANALYTICS_CACHE_SIZE", "ANALYTICS_LOG_LEVEL", "ANALYTICS_DATA_DIR"):
        monkeypatch.delenv(name, raising=False)
