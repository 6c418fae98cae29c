import pytest

from scoped_failures.infrastructure import config as config_module
from scoped_failures.infrastructure.scenario_catalog import clear_catalog_cache

ENV_VARS = ("LOG_LEVEL", "DEBUG", "BANNER_WIDTH", "SCENARIO_CATALOG")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config_module, "_config", None)
    clear_catalog_cache()
    yield
    clear_catalog_cache()


@pytest.fixture
def events():
    return []
