"""
Infrastructure Layer

Configuration and the scenario catalog.
"""

from scoped_failures.infrastructure.config import AppConfig, get_config, reload_config
from scoped_failures.infrastructure.scenario_catalog import (
    ScenarioCatalog,
    ScenarioCategory,
    ScenarioInfo,
    get_catalog,
    clear_catalog_cache,
)
