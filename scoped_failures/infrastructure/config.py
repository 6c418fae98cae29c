"""
Configuration Module

Centralized configuration management for the demonstration driver.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "scenarios.yaml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class AppConfig:
    """Main application configuration."""
    log_level: str = "WARNING"
    debug: bool = False
    banner_width: int = 60
    catalog_path: Path = field(default_factory=lambda: DEFAULT_CATALOG_PATH)

    def __post_init__(self):
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Invalid LOG_LEVEL: {self.log_level}")
        if self.banner_width < 20:
            raise ValueError(f"BANNER_WIDTH must be at least 20, got {self.banner_width}")

    @classmethod
    def from_env(cls) -> "AppConfig":
        catalog = os.getenv("SCENARIO_CATALOG")
        return cls(
            log_level=os.getenv("LOG_LEVEL", "WARNING"),
            debug=os.getenv("DEBUG", "false").lower() == "true",
            banner_width=int(os.getenv("BANNER_WIDTH", "60")),
            catalog_path=Path(catalog) if catalog else DEFAULT_CATALOG_PATH
        )

    @property
    def effective_log_level(self) -> int:
        """DEBUG overrides LOG_LEVEL."""
        if self.debug:
            return logging.DEBUG
        return getattr(logging, self.log_level)


# Global configuration instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reload_config() -> AppConfig:
    """Reload configuration from environment."""
    global _config
    _config = AppConfig.from_env()
    return _config
