"""
Scenario Catalog Loader

Loads scenario metadata (name, description, category) from a YAML file.
The scenario behavior itself lives in the application layer.
"""

import re
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator

from scoped_failures.domain.errors import UnknownScenarioError
from scoped_failures.infrastructure.config import get_config

_ID_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


class ScenarioCategory(Enum):
    """What a scenario demonstrates."""
    BASICS = "basics"
    HANDLERS = "handlers"
    RESOURCES = "resources"
    CHAINING = "chaining"
    SUPPRESSION = "suppression"


class ScenarioInfo(BaseModel):
    """Catalog entry for one scenario."""
    id: str = Field(..., description="Kebab-case scenario identifier")
    name: str = Field(..., min_length=1, description="Short display name")
    description: str = Field(default="", description="One-line summary")
    category: ScenarioCategory

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        if not _ID_RE.fullmatch(v):
            raise ValueError(f"Scenario id must be lower-case kebab-case, got {v!r}")
        return v


class ScenarioCatalog:
    """
    Catalog of scenario metadata.

    Entries keep the order of the YAML file.
    """

    def __init__(self, entries: List[ScenarioInfo]):
        self._entries: Dict[str, ScenarioInfo] = {}
        for entry in entries:
            if entry.id in self._entries:
                raise ValueError(f"Duplicate scenario id: {entry.id}")
            self._entries[entry.id] = entry

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ScenarioCatalog":
        """
        Load a catalog from YAML.

        Raises:
            FileNotFoundError: If the catalog file doesn't exist
            ValueError: If the file is not a mapping with a ``scenarios`` list
            pydantic.ValidationError: If an entry is malformed
        """
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Scenario catalog not found: {file_path}")

        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Scenario catalog must be a mapping: {file_path}")
        items = data.get("scenarios") or []
        if not isinstance(items, list):
            raise ValueError(f"'scenarios' must be a list: {file_path}")

        return cls([ScenarioInfo.model_validate(item) for item in items])

    def get(self, scenario_id: str) -> ScenarioInfo:
        """
        Get a catalog entry by id.

        Raises:
            UnknownScenarioError: If no entry has this id
        """
        try:
            return self._entries[scenario_id]
        except KeyError:
            raise UnknownScenarioError(scenario_id) from None

    def ids(self) -> List[str]:
        return list(self._entries)

    def entries(self) -> List[ScenarioInfo]:
        return list(self._entries.values())

    def __contains__(self, scenario_id: str) -> bool:
        return scenario_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)


# Singleton catalog instance
_catalog: Optional[ScenarioCatalog] = None


def get_catalog() -> ScenarioCatalog:
    """Get the catalog configured by SCENARIO_CATALOG (cached)."""
    global _catalog
    if _catalog is None:
        _catalog = ScenarioCatalog.from_file(get_config().catalog_path)
    return _catalog


def clear_catalog_cache() -> None:
    """Forget the cached catalog so the next call reloads it."""
    global _catalog
    _catalog = None
