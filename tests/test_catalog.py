import pytest
from pydantic import ValidationError

from scoped_failures.domain.errors import UnknownScenarioError
from scoped_failures.infrastructure.scenario_catalog import (
    ScenarioCatalog,
    ScenarioCategory,
    ScenarioInfo,
    get_catalog,
)


def _write(tmp_path, text):
    path = tmp_path / "scenarios.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_packaged_catalog_keeps_file_order():
    catalog = get_catalog()

    assert catalog.ids()[:3] == ["arithmetic", "handler-order", "resource-scope"]
    assert "suppressed" in catalog
    assert catalog.get("suppressed").category is ScenarioCategory.SUPPRESSION


def test_get_catalog_is_cached():
    assert get_catalog() is get_catalog()


def test_unknown_id_raises_domain_error():
    with pytest.raises(UnknownScenarioError):
        get_catalog().get("missing")


def test_catalog_path_comes_from_environment(tmp_path, monkeypatch):
    path = _write(tmp_path, """
scenarios:
  - id: suppressed
    name: Only one
    category: suppression
""")
    monkeypatch.setenv("SCENARIO_CATALOG", str(path))

    catalog = get_catalog()

    assert catalog.ids() == ["suppressed"]
    assert catalog.get("suppressed").description == ""


def test_missing_catalog_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ScenarioCatalog.from_file(tmp_path / "absent.yaml")


def test_empty_catalog_file(tmp_path):
    assert len(ScenarioCatalog.from_file(_write(tmp_path, ""))) == 0


def test_list_at_top_level_is_rejected(tmp_path):
    path = _write(tmp_path, """
- id: arithmetic
  name: Basic handler
  category: basics
""")
    with pytest.raises(ValueError, match="mapping"):
        ScenarioCatalog.from_file(path)


def test_scenarios_must_be_a_list(tmp_path):
    path = _write(tmp_path, "scenarios: arithmetic\n")
    with pytest.raises(ValueError, match="list"):
        ScenarioCatalog.from_file(path)


def test_scalar_entry_is_a_validation_error(tmp_path):
    path = _write(tmp_path, """
scenarios:
  - arithmetic
""")
    with pytest.raises(ValidationError):
        ScenarioCatalog.from_file(path)


@pytest.mark.parametrize("scenario_id", ["Upper", "with space", "trailing-", ""])
def test_invalid_ids_are_rejected(scenario_id):
    with pytest.raises(ValidationError):
        ScenarioInfo(id=scenario_id, name="x", category="basics")


def test_unknown_category_is_rejected():
    with pytest.raises(ValidationError):
        ScenarioInfo(id="ok", name="x", category="networking")


def test_duplicate_ids_are_rejected():
    entry = ScenarioInfo(id="dup", name="x", category="basics")
    with pytest.raises(ValueError):
        ScenarioCatalog([entry, entry])
