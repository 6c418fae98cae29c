import tomllib
from pathlib import Path

PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


def _project():
    with open(PYPROJECT, "rb") as f:
        return tomllib.load(f)["project"]


def test_project_metadata_has_no_working_document_readme():
    assert "readme" not in _project()


def test_runtime_dependencies_are_declared():
    names = {dep.split(">")[0].split("=")[0] for dep in _project()["dependencies"]}
    assert names == {"python-dotenv", "pydantic", "PyYAML"}
