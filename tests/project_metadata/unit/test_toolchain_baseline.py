"""Tests for repository toolchain baseline configuration."""

from __future__ import annotations

import ast
import tomllib
from pathlib import Path


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def _pyproject() -> dict:
    pyproject_path = _project_root() / "pyproject.toml"
    return tomllib.loads(pyproject_path.read_text(encoding="utf-8"))


def _imported_modules(path: Path) -> set[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"))
    modules: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            modules.update(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            modules.add(node.module)
    return modules


def test_project_uses_python_311_baseline_in_pyproject() -> None:
    pyproject = _pyproject()

    assert pyproject["project"]["requires-python"] == ">=3.11"
    assert pyproject["tool"]["ruff"]["target-version"] == "py311"
    assert pyproject["tool"]["mypy"]["python_version"] == "3.11"


def test_project_uses_uv_style_metadata_without_poetry() -> None:
    pyproject = _pyproject()
    dev_dependencies = pyproject["dependency-groups"]["dev"]

    assert "black" not in dev_dependencies
    assert "black" not in pyproject["tool"]
    assert "poetry" not in pyproject["tool"]
    assert pyproject["build-system"]["build-backend"] != "poetry.core.masonry.api"


def test_console_script_points_to_cli_main() -> None:
    pyproject = _pyproject()

    assert pyproject["project"]["scripts"]["schema-inspector"] == "schema_inspector.cli:main"


def test_model_does_not_depend_on_outer_layers() -> None:
    model_dir = _project_root() / "src" / "schema_inspector" / "model"

    for path in model_dir.glob("*.py"):
        for module in _imported_modules(path):
            assert not module.startswith("schema_inspector.navigation"), path.name
            assert not module.startswith("schema_inspector.cli"), path.name
            assert module not in {"click", "yaml"}, path.name
