"""Tests for repository toolchain baseline configuration."""

from __future__ import annotations

import tomllib
from pathlib import Path


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def _pyproject() -> dict:
    pyproject_path = _project_root() / "pyproject.toml"
    return tomllib.loads(pyproject_path.read_text(encoding="utf-8"))


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


def test_console_script_points_at_cli_main() -> None:
    pyproject = _pyproject()

    assert pyproject["project"]["scripts"]["payload-translate"] == "payload_translate.cli:main"


def test_core_packages_stay_independent_of_io_layers() -> None:
    package_root = _project_root() / "src" / "payload_translate"
    io_packages = ("document_store", "translation_provider", "translation_run", "cli")

    for core_package in ("addressing", "rich_text", "field_schema", "extraction", "reinsertion"):
        for module_path in (package_root / core_package).glob("*.py"):
            text = module_path.read_text(encoding="utf-8")
            for io_package in io_packages:
                assert f"payload_translate.{io_package}" not in text, (
                    f"{module_path.name} must not import {io_package}"
                )
