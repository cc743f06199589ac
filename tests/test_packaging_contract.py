#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tests for package layering and version management contracts.
"""

from pathlib import Path

import pytest

import genkai
from genkai import __version__ as public_version
from genkai._version import __version__ as internal_version


PROJECT_ROOT = Path(__file__).resolve().parents[1]
PYPROJECT_PATH = PROJECT_ROOT / "pyproject.toml"


def _load_pyproject() -> dict:
    try:
        import tomllib  # Python 3.11+
    except ModuleNotFoundError:  # pragma: no cover
        tomllib = pytest.importorskip("tomli")

    return tomllib.loads(PYPROJECT_PATH.read_text(encoding="utf-8"))


def test_version_is_single_sourced_via_genkai_version_module():
    pyproject = _load_pyproject()
    project = pyproject["project"]

    assert project.get("dynamic") == ["version"]
    assert (
        pyproject["tool"]["setuptools"]["dynamic"]["version"]["attr"]
        == "genkai._version.__version__"
    )
    assert public_version == internal_version


def test_core_dependencies_exclude_server_and_test_tooling():
    pyproject = _load_pyproject()
    joined = "\n".join(pyproject["project"]["dependencies"]).lower()

    assert "pydantic" in joined
    assert "fastapi" in joined
    assert "uvicorn" not in joined
    assert "pytest" not in joined


def test_optional_extensions_include_server_and_test():
    optional = _load_pyproject()["project"]["optional-dependencies"]

    assert any("uvicorn" in dep.lower() for dep in optional["server"])
    assert any("pytest" in dep.lower() for dep in optional["test"])
    assert any("httpx" in dep.lower() for dep in optional["test"])


def test_public_exports_are_lazy_and_resolvable():
    for name in genkai.__all__:
        assert getattr(genkai, name) is not None

    with pytest.raises(AttributeError):
        getattr(genkai, "does_not_exist")
