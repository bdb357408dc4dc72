"""
Shared fixtures for annalist tests.
"""

import logging
from pathlib import Path

import pytest

from annalist.core.config import CONFIG_ENV
from annalist.core.discovery import PROJECT_ROOT_ENV


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep user settings out of the tests and drop handlers bound to captured streams."""
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    monkeypatch.delenv(PROJECT_ROOT_ENV, raising=False)
    yield
    logging.getLogger("annalist").handlers.clear()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """A project directory named by its pyproject.toml."""
    root = tmp_path / "project"
    root.mkdir()
    (root / "pyproject.toml").write_text('[project]\nname = "Shop_Front"\nversion = "1.0"\n')
    return root


@pytest.fixture
def history_dir(tmp_path: Path) -> Path:
    return tmp_path / "history"
