"""
Tests for configuration, project root discovery and project identity.
"""

from pathlib import Path

import pytest

from annalist.core.config import CONFIG_ENV, Config
from annalist.core.discovery import PROJECT_ROOT_ENV, find_project_root, find_project_root_or_cwd
from annalist.core.errors import ConfigurationError, PathNotFoundError, ProjectRootNotFoundError
from annalist.core.project import get_project_identifier, normalize_identifier


def test_default_paths(project_root: Path) -> None:
    config = Config(project_root=project_root)
    root = project_root.resolve()
    assert config.build_dir == root / "build"
    assert config.output_dir == root / "build" / "site"
    assert config.report_dir == root / "build" / "site" / "annalist"
    assert config.source_dir == root / "build" / "annalist-outcomes"
    assert config.history_dir == Path.home() / ".annalist" / "history"
    assert config.config_file == root / "annalist.toml"


def test_relative_paths_resolve_against_project_root(project_root: Path) -> None:
    config = Config(project_root=project_root, output_dir=Path("public"), history_dir=Path("hist"))
    assert config.output_dir == project_root.resolve() / "public"
    assert config.history_dir == project_root.resolve() / "hist"


def test_missing_project_root(tmp_path: Path) -> None:
    with pytest.raises(PathNotFoundError):
        Config(project_root=tmp_path / "missing")


def test_verbosity_range(project_root: Path) -> None:
    with pytest.raises(ValueError):
        Config(project_root=project_root, verbosity=4)


def test_settings_from_pyproject_table(project_root: Path) -> None:
    (project_root / "pyproject.toml").write_text(
        '[project]\nname = "shop"\n\n'
        '[tool.annalist]\nissue_tracker_url = "https://bugs.example.com/{0}"\noutput_dir = "docs"\n'
    )
    config = Config(project_root=project_root)
    assert config.issue_tracker_url == "https://bugs.example.com/{0}"
    assert config.output_dir == project_root.resolve() / "docs"
    assert config.config_file == project_root.resolve() / "pyproject.toml"


def test_annalist_toml_wins_over_pyproject(project_root: Path) -> None:
    (project_root / "annalist.toml").write_text('[annalist]\nproject_id = "from-file"\n')
    (project_root / "pyproject.toml").write_text('[tool.annalist]\nproject_id = "from-pyproject"\n')
    assert Config(project_root=project_root).project_id == "from-file"


def test_explicit_values_win_over_file(project_root: Path) -> None:
    (project_root / "annalist.toml").write_text('[annalist]\nproject_id = "from-file"\nverbosity = 2\n')
    config = Config(project_root=project_root, project_id="explicit")
    assert config.project_id == "explicit"
    assert config.verbosity == 2


def test_config_file_from_environment(project_root: Path, tmp_path: Path, monkeypatch) -> None:
    settings = tmp_path / "ci.toml"
    settings.write_text('[annalist]\nproject_id = "ci"\n')
    monkeypatch.setenv(CONFIG_ENV, str(settings))
    config = Config(project_root=project_root)
    assert config.project_id == "ci"
    assert config.config_file == settings.resolve()


def test_broken_config_file(project_root: Path) -> None:
    (project_root / "annalist.toml").write_text("[annalist\n")
    with pytest.raises(ConfigurationError):
        Config(project_root=project_root)


def test_dict_round_trip(project_root: Path) -> None:
    config = Config(project_root=project_root, project_id="shop", verbosity=1)
    restored = Config.from_dict(config.to_dict())
    assert restored.project_id == "shop"
    assert restored.output_dir == config.output_dir
    assert restored.verbosity == 1


def test_find_project_root_walks_up(project_root: Path) -> None:
    nested = project_root / "tests" / "unit"
    nested.mkdir(parents=True)
    assert find_project_root(nested) == project_root.resolve()


def test_find_project_root_from_environment(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv(PROJECT_ROOT_ENV, str(tmp_path))
    assert find_project_root() == tmp_path.resolve()

    monkeypatch.setenv(PROJECT_ROOT_ENV, str(tmp_path / "missing"))
    with pytest.raises(ProjectRootNotFoundError):
        find_project_root()


def test_find_project_root_or_cwd(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv(PROJECT_ROOT_ENV, str(tmp_path / "missing"))
    monkeypatch.chdir(tmp_path)
    assert find_project_root_or_cwd() == Path.cwd()


def test_normalize_identifier() -> None:
    assert normalize_identifier("Shop_Front") == "shop-front"
    assert normalize_identifier("  my.cool__project ") == "my-cool-project"


def test_project_identifier_sources(tmp_path: Path, project_root: Path) -> None:
    assert get_project_identifier(project_root) == "shop-front"
    assert get_project_identifier(project_root, override="Other App") == "other-app"

    legacy = tmp_path / "legacy"
    legacy.mkdir()
    (legacy / "setup.cfg").write_text("[metadata]\nname = Legacy.Billing\n")
    assert get_project_identifier(legacy) == "legacy-billing"

    unnamed = tmp_path / "Plain_Dir"
    unnamed.mkdir()
    assert get_project_identifier(unnamed) == "plain-dir"


def test_project_identifier_from_poetry(tmp_path: Path) -> None:
    root = tmp_path / "poetry"
    root.mkdir()
    (root / "pyproject.toml").write_text('[tool.poetry]\nname = "Poetry-App"\n')
    assert get_project_identifier(root) == "poetry-app"


def test_project_identifier_never_contains_path_separators(tmp_path: Path) -> None:
    assert get_project_identifier(tmp_path, override="/tmp/elsewhere") == "tmp-elsewhere"
    assert get_project_identifier(tmp_path, override="..\\shared\\history") == "shared-history"
    with pytest.raises(ConfigurationError):
        get_project_identifier(tmp_path, override="../")
