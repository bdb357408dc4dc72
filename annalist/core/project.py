"""
Project identity resolution.

Report history is keyed by a stable identifier for the build unit, read from
the project's packaging metadata.
"""

import configparser
import re
from pathlib import Path
from typing import Optional

from annalist.core.errors import ConfigurationError
from annalist.core.logging import get_logger

logger = get_logger(__name__)

_SEPARATORS = re.compile(r"[-_.\s/\\]+")


def normalize_identifier(name: str) -> str:
    """
    Lowercase a project name and collapse separator runs into single dashes.

    Path separators are separators too, so the identifier is always a single
    directory name.
    """
    return _SEPARATORS.sub("-", name.strip()).strip("-").lower()


def _load_toml(path: Path) -> dict:
    try:
        import tomllib  # Python 3.11+
    except ModuleNotFoundError:  # Python 3.8-3.10
        import tomli as tomllib

    try:
        return tomllib.loads(path.read_text())
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Failed to read {path}: {e}") from e


def _name_from_pyproject(project_root: Path) -> Optional[str]:
    pyproject = project_root / "pyproject.toml"
    if not pyproject.exists():
        return None
    data = _load_toml(pyproject)
    name = data.get("project", {}).get("name")
    if not name:
        name = data.get("tool", {}).get("poetry", {}).get("name")
    return name or None


def _name_from_setup_cfg(project_root: Path) -> Optional[str]:
    setup_cfg = project_root / "setup.cfg"
    if not setup_cfg.exists():
        return None
    parser = configparser.ConfigParser()
    try:
        parser.read(setup_cfg)
    except configparser.Error as e:
        raise ConfigurationError(f"Failed to read {setup_cfg}: {e}") from e
    return parser.get("metadata", "name", fallback=None) or None


def get_project_identifier(project_root: Path, override: Optional[str] = None) -> str:
    """
    Return the identifier of the project rooted at project_root.
    
    Resolution order: explicit override, ``[project].name`` in pyproject.toml,
    ``[metadata].name`` in setup.cfg, then the directory name.
    """
    project_root = Path(project_root)
    name = (
        override
        or _name_from_pyproject(project_root)
        or _name_from_setup_cfg(project_root)
        or project_root.resolve().name
    )
    identifier = normalize_identifier(name)
    if not identifier:
        raise ConfigurationError(f"Could not derive a project identifier from {name!r}")
    logger.debug(f"Project identifier for {project_root}: {identifier}")
    return identifier
