"""
Project root discovery utilities.

The project root is the directory holding the packaging metadata of the
project under test; report paths and the project identifier derive from it.
"""

import os
from pathlib import Path
from typing import Optional

from annalist.core.errors import ProjectRootNotFoundError


# Marker files/directories that indicate a project root
PROJECT_MARKERS = [
    "pyproject.toml",
    "setup.cfg",
    "setup.py",
    ".git",
]

PROJECT_ROOT_ENV = "ANNALIST_PROJECT_ROOT"


def find_project_root(start_path: Optional[Path] = None) -> Path:
    """
    Find the project root by walking up from start_path looking for markers.
    
    Args:
        start_path: Starting directory (default: current working directory)
        
    Returns:
        Path to the nearest directory containing one of PROJECT_MARKERS
        
    Raises:
        ProjectRootNotFoundError: If no project root can be found
    """
    env_root = os.environ.get(PROJECT_ROOT_ENV)
    if env_root:
        env_path = Path(env_root).resolve()
        if env_path.is_dir():
            return env_path
        raise ProjectRootNotFoundError(
            f"Environment variable {PROJECT_ROOT_ENV} points to invalid location: {env_root}"
        )
    
    current = Path.cwd() if start_path is None else Path(start_path)
    current = current.resolve()
    
    while True:
        if _is_project_root(current):
            return current
        if current == current.parent:
            break
        current = current.parent
    
    raise ProjectRootNotFoundError(
        f"Could not find project root starting from {start_path or Path.cwd()}. "
        f"Looking for one of: {', '.join(PROJECT_MARKERS)}. "
        f"Set {PROJECT_ROOT_ENV} environment variable to override."
    )


def _is_project_root(path: Path) -> bool:
    if not path.is_dir():
        return False
    return any((path / marker).exists() for marker in PROJECT_MARKERS)


def find_project_root_or_cwd() -> Path:
    """
    Find the project root, or return the current working directory if not found.
    """
    try:
        return find_project_root()
    except ProjectRootNotFoundError:
        return Path.cwd()
