"""
Configuration management for annalist.
"""

import os
from dataclasses import MISSING, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

from annalist.core.discovery import find_project_root
from annalist.core.errors import ConfigurationError, PathNotFoundError

PATH_KEYS = frozenset({
    "project_root", "config_file", "build_dir", "source_dir",
    "output_dir", "history_dir",
})

CONFIG_ENV = "ANNALIST_CONFIG"
CONFIG_FILE_NAME = "annalist.toml"
REPORT_DIR_NAME = "annalist"
OUTCOMES_DIR_NAME = "annalist-outcomes"


def default_history_dir() -> Path:
    """Return the per-user directory holding report history for all projects."""
    return Path.home() / ".annalist" / "history"


@dataclass
class Config:
    """Configuration for report generation and history maintenance."""
    
    # Project paths - derived in __post_init__ when not given
    project_root: Optional[Path] = None
    config_file: Optional[Path] = None
    build_dir: Optional[Path] = None
    source_dir: Optional[Path] = None   # story outcomes are read from here
    output_dir: Optional[Path] = None   # site directory; reports go to output_dir/annalist
    history_dir: Optional[Path] = None
    
    # Project identity
    project_id: Optional[str] = None
    
    # Report rendering
    issue_tracker_url: Optional[str] = None
    
    # Execution
    verbosity: int = 0  # 0=warnings, 1=progress, 2=paths, 3=debug
    dry_run: bool = False
    plan: bool = False
    
    def __post_init__(self):
        """Discover the project root, load the config file and derive paths."""
        if self.project_root is None:
            try:
                self.project_root = find_project_root()
            except Exception as e:
                raise ConfigurationError(
                    f"Could not discover project root: {e}. "
                    f"Set project_root explicitly or set ANNALIST_PROJECT_ROOT environment variable."
                ) from e
        else:
            self.project_root = Path(self.project_root).resolve()
        
        if not self.project_root.exists():
            raise PathNotFoundError(f"Project root does not exist: {self.project_root}")
        
        self._load_config_file()
        
        self.build_dir = self._resolve(self.build_dir, self.project_root / "build")
        self.output_dir = self._resolve(self.output_dir, self.build_dir / "site")
        self.source_dir = self._resolve(self.source_dir, self.build_dir / OUTCOMES_DIR_NAME)
        self.history_dir = self._resolve(self.history_dir, default_history_dir())
        
        if not 0 <= self.verbosity <= 3:
            raise ValueError(f"verbosity must be between 0 and 3, got {self.verbosity}")
    
    @property
    def report_dir(self) -> Path:
        """Directory the aggregate report is written to."""
        return self.output_dir / REPORT_DIR_NAME
    
    def _resolve(self, value: Optional[Path], default: Path) -> Path:
        if value is None:
            return default
        path = Path(value).expanduser()
        if not path.is_absolute():
            path = self.project_root / path
        return path.resolve()
    
    def _config_table(self) -> Optional[Dict[str, Any]]:
        env_path = os.environ.get(CONFIG_ENV)
        if env_path:
            self.config_file = Path(env_path).resolve()
        elif self.config_file is None:
            self.config_file = self.project_root / CONFIG_FILE_NAME
        
        candidates = [self.config_file]
        if not env_path:
            candidates.append(self.project_root / "pyproject.toml")
        
        try:
            import tomllib  # Python 3.11+
        except ModuleNotFoundError:  # Python 3.8-3.10
            import tomli as tomllib
        
        for candidate in candidates:
            if not candidate or not candidate.exists():
                continue
            try:
                data = tomllib.loads(candidate.read_text())
            except Exception as e:
                raise ConfigurationError(f"Failed to read config file: {candidate}: {e}") from e
            table = data.get("annalist") or data.get("tool", {}).get("annalist")
            if table is None:
                continue
            if not isinstance(table, dict):
                raise ConfigurationError(f"annalist settings in {candidate} must be a table")
            self.config_file = candidate
            return table
        return None
    
    def _load_config_file(self) -> None:
        """Fill settings still at their defaults from annalist.toml or pyproject.toml."""
        table = self._config_table()
        if not table:
            return
        
        defaults = {
            f.name: f.default for f in fields(self) if f.default is not MISSING
        }
        for key, value in table.items():
            if key in ("project_root", "config_file") or key not in defaults:
                continue
            if value is None or getattr(self, key) != defaults[key]:
                continue
            if key in PATH_KEYS:
                value = Path(value)
            setattr(self, key, value)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "project_root": str(self.project_root),
            "config_file": str(self.config_file) if self.config_file else None,
            "build_dir": str(self.build_dir),
            "source_dir": str(self.source_dir),
            "output_dir": str(self.output_dir),
            "history_dir": str(self.history_dir),
            "project_id": self.project_id,
            "issue_tracker_url": self.issue_tracker_url,
            "verbosity": self.verbosity,
            "dry_run": self.dry_run,
            "plan": self.plan,
        }
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create configuration from dictionary."""
        data = dict(data)
        for key in PATH_KEYS:
            if key in data and isinstance(data[key], str):
                data[key] = Path(data[key])
        return cls(**data)
