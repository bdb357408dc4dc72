"""
Core modules for annalist.
"""

from annalist.core.config import Config
from annalist.core.discovery import find_project_root, find_project_root_or_cwd
from annalist.core.errors import (
    AnnalistError,
    ProjectRootNotFoundError,
    ConfigurationError,
    PathNotFoundError,
    StepExecutionError,
    ReportGenerationError,
)
from annalist.core.formatter import Formatter
from annalist.core.project import get_project_identifier

__all__ = [
    "Config",
    "find_project_root",
    "find_project_root_or_cwd",
    "AnnalistError",
    "ProjectRootNotFoundError",
    "ConfigurationError",
    "PathNotFoundError",
    "StepExecutionError",
    "ReportGenerationError",
    "Formatter",
    "get_project_identifier",
]
