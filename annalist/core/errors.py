"""
Custom exceptions for annalist.
"""


class AnnalistError(Exception):
    """Base exception for all annalist errors."""
    pass


class ProjectRootNotFoundError(AnnalistError):
    """Raised when the project root cannot be found."""
    pass


class ConfigurationError(AnnalistError):
    """Raised when configuration is invalid."""
    pass


class PathNotFoundError(AnnalistError):
    """Raised when a required path does not exist."""
    pass


class StepExecutionError(AnnalistError):
    """Raised when a build integration step fails."""
    pass


class ReportGenerationError(AnnalistError, OSError):
    """Raised when story outcomes cannot be read or reports cannot be written."""
    pass
