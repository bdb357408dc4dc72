"""
Base classes for build integration steps.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional

from annalist.core.config import Config
from annalist.core.errors import StepExecutionError
from annalist.core.formatter import Formatter
from annalist.core.logging import get_logger
from annalist.core.project import get_project_identifier
from annalist.reporting.reporter import HtmlAggregateReporter


class StepStatus(Enum):
    """Status of a step execution."""
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class StepResult:
    """Result of executing a step."""
    name: str
    status: StepStatus
    message: str
    duration_sec: Optional[float] = None
    outputs: Dict[str, str] = field(default_factory=dict)
    details: Dict[str, Any] = field(default_factory=dict)
    error: Optional[Exception] = None

    @property
    def success(self) -> bool:
        return self.status == StepStatus.SUCCESS

    @property
    def skipped(self) -> bool:
        return self.status == StepStatus.SKIPPED


@dataclass
class StepPlan:
    """Plan for a step (no execution)."""
    name: str
    will_run: bool
    reason: str
    outputs: Dict[str, str] = field(default_factory=dict)
    details: Dict[str, Any] = field(default_factory=dict)


ReporterFactory = Callable[[str, Config], HtmlAggregateReporter]


def default_reporter_factory(project_id: str, config: Config) -> HtmlAggregateReporter:
    return HtmlAggregateReporter(
        project_id,
        history_dir=config.history_dir,
        formatter=Formatter(config.issue_tracker_url),
    )


class StepBase(ABC):
    """
    Base class for the report steps.

    Every step first resolves the project identifier, then hands the work to
    an aggregate reporter created for that project:
    - report: generate the aggregate report
    - clean: clear the project's report history
    """

    def __init__(self, config: Config, reporter_factory: Optional[ReporterFactory] = None):
        self.config = config
        self.reporter_factory = reporter_factory or default_reporter_factory
        self.logger = get_logger(__name__)
        self._reporter: Optional[HtmlAggregateReporter] = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this step."""
        pass

    def project_identifier(self) -> str:
        return get_project_identifier(self.config.project_root, self.config.project_id)

    @property
    def reporter(self) -> HtmlAggregateReporter:
        """Reporter for this project, created on first use."""
        if self._reporter is None:
            self._reporter = self.reporter_factory(self.project_identifier(), self.config)
        return self._reporter

    def execute(self) -> StepResult:
        """Execute this step (dry_run/validate then _do_execute)."""
        if self.config.dry_run:
            return self.dry_run()
        error = self.validate()
        if error:
            return StepResult(name=self.name, status=StepStatus.FAILED, message=error)
        start = time.perf_counter()
        result = self._do_execute()
        result.duration_sec = time.perf_counter() - start
        return result

    @abstractmethod
    def _do_execute(self) -> StepResult:
        """
        Perform the step work. Called by execute() after dry_run/validate.

        Returns:
            StepResult indicating success or failure
        """
        pass

    def validate(self) -> Optional[str]:
        """
        Validate prerequisites for this step.

        Returns:
            None if valid, error message string if invalid
        """
        return None

    def dry_run(self) -> StepResult:
        return StepResult(
            name=self.name,
            status=StepStatus.SKIPPED,
            message=f"DRY RUN: Would execute {self.name} step"
        )

    def plan(self) -> StepPlan:
        """Return a plan for this step without executing it."""
        validation_error = self.validate()
        if validation_error:
            return StepPlan(name=self.name, will_run=False, reason=f"invalid: {validation_error}")
        return self._plan_details()

    def _plan_details(self) -> StepPlan:
        return StepPlan(name=self.name, will_run=True, reason="ready")

    def _failure(self, message: str, cause: Exception, outputs: Dict[str, str]) -> StepResult:
        """Wrap cause into a StepExecutionError-bearing failed result."""
        error_msg = f"{message}: {cause}"
        self.logger.error(error_msg)
        exec_error = StepExecutionError(error_msg)
        exec_error.__cause__ = cause
        return StepResult(
            name=self.name,
            status=StepStatus.FAILED,
            message=error_msg,
            error=exec_error,
            outputs=outputs,
        )
