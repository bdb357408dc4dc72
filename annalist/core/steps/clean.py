"""
Clean step: delete the report history of the current project.
"""

from annalist.core.errors import AnnalistError
from annalist.core.steps.base import StepBase, StepPlan, StepResult, StepStatus


class ClearHistoryStep(StepBase):
    """Step clearing the historical report data of this project."""

    @property
    def name(self) -> str:
        return "clean"

    def _outputs(self) -> dict:
        return {"history_dir": str(self.config.history_dir)}

    def _do_execute(self) -> StepResult:
        try:
            reporter = self.reporter
            self.logger.info("Clearing historical reports")
            removed = reporter.clear_history()
        except (OSError, AnnalistError) as e:
            return self._failure("Error clearing report history", e, self._outputs())

        if removed:
            message = f"Cleared {removed} history snapshot(s) for {reporter.project_id}"
        else:
            message = f"No report history to clear for {reporter.project_id}"
        return StepResult(
            name=self.name,
            status=StepStatus.SUCCESS,
            message=message,
            outputs=self._outputs(),
            details={"project_id": reporter.project_id, "removed": removed},
        )

    def dry_run(self) -> StepResult:
        try:
            directory = self.reporter.history.directory
        except (OSError, AnnalistError) as e:
            return self._failure("Error clearing report history", e, self._outputs())
        if directory.exists():
            message = f"DRY RUN: Would clear report history in {directory}"
        else:
            message = "DRY RUN: No report history to clear"
        return StepResult(
            name=self.name,
            status=StepStatus.SKIPPED,
            message=message,
            outputs=self._outputs(),
        )

    def _plan_details(self) -> StepPlan:
        return StepPlan(
            name=self.name,
            will_run=True,
            reason="ready",
            outputs=self._outputs(),
        )
