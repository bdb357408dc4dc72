"""
Report step: generate the aggregate report of recorded story outcomes.
"""

from annalist.core.errors import AnnalistError
from annalist.core.steps.base import StepBase, StepPlan, StepResult, StepStatus


class GenerateReportStep(StepBase):
    """Generates the aggregate HTML report into ``<output_dir>/annalist``."""

    @property
    def name(self) -> str:
        return "report"

    def _outputs(self) -> dict:
        return {
            "source_dir": str(self.config.source_dir),
            "report_dir": str(self.config.report_dir),
        }

    def _do_execute(self) -> StepResult:
        report_dir = self.config.report_dir
        source_dir = self.config.source_dir

        try:
            reporter = self.reporter
            self.logger.info("Generating aggregate reports")
            self.logger.info(f"Generating reports from {source_dir}")
            self.logger.info(f"Generating reports to {report_dir}")
            reporter.set_output_directory(report_dir)
            report_data = reporter.generate_reports_for_stories_from(source_dir)
        except (OSError, AnnalistError) as e:
            return self._failure("Error generating aggregate reports", e, self._outputs())

        return StepResult(
            name=self.name,
            status=StepStatus.SUCCESS,
            message=f"Report generated in {report_dir}: {report_data.summary}",
            outputs=self._outputs(),
            details={"project_id": reporter.project_id, "total": report_data.total},
        )

    def dry_run(self) -> StepResult:
        return StepResult(
            name=self.name,
            status=StepStatus.SKIPPED,
            message=(
                f"DRY RUN: Would generate reports from {self.config.source_dir} "
                f"to {self.config.report_dir}"
            ),
            outputs=self._outputs(),
        )

    def _plan_details(self) -> StepPlan:
        return StepPlan(
            name=self.name,
            will_run=True,
            reason="ready" if self.config.source_dir.is_dir() else "source directory missing",
            outputs=self._outputs(),
        )
