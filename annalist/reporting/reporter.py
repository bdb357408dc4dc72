"""
Aggregate story report generation.
"""

import json
from pathlib import Path
from typing import Dict, Optional

import jinja2

from annalist.core.config import default_history_dir
from annalist.core.errors import ReportGenerationError
from annalist.core.formatter import Formatter
from annalist.core.logging import get_logger
from annalist.reporting.history import ReportHistory
from annalist.reporting.loader import load_outcomes
from annalist.reporting.models import ReportData

TEMPLATE_DIR = Path(__file__).parent / "templates"
HTML_REPORT_NAME = "index.html"
JSON_REPORT_NAME = "report.json"

_JINJA2_ENV_CACHE: Dict[str, jinja2.Environment] = {}


def _environment() -> jinja2.Environment:
    template_dir = str(TEMPLATE_DIR)
    if template_dir not in _JINJA2_ENV_CACHE:
        _JINJA2_ENV_CACHE[template_dir] = jinja2.Environment(
            loader=jinja2.FileSystemLoader(template_dir),
            autoescape=jinja2.select_autoescape(["html", "j2"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
    return _JINJA2_ENV_CACHE[template_dir]


class HtmlAggregateReporter:
    """Generates the aggregate HTML and JSON report of a project's story outcomes."""

    def __init__(self, project_id: str, history_dir: Optional[Path] = None,
                 formatter: Optional[Formatter] = None):
        self.project_id = project_id
        self.formatter = formatter or Formatter()
        self.history = ReportHistory(project_id, history_dir or default_history_dir())
        self.output_directory: Optional[Path] = None
        self.logger = get_logger(__name__)

    def set_output_directory(self, output_directory: Path) -> None:
        self.output_directory = Path(output_directory)

    def generate_reports_for_stories_from(self, source_directory: Path) -> ReportData:
        """
        Read the story outcomes under source_directory and write the reports.

        Args:
            source_directory: Directory of recorded outcome files

        Returns:
            The aggregated report data

        Raises:
            ReportGenerationError: If outcomes cannot be read or reports cannot be written
        """
        if self.output_directory is None:
            raise ReportGenerationError("No output directory set for the aggregate report")

        outcomes = load_outcomes(Path(source_directory))
        report_data = ReportData(project_id=self.project_id, outcomes=outcomes)
        report_data.history = self.history.snapshots() + [report_data.snapshot()]

        try:
            self.output_directory.mkdir(parents=True, exist_ok=True)
            self._write_json_report(report_data)
            self._write_html_report(report_data)
        except OSError as e:
            raise ReportGenerationError(f"Could not write reports to {self.output_directory}: {e}") from e

        self.history.record(report_data)
        self.logger.info(f"Aggregate report for {self.project_id}: {report_data.summary}")
        return report_data

    def clear_history(self) -> int:
        """Remove this project's report history; return the number of snapshots removed."""
        removed = self.history.clear()
        self.logger.info(f"Removed {removed} history snapshot(s) for {self.project_id}")
        return removed

    def _write_json_report(self, report_data: ReportData) -> Path:
        file_path = self.output_directory / JSON_REPORT_NAME
        file_path.write_text(json.dumps(report_data.to_dict(), indent=2))
        return file_path

    def _write_html_report(self, report_data: ReportData) -> Path:
        file_path = self.output_directory / HTML_REPORT_NAME
        template = _environment().get_template("report.html.j2")
        html = template.render(
            report=report_data,
            counts=report_data.get_result_counts(),
            issue_links=self.formatter.add_links,
            issue_url=self.formatter.issue_url,
        )
        file_path.write_text(html)
        return file_path
