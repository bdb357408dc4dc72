"""
Per-project report history.

Every report generation stores a snapshot of its result counts under
``<base_dir>/<project_id>``; the HTML report shows them as a trend table.
"""

import json
from pathlib import Path
from typing import List

from annalist.core.errors import ConfigurationError, ReportGenerationError
from annalist.core.logging import get_logger
from annalist.reporting.models import HistorySnapshot, ReportData

logger = get_logger(__name__)

SNAPSHOT_PATTERN = "snapshot_*.json"


def _check_project_id(project_id: str) -> None:
    # The identifier names a single directory below base_dir.
    if (not project_id or project_id in (".", "..") or "\\" in project_id
            or Path(project_id).name != project_id):
        raise ConfigurationError(f"Invalid project identifier for report history: {project_id!r}")


class ReportHistory:
    """Snapshots of past report generations for one project."""

    def __init__(self, project_id: str, base_dir: Path):
        _check_project_id(project_id)
        self.project_id = project_id
        self.directory = Path(base_dir) / project_id

    def record(self, report_data: ReportData) -> Path:
        """Store a snapshot of report_data and return its path."""
        snapshot = report_data.snapshot()
        timestamp = snapshot.generated_at.strftime("%Y%m%d_%H%M%S_%f")
        path = self.directory / f"snapshot_{timestamp}.json"
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(snapshot.to_dict(), indent=2))
        except OSError as e:
            raise ReportGenerationError(f"Could not record report history in {self.directory}: {e}") from e
        logger.debug(f"Recorded history snapshot {path}")
        return path

    def snapshots(self) -> List[HistorySnapshot]:
        """Return stored snapshots, oldest first."""
        if not self.directory.is_dir():
            return []
        snapshots = []
        for path in sorted(self.directory.glob(SNAPSHOT_PATTERN)):
            try:
                snapshots.append(HistorySnapshot.from_dict(json.loads(path.read_text())))
            except (OSError, ValueError, KeyError) as e:
                raise ReportGenerationError(f"Could not read history snapshot {path}: {e}") from e
        return sorted(snapshots, key=lambda s: s.generated_at)

    def clear(self) -> int:
        """
        Delete the snapshots of this project; return how many were removed.

        Other files are left alone. The project directory is removed once it
        is empty.
        """
        if not self.directory.is_dir():
            return 0
        removed = 0
        try:
            for path in list(self.directory.glob(SNAPSHOT_PATTERN)):
                path.unlink()
                removed += 1
            if not any(self.directory.iterdir()):
                self.directory.rmdir()
        except OSError as e:
            raise ReportGenerationError(f"Could not clear report history in {self.directory}: {e}") from e
        return removed
