"""
Story reporting for annalist.

This package provides:
- Story outcome and aggregate report data structures
- Loading of recorded outcome files (JSON, YAML)
- Aggregate HTML/JSON report generation with per-project history
"""

from annalist.reporting.models import OutcomeResult, StoryOutcome, ReportData, HistorySnapshot
from annalist.reporting.loader import load_outcomes, load_outcome_file
from annalist.reporting.history import ReportHistory
from annalist.reporting.reporter import HtmlAggregateReporter

__all__ = [
    "OutcomeResult",
    "StoryOutcome",
    "ReportData",
    "HistorySnapshot",
    "load_outcomes",
    "load_outcome_file",
    "ReportHistory",
    "HtmlAggregateReporter",
]
