"""
Data models for story outcomes and aggregate reports.
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from annalist.annotations.markers import Tag


class OutcomeResult(Enum):
    """Result of a single test method."""
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
    ERROR = "ERROR"
    PENDING = "PENDING"
    IGNORED = "IGNORED"
    SKIPPED = "SKIPPED"

    @property
    def is_failure(self) -> bool:
        return self in (OutcomeResult.FAILURE, OutcomeResult.ERROR)


@dataclass
class StoryOutcome:
    """Recorded outcome of one test method, enriched with its metadata."""
    title: str
    method_name: str
    story: str
    result: OutcomeResult
    duration: float = 0.0  # seconds
    issues: Tuple[str, ...] = ()
    tags: Tuple[Tag, ...] = ()
    timestamp: datetime = field(default_factory=datetime.now)
    failure_message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON/YAML serialization, excluding null fields."""
        result = {
            "title": self.title,
            "method_name": self.method_name,
            "story": self.story,
            "result": self.result.value,
            "duration": self.duration,
            "issues": list(self.issues),
            "tags": [{"name": tag.name, "type": tag.type} for tag in self.tags],
            "timestamp": self.timestamp.isoformat(),
        }
        if self.failure_message is not None:
            result["failure_message"] = self.failure_message
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoryOutcome":
        tags = []
        for tag in data.get("tags") or []:
            if isinstance(tag, str):
                tags.append(Tag.parse(tag))
            else:
                tags.append(Tag(name=tag["name"], type=tag.get("type", "feature")))
        timestamp = data.get("timestamp")
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp)
        method_name = data["method_name"]
        return cls(
            title=data.get("title") or method_name,
            method_name=method_name,
            story=data.get("story") or "",
            result=OutcomeResult(str(data.get("result", "SUCCESS")).upper()),
            duration=float(data.get("duration") or 0.0),
            issues=tuple(data.get("issues") or ()),
            tags=tuple(tags),
            timestamp=timestamp or datetime.now(),
            failure_message=data.get("failure_message"),
        )


@dataclass
class HistorySnapshot:
    """Counts of one report generation, kept to show trends across runs."""
    project_id: str
    generated_at: datetime
    counts: Dict[str, int]

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "project_id": self.project_id,
            "generated_at": self.generated_at.isoformat(),
            "counts": dict(self.counts),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistorySnapshot":
        return cls(
            project_id=data["project_id"],
            generated_at=datetime.fromisoformat(data["generated_at"]),
            counts={key: int(value) for key, value in data.get("counts", {}).items()},
        )


@dataclass
class ReportData:
    """Aggregate of all story outcomes of a project."""
    project_id: str
    outcomes: List[StoryOutcome] = field(default_factory=list)
    generated_at: datetime = field(default_factory=datetime.now)
    history: List[HistorySnapshot] = field(default_factory=list)
    summary: str = ""

    def __post_init__(self):
        self.summary = self._generate_summary()

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def duration(self) -> float:
        return sum(outcome.duration for outcome in self.outcomes)

    def get_result_counts(self) -> Dict[str, int]:
        """Count of outcomes per result, in OutcomeResult order."""
        counts = OrderedDict((result.value.lower(), 0) for result in OutcomeResult)
        for outcome in self.outcomes:
            counts[outcome.result.value.lower()] += 1
        return dict(counts)

    def _generate_summary(self) -> str:
        total = self.total
        if total == 0:
            return "No story outcomes found"
        parts = []
        for name, count in self.get_result_counts().items():
            if count > 0:
                parts.append(f"{count} {name} ({count / total * 100:.1f}%)")
        return f"Tests: {total} total, " + ", ".join(parts)

    def stories(self) -> Dict[str, List[StoryOutcome]]:
        """Outcomes grouped by story, stories in order of first appearance."""
        grouped: Dict[str, List[StoryOutcome]] = {}
        for outcome in self.outcomes:
            grouped.setdefault(outcome.story, []).append(outcome)
        return grouped

    def tags(self) -> Dict[Tag, List[StoryOutcome]]:
        """Outcomes grouped by tag."""
        grouped: Dict[Tag, List[StoryOutcome]] = {}
        for outcome in self.outcomes:
            for tag in outcome.tags:
                grouped.setdefault(tag, []).append(outcome)
        return grouped

    def issues(self) -> List[str]:
        """Distinct issues in order of first appearance."""
        seen: Dict[str, None] = {}
        for outcome in self.outcomes:
            for issue in outcome.issues:
                seen.setdefault(issue, None)
        return list(seen)

    def get_failed_outcomes(self) -> List[StoryOutcome]:
        return [outcome for outcome in self.outcomes if outcome.result.is_failure]

    def snapshot(self) -> HistorySnapshot:
        return HistorySnapshot(
            project_id=self.project_id,
            generated_at=self.generated_at,
            counts=self.get_result_counts(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "project_id": self.project_id,
            "generated_at": self.generated_at.isoformat(),
            "summary": self.summary,
            "total": self.total,
            "duration": self.duration,
            "counts": self.get_result_counts(),
            "issues": self.issues(),
            "stories": {
                story: [outcome.to_dict() for outcome in outcomes]
                for story, outcomes in self.stories().items()
            },
            "history": [snapshot.to_dict() for snapshot in self.history],
        }
