"""
Recording of story outcomes.

The recorder resolves a test's metadata and writes the outcome as a JSON file
into the directory the report generator later reads from.
"""

import json
import re
from pathlib import Path
from typing import Any, Optional

from annalist.annotations.naming import humanize
from annalist.annotations.resolver import AnnotationResolver
from annalist.core.errors import ReportGenerationError
from annalist.core.logging import get_logger
from annalist.reporting.models import OutcomeResult, StoryOutcome

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")


def build_outcome(test_type: Any, method_name: str, result: OutcomeResult,
                  duration: float = 0.0, story: Optional[str] = None,
                  failure_message: Optional[str] = None) -> StoryOutcome:
    """
    Build the outcome of one test method from its metadata.

    The title defaults to the humanised method name. A pending or ignored
    marker on the method takes precedence over the observed result.
    """
    resolver = AnnotationResolver.for_type(test_type)
    if resolver.is_pending(method_name):
        result = OutcomeResult.PENDING
    elif resolver.is_ignored(method_name):
        result = OutcomeResult.IGNORED

    if story is None:
        story = resolver.provider.name if resolver.provider is not None else ""

    return StoryOutcome(
        title=resolver.annotated_title_for_method(method_name) or humanize(method_name),
        method_name=method_name,
        story=story,
        result=result,
        duration=duration,
        issues=resolver.issues_for_method(method_name),
        tags=resolver.tags_for_method(method_name),
        failure_message=failure_message,
    )


class OutcomeRecorder:
    """
    Writes story outcomes as JSON files into a directory.

    Each file is named after the story and method, so recording the same test
    again in a later run replaces its previous outcome.
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)
        self.logger = get_logger(__name__)

    def _path_for(self, outcome: StoryOutcome) -> Path:
        stem = _UNSAFE_FILENAME_CHARS.sub("_", f"{outcome.story}.{outcome.method_name}").strip("_.")
        return self.directory / f"{stem or 'outcome'}.json"

    def write(self, outcome: StoryOutcome) -> Path:
        path = self._path_for(outcome)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(outcome.to_dict(), indent=2))
        except OSError as e:
            raise ReportGenerationError(f"Could not record story outcome to {path}: {e}") from e
        self.logger.debug(f"Recorded {outcome.result.value} outcome for {outcome.method_name} in {path}")
        return path

    def record(self, test_type: Any, method_name: str, result: OutcomeResult,
               duration: float = 0.0, story: Optional[str] = None,
               failure_message: Optional[str] = None) -> Path:
        """Resolve the metadata of method_name, then write its outcome file."""
        outcome = build_outcome(
            test_type, method_name, result,
            duration=duration, story=story, failure_message=failure_message,
        )
        return self.write(outcome)
