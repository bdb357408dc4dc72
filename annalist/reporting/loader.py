"""
Loading of recorded story outcomes.

Each outcome file holds a single outcome mapping or a list of them, as JSON
or YAML.
"""

import json
from pathlib import Path
from typing import Any, List

import yaml

from annalist.core.errors import ReportGenerationError
from annalist.core.logging import get_logger
from annalist.reporting.models import StoryOutcome

logger = get_logger(__name__)

OUTCOME_SUFFIXES = (".json", ".yaml", ".yml")


def _parse(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if path.suffix == ".json":
        return json.loads(text)
    return yaml.safe_load(text)


def load_outcome_file(path: Path) -> List[StoryOutcome]:
    """Load the outcomes stored in one file."""
    try:
        data = _parse(path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ReportGenerationError(f"Could not read story outcomes from {path}: {e}") from e

    if data is None:
        return []
    entries = data if isinstance(data, list) else [data]

    outcomes = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise ReportGenerationError(f"Malformed story outcome in {path}: {entry!r}")
        try:
            outcomes.append(StoryOutcome.from_dict(entry))
        except (KeyError, TypeError, ValueError) as e:
            raise ReportGenerationError(f"Malformed story outcome in {path}: {e}") from e
    return outcomes


def load_outcomes(source_dir: Path) -> List[StoryOutcome]:
    """
    Load every outcome file found under source_dir.

    Files are read in sorted path order so reports are reproducible.

    Raises:
        ReportGenerationError: If source_dir is missing or a file is unreadable
    """
    source_dir = Path(source_dir)
    if not source_dir.is_dir():
        raise ReportGenerationError(f"Story outcome directory not found: {source_dir}")

    outcomes: List[StoryOutcome] = []
    paths = sorted(p for p in source_dir.rglob("*") if p.is_file() and p.suffix in OUTCOME_SUFFIXES)
    for path in paths:
        loaded = load_outcome_file(path)
        logger.debug(f"Loaded {len(loaded)} outcome(s) from {path}")
        outcomes.extend(loaded)
    return outcomes
