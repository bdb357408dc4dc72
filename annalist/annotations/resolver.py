"""
Resolution of test metadata (titles, issues, tags, pending and ignored status)
for test methods.

The resolver works in one of two modes. With a test type it reads the markers
declared on the type and on the matching method. Without one (``NameOnly``)
the only information available is the method or scenario name itself, from
which embedded issue references are extracted.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Union

from annalist.annotations.markers import ISSUE, ISSUES, PENDING, REGISTRY, TITLE, WITH_TAG, WITH_TAGS, Tag
from annalist.annotations.metadata import MetadataProvider, MetadataRecord, as_provider
from annalist.annotations.naming import with_no_arguments
from annalist.core.formatter import Formatter

IGNORE_MARKER_NAME = "Ignore"


@dataclass(frozen=True)
class WithType:
    """Resolution backed by the metadata of a test type."""
    provider: MetadataProvider


@dataclass(frozen=True)
class NameOnly:
    """Resolution from method or scenario names alone."""
    pass


Mode = Union[WithType, NameOnly]


def _tags_in(record: Optional[MetadataRecord]) -> List[Tag]:
    if record is None:
        return []
    tags = list(record.value_of(WITH_TAGS) or ())
    tag = record.value_of(WITH_TAG)
    if tag is not None:
        tags.append(tag)
    return tags


class AnnotationResolver:
    """Query facade over the metadata of one test type."""

    def __init__(self, mode: Mode):
        self._mode = mode

    @classmethod
    def for_type(cls, test_type: Any) -> "AnnotationResolver":
        """
        Build a resolver for a test class, module or MetadataProvider.

        ``None`` gives a resolver in name-only mode.
        """
        provider = as_provider(test_type)
        return cls(NameOnly() if provider is None else WithType(provider))

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def provider(self) -> Optional[MetadataProvider]:
        if isinstance(self._mode, WithType):
            return self._mode.provider
        return None

    def method(self, method_name: str) -> Optional[MetadataRecord]:
        """Return the record of the method called method_name (arguments stripped)."""
        provider = self.provider
        if provider is None:
            return None
        return provider.method_metadata(with_no_arguments(method_name))

    def _type_record(self) -> Optional[MetadataRecord]:
        provider = self.provider
        return provider.type_metadata() if provider is not None else None

    def _method_value(self, method_name: str, kind) -> Any:
        record = self.method(method_name)
        return record.value_of(kind) if record is not None else None

    def annotated_title_for_method(self, method_name: str) -> Optional[str]:
        return self._method_value(method_name, TITLE)

    @staticmethod
    def method_is_pending(method: Optional[MetadataRecord]) -> bool:
        return method is not None and method.has(PENDING)

    @staticmethod
    def method_is_ignored(method: Optional[MetadataRecord]) -> bool:
        # Every registered kind called "Ignore" counts, whatever its namespace.
        return method is not None and method.has_any(REGISTRY.kinds_named(IGNORE_MARKER_NAME))

    def is_pending(self, method_name: str) -> bool:
        return self.method_is_pending(self.method(method_name))

    def is_ignored(self, method_name: str) -> bool:
        return self.method_is_ignored(self.method(method_name))

    def annotated_issues_for_method_title(self, method_name: str) -> Tuple[str, ...]:
        """Issues mentioned in the method's title, or in the method name when it has no title."""
        title = self.annotated_title_for_method(method_name)
        if title is not None:
            return Formatter.issues_in(title)
        return Formatter.issues_in(method_name)

    def annotated_issue_for_method(self, method_name: str) -> Optional[str]:
        return self._method_value(method_name, ISSUE)

    def annotated_issues_for_method(self, method_name: str) -> Optional[Tuple[str, ...]]:
        issues = self._method_value(method_name, ISSUES)
        return tuple(issues) if issues is not None else None

    def annotated_issue_for_type(self) -> Optional[str]:
        record = self._type_record()
        return record.value_of(ISSUE) if record is not None else None

    def annotated_issues_for_type(self) -> Optional[Tuple[str, ...]]:
        record = self._type_record()
        issues = record.value_of(ISSUES) if record is not None else None
        return tuple(issues) if issues is not None else None

    def issues_for_method(self, method_name: str) -> Tuple[str, ...]:
        """
        All issues of a method.

        With a test type: the Issues list, then the Issue value, then the issues
        mentioned in the title (only when the method has a title). In name-only
        mode, the issues mentioned in the method name.
        """
        if isinstance(self._mode, NameOnly):
            return self.annotated_issues_for_method_title(method_name)

        issues: List[str] = []
        issues.extend(self.annotated_issues_for_method(method_name) or ())
        single_issue = self.annotated_issue_for_method(method_name)
        if single_issue is not None:
            issues.append(single_issue)
        if self.annotated_title_for_method(method_name) is not None:
            issues.extend(self.annotated_issues_for_method_title(method_name))
        return tuple(issues)

    def tags_for_type(self) -> Tuple[Tag, ...]:
        return tuple(_tags_in(self._type_record()))

    def tags_for(self, method_name: str) -> Tuple[Tag, ...]:
        """Tags declared on the method only."""
        return tuple(_tags_in(self.method(method_name)))

    def tags_for_method(self, method_name: str) -> Tuple[Tag, ...]:
        """Tags of the test type followed by the tags of the method."""
        return self.tags_for_type() + self.tags_for(method_name)

    def __repr__(self) -> str:
        return f"AnnotationResolver({self._mode!r})"
