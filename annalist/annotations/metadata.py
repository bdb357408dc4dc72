"""
Metadata providers.

The resolver never introspects test code itself: it asks a MetadataProvider
for the record of the test type and for the record of a named method.
"""

import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from annalist.annotations.markers import (
    PYTEST_IGNORE,
    UNITTEST_IGNORE,
    Marker,
    MarkerKind,
    markers_of,
)


@dataclass(frozen=True)
class MetadataRecord:
    """The markers attached to one test type or test method."""
    name: str
    markers: Tuple[Marker, ...] = ()

    def first(self, kind: MarkerKind) -> Optional[Marker]:
        for marker in self.markers:
            if marker.kind == kind:
                return marker
        return None

    def value_of(self, kind: MarkerKind) -> Any:
        marker = self.first(kind)
        return marker.value if marker is not None else None

    def has(self, kind: MarkerKind) -> bool:
        return self.first(kind) is not None

    def has_any(self, kinds: Iterable[MarkerKind]) -> bool:
        """True if a marker of any of the given kinds is attached."""
        kinds = frozenset(kinds)
        return any(marker.kind in kinds for marker in self.markers)


class MetadataProvider(ABC):
    """Source of metadata records for one test type."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of the test type."""
        pass

    @abstractmethod
    def type_metadata(self) -> MetadataRecord:
        """Return the record of markers attached to the test type itself."""
        pass

    @abstractmethod
    def method_metadata(self, method_name: str) -> Optional[MetadataRecord]:
        """Return the record for method_name, or None when there is no such method."""
        pass


def _pytest_marks(target: Any) -> List[Any]:
    marks = getattr(target, "pytestmark", [])
    if not isinstance(marks, (list, tuple)):
        marks = [marks]
    return list(marks)


def _foreign_markers(target: Any) -> Tuple[Marker, ...]:
    """Translate skip markers set by unittest and pytest into Ignore markers."""
    foreign = []
    if getattr(target, "__unittest_skip__", False):
        foreign.append(Marker(kind=UNITTEST_IGNORE, value=getattr(target, "__unittest_skip_why__", None)))
    for pytest_mark in _pytest_marks(target):
        if getattr(pytest_mark, "name", None) == "skip":
            reason = pytest_mark.kwargs.get("reason") if pytest_mark.kwargs else None
            if reason is None and pytest_mark.args:
                reason = pytest_mark.args[0]
            foreign.append(Marker(kind=PYTEST_IGNORE, value=reason))
    return tuple(foreign)


def _unwrap(member: Any) -> Any:
    if isinstance(member, (staticmethod, classmethod)):
        return member.__func__
    return member


class ClassMetadataProvider(MetadataProvider):
    """Reads markers from a test class (or module) and its functions."""

    def __init__(self, target: Any):
        self.target = target

    @property
    def name(self) -> str:
        return getattr(self.target, "__qualname__", None) or getattr(self.target, "__name__", repr(self.target))

    def type_metadata(self) -> MetadataRecord:
        return MetadataRecord(
            name=self.name,
            markers=markers_of(self.target) + _foreign_markers(self.target),
        )

    def method_metadata(self, method_name: str) -> Optional[MetadataRecord]:
        try:
            member = _unwrap(inspect.getattr_static(self.target, method_name))
        except AttributeError:
            return None
        if not inspect.isroutine(member):
            return None
        return MetadataRecord(
            name=method_name,
            markers=markers_of(member) + _foreign_markers(member),
        )

    def __repr__(self) -> str:
        return f"ClassMetadataProvider({self.name})"


class MappingMetadataProvider(MetadataProvider):
    """Metadata declared explicitly, as a mapping of method names to markers."""

    def __init__(self, name: str, type_markers: Iterable[Marker] = (),
                 methods: Optional[Mapping[str, Iterable[Marker]]] = None):
        self._name = name
        self._type_record = MetadataRecord(name=name, markers=tuple(type_markers))
        self._method_records = {
            method_name: MetadataRecord(name=method_name, markers=tuple(markers))
            for method_name, markers in (methods or {}).items()
        }

    @property
    def name(self) -> str:
        return self._name

    def type_metadata(self) -> MetadataRecord:
        return self._type_record

    def method_metadata(self, method_name: str) -> Optional[MetadataRecord]:
        return self._method_records.get(method_name)

    def __repr__(self) -> str:
        return f"MappingMetadataProvider({self._name})"


def as_provider(test_type: Any) -> Optional[MetadataProvider]:
    """Adapt a class, module or provider into a MetadataProvider (None stays None)."""
    if test_type is None or isinstance(test_type, MetadataProvider):
        return test_type
    return ClassMetadataProvider(test_type)
