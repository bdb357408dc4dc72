"""
Marker kinds, the marker registry and the decorators that attach markers
to test classes and test methods.

A marker is a (kind, value) pair. Kinds are registered by name; several
namespaces may register a kind under the same name, which is how ignore
markers coming from different test frameworks are all recognised as "Ignore".
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar, Union

MARKERS_ATTRIBUTE = "__annalist_markers__"
DEFAULT_NAMESPACE = "annalist"

T = TypeVar("T")


@dataclass(frozen=True)
class MarkerKind:
    """A named kind of metadata, qualified by the namespace that defines it."""
    name: str
    namespace: str = DEFAULT_NAMESPACE

    @property
    def qualified_name(self) -> str:
        return f"{self.namespace}.{self.name}"


@dataclass(frozen=True)
class Marker:
    """A piece of metadata attached to a test type or method."""
    kind: MarkerKind
    value: Any = None

    @property
    def name(self) -> str:
        return self.kind.name


@dataclass(frozen=True)
class Tag:
    """A categorisation label, e.g. ``Tag("Login", type="feature")``."""
    name: str
    type: str = "feature"

    @classmethod
    def parse(cls, value: str) -> "Tag":
        """Parse ``"type:name"`` (or a bare ``"name"``) into a Tag."""
        if ":" in value:
            tag_type, name = value.split(":", 1)
            return cls(name=name.strip(), type=tag_type.strip())
        return cls(name=value.strip())

    def __str__(self) -> str:
        return f"{self.type}:{self.name}"


class MarkerRegistry:
    """Registry of marker kinds keyed by their simple name."""

    def __init__(self):
        self._kinds: Dict[str, List[MarkerKind]] = {}

    def register(self, kind: MarkerKind) -> MarkerKind:
        kinds = self._kinds.setdefault(kind.name, [])
        if kind not in kinds:
            kinds.append(kind)
        return kind

    def kinds_named(self, name: str) -> Tuple[MarkerKind, ...]:
        return tuple(self._kinds.get(name, ()))


REGISTRY = MarkerRegistry()


def marker_kind(name: str, namespace: str = DEFAULT_NAMESPACE) -> MarkerKind:
    """Create and register a marker kind."""
    return REGISTRY.register(MarkerKind(name=name, namespace=namespace))


TITLE = marker_kind("Title")
ISSUE = marker_kind("Issue")
ISSUES = marker_kind("Issues")
PENDING = marker_kind("Pending")
IGNORE = marker_kind("Ignore")
WITH_TAG = marker_kind("WithTag")
WITH_TAGS = marker_kind("WithTags")

# Skip markers of other frameworks, surfaced by the class metadata provider
UNITTEST_IGNORE = marker_kind("Ignore", namespace="unittest")
PYTEST_IGNORE = marker_kind("Ignore", namespace="pytest")


def markers_of(target: Any) -> Tuple[Marker, ...]:
    """Return the markers attached to target with the decorators below."""
    return tuple(getattr(target, MARKERS_ATTRIBUTE, ()))


def _attach(target: T, marker: Marker) -> T:
    # Decorators apply bottom-up; prepending keeps markers in source order.
    setattr(target, MARKERS_ATTRIBUTE, (marker,) + markers_of(target))
    return target


def mark(kind: MarkerKind, value: Any = None) -> Callable[[T], T]:
    """Generic decorator attaching a marker of any kind."""
    marker = Marker(kind=kind, value=value)

    def decorator(target: T) -> T:
        return _attach(target, marker)

    return decorator


def title(value: str) -> Callable[[T], T]:
    """Give a test a human-readable title; issue references in it are reported."""
    return mark(TITLE, value)


def issue(value: str) -> Callable[[T], T]:
    return mark(ISSUE, value)


def issues(*values: str) -> Callable[[T], T]:
    return mark(ISSUES, tuple(values))


def pending(target: T) -> T:
    """Mark a test as pending (specified but not implemented yet)."""
    return _attach(target, Marker(kind=PENDING))


def ignore(target: T) -> T:
    """Mark a test as ignored."""
    return _attach(target, Marker(kind=IGNORE))


def _as_tag(value: Union[Tag, str]) -> Tag:
    return value if isinstance(value, Tag) else Tag.parse(value)


def with_tag(value: Union[Tag, str, None] = None, *, name: Optional[str] = None,
             type: str = "feature") -> Callable[[T], T]:
    """Tag a test, either with ``"type:name"`` or with ``name=`` and ``type=``."""
    if value is None:
        if name is None:
            raise TypeError("with_tag() needs a tag value or a name")
        tag = Tag(name=name, type=type)
    else:
        tag = _as_tag(value)
    return mark(WITH_TAG, tag)


def with_tags(*values: Union[Tag, str]) -> Callable[[T], T]:
    return mark(WITH_TAGS, tuple(_as_tag(value) for value in values))
