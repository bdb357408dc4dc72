"""
Test metadata declaration and resolution.
"""

from annalist.annotations.markers import (
    MarkerKind,
    Marker,
    MarkerRegistry,
    REGISTRY,
    Tag,
    marker_kind,
    mark,
    title,
    issue,
    issues,
    pending,
    ignore,
    with_tag,
    with_tags,
)
from annalist.annotations.metadata import (
    MetadataRecord,
    MetadataProvider,
    ClassMetadataProvider,
    MappingMetadataProvider,
    as_provider,
)
from annalist.annotations.naming import with_no_arguments, humanize
from annalist.annotations.resolver import AnnotationResolver, WithType, NameOnly

__all__ = [
    "MarkerKind",
    "Marker",
    "MarkerRegistry",
    "REGISTRY",
    "Tag",
    "marker_kind",
    "mark",
    "title",
    "issue",
    "issues",
    "pending",
    "ignore",
    "with_tag",
    "with_tags",
    "MetadataRecord",
    "MetadataProvider",
    "ClassMetadataProvider",
    "MappingMetadataProvider",
    "as_provider",
    "with_no_arguments",
    "humanize",
    "AnnotationResolver",
    "WithType",
    "NameOnly",
]
