"""
annalist

Test metadata resolution and aggregate story reporting: titles, issues, tags
and pending/ignored status of test methods, recorded outcomes and HTML reports.
"""

__version__ = "0.1.0"
__author__ = "annalist developers"

from annalist.annotations import (
    AnnotationResolver,
    Tag,
    title,
    issue,
    issues,
    pending,
    ignore,
    with_tag,
    with_tags,
)
from annalist.core.config import Config

__all__ = [
    "AnnotationResolver",
    "Tag",
    "title",
    "issue",
    "issues",
    "pending",
    "ignore",
    "with_tag",
    "with_tags",
    "Config",
]
