"""
Text formatting shared by the annotation resolver and the HTML reports.
"""

import re
from typing import List, Optional, Tuple

from markupsafe import Markup, escape

# Bracketed issue lists ("Login [ISSUE-1, ISSUE-2]"), hash references ("#123",
# "#PROJ-123") and tracker keys that do not continue a longer word
# ("shouldLogin_JIRA-42"). A bracket glued to a name ("test_fetch[GET]") is a
# parameter id, not an issue list.
ISSUE_PATTERN = re.compile(
    r"(?<!\S)\[(?P<listed>[^\[\]]*)\]"
    r"|(?P<hash>#(?:[A-Z][A-Z0-9]*-)?\d+)"
    r"|(?<![A-Za-z0-9#])(?P<key>[A-Z][A-Z0-9]*-\d+)"
)

# Entries of a bracketed list count as issues only when they look like
# identifiers, so lists such as "[chrome]" are not picked up.
LISTED_ISSUE = re.compile(r"#(?:[A-Z][A-Z0-9]*-)?\d+|[A-Z][A-Z0-9_-]*")


def _issues_from_match(match: "re.Match") -> List[str]:
    listed = match.group("listed")
    if listed is None:
        return [match.group(0)]
    issues = []
    for entry in listed.split(","):
        entry = entry.strip()
        if LISTED_ISSUE.fullmatch(entry):
            issues.append(entry)
    return issues


class Formatter:
    """Extracts issue references from free text and renders them as links."""

    def __init__(self, issue_tracker_url: Optional[str] = None):
        """
        Args:
            issue_tracker_url: URL pattern for issue links; ``{0}`` (or ``{}``)
                is replaced by the issue reference without its leading ``#``.
        """
        self.issue_tracker_url = issue_tracker_url

    @staticmethod
    def issues_in(text: Optional[str]) -> Tuple[str, ...]:
        """Return the issue references found in text, in order of appearance."""
        if not text:
            return ()
        issues: List[str] = []
        for match in ISSUE_PATTERN.finditer(text):
            issues.extend(_issues_from_match(match))
        return tuple(issues)

    def issue_url(self, issue: str) -> Optional[str]:
        if not self.issue_tracker_url:
            return None
        return self.issue_tracker_url.replace("{}", "{0}").format(issue.lstrip("#"))

    def _link(self, issue: str) -> Markup:
        return Markup('<a target="_blank" href="{0}">{1}</a>').format(self.issue_url(issue), issue)

    def add_links(self, text: Optional[str]) -> Markup:
        """Escape text for HTML, turning issue references into tracker links."""
        if not text:
            return Markup("")
        if not self.issue_tracker_url:
            return escape(text)

        parts = []
        last = 0
        for match in ISSUE_PATTERN.finditer(text):
            parts.append(escape(text[last:match.start()]))
            issues = _issues_from_match(match)
            if match.group("listed") is None:
                parts.append(self._link(issues[0]))
            elif issues:
                links = Markup(", ").join(self._link(issue) for issue in issues)
                parts.append(Markup("[{0}]").format(links))
            else:
                parts.append(escape(match.group(0)))
            last = match.end()
        parts.append(escape(text[last:]))
        return Markup("").join(parts)
