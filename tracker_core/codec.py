"""Issue codec for Tracker - converting between Issue and markdown files.

Round trips are lossless as long as titles, labels and descriptions do not
contain a bare ``---`` line or embedded newlines in single-line fields; the
line-oriented format has no escaping.
"""

from typing import List

from tracker_core.body import parse_body
from tracker_core.frontmatter import ParsedFrontmatter, parse_frontmatter
from tracker_core.models import Issue, Priority, ProgressEntry, Status

__all__ = [
    "to_issue",
    "parse_issue",
    "issue_to_markdown",
]


def to_issue(
    parsed: ParsedFrontmatter,
    description: str,
    progress: List[ProgressEntry],
    default_id: int,
    default_timestamp: str,
    default_title: str = "",
) -> Issue:
    """Merge parsed frontmatter and body with caller-supplied defaults.

    Args:
        parsed: Frontmatter fields as read from the file
        description: Description text from the body
        progress: Progress entries from the body
        default_id: Id used when the frontmatter has none
        default_timestamp: Used for missing created/updated values
        default_title: Title used when the frontmatter has none

    Returns:
        Issue; unknown status/priority tokens become open/medium
    """
    return Issue(
        id=parsed.id if parsed.id is not None else default_id,
        title=parsed.title if parsed.title is not None else default_title,
        status=Status.parse(parsed.status),
        priority=Priority.parse(parsed.priority),
        created=parsed.created or default_timestamp,
        updated=parsed.updated or default_timestamp,
        labels=list(parsed.labels),
        assignee=parsed.assignee,
        project=parsed.project,
        blocks=list(parsed.blocks),
        blocked_by=list(parsed.blocked_by),
        description=description,
        progress=list(progress),
    )


def parse_issue(
    content: str,
    default_id: int = 0,
    default_timestamp: str = "",
    default_title: str = "",
) -> Issue:
    """Parse a complete issue file.

    Raises:
        FrontmatterParseError: If the frontmatter block is malformed
    """
    parsed, body = parse_frontmatter(content)
    description, progress = parse_body(body)
    return to_issue(
        parsed, description, progress, default_id, default_timestamp, default_title
    )


def _format_list(items) -> str:
    return "[" + ", ".join(str(item) for item in items) + "]"


def _quote_title(title: str) -> str:
    # The reader strips whitespace and one layer of matching quotes.
    if not title:
        return title
    wrapped = len(title) >= 2 and title[0] == title[-1] and title[0] in "\"'"
    if title != title.strip() or wrapped:
        quote = "'" if title.startswith('"') else '"'
        return f"{quote}{title}{quote}"
    return title


def issue_to_markdown(issue: Issue) -> str:
    """Serialize an issue to its on-disk markdown form."""
    lines = [
        "---",
        f"id: {issue.id}",
        f"title: {_quote_title(issue.title)}",
        f"status: {issue.status.value}",
        f"priority: {issue.priority.value}",
        f"created: {issue.created}",
        f"updated: {issue.updated}",
        f"labels: {_format_list(issue.labels)}",
        f"assignee: {issue.assignee or ''}",
        f"project: {issue.project or ''}",
        f"blocks: {_format_list(issue.blocks)}",
        f"blocked_by: {_format_list(issue.blocked_by)}",
        "---",
        "",
        f"# {issue.title}",
        "",
        "## Description",
        issue.description,
    ]

    if issue.progress:
        lines.append("")
        lines.append("## Progress")
        for entry in issue.progress:
            lines.append(f"- [{entry.timestamp}] {entry.message}")

    return "\n".join(lines) + "\n"
