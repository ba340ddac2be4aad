"""Body parsing for Tracker - description text and the progress log.

The body is read line by line through a small state machine::

    BEFORE_TITLE --"# "--> (title discarded)
    any --"## Description"--> IN_DESCRIPTION
    any --"## Progress"-----> IN_PROGRESS --non-entry line--> DONE
    any --other "## "-------> OTHER_SECTION

Parsing never fails; content it does not understand is dropped.
"""

import re
from enum import Enum
from typing import List, Optional, Tuple

from tracker_core.models import ProgressEntry

__all__ = [
    "BodyState",
    "parse_body",
    "parse_progress_line",
]

_PROGRESS_HEADING = re.compile(r"^## progress", re.IGNORECASE)
_PROGRESS_ENTRY = re.compile(r"^- \[([^\]]*)\](.*)$")


class BodyState(Enum):
    BEFORE_TITLE = "before_title"
    IN_DESCRIPTION = "in_description"
    IN_PROGRESS = "in_progress"
    OTHER_SECTION = "other_section"
    DONE = "done"


def parse_progress_line(line: str) -> Optional[ProgressEntry]:
    """Parse ``- [<timestamp>] <message>`` into a ProgressEntry.

    Returns:
        The entry, or None if the line does not have that shape

    Examples:
        >>> parse_progress_line("- [2026-01-01T10:00:00] Started work")
        ProgressEntry(timestamp='2026-01-01T10:00:00', message='Started work')
    """
    match = _PROGRESS_ENTRY.match(line.strip())
    if match is None:
        return None
    return ProgressEntry(timestamp=match.group(1), message=match.group(2).strip())


def parse_body(body: str) -> Tuple[str, List[ProgressEntry]]:
    """Split an issue body into its description and progress log.

    Args:
        body: Markdown text following the frontmatter block

    Returns:
        Tuple of (description, progress entries in file order)
    """
    state = BodyState.BEFORE_TITLE
    description_lines: List[str] = []
    progress: List[ProgressEntry] = []

    for line in body.splitlines():
        if state is BodyState.BEFORE_TITLE and line.startswith("# "):
            state = BodyState.OTHER_SECTION
        elif line.startswith("## Description"):
            state = BodyState.IN_DESCRIPTION
        elif _PROGRESS_HEADING.match(line):
            state = BodyState.IN_PROGRESS
        elif line.startswith("## "):
            state = BodyState.OTHER_SECTION
        elif state is BodyState.IN_DESCRIPTION:
            description_lines.append(line)
        elif state is BodyState.IN_PROGRESS:
            if not line.strip():
                continue
            entry = parse_progress_line(line)
            if entry is None:
                state = BodyState.DONE
            else:
                progress.append(entry)

    description = "\n".join(description_lines).strip()
    return description, progress
