"""Shared utilities for Tracker - timestamps and filename slugs."""

import re
from datetime import datetime, timezone

from tracker_core.constants import ID_WIDTH, SLUG_MAX_LENGTH

__all__ = [
    "get_iso_timestamp",
    "slugify",
    "format_issue_filename",
]


def get_iso_timestamp() -> str:
    """Get current UTC timestamp in ISO format with Z suffix.

    Returns:
        ISO 8601 formatted timestamp string (e.g., "2026-01-15T10:30:00Z")
    """
    now = datetime.now(timezone.utc).replace(microsecond=0)
    return now.isoformat().replace("+00:00", "Z")


def slugify(title: str) -> str:
    """Derive the filesystem-safe part of an issue filename from its title.

    Lowercases, turns spaces into hyphens, drops everything that is not
    alphanumeric or a hyphen, and truncates to SLUG_MAX_LENGTH characters.

    Examples:
        >>> slugify("Fix Parser Bug")
        'fix-parser-bug'
        >>> slugify("Crash on save!")
        'crash-on-save'
    """
    slug = title.lower().replace(" ", "-")
    slug = re.sub(r"[^a-z0-9-]", "", slug)
    return slug[:SLUG_MAX_LENGTH]


def format_issue_filename(issue_id: int, title: str) -> str:
    """Build the deterministic filename for an issue, e.g. ``0004-foo.md``."""
    return f"{issue_id:0{ID_WIDTH}d}-{slugify(title)}.md"
