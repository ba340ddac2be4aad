"""Frontmatter parsing for Tracker - the ``---`` delimited key/value block."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from tracker_core.constants import FRONTMATTER_DELIMITER
from tracker_core.exceptions import FrontmatterParseError

__all__ = [
    "ParsedFrontmatter",
    "parse_frontmatter",
    "parse_string_array",
    "parse_int_array",
]


@dataclass
class ParsedFrontmatter:
    """Raw frontmatter fields. Anything missing stays None until the codec fills defaults."""

    id: Optional[int] = None
    title: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    created: Optional[str] = None
    updated: Optional[str] = None
    labels: List[str] = field(default_factory=list)
    assignee: Optional[str] = None
    project: Optional[str] = None
    blocks: List[int] = field(default_factory=list)
    blocked_by: List[int] = field(default_factory=list)


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _optional_text(value: str) -> Optional[str]:
    value = _strip_quotes(value)
    if value == "" or value == "null":
        return None
    return value


def _array_items(value: str) -> Optional[List[str]]:
    """Split ``[a, b]`` into trimmed items, or None if the brackets are missing."""
    value = value.strip()
    if not (value.startswith("[") and value.endswith("]")):
        return None
    inner = value[1:-1].strip()
    if not inner:
        return []
    return [item.strip() for item in inner.split(",")]


def parse_string_array(value: str) -> List[str]:
    """Parse a bracketed list of optionally quoted strings.

    Malformed syntax yields an empty list rather than an error.

    Examples:
        >>> parse_string_array('[bug, "ui"]')
        ['bug', 'ui']
        >>> parse_string_array("bug, ui")
        []
    """
    items = _array_items(value)
    if items is None:
        return []
    labels = []
    for item in items:
        item = _strip_quotes(item).strip()
        if item:
            labels.append(item)
    return labels


def parse_int_array(value: str) -> List[int]:
    """Parse a bracketed list of unsigned integers.

    Any malformed item makes the whole list empty.

    Examples:
        >>> parse_int_array("[5, 6]")
        [5, 6]
        >>> parse_int_array("[5, x]")
        []
    """
    items = _array_items(value)
    if items is None:
        return []
    numbers = []
    for item in items:
        if not item.isdecimal():
            return []
        numbers.append(int(item))
    return numbers


def _apply_field(parsed: ParsedFrontmatter, key: str, value: str) -> None:
    if key == "id":
        if value.isdecimal():
            parsed.id = int(value)
    elif key == "title":
        parsed.title = _strip_quotes(value)
    elif key == "status":
        parsed.status = value
    elif key == "priority":
        parsed.priority = value
    elif key == "created":
        parsed.created = value
    elif key == "updated":
        parsed.updated = value
    elif key == "labels":
        parsed.labels = parse_string_array(value)
    elif key == "assignee":
        parsed.assignee = _optional_text(value)
    elif key == "project":
        parsed.project = _optional_text(value)
    elif key == "blocks":
        parsed.blocks = parse_int_array(value)
    elif key == "blocked_by":
        parsed.blocked_by = parse_int_array(value)
    # Unknown keys are ignored


def parse_frontmatter(content: str) -> Tuple[ParsedFrontmatter, str]:
    """Parse the frontmatter block at the top of an issue file.

    Args:
        content: Full file content

    Returns:
        Tuple of (parsed fields, remaining body text after the closing delimiter)

    Raises:
        FrontmatterParseError: If the opening delimiter is missing or the
            block is never closed
    """
    lines = content.splitlines()
    index = 0

    # Only blank lines may precede the opening delimiter
    while index < len(lines) and not lines[index].strip():
        index += 1

    if index >= len(lines) or lines[index].strip() != FRONTMATTER_DELIMITER:
        raise FrontmatterParseError(
            f"Expected opening '{FRONTMATTER_DELIMITER}' delimiter",
            line=index + 1 if index < len(lines) else max(len(lines), 1),
        )

    parsed = ParsedFrontmatter()
    index += 1

    while index < len(lines):
        line = lines[index]
        stripped = line.strip()

        if stripped == FRONTMATTER_DELIMITER:
            body = "\n".join(lines[index + 1:])
            return parsed, body

        if stripped and not stripped.startswith("#") and ":" in line:
            key, _, value = line.partition(":")
            _apply_field(parsed, key.strip(), value.strip())

        index += 1

    last_line = lines[-1] if lines else ""
    raise FrontmatterParseError(
        f"Missing closing '{FRONTMATTER_DELIMITER}' delimiter",
        line=len(lines),
        column=len(last_line) + 1,
    )
