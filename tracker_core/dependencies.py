"""Dependency management for Tracker - blocks / blocked_by relationships.

Each relationship is stored on both issues: the blocked issue lists the
blocker in ``blocked_by`` and the blocker lists it in ``blocks``. The two
sides are written by separate updates, so a crash between them can leave
the graph asymmetric.
"""

from pathlib import Path
from typing import Dict, List, Optional

from tracker_core.issues import get_issue, update_issue
from tracker_core.models import Issue, Status

__all__ = [
    "add_blocked_by",
    "remove_blocked_by",
    "get_blockers",
    "is_effectively_blocked",
    "ready_issues",
]


def _with_item(items: List[int], item: int) -> List[int]:
    return items if item in items else items + [item]


def _without_item(items: List[int], item: int) -> List[int]:
    return [existing for existing in items if existing != item]


def add_blocked_by(issues_dir: Path, issue_id: int, blocker_id: int) -> Optional[Issue]:
    """Record that ``blocker_id`` blocks ``issue_id``.

    Idempotent: an existing relationship is left as is.

    Args:
        issues_dir: Path to the .issues directory
        issue_id: Issue that is blocked
        blocker_id: Issue that blocks it

    Returns:
        The updated blocked issue, or None if either issue does not exist
    """
    if get_issue(issues_dir, blocker_id) is None:
        return None

    updated = update_issue(
        issues_dir,
        issue_id,
        lambda issue: issue.copy(blocked_by=_with_item(issue.blocked_by, blocker_id)),
    )
    if updated is None:
        return None

    update_issue(
        issues_dir,
        blocker_id,
        lambda blocker: blocker.copy(blocks=_with_item(blocker.blocks, issue_id)),
    )
    return updated


def remove_blocked_by(issues_dir: Path, issue_id: int, blocker_id: int) -> Optional[Issue]:
    """Remove the relationship from both sides.

    Missing relationships or a missing blocker are not errors.

    Returns:
        The updated blocked issue, or None if it does not exist
    """
    updated = update_issue(
        issues_dir,
        issue_id,
        lambda issue: issue.copy(blocked_by=_without_item(issue.blocked_by, blocker_id)),
    )

    update_issue(
        issues_dir,
        blocker_id,
        lambda blocker: blocker.copy(blocks=_without_item(blocker.blocks, issue_id)),
    )
    return updated


def get_blockers(issue: Issue, all_issues: List[Issue]) -> List[Issue]:
    """Resolve ``issue.blocked_by`` against loaded issues; unknown ids are skipped."""
    by_id: Dict[int, Issue] = {other.id: other for other in all_issues}
    return [by_id[blocker_id] for blocker_id in issue.blocked_by if blocker_id in by_id]


def is_effectively_blocked(issue: Issue, all_issues: List[Issue]) -> bool:
    """Check if any resolvable blocker is still open or in progress.

    Closed blockers and ids that do not resolve to a loaded issue do not
    count as blocking.
    """
    return any(blocker.status != Status.CLOSED for blocker in get_blockers(issue, all_issues))


def ready_issues(all_issues: List[Issue]) -> List[Issue]:
    """Active issues that are not effectively blocked.

    Sorted by priority (critical first), then id.
    """
    ready = [
        issue
        for issue in all_issues
        if issue.status != Status.CLOSED and not is_effectively_blocked(issue, all_issues)
    ]
    return sorted(ready, key=lambda issue: (-issue.priority.rank, issue.id))
