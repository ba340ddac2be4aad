"""Issue management for Tracker - CRUD, filtering and search."""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from tracker_core.constants import ACTIVE_STATUSES
from tracker_core.models import Issue, Priority, ProgressEntry, Status
from tracker_core.storage import (
    find_issue,
    load_all_issues,
    next_id_for,
    replace_issue_file,
    write_issue,
)
from tracker_core.utils import get_iso_timestamp

__all__ = [
    "IssueFilter",
    "create_issue",
    "get_issue",
    "update_issue",
    "set_status",
    "add_progress",
    "delete_issue",
    "list_issues",
    "filter_issues",
    "search_issues_in",
    "search_issues",
]


@dataclass
class IssueFilter:
    """Criteria for list_issues. Unset fields do not filter.

    Without an explicit status only open and in-progress issues are kept,
    unless include_all is set.
    """

    status: Optional[Status] = None
    include_all: bool = False
    label: Optional[str] = None
    assignee: Optional[str] = None
    project: Optional[str] = None
    blocked_only: bool = False


def create_issue(
    issues_dir: Path,
    title: str,
    description: str = "",
    priority: Priority = Priority.MEDIUM,
    labels: Iterable[str] = (),
    assignee: Optional[str] = None,
    project: Optional[str] = None,
) -> Issue:
    """Create a new issue file.

    Args:
        issues_dir: Path to the .issues directory
        title: Issue title (assumed non-empty; callers validate)
        description: Optional detailed description
        priority: Priority level
        labels: Labels to attach, duplicates dropped
        assignee: Optional assignee
        project: Optional project name

    Returns:
        The created issue
    """
    issue_id = next_id_for(load_all_issues(issues_dir))
    now = get_iso_timestamp()

    issue = Issue(
        id=issue_id,
        title=title,
        status=Status.OPEN,
        priority=priority,
        created=now,
        updated=now,
        labels=list(dict.fromkeys(labels)),
        assignee=assignee,
        project=project,
        description=description,
    )
    write_issue(issues_dir, issue)
    return issue


def get_issue(issues_dir: Path, issue_id: int) -> Optional[Issue]:
    """Get issue by id, or None if not found."""
    found = find_issue(issues_dir, issue_id)
    if found is None:
        return None
    return found[0]


def update_issue(
    issues_dir: Path,
    issue_id: int,
    transform: Callable[[Issue], Issue],
) -> Optional[Issue]:
    """Apply ``transform`` to an issue and persist the result.

    The transform receives a copy whose ``updated`` timestamp is already
    refreshed. Its id is restored afterwards so a transform cannot move the
    record to another id. A title change renames the file.

    Returns:
        The updated issue, or None if the id was not found
    """
    found = find_issue(issues_dir, issue_id)
    if found is None:
        return None

    issue, path = found
    updated = transform(issue.copy(updated=get_iso_timestamp()))
    updated.id = issue.id

    replace_issue_file(issues_dir, path, updated)
    return updated


def set_status(issues_dir: Path, issue_id: int, status: Status) -> Optional[Issue]:
    """Change an issue's status."""
    return update_issue(issues_dir, issue_id, lambda issue: issue.copy(status=status))


def add_progress(issues_dir: Path, issue_id: int, message: str) -> Optional[Issue]:
    """Append a progress entry stamped with the current time."""
    entry = ProgressEntry(timestamp=get_iso_timestamp(), message=message.strip())
    return update_issue(
        issues_dir,
        issue_id,
        lambda issue: issue.copy(progress=issue.progress + [entry]),
    )


def delete_issue(issues_dir: Path, issue_id: int) -> bool:
    """Delete an issue's file.

    Returns:
        True if a file was removed, False if the id was not found
    """
    found = find_issue(issues_dir, issue_id)
    if found is None:
        return False
    found[1].unlink()
    return True


def _matches(issue: Issue, issue_filter: IssueFilter) -> bool:
    if issue_filter.status is not None:
        if issue.status != issue_filter.status:
            return False
    elif not issue_filter.include_all and issue.status.value not in ACTIVE_STATUSES:
        return False

    if issue_filter.label is not None and issue_filter.label not in issue.labels:
        return False
    if issue_filter.assignee is not None and issue.assignee != issue_filter.assignee:
        return False
    if issue_filter.project is not None and issue.project != issue_filter.project:
        return False
    if issue_filter.blocked_only and not issue.is_blocked:
        return False
    return True


def filter_issues(issues: List[Issue], issue_filter: Optional[IssueFilter] = None) -> List[Issue]:
    """Apply an IssueFilter to already loaded issues."""
    if issue_filter is None:
        issue_filter = IssueFilter()
    return [issue for issue in issues if _matches(issue, issue_filter)]


def list_issues(issues_dir: Path, issue_filter: Optional[IssueFilter] = None) -> List[Issue]:
    """List issues matching a filter, sorted by id.

    Args:
        issues_dir: Path to the .issues directory
        issue_filter: Criteria; defaults to open and in-progress issues

    Returns:
        Matching issues
    """
    return filter_issues(load_all_issues(issues_dir), issue_filter)


def search_issues_in(issues: List[Issue], query: str) -> List[Issue]:
    """Case-insensitive substring search over title, description and progress.

    An empty (or whitespace-only) query matches nothing.
    """
    needle = query.strip().lower()
    if not needle:
        return []

    results = []
    for issue in issues:
        if (
            needle in issue.title.lower()
            or needle in issue.description.lower()
            or any(needle in entry.message.lower() for entry in issue.progress)
        ):
            results.append(issue)
    return results


def search_issues(issues_dir: Path, query: str) -> List[Issue]:
    """Search every issue in the directory, closed ones included."""
    return search_issues_in(load_all_issues(issues_dir), query)
