"""CLI module for Tracker - typer app and all commands."""

import json
import os
from pathlib import Path
from typing import Any, List, Optional

import typer
from typing_extensions import Annotated

from tracker_core.constants import ISSUES_DIR_NAME
from tracker_core.dependencies import (
    add_blocked_by,
    get_blockers,
    is_effectively_blocked,
    ready_issues,
    remove_blocked_by,
)
from tracker_core.discovery import find_issues_dir, init_issues_dir
from tracker_core.issues import (
    IssueFilter,
    add_progress,
    create_issue,
    delete_issue,
    filter_issues,
    search_issues_in,
    set_status,
    update_issue,
)
from tracker_core.models import Issue, Priority, Status
from tracker_core.storage import scan_issues

__all__ = ["app", "main"]

# Create Typer app
app = typer.Typer(help="Tracker - file-backed issue tracker living in .issues/")

STATUS_MARKERS = {
    Status.OPEN: "○",
    Status.IN_PROGRESS: "◐",
    Status.CLOSED: "●",
}


def _require_issues_dir() -> Path:
    issues_dir = find_issues_dir()
    if issues_dir is None:
        print(f"Error: No {ISSUES_DIR_NAME} directory found")
        print("Run 'tracker init' first")
        raise typer.Exit(code=1)
    return issues_dir


def _load(issues_dir: Path) -> List[Issue]:
    """Scan the directory, reporting skipped files on stderr."""
    result = scan_issues(issues_dir)
    for warning in result.warnings:
        typer.echo(f"Warning: {warning}", err=True)
    return result.issues


def _not_found(issue_id: int) -> None:
    print(f"Error: Issue #{issue_id} not found")
    raise typer.Exit(code=1)


def _print_json(data: Any, compact: bool) -> None:
    if compact:
        print(json.dumps(data, separators=(",", ":")))
    else:
        print(json.dumps(data, indent=2))


def _summary_line(issue: Issue, all_issues: Optional[List[Issue]] = None) -> str:
    marker = STATUS_MARKERS.get(issue.status, "?")
    line = f"{marker} #{issue.id} [{issue.priority.value}] {issue.title}"
    if issue.labels:
        line += f" ({', '.join(issue.labels)})"
    if all_issues is not None and is_effectively_blocked(issue, all_issues):
        line += " [blocked]"
    return line


def _print_issue_list(issues: List[Issue], all_issues: List[Issue], as_json: bool, compact: bool) -> None:
    if as_json or compact:
        _print_json([issue.to_dict() for issue in issues], compact)
        return

    if not issues:
        print("No issues found")
        return

    for issue in issues:
        print(_summary_line(issue, all_issues))


def _print_issue_detail(issue: Issue, all_issues: List[Issue]) -> None:
    print(f"ID:          #{issue.id}")
    print(f"Title:       {issue.title}")
    print(f"Status:      {issue.status.value}")
    print(f"Priority:    {issue.priority.value}")
    print(f"Created:     {issue.created}")
    print(f"Updated:     {issue.updated}")
    if issue.labels:
        print(f"Labels:      {', '.join(issue.labels)}")
    if issue.assignee:
        print(f"Assignee:    {issue.assignee}")
    if issue.project:
        print(f"Project:     {issue.project}")

    if issue.description:
        print(f"\nDescription:\n{issue.description}")

    if issue.blocked_by:
        print("\nBlocked by:")
        by_id = {other.id: other for other in get_blockers(issue, all_issues)}
        for blocker_id in issue.blocked_by:
            blocker = by_id.get(blocker_id)
            if blocker is None:
                print(f"  ? #{blocker_id} - (unknown)")
            else:
                print(f"  {STATUS_MARKERS[blocker.status]} #{blocker.id} - {blocker.title}")

    if issue.blocks:
        print("\nBlocks:")
        for blocked_id in issue.blocks:
            print(f"  #{blocked_id}")

    if issue.progress:
        print("\nProgress:")
        for entry in issue.progress:
            print(f"  [{entry.timestamp}] {entry.message}")


def _emit_single(issue: Issue, as_json: bool, compact: bool, message: str) -> None:
    if as_json or compact:
        _print_json(issue.to_dict(), compact)
    else:
        print(message)


@app.command()
def init():
    """Initialize an issues directory in the current directory."""
    root = Path(os.getcwd())
    try:
        issues_dir = init_issues_dir(root)
    except FileExistsError:
        print(f"Error: {root / ISSUES_DIR_NAME} already exists")
        raise typer.Exit(code=1)

    print(f"Initialized issues directory: {issues_dir}")


@app.command()
def create(
    title: Annotated[str, typer.Argument(help="Issue title")],
    description: Annotated[str, typer.Option(help="Detailed description")] = "",
    priority: Annotated[Priority, typer.Option(help="Priority level")] = Priority.MEDIUM,
    label: Annotated[Optional[List[str]], typer.Option(help="Label (can specify multiple times)")] = None,
    assignee: Annotated[Optional[str], typer.Option(help="Assignee")] = None,
    project: Annotated[Optional[str], typer.Option(help="Project name")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Output as indented JSON")] = False,
    compact: Annotated[bool, typer.Option("--compact", help="Output as single-line JSON")] = False,
):
    """Create a new issue."""
    if not title.strip():
        print("Error: Title must not be empty")
        raise typer.Exit(code=1)

    issues_dir = _require_issues_dir()
    issue = create_issue(
        issues_dir,
        title.strip(),
        description=description,
        priority=priority,
        labels=label or [],
        assignee=assignee,
        project=project,
    )
    _emit_single(issue, as_json, compact, f"Created #{issue.id}: {issue.title}")


@app.command(name="list")
def list_cmd(
    status: Annotated[Optional[Status], typer.Option(help="Filter by status")] = None,
    show_all: Annotated[bool, typer.Option("--all", help="Include closed issues")] = False,
    label: Annotated[Optional[str], typer.Option(help="Filter by label")] = None,
    assignee: Annotated[Optional[str], typer.Option(help="Filter by assignee")] = None,
    project: Annotated[Optional[str], typer.Option(help="Filter by project")] = None,
    blocked: Annotated[bool, typer.Option("--blocked", help="Only issues with blockers")] = False,
    as_json: Annotated[bool, typer.Option("--json", help="Output as indented JSON")] = False,
    compact: Annotated[bool, typer.Option("--compact", help="Output as single-line JSON")] = False,
):
    """List issues (open and in-progress by default)."""
    issues_dir = _require_issues_dir()
    all_issues = _load(issues_dir)

    issue_filter = IssueFilter(
        status=status,
        include_all=show_all,
        label=label,
        assignee=assignee,
        project=project,
        blocked_only=blocked,
    )
    _print_issue_list(filter_issues(all_issues, issue_filter), all_issues, as_json, compact)


@app.command()
def show(
    issue_id: Annotated[int, typer.Argument(help="Issue ID")],
    as_json: Annotated[bool, typer.Option("--json", help="Output as indented JSON")] = False,
    compact: Annotated[bool, typer.Option("--compact", help="Output as single-line JSON")] = False,
):
    """Show issue details."""
    issues_dir = _require_issues_dir()
    all_issues = _load(issues_dir)

    issue = next((candidate for candidate in all_issues if candidate.id == issue_id), None)
    if issue is None:
        _not_found(issue_id)

    if as_json or compact:
        _print_json(issue.to_dict(), compact)
    else:
        _print_issue_detail(issue, all_issues)


@app.command()
def update(
    issue_id: Annotated[int, typer.Argument(help="Issue ID")],
    title: Annotated[Optional[str], typer.Option(help="Set title")] = None,
    description: Annotated[Optional[str], typer.Option(help="Set description")] = None,
    priority: Annotated[Optional[Priority], typer.Option(help="Set priority")] = None,
    status: Annotated[Optional[Status], typer.Option(help="Set status")] = None,
    assignee: Annotated[Optional[str], typer.Option(help="Set assignee (empty to clear)")] = None,
    project: Annotated[Optional[str], typer.Option(help="Set project (empty to clear)")] = None,
    add_label: Annotated[Optional[List[str]], typer.Option(help="Add label")] = None,
    remove_label: Annotated[Optional[List[str]], typer.Option(help="Remove label")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Output as indented JSON")] = False,
    compact: Annotated[bool, typer.Option("--compact", help="Output as single-line JSON")] = False,
):
    """Update an issue."""
    if title is not None and not title.strip():
        print("Error: Title must not be empty")
        raise typer.Exit(code=1)

    issues_dir = _require_issues_dir()

    def apply(issue: Issue) -> Issue:
        changes = {}
        if title is not None:
            changes["title"] = title.strip()
        if description is not None:
            changes["description"] = description
        if priority is not None:
            changes["priority"] = priority
        if status is not None:
            changes["status"] = status
        if assignee is not None:
            changes["assignee"] = assignee or None
        if project is not None:
            changes["project"] = project or None
        if add_label or remove_label:
            labels = [name for name in issue.labels if name not in (remove_label or [])]
            for name in add_label or []:
                if name not in labels:
                    labels.append(name)
            changes["labels"] = labels
        return issue.copy(**changes)

    updated = update_issue(issues_dir, issue_id, apply)
    if updated is None:
        _not_found(issue_id)

    _emit_single(updated, as_json, compact, f"Updated #{updated.id}: {updated.title}")


def _change_status(issue_id: int, status: Status, verb: str) -> None:
    issues_dir = _require_issues_dir()
    updated = set_status(issues_dir, issue_id, status)
    if updated is None:
        _not_found(issue_id)
    print(f"{verb} #{updated.id}: {updated.title}")


@app.command()
def start(issue_id: Annotated[int, typer.Argument(help="Issue ID")]):
    """Mark an issue as in progress."""
    _change_status(issue_id, Status.IN_PROGRESS, "Started")


@app.command()
def close(issue_id: Annotated[int, typer.Argument(help="Issue ID")]):
    """Close an issue."""
    _change_status(issue_id, Status.CLOSED, "Closed")


@app.command()
def reopen(issue_id: Annotated[int, typer.Argument(help="Issue ID")]):
    """Reopen a closed issue."""
    _change_status(issue_id, Status.OPEN, "Reopened")


@app.command()
def progress(
    issue_id: Annotated[int, typer.Argument(help="Issue ID")],
    message: Annotated[str, typer.Argument(help="Progress note")],
):
    """Append a timestamped progress entry."""
    if not message.strip():
        print("Error: Progress message must not be empty")
        raise typer.Exit(code=1)

    issues_dir = _require_issues_dir()
    updated = add_progress(issues_dir, issue_id, message)
    if updated is None:
        _not_found(issue_id)

    entry = updated.progress[-1]
    print(f"Added progress to #{issue_id}:")
    print(f"  [{entry.timestamp}] {entry.message}")


@app.command()
def block(
    issue_id: Annotated[int, typer.Argument(help="Issue that is blocked")],
    blocker_id: Annotated[int, typer.Argument(help="Issue that blocks it")],
):
    """Mark an issue as blocked by another."""
    if issue_id == blocker_id:
        print("Error: An issue cannot block itself")
        raise typer.Exit(code=1)

    issues_dir = _require_issues_dir()
    updated = add_blocked_by(issues_dir, issue_id, blocker_id)
    if updated is None:
        print(f"Error: Issue #{issue_id} or #{blocker_id} not found")
        raise typer.Exit(code=1)

    print(f"#{issue_id} is blocked by #{blocker_id}")


@app.command()
def unblock(
    issue_id: Annotated[int, typer.Argument(help="Issue that is blocked")],
    blocker_id: Annotated[int, typer.Argument(help="Issue that blocks it")],
):
    """Remove a blocking relationship."""
    issues_dir = _require_issues_dir()
    updated = remove_blocked_by(issues_dir, issue_id, blocker_id)
    if updated is None:
        _not_found(issue_id)

    print(f"#{issue_id} is no longer blocked by #{blocker_id}")


@app.command()
def search(
    query: Annotated[str, typer.Argument(help="Text to search for")],
    as_json: Annotated[bool, typer.Option("--json", help="Output as indented JSON")] = False,
    compact: Annotated[bool, typer.Option("--compact", help="Output as single-line JSON")] = False,
):
    """Search titles, descriptions and progress notes."""
    issues_dir = _require_issues_dir()
    all_issues = _load(issues_dir)
    _print_issue_list(search_issues_in(all_issues, query), all_issues, as_json, compact)


@app.command()
def ready(
    as_json: Annotated[bool, typer.Option("--json", help="Output as indented JSON")] = False,
    compact: Annotated[bool, typer.Option("--compact", help="Output as single-line JSON")] = False,
):
    """Show ready work (not blocked by any open issue)."""
    issues_dir = _require_issues_dir()
    all_issues = _load(issues_dir)
    issues = ready_issues(all_issues)

    if not issues and not (as_json or compact):
        print("No ready work")
        return

    _print_issue_list(issues, all_issues, as_json, compact)


@app.command()
def delete(issue_id: Annotated[int, typer.Argument(help="Issue ID")]):
    """Delete an issue file."""
    issues_dir = _require_issues_dir()
    if not delete_issue(issues_dir, issue_id):
        _not_found(issue_id)

    print(f"Deleted #{issue_id}")


def main():
    """Main CLI entry point."""
    app()
