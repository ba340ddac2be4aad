"""Tests for blocking relationships."""


def test_add_blocked_by_updates_both_sides(issues_dir):
    """Both issues should record the relationship."""
    from tracker_core import add_blocked_by, create_issue, get_issue

    create_issue(issues_dir, "Blocker")
    create_issue(issues_dir, "Blocked")

    updated = add_blocked_by(issues_dir, 2, 1)

    assert updated.blocked_by == [1]
    assert get_issue(issues_dir, 2).blocked_by == [1]
    assert get_issue(issues_dir, 1).blocks == [2]


def test_add_blocked_by_is_idempotent(issues_dir):
    """Adding the same relationship twice should not duplicate ids."""
    from tracker_core import add_blocked_by, create_issue, get_issue

    create_issue(issues_dir, "Blocker")
    create_issue(issues_dir, "Blocked")

    add_blocked_by(issues_dir, 2, 1)
    add_blocked_by(issues_dir, 2, 1)

    assert get_issue(issues_dir, 2).blocked_by == [1]
    assert get_issue(issues_dir, 1).blocks == [2]


def test_add_blocked_by_missing_blocker(issues_dir):
    """A blocker that does not exist should fail without writing anything."""
    from tracker_core import add_blocked_by, create_issue, get_issue

    create_issue(issues_dir, "Lonely")

    assert add_blocked_by(issues_dir, 1, 9) is None
    assert get_issue(issues_dir, 1).blocked_by == []


def test_add_blocked_by_missing_target(issues_dir):
    """A missing blocked issue leaves the blocker untouched."""
    from tracker_core import add_blocked_by, create_issue, get_issue

    create_issue(issues_dir, "Blocker")

    assert add_blocked_by(issues_dir, 9, 1) is None
    assert get_issue(issues_dir, 1).blocks == []


def test_multiple_blockers_keep_order(issues_dir):
    """Blockers should be appended in the order they were added."""
    from tracker_core import add_blocked_by, create_issue, get_issue

    for title in ("A", "B", "C", "Target"):
        create_issue(issues_dir, title)

    add_blocked_by(issues_dir, 4, 3)
    add_blocked_by(issues_dir, 4, 1)

    assert get_issue(issues_dir, 4).blocked_by == [3, 1]


def test_remove_blocked_by_updates_both_sides(issues_dir):
    """Removing should clear both directions."""
    from tracker_core import add_blocked_by, create_issue, get_issue, remove_blocked_by

    create_issue(issues_dir, "Blocker")
    create_issue(issues_dir, "Blocked")
    add_blocked_by(issues_dir, 2, 1)

    updated = remove_blocked_by(issues_dir, 2, 1)

    assert updated.blocked_by == []
    assert get_issue(issues_dir, 1).blocks == []


def test_remove_missing_relationship_is_not_error(issues_dir):
    """Removing a relationship that never existed should succeed quietly."""
    from tracker_core import create_issue, remove_blocked_by

    create_issue(issues_dir, "A")
    create_issue(issues_dir, "B")

    assert remove_blocked_by(issues_dir, 2, 1).blocked_by == []
    assert remove_blocked_by(issues_dir, 2, 77) is not None
    assert remove_blocked_by(issues_dir, 77, 1) is None


def test_effectively_blocked_by_open_or_in_progress():
    """An open or in-progress blocker still blocks."""
    from tracker_core import Issue, Status, is_effectively_blocked

    blocker = Issue(id=1, title="Blocker", status=Status.IN_PROGRESS)
    blocked = Issue(id=2, title="Blocked", blocked_by=[1])

    assert is_effectively_blocked(blocked, [blocker, blocked])

    blocker.status = Status.OPEN
    assert is_effectively_blocked(blocked, [blocker, blocked])


def test_not_effectively_blocked_when_blockers_closed_or_missing():
    """Closed and unknown blockers do not block."""
    from tracker_core import Issue, Status, is_effectively_blocked

    closed = Issue(id=1, title="Done", status=Status.CLOSED)
    blocked = Issue(id=2, title="Blocked", blocked_by=[1, 99])

    assert blocked.is_blocked
    assert not is_effectively_blocked(blocked, [closed, blocked])
    assert not is_effectively_blocked(Issue(id=3, title="Free"), [closed])


def test_get_blockers_skips_unknown_ids():
    """Only resolvable ids are returned, in blocked_by order."""
    from tracker_core import Issue, get_blockers

    first = Issue(id=1, title="First")
    second = Issue(id=2, title="Second")
    blocked = Issue(id=3, title="Blocked", blocked_by=[2, 50, 1])

    assert [issue.id for issue in get_blockers(blocked, [first, second, blocked])] == [2, 1]


def test_ready_issues_orders_by_priority():
    """Ready work excludes closed and blocked issues, critical first."""
    from tracker_core import Issue, Priority, Status, ready_issues

    issues = [
        Issue(id=1, title="Low", priority=Priority.LOW),
        Issue(id=2, title="Critical", priority=Priority.CRITICAL),
        Issue(id=3, title="Closed", status=Status.CLOSED, priority=Priority.CRITICAL),
        Issue(id=4, title="Blocked", priority=Priority.HIGH, blocked_by=[1]),
        Issue(id=5, title="Unblocked", priority=Priority.HIGH, blocked_by=[3]),
    ]

    assert [issue.id for issue in ready_issues(issues)] == [2, 5, 1]
