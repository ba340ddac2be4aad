"""Tests for directory scanning, id allocation and file naming."""

import logging


def test_list_issue_files_excludes_readme(issues_dir, write_raw):
    """README.md and non-markdown files should not be listed."""
    from tracker_core import list_issue_files

    write_raw("0001-a.md", "---\nid: 1\n---\n")
    write_raw("notes.txt", "ignored")

    names = [path.name for path in list_issue_files(issues_dir)]

    assert names == ["0001-a.md"]


def test_load_all_issues_sorted_by_id(issues_dir, write_raw):
    """Issues should come back ordered by id regardless of filenames."""
    from tracker_core import load_all_issues

    write_raw("b.md", "---\nid: 10\ntitle: Ten\n---\n")
    write_raw("a.md", "---\nid: 2\ntitle: Two\n---\n")
    write_raw("c.md", "---\nid: 7\ntitle: Seven\n---\n")

    assert [issue.id for issue in load_all_issues(issues_dir)] == [2, 7, 10]


def test_scan_skips_corrupt_file_with_warning(issues_dir, write_raw, caplog):
    """A broken file should produce a warning without aborting the scan."""
    from tracker_core import scan_issues

    write_raw("0001-good.md", "---\nid: 1\ntitle: Good\n---\n")
    bad = write_raw("0002-bad.md", "---\nid: 2\ntitle: never closed\n")

    with caplog.at_level(logging.WARNING, logger="tracker_core.storage"):
        result = scan_issues(issues_dir)

    assert [issue.id for issue in result.issues] == [1]
    assert len(result.warnings) == 1
    assert result.warnings[0].path == bad
    assert "closing" in result.warnings[0].message
    assert "0002-bad.md" in caplog.text


def test_scan_skips_undecodable_file(issues_dir):
    """Files that are not UTF-8 should be reported, not raised."""
    from tracker_core import scan_issues

    (issues_dir / "0001-binary.md").write_bytes(b"\xff\xfe\x00garbage")

    result = scan_issues(issues_dir)

    assert result.issues == []
    assert len(result.warnings) == 1


def test_missing_id_defaults_to_filename_digits(issues_dir, write_raw):
    """An issue without an id key should take the id from its filename."""
    from tracker_core import load_all_issues

    write_raw("0005-no-id.md", "---\ntitle: No id\n---\n")

    issues = load_all_issues(issues_dir)

    assert issues[0].id == 5
    assert issues[0].created != ""


def test_next_id_for_empty_set():
    """The first issue gets id 1."""
    from tracker_core import next_id_for

    assert next_id_for([]) == 1


def test_next_id_after_gaps(issues_dir, write_raw):
    """Next id is one past the maximum, even with gaps."""
    from tracker_core import next_issue_id

    for issue_id in (3, 7, 2):
        write_raw(f"{issue_id:04d}-x.md", f"---\nid: {issue_id}\n---\n")

    assert next_issue_id(issues_dir) == 8


def test_next_issue_id_in_fresh_directory(issues_dir):
    """An initialized but empty directory starts at 1."""
    from tracker_core import next_issue_id

    assert next_issue_id(issues_dir) == 1


def test_slugify():
    """Slugs should be lowercase, hyphenated and limited to 40 characters."""
    from tracker_core import slugify

    assert slugify("Fix Parser Bug") == "fix-parser-bug"
    assert slugify("Crash on save! (again)") == "crash-on-save-again"
    assert slugify("x" * 60) == "x" * 40


def test_issue_filename_is_zero_padded():
    """Filenames use a 4-digit id prefix."""
    from tracker_core import Issue, issue_filename

    assert issue_filename(Issue(id=4, title="Foo")) == "0004-foo.md"
    assert issue_filename(Issue(id=12345, title="Big")) == "12345-big.md"


def test_write_and_find_issue(issues_dir):
    """A written issue should be found along with its path."""
    from tracker_core import Issue, find_issue, write_issue

    path = write_issue(issues_dir, Issue(id=1, title="Stored"))
    found = find_issue(issues_dir, 1)

    assert found is not None
    issue, found_path = found
    assert issue.title == "Stored"
    assert found_path == path
    assert find_issue(issues_dir, 99) is None


def test_replace_issue_file_renames(issues_dir):
    """A new title should move the issue to a new file."""
    from tracker_core import Issue, replace_issue_file, write_issue

    old_path = write_issue(issues_dir, Issue(id=1, title="Old"))
    new_path = replace_issue_file(issues_dir, old_path, Issue(id=1, title="New"))

    assert not old_path.exists()
    assert new_path.name == "0001-new.md"
    assert new_path.exists()
