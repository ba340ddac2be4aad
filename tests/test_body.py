"""Tests for the body parser (description and progress log)."""


def test_parse_progress_entry():
    """A progress line should split into timestamp and message."""
    from tracker_core import ProgressEntry, parse_progress_line

    entry = parse_progress_line("- [2026-01-01T10:00:00] Started work")

    assert entry == ProgressEntry(timestamp="2026-01-01T10:00:00", message="Started work")


def test_parse_progress_line_rejects_other_shapes():
    """Lines without the bracketed timestamp are not entries."""
    from tracker_core import parse_progress_line

    assert parse_progress_line("Started work") is None
    assert parse_progress_line("- Started work") is None
    assert parse_progress_line("* [2026-01-01] Started") is None


def test_parse_body_splits_description_and_progress():
    """Should return trimmed description and entries in file order."""
    from tracker_core import parse_body

    body = """
# Title goes here

## Description
First paragraph.

Second paragraph.

## Progress
- [2026-01-01T10:00:00] Started work
- [2026-01-02T10:00:00] Finished
"""
    description, progress = parse_body(body)

    assert description == "First paragraph.\n\nSecond paragraph."
    assert [entry.message for entry in progress] == ["Started work", "Finished"]
    assert progress[0].timestamp == "2026-01-01T10:00:00"


def test_title_line_is_not_description():
    """The title heading should never leak into the description."""
    from tracker_core import parse_body

    description, progress = parse_body("# Only a title\n")

    assert description == ""
    assert progress == []


def test_progress_heading_is_case_insensitive():
    """'## progress' should still start the progress log."""
    from tracker_core import parse_body

    _, progress = parse_body("# T\n\n## PROGRESS\n- [t1] one\n")

    assert len(progress) == 1
    assert progress[0].message == "one"


def test_non_matching_line_ends_progress():
    """Progress parsing stops at the first line that is not an entry."""
    from tracker_core import parse_body

    body = "# T\n## Progress\n- [t1] one\nnot an entry\n- [t2] two\n"
    _, progress = parse_body(body)

    assert [entry.message for entry in progress] == ["one"]


def test_other_section_ends_description():
    """Another ## heading should close the description."""
    from tracker_core import parse_body

    body = "# T\n## Description\nkept\n## Notes\nignored\n"
    description, _ = parse_body(body)

    assert description == "kept"


def test_garbage_body_degrades_to_empty():
    """Bodies without known sections should give empty results, not errors."""
    from tracker_core import parse_body

    assert parse_body("") == ("", [])
    assert parse_body("random text\nmore text\n## \n- [x") == ("", [])
