"""Tracker - local, file-backed issue tracker.

Issues are markdown files with a frontmatter block, kept in a ``.issues``
directory. This package provides the parser, codec and storage engine.
Import from here for the public API.
"""

import logging

from tracker_core.exceptions import TrackerError, FrontmatterParseError
from tracker_core.constants import (
    ISSUES_DIR_NAME,
    INDEX_FILE_NAME,
    README_FILE_NAME,
    ISSUES_DIR_ENV,
    FRONTMATTER_DELIMITER,
    ID_WIDTH,
    SLUG_MAX_LENGTH,
    ACTIVE_STATUSES,
)
from tracker_core.utils import (
    get_iso_timestamp,
    slugify,
    format_issue_filename,
)
from tracker_core.models import (
    Status,
    Priority,
    ProgressEntry,
    Issue,
)
from tracker_core.frontmatter import (
    ParsedFrontmatter,
    parse_frontmatter,
    parse_string_array,
    parse_int_array,
)
from tracker_core.body import (
    BodyState,
    parse_body,
    parse_progress_line,
)
from tracker_core.codec import (
    to_issue,
    parse_issue,
    issue_to_markdown,
)
from tracker_core.storage import (
    ScanWarning,
    ScanResult,
    list_issue_files,
    read_issue_file,
    scan_issues,
    load_all_issues,
    find_issue,
    next_id_for,
    next_issue_id,
    issue_filename,
    write_issue,
    replace_issue_file,
)
from tracker_core.issues import (
    IssueFilter,
    create_issue,
    get_issue,
    update_issue,
    set_status,
    add_progress,
    delete_issue,
    list_issues,
    filter_issues,
    search_issues_in,
    search_issues,
)
from tracker_core.dependencies import (
    add_blocked_by,
    remove_blocked_by,
    get_blockers,
    is_effectively_blocked,
    ready_issues,
)
from tracker_core.discovery import (
    find_issues_dir,
    init_issues_dir,
)
from tracker_core.cli import app, main

# The CLI reports scan warnings itself; applications opt in to log output.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Exceptions
    "TrackerError",
    "FrontmatterParseError",
    # Constants
    "ISSUES_DIR_NAME",
    "INDEX_FILE_NAME",
    "README_FILE_NAME",
    "ISSUES_DIR_ENV",
    "FRONTMATTER_DELIMITER",
    "ID_WIDTH",
    "SLUG_MAX_LENGTH",
    "ACTIVE_STATUSES",
    # Utils
    "get_iso_timestamp",
    "slugify",
    "format_issue_filename",
    # Models
    "Status",
    "Priority",
    "ProgressEntry",
    "Issue",
    # Parsers
    "ParsedFrontmatter",
    "parse_frontmatter",
    "parse_string_array",
    "parse_int_array",
    "BodyState",
    "parse_body",
    "parse_progress_line",
    # Codec
    "to_issue",
    "parse_issue",
    "issue_to_markdown",
    # Storage
    "ScanWarning",
    "ScanResult",
    "list_issue_files",
    "read_issue_file",
    "scan_issues",
    "load_all_issues",
    "find_issue",
    "next_id_for",
    "next_issue_id",
    "issue_filename",
    "write_issue",
    "replace_issue_file",
    # Issues
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
    # Dependencies
    "add_blocked_by",
    "remove_blocked_by",
    "get_blockers",
    "is_effectively_blocked",
    "ready_issues",
    # Discovery
    "find_issues_dir",
    "init_issues_dir",
    # CLI
    "app",
    "main",
]
