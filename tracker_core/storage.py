"""Storage for Tracker - scanning and writing issue files.

There is no index: every call enumerates the issues directory and parses
each file again. A corrupt file is reported as a warning and skipped so one
bad file never hides the rest.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Tuple

from tracker_core.codec import issue_to_markdown, parse_issue
from tracker_core.constants import README_FILE_NAME
from tracker_core.exceptions import FrontmatterParseError
from tracker_core.models import Issue
from tracker_core.utils import format_issue_filename

__all__ = [
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
]

logger = logging.getLogger(__name__)

_LEADING_ID = re.compile(r"^(\d+)")


@dataclass(frozen=True)
class ScanWarning:
    """A file that could not be loaded during a directory scan."""

    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass
class ScanResult:
    issues: List[Issue] = field(default_factory=list)
    warnings: List[ScanWarning] = field(default_factory=list)


def list_issue_files(issues_dir: Path) -> List[Path]:
    """List issue files (``*.md`` except README.md), sorted by name."""
    issues_dir = Path(issues_dir)
    return sorted(
        path
        for path in issues_dir.glob("*.md")
        if path.is_file() and path.name != README_FILE_NAME
    )


def _default_id(path: Path) -> int:
    match = _LEADING_ID.match(path.name)
    return int(match.group(1)) if match else 0


def _mtime_timestamp(path: Path) -> str:
    mtime = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc).replace(microsecond=0)
    return mtime.isoformat().replace("+00:00", "Z")


def read_issue_file(path: Path) -> Issue:
    """Read and parse a single issue file.

    Defaults for a missing id or timestamps come from the filename and the
    file's modification time.

    Raises:
        FrontmatterParseError: If the frontmatter is malformed
        OSError: If the file cannot be read
        UnicodeDecodeError: If the file is not valid UTF-8
    """
    path = Path(path)
    content = path.read_text(encoding="utf-8")
    return parse_issue(content, _default_id(path), _mtime_timestamp(path))


def scan_issues(issues_dir: Path) -> ScanResult:
    """Load every issue file in the directory.

    Args:
        issues_dir: Path to the .issues directory

    Returns:
        ScanResult with issues sorted by id and one warning per skipped file
    """
    result = ScanResult()

    for path in list_issue_files(issues_dir):
        try:
            issue = read_issue_file(path)
        except FrontmatterParseError as e:
            warning = ScanWarning(path, str(e))
        except (OSError, UnicodeDecodeError) as e:
            warning = ScanWarning(path, f"unreadable: {e}")
        else:
            result.issues.append(issue)
            continue

        logger.warning("Skipping issue file %s", warning)
        result.warnings.append(warning)

    result.issues.sort(key=lambda issue: issue.id)
    return result


def load_all_issues(issues_dir: Path) -> List[Issue]:
    """Load all parseable issues, sorted ascending by id."""
    return scan_issues(issues_dir).issues


def find_issue(issues_dir: Path, issue_id: int) -> Optional[Tuple[Issue, Path]]:
    """Locate an issue and the file it was read from.

    Returns:
        Tuple of (issue, path), or None if no file holds that id
    """
    for path in list_issue_files(issues_dir):
        try:
            issue = read_issue_file(path)
        except (FrontmatterParseError, OSError, UnicodeDecodeError):
            continue
        if issue.id == issue_id:
            return issue, path
    return None


def next_id_for(issues: List[Issue]) -> int:
    """Return 1 + the highest id in ``issues``, or 1 if there are none."""
    if not issues:
        return 1
    return max(issue.id for issue in issues) + 1


def next_issue_id(issues_dir: Path) -> int:
    """Allocate the next id for a directory. Nothing is reserved."""
    return next_id_for(load_all_issues(issues_dir))


def issue_filename(issue: Issue) -> str:
    return format_issue_filename(issue.id, issue.title)


def write_issue(issues_dir: Path, issue: Issue) -> Path:
    """Write an issue to its canonical filename and return the path."""
    path = Path(issues_dir) / issue_filename(issue)
    path.write_text(issue_to_markdown(issue), encoding="utf-8")
    return path


def replace_issue_file(issues_dir: Path, old_path: Path, issue: Issue) -> Path:
    """Rewrite an issue that was read from ``old_path``.

    When the title change moves the issue to a new filename, the old file is
    deleted before the new one is written. The two steps are not atomic.
    """
    new_path = Path(issues_dir) / issue_filename(issue)
    if Path(old_path).name != new_path.name:
        Path(old_path).unlink(missing_ok=True)
    return write_issue(issues_dir, issue)
