"""Issues directory discovery and initialization for Tracker."""

import os
from pathlib import Path
from typing import Optional

from tracker_core.constants import (
    INDEX_FILE_NAME,
    ISSUES_DIR_ENV,
    ISSUES_DIR_NAME,
    README_FILE_NAME,
)

__all__ = [
    "find_issues_dir",
    "init_issues_dir",
]

README_TEXT = """# Issues

This directory is managed by `tracker`. Each issue is one markdown file
named `<id>-<slug>.md` with a `---` delimited frontmatter block followed by
a `## Description` section and an optional `## Progress` log.

Files can be edited by hand; keep the frontmatter keys on single lines.
"""


def find_issues_dir(cwd: Optional[str] = None) -> Optional[Path]:
    """Find the issues directory for the current working directory.

    The TRACKER_DIR environment variable wins if set. Otherwise walks up the
    directory tree from ``cwd`` looking for a ``.issues`` directory.

    Args:
        cwd: Optional starting directory (defaults to os.getcwd())

    Returns:
        Path to the issues directory, or None if there is none
    """
    override = os.environ.get(ISSUES_DIR_ENV)
    if override:
        return Path(override)

    if cwd is None:
        cwd = os.getcwd()

    current_path = Path(cwd).resolve()

    for parent in [current_path] + list(current_path.parents):
        candidate = parent / ISSUES_DIR_NAME
        if candidate.is_dir():
            return candidate

    return None


def init_issues_dir(root: Path) -> Path:
    """Create ``<root>/.issues`` with its marker files.

    The ``index.jsonl`` file is created empty and is never read.

    Raises:
        FileExistsError: If the directory already exists
        OSError: On any other filesystem failure
    """
    issues_dir = Path(root) / ISSUES_DIR_NAME
    issues_dir.mkdir()
    (issues_dir / INDEX_FILE_NAME).write_text("")
    (issues_dir / README_FILE_NAME).write_text(README_TEXT)
    return issues_dir
