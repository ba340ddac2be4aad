"""Constants for Tracker - directory layout, file format, defaults."""

__all__ = [
    "ISSUES_DIR_NAME",
    "INDEX_FILE_NAME",
    "README_FILE_NAME",
    "ISSUES_DIR_ENV",
    "FRONTMATTER_DELIMITER",
    "ID_WIDTH",
    "SLUG_MAX_LENGTH",
    "ACTIVE_STATUSES",
]

# Directory layout
ISSUES_DIR_NAME = ".issues"
INDEX_FILE_NAME = "index.jsonl"
README_FILE_NAME = "README.md"

# Overrides directory discovery (mainly for tests and scripts)
ISSUES_DIR_ENV = "TRACKER_DIR"

# File format
FRONTMATTER_DELIMITER = "---"
ID_WIDTH = 4
SLUG_MAX_LENGTH = 40

# Statuses shown by default when listing
ACTIVE_STATUSES = ("open", "in-progress")
