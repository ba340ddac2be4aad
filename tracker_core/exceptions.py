"""Custom exceptions for Tracker."""

__all__ = ["TrackerError", "FrontmatterParseError"]


class TrackerError(Exception):
    """Base class for Tracker errors."""

    pass


class FrontmatterParseError(TrackerError):
    """Raised when an issue file's frontmatter block is structurally broken.

    Carries the 1-based line and column where parsing gave up.
    """

    def __init__(self, message: str, line: int, column: int = 1):
        super().__init__(f"{message} (line {line}, column {column})")
        self.message = message
        self.line = line
        self.column = column
