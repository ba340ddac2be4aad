"""Entity model for Tracker - issues, progress entries, status and priority."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional

__all__ = [
    "Status",
    "Priority",
    "ProgressEntry",
    "Issue",
]


class Status(str, Enum):
    """Issue status. Textual form is the enum value."""

    OPEN = "open"
    IN_PROGRESS = "in-progress"
    CLOSED = "closed"

    @classmethod
    def parse(cls, token: Optional[str]) -> "Status":
        """Decode a status token, falling back to OPEN for anything unknown."""
        if token is not None:
            token = token.strip().lower()
            for status in cls:
                if status.value == token:
                    return status
        return cls.OPEN

    def __str__(self) -> str:
        return self.value


class Priority(str, Enum):
    """Issue priority, ordered low < medium < high < critical."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @classmethod
    def parse(cls, token: Optional[str]) -> "Priority":
        """Decode a priority token, falling back to MEDIUM for anything unknown."""
        if token is not None:
            token = token.strip().lower()
            for priority in cls:
                if priority.value == token:
                    return priority
        return cls.MEDIUM

    @property
    def rank(self) -> int:
        return _PRIORITY_ORDER.index(self)

    def __lt__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank >= other.rank

    def __str__(self) -> str:
        return self.value


_PRIORITY_ORDER = [Priority.LOW, Priority.MEDIUM, Priority.HIGH, Priority.CRITICAL]


@dataclass(frozen=True)
class ProgressEntry:
    """One line of an issue's progress log."""

    timestamp: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"timestamp": self.timestamp, "message": self.message}


@dataclass
class Issue:
    """A single tracked issue as stored in one markdown file.

    ``blocked_by`` lists the ids of issues this one waits on; ``blocks`` is
    the reverse direction. Storage operations keep the two sides symmetric
    on write, but nothing re-checks that on read.
    """

    id: int
    title: str
    status: Status = Status.OPEN
    priority: Priority = Priority.MEDIUM
    created: str = ""
    updated: str = ""
    labels: List[str] = field(default_factory=list)
    assignee: Optional[str] = None
    project: Optional[str] = None
    blocks: List[int] = field(default_factory=list)
    blocked_by: List[int] = field(default_factory=list)
    description: str = ""
    progress: List[ProgressEntry] = field(default_factory=list)

    @property
    def is_blocked(self) -> bool:
        """True if any blocker is recorded, whatever its status."""
        return len(self.blocked_by) > 0

    def copy(self, **changes: Any) -> "Issue":
        """Return a copy with fresh lists, optionally overriding fields."""
        fresh = replace(
            self,
            labels=list(self.labels),
            blocks=list(self.blocks),
            blocked_by=list(self.blocked_by),
            progress=list(self.progress),
        )
        return replace(fresh, **changes) if changes else fresh

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation used by the CLI."""
        return {
            "id": self.id,
            "title": self.title,
            "status": self.status.value,
            "priority": self.priority.value,
            "created": self.created,
            "updated": self.updated,
            "labels": list(self.labels),
            "assignee": self.assignee,
            "project": self.project,
            "blocks": list(self.blocks),
            "blocked_by": list(self.blocked_by),
            "description": self.description,
            "progress": [entry.to_dict() for entry in self.progress],
        }
