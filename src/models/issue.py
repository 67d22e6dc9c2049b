"""Issue enums - problems reported against rooms."""

from enum import Enum


class IssueStatus(str, Enum):
    """Issue lifecycle states."""
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"
    REPORTED = "reported"


class IssuePriority(str, Enum):
    """Issue priority levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


# Anything outside this set counts as unresolved
TERMINAL_ISSUE_STATUSES = frozenset({IssueStatus.RESOLVED.value, IssueStatus.CLOSED.value})
