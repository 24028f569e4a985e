"""
Session status and forward-only transitions.

Dependencies: enum (stdlib)
System role: Session state machine shared by ORM and lifecycle logic
"""

import enum


class SessionStatus(str, enum.Enum):
    """Lifecycle status of an AI chat session."""

    ACTIVE = "active"
    ARCHIVED = "archived"
    DELETED = "deleted"


_ORDER = {
    SessionStatus.ACTIVE: 0,
    SessionStatus.ARCHIVED: 1,
    SessionStatus.DELETED: 2,
}


def can_transition(current: SessionStatus, target: SessionStatus) -> bool:
    """
    Check whether a status change moves strictly forward.

    Args:
        current: Present status
        target: Requested status

    Returns:
        bool: True for active->archived, active->deleted, archived->deleted
    """
    return _ORDER[target] > _ORDER[current]
