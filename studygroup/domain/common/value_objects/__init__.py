"""Common value objects shared across all domain modules."""

from .ids import GroupId, SessionId, UserId

__all__ = [
    # IDs
    "GroupId",
    "SessionId",
    "UserId",
]
