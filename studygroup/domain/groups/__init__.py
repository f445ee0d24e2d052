"""Study groups module domain layer."""

from .entities import Group, Session
from .value_objects import Attendance, GroupCode, Pass, SessionType

__all__ = [
    "Attendance",
    "Group",
    "GroupCode",
    "Pass",
    "Session",
    "SessionType",
]
