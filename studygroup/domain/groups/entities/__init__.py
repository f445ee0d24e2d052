from .group import Group
from .session import Session

__all__ = [
    "Group",
    "Session",
]
