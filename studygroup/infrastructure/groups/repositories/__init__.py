from .group_repository import GroupRepository

__all__ = ["GroupRepository"]
