from .group_repository import GroupRepositoryProtocol

__all__ = ["GroupRepositoryProtocol"]
