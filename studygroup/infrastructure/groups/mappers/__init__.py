from .group_mapper import GroupMapper

__all__ = ["GroupMapper"]
