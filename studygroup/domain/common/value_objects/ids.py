from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True)
class GroupId(EntityId):
    """Strongly-typed study group identifier."""


@dataclass(frozen=True)
class SessionId(EntityId):
    """Strongly-typed session identifier."""


@dataclass(frozen=True)
class UserId(EntityId):
    """Strongly-typed user identifier, as issued by the identity provider."""
