"""Pydantic schemas for Group API request/response validation."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from studygroup.domain.common.value_objects import UserId
from studygroup.domain.groups import Group


class GroupCreateRequest(BaseModel):
    """Schema for creating a Group."""

    name: str = Field(..., min_length=1, max_length=200, description="Display name of the group")


class GroupUpdateRequest(BaseModel):
    """Schema for renaming a Group."""

    name: str = Field(..., min_length=1, max_length=200, description="New display name")


class GroupResponse(BaseModel):
    """Schema for Group response."""

    id: UUID
    name: str
    code: str = Field(..., description="Shareable code derived from the group name")
    student_count: int
    session_count: int
    created_at: datetime | None = None

    @classmethod
    def from_domain(cls, group: Group) -> "GroupResponse":
        return cls(
            id=group.id.value,
            name=group.name,
            code=group.code.value,
            student_count=len(group.student_ids),
            session_count=len(group.sessions),
            created_at=group.created_at,
        )


class GroupsResponse(BaseModel):
    """Schema for a list of groups."""

    groups: list[GroupResponse]


class RosterReplaceRequest(BaseModel):
    """Schema for replacing a group's roster."""

    student_ids: list[UUID] = Field(..., description="Complete new roster")


class StudentsResponse(BaseModel):
    """Schema for a group's roster."""

    group_id: UUID
    student_ids: list[UUID]

    @classmethod
    def from_domain(cls, group_id: UUID, student_ids: list[UserId]) -> "StudentsResponse":
        return cls(group_id=group_id, student_ids=[s.value for s in student_ids])


class RosterChangeResponse(BaseModel):
    """Schema for a single roster change."""

    group_id: UUID
    student_id: UUID
    changed: bool = Field(..., description="False when the roster already had the requested state")
