"""Pydantic schemas for Session API request/response validation."""

from datetime import datetime
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, Field

from studygroup.domain.groups import Session, SessionType


class SessionCreateRequest(BaseModel):
    """Schema for scheduling a Session."""

    session_type: SessionType = Field(..., description="Kind of session")
    location: str = Field(
        ..., min_length=1, max_length=255, description="Where the session is held"
    )
    begins: AwareDatetime = Field(..., description="Start, with timezone offset")
    ends: AwareDatetime = Field(..., description="End, strictly after begins")


class SessionUpdateRequest(BaseModel):
    """Schema for changing a Session. Omitted fields stay unchanged."""

    session_type: SessionType | None = None
    location: str | None = Field(None, min_length=1, max_length=255)
    begins: AwareDatetime | None = None
    ends: AwareDatetime | None = None


class SessionResponse(BaseModel):
    """Schema for Session response."""

    id: UUID
    group_id: UUID
    session_type: SessionType
    location: str
    begins: datetime
    ends: datetime
    attendance_count: int

    @classmethod
    def from_domain(cls, group_id: UUID, session: Session) -> "SessionResponse":
        return cls(
            id=session.id.value,
            group_id=group_id,
            session_type=session.session_type,
            location=session.location,
            begins=session.begins,
            ends=session.ends,
            attendance_count=len(session.attendances),
        )


class SessionsResponse(BaseModel):
    """Schema for a list of sessions."""

    sessions: list[SessionResponse]


class UnscheduleResponse(BaseModel):
    group_id: UUID
    removed: int
