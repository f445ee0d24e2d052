"""Pydantic schemas for pass and attendance API request/response validation."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from studygroup.domain.groups import Attendance, Pass


class PassIssueRequest(BaseModel):
    """Schema for issuing a Pass. The caller is the requester."""

    requestee_id: UUID = Field(..., description="User whose attendance the pass records")


class PassResponse(BaseModel):
    """Schema for an issued Pass."""

    session_id: UUID
    requester_id: UUID
    requestee_id: UUID
    code: str = Field(..., description="Redemption code")
    issued_at: datetime
    expires_at: datetime

    @classmethod
    def from_domain(cls, issued: Pass) -> "PassResponse":
        return cls(
            session_id=issued.session_id.value,
            requester_id=issued.requester_id.value,
            requestee_id=issued.requestee_id.value,
            code=issued.code,
            issued_at=issued.issued_at,
            expires_at=issued.expires_at,
        )


class PassRedeemRequest(BaseModel):
    """Schema for redeeming a Pass by code."""

    code: str = Field(..., min_length=1, max_length=32, description="Redemption code")


class AttendanceResponse(BaseModel):
    """Schema for a recorded Attendance."""

    session_id: UUID
    student_id: UUID
    recorded_at: datetime

    @classmethod
    def from_domain(cls, attendance: Attendance) -> "AttendanceResponse":
        return cls(
            session_id=attendance.session_id.value,
            student_id=attendance.student_id.value,
            recorded_at=attendance.recorded_at,
        )


class AttendancesResponse(BaseModel):
    """Schema for a list of attendances."""

    attendances: list[AttendanceResponse]
