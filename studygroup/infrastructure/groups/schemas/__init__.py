from .attendance_schemas import (
    AttendanceResponse,
    AttendancesResponse,
    PassIssueRequest,
    PassRedeemRequest,
    PassResponse,
)
from .group_schemas import (
    GroupCreateRequest,
    GroupResponse,
    GroupsResponse,
    GroupUpdateRequest,
    RosterChangeResponse,
    RosterReplaceRequest,
    StudentsResponse,
)
from .session_schemas import (
    SessionCreateRequest,
    SessionResponse,
    SessionsResponse,
    SessionUpdateRequest,
    UnscheduleResponse,
)

__all__ = [
    "AttendanceResponse",
    "AttendancesResponse",
    "GroupCreateRequest",
    "GroupResponse",
    "GroupUpdateRequest",
    "GroupsResponse",
    "PassIssueRequest",
    "PassRedeemRequest",
    "PassResponse",
    "RosterChangeResponse",
    "RosterReplaceRequest",
    "SessionCreateRequest",
    "SessionResponse",
    "SessionUpdateRequest",
    "SessionsResponse",
    "StudentsResponse",
    "UnscheduleResponse",
]
