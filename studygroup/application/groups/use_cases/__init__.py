from .attendance_query_use_case import AttendanceQueryUseCase
from .group_management_use_case import GroupManagementUseCase
from .pass_use_case import PassUseCase
from .roster_use_case import RosterUseCase
from .session_scheduling_use_case import SessionSchedulingUseCase

__all__ = [
    "AttendanceQueryUseCase",
    "GroupManagementUseCase",
    "PassUseCase",
    "RosterUseCase",
    "SessionSchedulingUseCase",
]
