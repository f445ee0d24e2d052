"""Use case for reading recorded attendances."""

from uuid import UUID

from studygroup.application.groups.protocols.group_repository import GroupRepositoryProtocol
from studygroup.application.groups.use_cases.exceptions import AttendanceNotFoundError
from studygroup.application.groups.use_cases.group_loader import load_group
from studygroup.domain.common.value_objects import SessionId, UserId
from studygroup.domain.groups import Attendance


class AttendanceQueryUseCase:
    def __init__(self, group_repository: GroupRepositoryProtocol) -> None:
        self.group_repository = group_repository

    def list_attendances(
        self,
        group_id: UUID,
        student_id: UUID | None = None,
        session_id: UUID | None = None,
    ) -> list[Attendance]:
        """
        Get a group's attendances, optionally for one student and/or session.

        Raises:
            GroupNotFoundError: If the group does not exist
            SessionNotFoundError: If a session filter names a session the group does not own
        """
        group = load_group(self.group_repository, group_id)
        session_id_vo = SessionId(session_id) if session_id else None
        if session_id_vo is not None:
            group.session(session_id_vo)

        attendances = group.attendances(
            student_id=UserId(student_id) if student_id else None,
            session_id=session_id_vo,
        )
        return sorted(attendances, key=lambda a: a.recorded_at)

    def get_attendance(self, group_id: UUID, session_id: UUID, student_id: UUID) -> Attendance:
        """
        Get one student's attendance for a session.

        Raises:
            GroupNotFoundError: If the group does not exist
            SessionNotFoundError: If the group has no such session
            AttendanceNotFoundError: If the student did not attend
        """
        group = load_group(self.group_repository, group_id)
        attendance = group.session(SessionId(session_id)).attendance(UserId(student_id))
        if attendance is None:
            raise AttendanceNotFoundError(session_id, student_id)
        return attendance
