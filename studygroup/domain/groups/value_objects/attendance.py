from dataclasses import dataclass, field
from datetime import datetime

from studygroup.domain.common.value_object import ValueObject
from studygroup.domain.common.value_objects import SessionId, UserId


@dataclass(frozen=True)
class Attendance(ValueObject):
    """
    Immutable fact that a student attended a session.

    Identified by the (session, student) pair; the recording time is
    informational and does not take part in equality.
    """

    session_id: SessionId
    student_id: UserId
    recorded_at: datetime = field(compare=False)

    def belongs_to_session(self, session_id: SessionId) -> bool:
        return self.session_id == session_id

    def belongs_to_student(self, student_id: UserId) -> bool:
        return self.student_id == student_id
