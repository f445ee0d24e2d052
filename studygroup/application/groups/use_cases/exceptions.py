"""Exceptions for study group use cases."""

from studygroup.exceptions import ConflictError, NotFoundError


class GroupCodeTakenError(ConflictError):
    """Another group already uses the code derived from the requested name."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"A group with code {code} already exists")


class AttendanceNotFoundError(NotFoundError):
    """Student has no attendance recorded for the session."""

    def __init__(self, session_id: object, student_id: object) -> None:
        self.session_id = session_id
        self.student_id = student_id
        super().__init__(f"No attendance of student {student_id} for session {session_id}")


class LivePassNotFoundError(NotFoundError):
    """Requestee holds no live pass for the session."""

    def __init__(self, session_id: object, requestee_id: object) -> None:
        self.session_id = session_id
        self.requestee_id = requestee_id
        super().__init__(f"No live pass of user {requestee_id} for session {session_id}")
