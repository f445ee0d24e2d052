"""Study group domain exceptions."""

from studygroup.domain.common.exceptions import EntityNotFoundError, StateConflictError


class SessionNotFoundError(EntityNotFoundError):
    """Raised when a group does not own the requested session."""

    def __init__(self, session_id: object) -> None:
        super().__init__("Session", session_id)


class DuplicateAttendanceError(StateConflictError):
    """Raised by the group when attendance for a (session, student) pair already exists."""

    def __init__(self, session_id: object, student_id: object) -> None:
        super().__init__(
            "duplicate_attendance",
            f"Attendance of student {student_id} for session {session_id} "
            "has already been registered",
        )
        self.session_id = session_id
        self.student_id = student_id


class AlreadyAttendedError(StateConflictError):
    """Raised by a session when the user already has an attendance recorded."""

    def __init__(self, user_id: object) -> None:
        super().__init__("already_attended", f"User {user_id} has already attended this session")
        self.user_id = user_id


class LivePassExistsError(StateConflictError):
    """Raised when a non-expired pass already exists for the requestee."""

    def __init__(self, requestee_id: object) -> None:
        super().__init__(
            "live_pass_exists", f"User {requestee_id} already has a valid pass for this session"
        )
        self.requestee_id = requestee_id


class ExpiredPassError(StateConflictError):
    """Raised when an expired pass is presented to the group."""

    def __init__(self, code: str) -> None:
        super().__init__("expired_pass", "The pass given is expired")
        self.code = code


class InvalidPassError(StateConflictError):
    """Raised when no live pass matches the presented code."""

    def __init__(self, code: str) -> None:
        super().__init__("invalid_pass_code", "No valid pass with the given code found")
        self.code = code


class NotRegisteredError(StateConflictError):
    """Raised when a student outside the roster tries to attend a group session."""

    def __init__(self, student_id: object) -> None:
        super().__init__(
            "not_registered", f"Student {student_id} is not registered in this group"
        )
        self.student_id = student_id
