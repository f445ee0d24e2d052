"""
Group aggregate root.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from studygroup.domain.common.aggregate_root import AggregateRoot
from studygroup.domain.common.clock import Clock, utc_now
from studygroup.domain.common.exceptions import ValidationError
from studygroup.domain.common.validation import check_not_blank, require
from studygroup.domain.common.value_objects import GroupId, SessionId, UserId
from studygroup.domain.groups.entities.session import Session
from studygroup.domain.groups.events import (
    AttendanceRecorded,
    GroupCreated,
    GroupRenamed,
    PassIssued,
    SessionRemoved,
    SessionScheduled,
    StudentDeregistered,
    StudentRegistered,
)
from studygroup.domain.groups.exceptions import (
    DuplicateAttendanceError,
    ExpiredPassError,
    InvalidPassError,
    NotRegisteredError,
    SessionNotFoundError,
)
from studygroup.domain.groups.value_objects.attendance import Attendance
from studygroup.domain.groups.value_objects.attendance_pass import (
    DEFAULT_PASS_CODE_LENGTH,
    Pass,
)
from studygroup.domain.groups.value_objects.group_code import GroupCode
from studygroup.domain.groups.value_objects.session_type import SessionType


@dataclass(eq=False)
class Group(AggregateRoot[GroupId]):
    """
    Study group aggregate root.

    A group holds the roster of registered students and exclusively owns
    its sessions. Attendance is stored once, in the session it belongs to;
    group level queries are projections over the sessions.

    Business Rules:
    - Name cannot be blank
    - A student appears at most once in the roster
    - Removed sessions are destroyed together with their passes and attendances
    - Only registered students can attend through the group
    - The code is derived from the name at creation and kept on rename
    """

    id: GroupId
    name: str
    code: GroupCode
    clock: Clock = field(default=utc_now, repr=False)
    created_at: datetime | None = None

    _student_ids: set[UserId] = field(default_factory=set, repr=False)
    _sessions: list[Session] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Validate invariants."""
        require(check_not_blank(self.name, "name"))
        self.name = self.name.strip()
        for session in self._sessions:
            session.clock = self.clock

    # Naming

    def rename(self, name: str) -> None:
        """
        Change the display name. The group code stays the same.

        Raises:
            ValidationError: If name is blank
        """
        require(check_not_blank(name, "name"))
        self.name = name.strip()
        self._record_event(GroupRenamed(group_id=self.id, name=self.name))

    def regenerate_code(self) -> GroupCode:
        """Derive the code again from the current name."""
        self.code = GroupCode.from_group_name(self.name)
        return self.code

    # Roster

    @property
    def student_ids(self) -> frozenset[UserId]:
        return frozenset(self._student_ids)

    def add_student(self, student_id: UserId) -> bool:
        """Register a student. Returns False if already registered."""
        if student_id in self._student_ids:
            return False
        self._student_ids.add(student_id)
        self._record_event(StudentRegistered(group_id=self.id, student_id=student_id))
        return True

    def remove_student(self, student_id: UserId) -> bool:
        """Deregister a student. Returns False if not registered."""
        if student_id not in self._student_ids:
            return False
        self._student_ids.remove(student_id)
        self._record_event(StudentDeregistered(group_id=self.id, student_id=student_id))
        return True

    def replace_students(self, student_ids: Iterable[UserId]) -> None:
        """
        Replace the whole roster.

        Raises:
            ValidationError: If no student ids are given
        """
        new_roster = set(student_ids)
        if not new_roster:
            raise ValidationError("Empty roster given", field="student_ids")

        for student_id in self._student_ids - new_roster:
            self.remove_student(student_id)
        for student_id in new_roster - self._student_ids:
            self.add_student(student_id)

    def is_student_registered(self, student_id: UserId) -> bool:
        return student_id in self._student_ids

    # Scheduling

    @property
    def sessions(self) -> tuple[Session, ...]:
        return tuple(self._sessions)

    def sessions_of_type(self, session_type: SessionType) -> tuple[Session, ...]:
        return tuple(s for s in self._sessions if s.session_type == session_type)

    def find_session(self, session_id: SessionId) -> Session | None:
        return next((s for s in self._sessions if s.id == session_id), None)

    def session(self, session_id: SessionId) -> Session:
        """
        Get an owned session.

        Raises:
            SessionNotFoundError: If the group has no such session
        """
        found = self.find_session(session_id)
        if found is None:
            raise SessionNotFoundError(session_id)
        return found

    def add_session(
        self,
        session_type: SessionType,
        location: str,
        begins: datetime,
        ends: datetime,
        session_id: SessionId | None = None,
    ) -> SessionId:
        """
        Schedule a new session.

        Args:
            session_type: Kind of session
            location: Where the session takes place
            begins: Start of the session
            ends: End of the session, strictly after begins
            session_id: Identifier to use (generated if not given)

        Returns:
            Identifier of the new session

        Raises:
            ValidationError: If location is blank or ends is not after begins
        """
        new_session = Session(
            id=session_id or SessionId.generate(),
            session_type=session_type,
            location=location,
            begins=begins,
            ends=ends,
            clock=self.clock,
        )
        self._sessions.append(new_session)
        self._record_event(
            SessionScheduled(
                group_id=self.id,
                session_id=new_session.id,
                session_type=new_session.session_type,
            )
        )
        return new_session.id

    def repurpose_session(self, session_id: SessionId, session_type: SessionType) -> None:
        self.session(session_id).repurpose(session_type)

    def relocate_session(self, session_id: SessionId, location: str) -> None:
        self.session(session_id).relocate(location)

    def reschedule_session(self, session_id: SessionId, begins: datetime, ends: datetime) -> None:
        self.session(session_id).reschedule(begins, ends)

    def remove_session(self, session_id: SessionId) -> bool:
        """Destroy a session with its passes and attendances."""
        found = self.find_session(session_id)
        if found is None:
            return False
        self._sessions.remove(found)
        self._record_event(SessionRemoved(group_id=self.id, session_id=session_id))
        return True

    def unschedule(self) -> int:
        """Destroy all sessions. Returns how many were removed."""
        removed = list(self._sessions)
        self._sessions.clear()
        for session in removed:
            self._record_event(SessionRemoved(group_id=self.id, session_id=session.id))
        return len(removed)

    # Passes and attendance

    def issue_pass(
        self,
        session_id: SessionId,
        requester_id: UserId,
        requestee_id: UserId,
        validity: timedelta | None = None,
        code_length: int = DEFAULT_PASS_CODE_LENGTH,
    ) -> Pass:
        """
        Issue a pass for one of the group's sessions.

        Raises:
            SessionNotFoundError: If the group has no such session
            LivePassExistsError: If the requestee already holds a live pass
            AlreadyAttendedError: If the requestee already attended
        """
        issued = self.session(session_id).add_pass(
            requester_id, requestee_id, validity=validity, code_length=code_length
        )
        self._record_event(
            PassIssued(
                group_id=self.id,
                session_id=session_id,
                requester_id=requester_id,
                requestee_id=requestee_id,
            )
        )
        return issued

    def attend(self, attendance_pass: Pass) -> Attendance:
        """
        Record attendance for the student a pass was issued to.

        Checks run in order and the first failure wins.

        Args:
            attendance_pass: Pass presented for one of the group's sessions

        Returns:
            The recorded Attendance

        Raises:
            ExpiredPassError: If the pass has expired
            SessionNotFoundError: If the pass is for a session the group does not own
            DuplicateAttendanceError: If the student already attended the session
            NotRegisteredError: If the student is not on the roster
            InvalidPassError: If the session never issued the pass
        """
        if attendance_pass.is_expired(self.clock()):
            raise ExpiredPassError(attendance_pass.code)

        session = self.session(attendance_pass.session_id)
        student_id = attendance_pass.student_id

        if session.has_attended(student_id):
            raise DuplicateAttendanceError(session.id, student_id)
        if not self.is_student_registered(student_id):
            raise NotRegisteredError(student_id)

        attendance = session.attend(attendance_pass)
        self._record_event(
            AttendanceRecorded(group_id=self.id, session_id=session.id, student_id=student_id)
        )
        return attendance

    def redeem_pass(self, session_id: SessionId, code: str) -> Attendance:
        """
        Redeem a pass code for one of the group's sessions.

        Raises:
            SessionNotFoundError: If the group has no such session
            InvalidPassError: If no live pass matches the code
            DuplicateAttendanceError: If the pass was already redeemed
            NotRegisteredError: If the requestee is not on the roster
        """
        live_pass = self.session(session_id).find_live_pass(code)
        if live_pass is None:
            raise InvalidPassError(code)
        return self.attend(live_pass)

    def has_attended(self, student_id: UserId, session_id: SessionId) -> bool:
        found = self.find_session(session_id)
        return found is not None and found.has_attended(student_id)

    def attendances(
        self,
        student_id: UserId | None = None,
        session_id: SessionId | None = None,
    ) -> tuple[Attendance, ...]:
        """All attendances of the group, optionally narrowed to a student and/or session."""
        return tuple(
            attendance
            for session in self._sessions
            if session_id is None or session.id == session_id
            for attendance in session.attendances
            if student_id is None or attendance.student_id == student_id
        )

    @classmethod
    def create(
        cls,
        name: str,
        group_id: GroupId | None = None,
        clock: Clock = utc_now,
    ) -> "Group":
        """
        Factory method for creating a new group.

        Args:
            name: Display name, also the source of the group code
            group_id: Identifier to use (generated if not given)
            clock: Current-time provider for pass expiry

        Returns:
            New Group instance

        Raises:
            ValidationError: If name is blank
        """
        group = cls(
            id=group_id or GroupId.generate(),
            name=name,
            code=GroupCode.from_group_name(name),
            clock=clock,
        )
        group._record_event(
            GroupCreated(group_id=group.id, name=group.name, code=group.code.value)
        )
        return group
