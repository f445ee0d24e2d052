"""
Session entity.

A session is one scheduled meeting of a study group. It owns the passes
issued for it and the attendances recorded against it.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from studygroup.domain.common.clock import Clock, utc_now
from studygroup.domain.common.entity import Entity
from studygroup.domain.common.validation import (
    check_not_blank,
    check_time_window,
    check_timezone_aware,
    require,
)
from studygroup.domain.common.value_objects import SessionId, UserId
from studygroup.domain.groups.exceptions import (
    AlreadyAttendedError,
    InvalidPassError,
    LivePassExistsError,
)
from studygroup.domain.groups.value_objects.attendance import Attendance
from studygroup.domain.groups.value_objects.attendance_pass import (
    DEFAULT_PASS_CODE_LENGTH,
    DEFAULT_PASS_VALIDITY,
    Pass,
    generate_pass_code,
)
from studygroup.domain.groups.value_objects.session_type import SessionType


def normalize_pass_code(code: str) -> str:
    return code.strip().upper()


@dataclass(eq=False)
class Session(Entity[SessionId]):
    """
    Scheduled session of a study group.

    Business Rules:
    - Location cannot be blank
    - Session must end strictly after it begins, after every mutation
    - At most one non-expired pass per requestee
    - At most one attendance per user
    - Expired passes are pruned only when a lookup runs into them
    """

    id: SessionId
    session_type: SessionType
    location: str
    begins: datetime
    ends: datetime
    clock: Clock = field(default=utc_now, repr=False)

    _passes: list[Pass] = field(default_factory=list, repr=False)
    _attendances: dict[UserId, Attendance] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        """Validate invariants."""
        require(
            check_not_blank(self.location, "location"),
            check_timezone_aware(self.begins, "begins"),
            check_timezone_aware(self.ends, "ends"),
            check_time_window(self.begins, self.ends),
        )
        self.location = self.location.strip()
        self.session_type = SessionType.parse(self.session_type)

    @property
    def passes(self) -> tuple[Pass, ...]:
        """Outstanding passes, including ones that expired but were not pruned yet."""
        return tuple(self._passes)

    @property
    def attendances(self) -> tuple[Attendance, ...]:
        return tuple(self._attendances.values())

    @property
    def duration(self) -> timedelta:
        return self.ends - self.begins

    def repurpose(self, session_type: SessionType) -> None:
        self.session_type = SessionType.parse(session_type)

    def relocate(self, location: str) -> None:
        """
        Move the session to another location.

        Raises:
            ValidationError: If location is blank
        """
        require(check_not_blank(location, "location"))
        self.location = location.strip()

    def change_begins(self, begins: datetime) -> None:
        require(
            check_timezone_aware(begins, "begins"),
            check_time_window(begins, self.ends),
        )
        self.begins = begins

    def change_ends(self, ends: datetime) -> None:
        require(
            check_timezone_aware(ends, "ends"),
            check_time_window(self.begins, ends),
        )
        self.ends = ends

    def reschedule(self, begins: datetime, ends: datetime) -> None:
        """
        Replace both bounds of the time window.

        The new pair is validated as a whole before either bound changes, so
        moving a session entirely past its old end is possible.

        Raises:
            ValidationError: If ends is not after begins
        """
        require(
            check_timezone_aware(begins, "begins"),
            check_timezone_aware(ends, "ends"),
            check_time_window(begins, ends),
        )
        self.begins = begins
        self.ends = ends

    def add_pass(
        self,
        requester_id: UserId,
        requestee_id: UserId,
        validity: timedelta | None = None,
        code_length: int = DEFAULT_PASS_CODE_LENGTH,
    ) -> Pass:
        """
        Issue a pass that lets the requestee's attendance be recorded.

        Args:
            requester_id: User issuing the pass
            requestee_id: User the pass is for
            validity: How long the pass stays redeemable
            code_length: Number of characters in the redemption code

        Returns:
            The new Pass, carrying its redemption code

        Raises:
            AlreadyAttendedError: If the requestee already attended
            LivePassExistsError: If the requestee already holds a non-expired pass
        """
        # A redeemed pass is superseded by the attendance, live or not
        if self.has_attended(requestee_id):
            raise AlreadyAttendedError(requestee_id)
        if self.live_pass_for(requestee_id) is not None:
            raise LivePassExistsError(requestee_id)

        new_pass = Pass.issue(
            session_id=self.id,
            requester_id=requester_id,
            requestee_id=requestee_id,
            issued_at=self.clock(),
            validity=DEFAULT_PASS_VALIDITY if validity is None else validity,
            code=self._unused_code(code_length),
        )
        self._passes.append(new_pass)
        return new_pass

    def attend(self, pass_or_code: Pass | str) -> Attendance:
        """
        Redeem a pass and record the requestee's attendance.

        The pass is left in place; the recorded attendance is what rejects
        any further redemption.

        Args:
            pass_or_code: The pass itself or its redemption code

        Returns:
            The recorded Attendance

        Raises:
            InvalidPassError: If no live pass matches the code
            AlreadyAttendedError: If the requestee already attended
        """
        code = pass_or_code.code if isinstance(pass_or_code, Pass) else pass_or_code
        redeemed = self.find_live_pass(code)
        if redeemed is None:
            raise InvalidPassError(code)

        if self.has_attended(redeemed.requestee_id):
            raise AlreadyAttendedError(redeemed.requestee_id)

        attendance = Attendance(
            session_id=self.id,
            student_id=redeemed.requestee_id,
            recorded_at=self.clock(),
        )
        self._attendances[redeemed.requestee_id] = attendance
        return attendance

    def has_attended(self, user_id: UserId) -> bool:
        return user_id in self._attendances

    def attendance(self, user_id: UserId) -> Attendance | None:
        return self._attendances.get(user_id)

    def find_live_pass(self, code: str) -> Pass | None:
        """Look up a non-expired pass by code, pruning it if it has expired."""
        code = normalize_pass_code(code)
        match = next((p for p in self._passes if p.code == code), None)
        if match is None:
            return None
        if match.is_expired(self.clock()):
            self._passes.remove(match)
            return None
        return match

    def live_pass_for(self, requestee_id: UserId) -> Pass | None:
        """Look up the requestee's non-expired pass, pruning expired ones."""
        now = self.clock()
        live: Pass | None = None
        for candidate in [p for p in self._passes if p.requestee_id == requestee_id]:
            if candidate.is_expired(now):
                self._passes.remove(candidate)
            else:
                live = candidate
        return live

    def _unused_code(self, length: int) -> str:
        taken = {p.code for p in self._passes}
        code = generate_pass_code(length)
        while code in taken:
            code = generate_pass_code(length)
        return code
