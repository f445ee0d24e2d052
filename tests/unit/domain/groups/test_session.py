"""Tests for the Session entity."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest

from studygroup.domain.common.clock import Clock
from studygroup.domain.common.exceptions import StateConflictError, ValidationError
from studygroup.domain.common.value_objects import SessionId, UserId
from studygroup.domain.groups import Attendance, Pass, Session, SessionType
from studygroup.domain.groups.exceptions import (
    AlreadyAttendedError,
    InvalidPassError,
    LivePassExistsError,
)

T = datetime(2024, 10, 7, 9, 0, tzinfo=UTC)

TUTOR = UserId.generate()
U1 = UserId.generate()
U2 = UserId.generate()


def make_session(clock: Clock, **overrides: object) -> Session:
    fields: dict[str, object] = {
        "id": SessionId.generate(),
        "session_type": SessionType.TUTORIAL,
        "location": "Room 101",
        "begins": T,
        "ends": T + timedelta(hours=2),
        "clock": clock,
    }
    fields.update(overrides)
    return Session(**fields)  # type: ignore[arg-type]


class TestSessionCreation:
    def test_create_session(self, clock: Clock) -> None:
        session = make_session(clock, location="  Room 101  ")

        assert session.location == "Room 101"
        assert session.session_type == SessionType.TUTORIAL
        assert session.duration == timedelta(hours=2)
        assert session.passes == ()
        assert session.attendances == ()

    def test_session_type_accepts_raw_value(self, clock: Clock) -> None:
        session = make_session(clock, session_type="Lecture")
        assert session.session_type == SessionType.LECTURE

    def test_unknown_session_type_rejected(self, clock: Clock) -> None:
        with pytest.raises(ValidationError) as exc_info:
            make_session(clock, session_type="party")
        assert exc_info.value.field == "session_type"

    def test_ends_equal_to_begins_rejected(self, clock: Clock) -> None:
        with pytest.raises(ValidationError, match="'ends' datetime must be after"):
            make_session(clock, ends=T)

    def test_ends_before_begins_rejected(self, clock: Clock) -> None:
        with pytest.raises(ValidationError):
            make_session(clock, ends=T - timedelta(minutes=1))

    def test_blank_location_rejected(self, clock: Clock) -> None:
        with pytest.raises(ValidationError) as exc_info:
            make_session(clock, location="   ")
        assert exc_info.value.field == "location"

    def test_naive_datetime_rejected(self, clock: Clock) -> None:
        with pytest.raises(ValidationError) as exc_info:
            make_session(clock, begins=datetime(2024, 10, 7, 9, 0))
        assert exc_info.value.field == "begins"


class TestSessionChanges:
    def test_change_begins_keeps_window_valid(self, clock: Clock) -> None:
        session = make_session(clock)

        session.change_begins(T + timedelta(hours=1))
        assert session.begins == T + timedelta(hours=1)

        with pytest.raises(ValidationError):
            session.change_begins(T + timedelta(hours=2))
        assert session.begins == T + timedelta(hours=1)

    def test_change_ends_keeps_window_valid(self, clock: Clock) -> None:
        session = make_session(clock)

        with pytest.raises(ValidationError):
            session.change_ends(T)
        assert session.ends == T + timedelta(hours=2)

        session.change_ends(T + timedelta(hours=3))
        assert session.ends == T + timedelta(hours=3)

    def test_reschedule_past_old_end(self, clock: Clock) -> None:
        """Both bounds move together, so the session can move a day later."""
        session = make_session(clock)
        session.reschedule(T + timedelta(days=1), T + timedelta(days=1, hours=1))

        assert session.begins == T + timedelta(days=1)
        assert session.ends == T + timedelta(days=1, hours=1)

    def test_invalid_reschedule_changes_nothing(self, clock: Clock) -> None:
        session = make_session(clock)
        with pytest.raises(ValidationError):
            session.reschedule(T + timedelta(hours=5), T + timedelta(hours=4))

        assert session.begins == T
        assert session.ends == T + timedelta(hours=2)

    def test_relocate_and_repurpose(self, clock: Clock) -> None:
        session = make_session(clock)
        session.relocate(" Lab 3 ")
        session.repurpose(SessionType.EXAM)

        assert session.location == "Lab 3"
        assert session.session_type == SessionType.EXAM

        with pytest.raises(ValidationError):
            session.relocate("")
        assert session.location == "Lab 3"

    def test_identity_equality(self, clock: Clock) -> None:
        session_id = SessionId.generate()
        first = make_session(clock, id=session_id)
        second = make_session(clock, id=session_id, location="Elsewhere")

        assert first == second
        assert first != make_session(clock)


class TestPasses:
    def test_add_pass(self, clock: Clock) -> None:
        session = make_session(clock)
        issued = session.add_pass(TUTOR, U1)

        assert issued.session_id == session.id
        assert issued.requester_id == TUTOR
        assert issued.requestee_id == U1
        assert issued.issued_at == clock()
        assert issued.expires_at == clock() + timedelta(minutes=5)
        assert len(issued.code) == 8
        assert session.passes == (issued,)

    def test_custom_validity_and_code_length(self, clock: Clock) -> None:
        session = make_session(clock)
        issued = session.add_pass(TUTOR, U1, validity=timedelta(seconds=30), code_length=12)

        assert len(issued.code) == 12
        assert issued.expires_at == clock() + timedelta(seconds=30)

    def test_second_live_pass_for_same_requestee_rejected(self, clock: Clock) -> None:
        session = make_session(clock)
        session.add_pass(TUTOR, U1)

        with pytest.raises(LivePassExistsError):
            session.add_pass(TUTOR, U1)
        assert len(session.passes) == 1

    def test_live_pass_conflict_is_a_state_conflict(self, clock: Clock) -> None:
        session = make_session(clock)
        session.add_pass(TUTOR, U1)

        with pytest.raises(StateConflictError):
            session.add_pass(TUTOR, U1)

    def test_passes_for_different_requestees(self, clock: Clock) -> None:
        session = make_session(clock)
        first = session.add_pass(TUTOR, U1)
        second = session.add_pass(TUTOR, U2)

        assert first.code != second.code
        assert len(session.passes) == 2

    def test_reissue_after_expiry(self, clock: Clock, advance: Callable[[timedelta], None]) -> None:
        """Issuing succeeds again once the first pass's window elapsed."""
        session = make_session(clock)
        first = session.add_pass(TUTOR, U1)

        advance(timedelta(minutes=5))
        second = session.add_pass(TUTOR, U1)

        assert session.passes == (second,)
        assert first not in session.passes

    def test_no_pass_for_attended_user(self, clock: Clock) -> None:
        session = make_session(clock)
        session.attend(session.add_pass(TUTOR, U1))

        with pytest.raises(AlreadyAttendedError):
            session.add_pass(TUTOR, U1)

    def test_no_pass_for_attended_user_after_expiry(
        self, clock: Clock, advance: Callable[[timedelta], None]
    ) -> None:
        session = make_session(clock)
        session.attend(session.add_pass(TUTOR, U1))

        advance(timedelta(minutes=5))
        with pytest.raises(AlreadyAttendedError):
            session.add_pass(TUTOR, U1)
        assert session.live_pass_for(U1) is None

    def test_live_pass_for(self, clock: Clock, advance: Callable[[timedelta], None]) -> None:
        session = make_session(clock)
        issued = session.add_pass(TUTOR, U1)

        assert session.live_pass_for(U1) == issued
        assert session.live_pass_for(U2) is None

        advance(timedelta(minutes=5))
        assert session.live_pass_for(U1) is None
        assert session.passes == ()

    def test_expired_passes_stay_until_looked_up(
        self, clock: Clock, advance: Callable[[timedelta], None]
    ) -> None:
        session = make_session(clock)
        issued = session.add_pass(TUTOR, U1)

        advance(timedelta(hours=1))
        assert session.passes == (issued,)

        assert session.find_live_pass(issued.code) is None
        assert session.passes == ()


class TestAttend:
    def test_attend_by_code(self, clock: Clock) -> None:
        session = make_session(clock)
        issued = session.add_pass(TUTOR, U1)

        attendance = session.attend(issued.code)

        assert attendance == Attendance(session_id=session.id, student_id=U1, recorded_at=T)
        assert attendance.recorded_at == clock()
        assert session.has_attended(U1)
        assert session.attendance(U1) == attendance
        assert session.attendances == (attendance,)

    def test_attend_by_pass(self, clock: Clock) -> None:
        session = make_session(clock)
        attendance = session.attend(session.add_pass(TUTOR, U1))
        assert attendance.student_id == U1

    def test_code_is_case_insensitive(self, clock: Clock) -> None:
        session = make_session(clock)
        issued = session.add_pass(TUTOR, U1)

        session.attend(f"  {issued.code.lower()} ")
        assert session.has_attended(U1)

    def test_redeem_twice(self, clock: Clock) -> None:
        """The pass stays after redemption; the attendance blocks the second one."""
        session = make_session(clock)
        issued = session.add_pass(TUTOR, U1)
        session.attend(issued.code)

        with pytest.raises(AlreadyAttendedError):
            session.attend(issued.code)
        assert len(session.attendances) == 1
        assert session.passes == (issued,)

    def test_unknown_code(self, clock: Clock) -> None:
        session = make_session(clock)
        session.add_pass(TUTOR, U1)

        with pytest.raises(InvalidPassError):
            session.attend("NOPE2345")
        assert session.attendances == ()

    def test_expired_code_is_pruned(
        self, clock: Clock, advance: Callable[[timedelta], None]
    ) -> None:
        session = make_session(clock)
        issued = session.add_pass(TUTOR, U1)

        advance(timedelta(minutes=5))
        with pytest.raises(InvalidPassError):
            session.attend(issued.code)

        assert session.passes == ()
        assert not session.has_attended(U1)

    def test_pass_from_other_session_rejected(self, clock: Clock) -> None:
        session = make_session(clock)
        foreign = Pass.issue(
            session_id=SessionId.generate(),
            requester_id=TUTOR,
            requestee_id=U1,
            issued_at=clock(),
            code="ABCDEFGH",
        )

        with pytest.raises(InvalidPassError):
            session.attend(foreign)

    def test_redeem_just_before_expiry(
        self, clock: Clock, advance: Callable[[timedelta], None]
    ) -> None:
        session = make_session(clock)
        issued = session.add_pass(TUTOR, U1)

        advance(timedelta(minutes=5) - timedelta(microseconds=1))
        session.attend(issued.code)
        assert session.has_attended(U1)

    def test_views_are_copies(self, clock: Clock) -> None:
        session = make_session(clock)
        session.attend(session.add_pass(TUTOR, U1))

        assert isinstance(session.passes, tuple)
        assert isinstance(session.attendances, tuple)
