"""Tests for GroupRepository persistence of the whole Group aggregate."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from studygroup import models
from studygroup.domain.common.clock import Clock
from studygroup.domain.common.value_objects import GroupId, UserId
from studygroup.domain.groups import Group, GroupCode, SessionType
from studygroup.exceptions import PersistenceConflictError
from studygroup.infrastructure.groups.repositories import GroupRepository

T = datetime(2024, 10, 7, 9, 0, tzinfo=UTC)

TUTOR = UserId.generate()
U1 = UserId.generate()
U2 = UserId.generate()


@pytest.fixture
def repository(db_session: Session, clock: Clock) -> GroupRepository:
    return GroupRepository(db_session, clock=clock)


def count(db_session: Session, model: type[models.Base]) -> int:
    return db_session.execute(select(func.count()).select_from(model)).scalar_one()


def test_save_round_trips_aggregate(repository: GroupRepository, clock: Clock) -> None:
    """Roster, sessions, passes and attendances survive a save and reload."""
    group = Group.create("Algorithms A", clock=clock)
    group.add_student(U1)
    group.add_student(U2)
    session_id = group.add_session(SessionType.TUTORIAL, "Room 101", T, T + timedelta(hours=2))
    group.add_session(
        SessionType.LECTURE, "Hall A", T + timedelta(days=1), T + timedelta(days=1, hours=1)
    )
    group.attend(group.issue_pass(session_id, TUTOR, U1))
    pending = group.issue_pass(session_id, TUTOR, U2)

    repository.save(group)
    loaded = repository.find_by_id(group.id)

    assert loaded is not None
    assert loaded.name == "Algorithms A"
    assert loaded.code == group.code
    assert loaded.created_at is not None
    assert loaded.student_ids == frozenset({U1, U2})
    assert [s.session_type for s in loaded.sessions] == [SessionType.TUTORIAL, SessionType.LECTURE]

    session = loaded.session(session_id)
    assert session.location == "Room 101"
    assert session.begins == T
    assert session.ends == T + timedelta(hours=2)
    assert set(session.passes) == set(group.session(session_id).passes)
    assert session.live_pass_for(U2) == pending
    assert loaded.has_attended(U1, session_id)
    assert loaded.attendances()[0].recorded_at == clock()


def test_save_does_not_rewrite_unchanged_children(
    repository: GroupRepository, db_session: Session
) -> None:
    group = Group.create("Algorithms A")
    group.add_student(U1)
    session_id = group.add_session(SessionType.TUTORIAL, "Room 101", T, T + timedelta(hours=2))
    group.attend(group.issue_pass(session_id, TUTOR, U1))
    repository.save(group)

    loaded = repository.find_by_id(group.id)
    assert loaded is not None
    loaded.add_student(U2)
    repository.save(loaded)

    assert count(db_session, models.GroupStudent) == 2
    assert count(db_session, models.Attendance) == 1
    assert count(db_session, models.SessionPass) == 1


def test_pruned_pass_is_deleted(
    repository: GroupRepository,
    db_session: Session,
    clock: Clock,
    advance: Callable[[timedelta], None],
) -> None:
    group = Group.create("Algorithms A", clock=clock)
    session_id = group.add_session(SessionType.TUTORIAL, "Room 101", T, T + timedelta(hours=2))
    group.issue_pass(session_id, TUTOR, U1)
    repository.save(group)

    advance(timedelta(minutes=5))
    loaded = repository.find_by_id(group.id)
    assert loaded is not None
    reissued = loaded.issue_pass(session_id, TUTOR, U1)
    repository.save(loaded)

    assert count(db_session, models.SessionPass) == 1
    reloaded = repository.find_by_id(group.id)
    assert reloaded is not None
    assert reloaded.session(session_id).passes == (reissued,)


def test_removing_session_cascades(repository: GroupRepository, db_session: Session) -> None:
    group = Group.create("Algorithms A")
    group.add_student(U1)
    session_id = group.add_session(SessionType.TUTORIAL, "Room 101", T, T + timedelta(hours=2))
    group.attend(group.issue_pass(session_id, TUTOR, U1))
    repository.save(group)

    loaded = repository.find_by_id(group.id)
    assert loaded is not None
    loaded.remove_session(session_id)
    repository.save(loaded)

    assert count(db_session, models.Session) == 0
    assert count(db_session, models.SessionPass) == 0
    assert count(db_session, models.Attendance) == 0


def test_find_by_code_and_all(repository: GroupRepository) -> None:
    second = repository.save(Group.create("Data Structures B"))
    first = repository.save(Group.create("Algorithms A"))

    assert repository.find_by_code(GroupCode.from_group_name("algorithms a")) == first
    assert repository.find_by_code(GroupCode("ZZZZZZ")) is None
    assert [g.id for g in repository.find_all()] == [first.id, second.id]


def test_find_missing(repository: GroupRepository) -> None:
    assert repository.find_by_id(GroupId.generate()) is None
    assert repository.find_by_id(GroupId.generate(), for_update=True) is None


def test_duplicate_code_is_a_conflict(repository: GroupRepository) -> None:
    repository.save(Group.create("Algorithms A"))

    with pytest.raises(PersistenceConflictError):
        repository.save(Group.create("algorithms  a"))


def test_delete_cascades(repository: GroupRepository, db_session: Session) -> None:
    group = Group.create("Algorithms A")
    group.add_student(U1)
    session_id = group.add_session(SessionType.TUTORIAL, "Room 101", T, T + timedelta(hours=2))
    group.attend(group.issue_pass(session_id, TUTOR, U1))
    repository.save(group)

    assert repository.delete(group.id) is True
    assert repository.delete(group.id) is False
    assert count(db_session, models.Group) == 0
    assert count(db_session, models.GroupStudent) == 0
    assert count(db_session, models.Session) == 0
    assert count(db_session, models.Attendance) == 0


class TestConcurrentRedemption:
    """Two requests that loaded the same group before either saved."""

    @pytest.fixture
    def other_repository(self, other_db_session: Session, clock: Clock) -> GroupRepository:
        return GroupRepository(other_db_session, clock=clock)

    def test_same_pass_redeemed_twice_is_a_conflict(
        self,
        repository: GroupRepository,
        other_repository: GroupRepository,
        db_session: Session,
        clock: Clock,
    ) -> None:
        group = Group.create("Algorithms A", clock=clock)
        group.add_student(U1)
        session_id = group.add_session(SessionType.TUTORIAL, "Room 101", T, T + timedelta(hours=2))
        code = group.issue_pass(session_id, TUTOR, U1).code
        repository.save(group)

        first = repository.find_by_id(group.id)
        second = other_repository.find_by_id(group.id)
        assert first is not None
        assert second is not None
        first.redeem_pass(session_id, code)
        second.redeem_pass(session_id, code)

        repository.save(first)
        with pytest.raises(PersistenceConflictError):
            other_repository.save(second)

        assert count(db_session, models.Attendance) == 1

    def test_different_students_both_recorded(
        self,
        repository: GroupRepository,
        other_repository: GroupRepository,
        db_session: Session,
        clock: Clock,
    ) -> None:
        group = Group.create("Algorithms A", clock=clock)
        group.add_student(U1)
        group.add_student(U2)
        session_id = group.add_session(SessionType.TUTORIAL, "Room 101", T, T + timedelta(hours=2))
        first_code = group.issue_pass(session_id, TUTOR, U1).code
        second_code = group.issue_pass(session_id, TUTOR, U2).code
        repository.save(group)

        first = repository.find_by_id(group.id)
        second = other_repository.find_by_id(group.id)
        assert first is not None
        assert second is not None
        first.redeem_pass(session_id, first_code)
        second.redeem_pass(session_id, second_code)

        repository.save(first)
        other_repository.save(second)

        assert count(db_session, models.Attendance) == 2
