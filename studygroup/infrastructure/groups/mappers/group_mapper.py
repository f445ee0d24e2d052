"""Mapper for Group ORM ↔ Domain conversion."""

from datetime import UTC, datetime
from uuid import UUID

from studygroup.domain.common.clock import Clock, utc_now
from studygroup.domain.common.value_objects import GroupId, SessionId, UserId
from studygroup.domain.groups import Attendance, Group, GroupCode, Pass, Session, SessionType
from studygroup.models import Attendance as AttendanceORM
from studygroup.models import Group as GroupORM
from studygroup.models import GroupStudent as GroupStudentORM
from studygroup.models import Session as SessionORM
from studygroup.models import SessionPass as SessionPassORM

AttendanceKeys = frozenset[tuple[UUID, UUID]]


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; everything is stored in UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class GroupMapper:
    """Mapper for the Group aggregate, its roster, sessions, passes and attendances."""

    def to_domain(self, orm_model: GroupORM, clock: Clock = utc_now) -> Group:
        """
        Convert ORM model to domain aggregate.

        Uses the constructor directly (NOT the factory method) so no
        creation event is recorded on reconstitution.
        """
        return Group(
            id=GroupId(orm_model.id),
            name=orm_model.name,
            code=GroupCode(orm_model.code),
            clock=clock,
            created_at=as_utc(orm_model.created_at) if orm_model.created_at else None,
            _student_ids={UserId(s.student_id) for s in orm_model.students},
            _sessions=[self._session_to_domain(s) for s in orm_model.sessions],
        )

    def to_orm(
        self,
        domain_entity: Group,
        orm_model: GroupORM | None = None,
        loaded_attendances: AttendanceKeys | None = None,
    ) -> GroupORM:
        """
        Convert domain aggregate to ORM model.

        Handles both create (orm_model=None) and update (orm_model provided).
        Child rows are reconciled by natural key so unchanged rows are kept
        and only added or removed ones reach the database.

        Args:
            domain_entity: Group aggregate
            orm_model: Current rows of the group, if it exists
            loaded_attendances: (session id, student id) pairs the aggregate
                was loaded with. Attendances outside this set are always
                inserted, so one recorded concurrently by another transaction
                hits the unique constraint. Defaults to the rows of orm_model.
        """
        if orm_model is None:
            orm_model = GroupORM(id=domain_entity.id.value, students=[], sessions=[])
        if loaded_attendances is None:
            loaded_attendances = self.attendance_keys(orm_model)

        orm_model.name = domain_entity.name
        orm_model.code = domain_entity.code.value

        self._sync_students(domain_entity, orm_model)
        self._sync_sessions(domain_entity, orm_model, loaded_attendances)
        return orm_model

    @staticmethod
    def attendance_keys(orm_model: GroupORM) -> AttendanceKeys:
        """(session id, student id) pairs of the attendance rows of a group."""
        return frozenset(
            (session.id, attendance.student_id)
            for session in orm_model.sessions
            for attendance in session.attendances
        )

    def _session_to_domain(self, orm_model: SessionORM) -> Session:
        session_id = SessionId(orm_model.id)
        passes = [
            Pass(
                session_id=session_id,
                requester_id=UserId(p.requester_id),
                requestee_id=UserId(p.requestee_id),
                code=p.code,
                issued_at=as_utc(p.issued_at),
                validity=p.validity,
            )
            for p in orm_model.passes
        ]
        attendances = {
            UserId(a.student_id): Attendance(
                session_id=session_id,
                student_id=UserId(a.student_id),
                recorded_at=as_utc(a.recorded_at),
            )
            for a in orm_model.attendances
        }
        return Session(
            id=session_id,
            session_type=SessionType.parse(orm_model.session_type),
            location=orm_model.location,
            begins=as_utc(orm_model.begins),
            ends=as_utc(orm_model.ends),
            _passes=passes,
            _attendances=attendances,
        )

    def _sync_students(self, domain_entity: Group, orm_model: GroupORM) -> None:
        wanted = {student_id.value for student_id in domain_entity.student_ids}
        kept = [s for s in orm_model.students if s.student_id in wanted]
        present = {s.student_id for s in kept}
        added = [GroupStudentORM(student_id=sid) for sid in sorted(wanted - present)]
        orm_model.students = kept + added

    def _sync_sessions(
        self, domain_entity: Group, orm_model: GroupORM, loaded_attendances: AttendanceKeys
    ) -> None:
        existing = {s.id: s for s in orm_model.sessions}
        synced: list[SessionORM] = []

        for position, session in enumerate(domain_entity.sessions):
            session_orm = existing.get(session.id.value)
            if session_orm is None:
                session_orm = SessionORM(id=session.id.value, passes=[], attendances=[])

            session_orm.position = position
            session_orm.session_type = session.session_type.value
            session_orm.location = session.location
            session_orm.begins = as_utc(session.begins)
            session_orm.ends = as_utc(session.ends)

            self._sync_passes(session, session_orm)
            loaded = {student for sid, student in loaded_attendances if sid == session.id.value}
            self._sync_attendances(session, session_orm, loaded)
            synced.append(session_orm)

        orm_model.sessions = synced

    def _sync_passes(self, session: Session, orm_model: SessionORM) -> None:
        wanted = {p.code: p for p in session.passes}
        kept = [p for p in orm_model.passes if p.code in wanted]
        present = {p.code for p in kept}
        added = [
            SessionPassORM(
                code=p.code,
                requester_id=p.requester_id.value,
                requestee_id=p.requestee_id.value,
                issued_at=as_utc(p.issued_at),
                validity=p.validity,
            )
            for code, p in wanted.items()
            if code not in present
        ]
        orm_model.passes = kept + added

    def _sync_attendances(
        self, session: Session, orm_model: SessionORM, loaded: set[UUID]
    ) -> None:
        wanted = {a.student_id.value: a for a in session.attendances}
        # Rows the aggregate never saw belong to another writer and stay untouched
        kept = [
            a
            for a in orm_model.attendances
            if a.student_id in wanted or a.student_id not in loaded
        ]
        added = [
            AttendanceORM(
                student_id=student_id,
                recorded_at=as_utc(a.recorded_at),
            )
            for student_id, a in wanted.items()
            if student_id not in loaded
        ]
        orm_model.attendances = kept + added
