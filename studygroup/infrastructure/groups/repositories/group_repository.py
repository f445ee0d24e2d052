"""
Domain-centric repository for the Group aggregate.

Returns domain aggregates instead of ORM models.
Uses GroupMapper internally for conversions.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.sql import Select

from studygroup.domain.common.clock import Clock, utc_now
from studygroup.domain.common.value_objects import GroupId
from studygroup.domain.groups import Group, GroupCode
from studygroup.exceptions import PersistenceConflictError
from studygroup.infrastructure.groups.mappers.group_mapper import AttendanceKeys, GroupMapper
from studygroup.models import Group as GroupORM
from studygroup.models import Session as SessionORM

logger = logging.getLogger(__name__)


class GroupRepository:
    """Repository for Group persistence (domain-centric)."""

    def __init__(self, db: Session, clock: Clock = utc_now) -> None:
        """
        Initialize repository.

        Args:
            db: SQLAlchemy database session
            clock: Current-time provider handed to reconstituted groups
        """
        self.db = db
        self.clock = clock
        self.mapper = GroupMapper()
        # Attendance rows each group was last loaded with
        self._loaded_attendances: dict[GroupId, AttendanceKeys] = {}

    def find_by_id(self, group_id: GroupId, *, for_update: bool = False) -> Group | None:
        """
        Load a group with its roster, sessions, passes and attendances.

        Args:
            group_id: Group ID value object
            for_update: Lock the group row until the transaction ends, which
                serialises pass issuance on databases that support it

        Returns:
            Group aggregate if found, None otherwise
        """
        stmt = self._aggregate_query().where(GroupORM.id == group_id.value)
        if for_update:
            stmt = stmt.with_for_update(of=GroupORM)

        orm_model = self.db.execute(stmt).scalar_one_or_none()
        if not orm_model:
            return None

        return self._to_domain(orm_model)

    def find_by_code(self, code: GroupCode) -> Group | None:
        """
        Load a group by its shareable code.

        Args:
            code: Group code value object

        Returns:
            Group aggregate if found, None otherwise
        """
        stmt = self._aggregate_query().where(GroupORM.code == code.value)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self._to_domain(orm_model) if orm_model else None

    def find_all(self) -> list[Group]:
        """
        Load all groups ordered by name.

        Returns:
            List of Group aggregates
        """
        stmt = self._aggregate_query().order_by(GroupORM.name, GroupORM.id)
        orm_models = self.db.execute(stmt).scalars().all()
        return [self._to_domain(orm) for orm in orm_models]

    def save(self, group: Group) -> Group:
        """
        Create or update a group and everything it owns.

        Unique constraints on group codes, pass codes and (session, student)
        attendances are the final guard against concurrent writers; a
        violation rolls the transaction back. Attendances are reconciled
        against the rows the group was loaded with, not the current rows, so
        one recorded by another writer in the meantime is a conflict.

        Args:
            group: Group aggregate to save

        Returns:
            Group reloaded from the database

        Raises:
            PersistenceConflictError: If a concurrent transaction wrote a conflicting row
        """
        existing_orm = self.db.execute(
            self._aggregate_query().where(GroupORM.id == group.id.value)
        ).scalar_one_or_none()

        orm_model = self.mapper.to_orm(
            group, existing_orm, self._loaded_attendances.get(group.id)
        )
        if existing_orm is None:
            self.db.add(orm_model)

        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Integrity conflict while saving group {group.id}: {e.orig}")
            raise PersistenceConflictError("Group", group.id) from e

        for event in group.collect_events():
            logger.debug("domain_event %s", event.to_dict())

        self.db.refresh(orm_model)
        return self._to_domain(orm_model)

    def delete(self, group_id: GroupId) -> bool:
        """
        Delete a group together with its sessions, passes and attendances.

        Args:
            group_id: Group ID value object

        Returns:
            True if a group was deleted, False if it did not exist
        """
        orm_model = self.db.get(GroupORM, group_id.value)
        if orm_model is None:
            return False

        self.db.delete(orm_model)
        self.db.commit()
        self._loaded_attendances.pop(group_id, None)
        return True

    def _to_domain(self, orm_model: GroupORM) -> Group:
        group = self.mapper.to_domain(orm_model, self.clock)
        self._loaded_attendances[group.id] = self.mapper.attendance_keys(orm_model)
        return group

    @staticmethod
    def _aggregate_query() -> Select[tuple[GroupORM]]:
        return select(GroupORM).options(
            selectinload(GroupORM.students),
            selectinload(GroupORM.sessions).selectinload(SessionORM.passes),
            selectinload(GroupORM.sessions).selectinload(SessionORM.attendances),
        )
