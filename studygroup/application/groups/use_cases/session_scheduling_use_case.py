"""Use case for scheduling a group's sessions."""

from datetime import datetime
from uuid import UUID

import structlog

from studygroup.application.groups.protocols.group_repository import GroupRepositoryProtocol
from studygroup.application.groups.use_cases.group_loader import load_group
from studygroup.domain.common.value_objects import SessionId
from studygroup.domain.groups import Session, SessionType
from studygroup.domain.groups.exceptions import SessionNotFoundError
from studygroup.exceptions import ValidationError

logger = structlog.get_logger(__name__)


class SessionSchedulingUseCase:
    """Use case for adding, changing and removing sessions."""

    def __init__(self, group_repository: GroupRepositoryProtocol) -> None:
        self.group_repository = group_repository

    def schedule_session(
        self,
        group_id: UUID,
        session_type: SessionType,
        location: str,
        begins: datetime,
        ends: datetime,
    ) -> Session:
        """
        Schedule a new session in a group.

        Args:
            group_id: ID of the group
            session_type: Kind of session
            location: Where the session takes place
            begins: Start of the session
            ends: End of the session

        Returns:
            The scheduled session

        Raises:
            GroupNotFoundError: If the group does not exist
            ValidationError: If location is blank or ends is not after begins
        """
        group = load_group(self.group_repository, group_id)
        session_id = group.add_session(session_type, location, begins, ends)

        group = self.group_repository.save(group)
        logger.info(
            "scheduled_session",
            group_id=str(group_id),
            session_id=str(session_id),
            session_type=str(session_type),
        )
        return group.session(session_id)

    def list_sessions(
        self, group_id: UUID, session_type: SessionType | None = None
    ) -> list[Session]:
        group = load_group(self.group_repository, group_id)
        if session_type is None:
            return list(group.sessions)
        return list(group.sessions_of_type(session_type))

    def get_session(self, group_id: UUID, session_id: UUID) -> Session:
        """
        Raises:
            GroupNotFoundError: If the group does not exist
            SessionNotFoundError: If the group has no such session
        """
        group = load_group(self.group_repository, group_id)
        return group.session(SessionId(session_id))

    def update_session(
        self,
        group_id: UUID,
        session_id: UUID,
        session_type: SessionType | None = None,
        location: str | None = None,
        begins: datetime | None = None,
        ends: datetime | None = None,
    ) -> Session:
        """
        Repurpose, relocate and/or reschedule a session.

        Missing time bounds keep their current value; the resulting window is
        validated as a whole before anything changes.

        Raises:
            ValidationError: If nothing to change is given, or the change is invalid
            GroupNotFoundError: If the group does not exist
            SessionNotFoundError: If the group has no such session
        """
        if session_type is None and location is None and begins is None and ends is None:
            raise ValidationError("At least one of type, location, begins or ends is required")

        group = load_group(self.group_repository, group_id)
        session_id_vo = SessionId(session_id)
        current = group.session(session_id_vo)

        if begins is not None or ends is not None:
            group.reschedule_session(
                session_id_vo,
                begins if begins is not None else current.begins,
                ends if ends is not None else current.ends,
            )
        if location is not None:
            group.relocate_session(session_id_vo, location)
        if session_type is not None:
            group.repurpose_session(session_id_vo, session_type)

        group = self.group_repository.save(group)
        logger.info("updated_session", group_id=str(group_id), session_id=str(session_id))
        return group.session(session_id_vo)

    def remove_session(self, group_id: UUID, session_id: UUID) -> None:
        """
        Destroy a session with its passes and attendances.

        Raises:
            GroupNotFoundError: If the group does not exist
            SessionNotFoundError: If the group has no such session
        """
        group = load_group(self.group_repository, group_id)
        if not group.remove_session(SessionId(session_id)):
            raise SessionNotFoundError(session_id)

        self.group_repository.save(group)
        logger.info("removed_session", group_id=str(group_id), session_id=str(session_id))

    def unschedule(self, group_id: UUID) -> int:
        """
        Destroy every session of a group.

        Returns:
            Number of sessions removed
        """
        group = load_group(self.group_repository, group_id)
        removed = group.unschedule()

        self.group_repository.save(group)
        logger.info("unscheduled_group", group_id=str(group_id), removed=removed)
        return removed
