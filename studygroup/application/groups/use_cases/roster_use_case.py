"""Use case for managing a group's student roster."""

from uuid import UUID

import structlog

from studygroup.application.groups.protocols.group_repository import GroupRepositoryProtocol
from studygroup.application.groups.use_cases.group_loader import load_group
from studygroup.domain.common.value_objects import UserId

logger = structlog.get_logger(__name__)


class RosterUseCase:
    def __init__(self, group_repository: GroupRepositoryProtocol) -> None:
        self.group_repository = group_repository

    def list_students(self, group_id: UUID) -> list[UserId]:
        """
        Get the registered students of a group.

        Raises:
            GroupNotFoundError: If the group does not exist
        """
        group = load_group(self.group_repository, group_id)
        return sorted(group.student_ids, key=lambda student_id: str(student_id))

    def register_student(self, group_id: UUID, student_id: UUID) -> bool:
        """
        Add a student to the roster.

        Returns:
            True if the student was added, False if already registered
        """
        group = load_group(self.group_repository, group_id)
        if not group.add_student(UserId(student_id)):
            return False

        self.group_repository.save(group)
        logger.info("registered_student", group_id=str(group_id), student_id=str(student_id))
        return True

    def deregister_student(self, group_id: UUID, student_id: UUID) -> bool:
        """
        Remove a student from the roster.

        Returns:
            True if the student was removed, False if not registered
        """
        group = load_group(self.group_repository, group_id)
        if not group.remove_student(UserId(student_id)):
            return False

        self.group_repository.save(group)
        logger.info("deregistered_student", group_id=str(group_id), student_id=str(student_id))
        return True

    def replace_roster(self, group_id: UUID, student_ids: list[UUID]) -> list[UserId]:
        """
        Replace the whole roster.

        Raises:
            GroupNotFoundError: If the group does not exist
            ValidationError: If the new roster is empty
        """
        group = load_group(self.group_repository, group_id)
        group.replace_students(UserId(student_id) for student_id in student_ids)

        group = self.group_repository.save(group)
        logger.info("replaced_roster", group_id=str(group_id), size=len(group.student_ids))
        return sorted(group.student_ids, key=lambda student_id: str(student_id))
