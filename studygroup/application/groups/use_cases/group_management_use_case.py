"""Use case for creating, naming and deleting study groups."""

from uuid import UUID

import structlog

from studygroup.application.groups.protocols.group_repository import GroupRepositoryProtocol
from studygroup.application.groups.use_cases.exceptions import GroupCodeTakenError
from studygroup.application.groups.use_cases.group_loader import load_group
from studygroup.domain.common.value_objects import GroupId
from studygroup.domain.groups import Group, GroupCode
from studygroup.exceptions import GroupNotFoundError

logger = structlog.get_logger(__name__)


class GroupManagementUseCase:
    """Use case for group lifecycle and lookup."""

    def __init__(self, group_repository: GroupRepositoryProtocol) -> None:
        self.group_repository = group_repository

    def create_group(self, name: str, group_id: UUID | None = None) -> Group:
        """
        Create a new study group.

        Args:
            name: Display name of the group
            group_id: Identifier to use (generated if not given)

        Returns:
            Created group

        Raises:
            ValidationError: If the name is blank
            GroupCodeTakenError: If the derived code is already used
        """
        group = Group.create(name, group_id=GroupId(group_id) if group_id else None)
        self._ensure_code_free(group.code, group.id)

        group = self.group_repository.save(group)
        logger.info("created_group", group_id=str(group.id), code=group.code.value)
        return group

    def get_group(self, group_id: UUID) -> Group:
        """
        Raises:
            GroupNotFoundError: If the group does not exist
        """
        return load_group(self.group_repository, group_id)

    def get_group_by_code(self, code: str) -> Group:
        """
        Look up a group by the code students share.

        Raises:
            ValidationError: If the code is malformed
            GroupNotFoundError: If no group has the code
        """
        group_code = GroupCode.parse(code)
        group = self.group_repository.find_by_code(group_code)
        if not group:
            raise GroupNotFoundError(message=f"Group with code {group_code} not found")
        return group

    def list_groups(self) -> list[Group]:
        return self.group_repository.find_all()

    def rename_group(self, group_id: UUID, name: str) -> Group:
        """
        Rename a group. Its code is kept.

        Raises:
            GroupNotFoundError: If the group does not exist
            ValidationError: If the name is blank
        """
        group = load_group(self.group_repository, group_id)
        group.rename(name)

        group = self.group_repository.save(group)
        logger.info("renamed_group", group_id=str(group.id))
        return group

    def regenerate_code(self, group_id: UUID) -> Group:
        """
        Derive the group code again from the current name.

        Raises:
            GroupNotFoundError: If the group does not exist
            GroupCodeTakenError: If another group already uses the new code
        """
        group = load_group(self.group_repository, group_id)
        previous = group.code
        code = group.regenerate_code()
        if code != previous:
            self._ensure_code_free(code, group.id)

        group = self.group_repository.save(group)
        logger.info(
            "regenerated_group_code",
            group_id=str(group.id),
            previous_code=previous.value,
            code=code.value,
        )
        return group

    def delete_group(self, group_id: UUID) -> None:
        """
        Delete a group with all its sessions.

        Raises:
            GroupNotFoundError: If the group does not exist
        """
        if not self.group_repository.delete(GroupId(group_id)):
            raise GroupNotFoundError(group_id)
        logger.info("deleted_group", group_id=str(group_id))

    def _ensure_code_free(self, code: GroupCode, group_id: GroupId) -> None:
        holder = self.group_repository.find_by_code(code)
        if holder and holder.id != group_id:
            raise GroupCodeTakenError(code.value)
