from uuid import UUID

from studygroup.application.groups.protocols.group_repository import GroupRepositoryProtocol
from studygroup.domain.common.value_objects import GroupId
from studygroup.domain.groups import Group
from studygroup.exceptions import GroupNotFoundError


def load_group(
    group_repository: GroupRepositoryProtocol, group_id: UUID, *, for_update: bool = False
) -> Group:
    """
    Load a group or fail.

    Raises:
        GroupNotFoundError: If no group has the given id
    """
    group = group_repository.find_by_id(GroupId(group_id), for_update=for_update)
    if not group:
        raise GroupNotFoundError(group_id)
    return group
