from typing import Protocol

from studygroup.domain.common.value_objects import GroupId
from studygroup.domain.groups import Group, GroupCode


class GroupRepositoryProtocol(Protocol):
    def find_by_id(self, group_id: GroupId, *, for_update: bool = False) -> Group | None: ...

    def find_by_code(self, code: GroupCode) -> Group | None: ...

    def find_all(self) -> list[Group]: ...

    def save(self, group: Group) -> Group: ...

    def delete(self, group_id: GroupId) -> bool: ...
