import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from starlette import status

from studygroup.application.groups.use_cases import GroupManagementUseCase, RosterUseCase
from studygroup.core import container
from studygroup.domain.common.exceptions import DomainError
from studygroup.exceptions import StudyGroupError
from studygroup.infrastructure.common.di import inject_use_case
from studygroup.infrastructure.groups.schemas import (
    GroupCreateRequest,
    GroupResponse,
    GroupsResponse,
    GroupUpdateRequest,
    RosterChangeResponse,
    RosterReplaceRequest,
    StudentsResponse,
)
from studygroup.infrastructure.identity import get_current_user_id

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/groups",
    tags=["groups"],
    dependencies=[Depends(get_current_user_id)],
)


def _unexpected(action: str, e: Exception) -> HTTPException:
    logger.error(f"Failed to {action}: {e!s}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred. Please try again later.",
    )


@router.post("", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
def create_group(
    request: GroupCreateRequest,
    use_case: GroupManagementUseCase = Depends(
        inject_use_case(container.group_management_use_case)
    ),
) -> GroupResponse:
    """
    Create a study group.

    The group code is derived from the name; a name whose code is already
    taken by another group is rejected with 409.
    """
    try:
        group = use_case.create_group(request.name)
        return GroupResponse.from_domain(group)
    except (StudyGroupError, DomainError):
        # Re-raise custom exceptions - handled by exception handlers
        raise
    except Exception as e:
        raise _unexpected("create group", e) from e


@router.get("", response_model=GroupsResponse, status_code=status.HTTP_200_OK)
def list_groups(
    use_case: GroupManagementUseCase = Depends(
        inject_use_case(container.group_management_use_case)
    ),
) -> GroupsResponse:
    """Get all study groups ordered by name."""
    try:
        groups = use_case.list_groups()
        return GroupsResponse(groups=[GroupResponse.from_domain(g) for g in groups])
    except (StudyGroupError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("list groups", e) from e


@router.get("/by-code/{code}", response_model=GroupResponse, status_code=status.HTTP_200_OK)
def get_group_by_code(
    code: str,
    use_case: GroupManagementUseCase = Depends(
        inject_use_case(container.group_management_use_case)
    ),
) -> GroupResponse:
    """Look up a group by the code students share with each other."""
    try:
        return GroupResponse.from_domain(use_case.get_group_by_code(code))
    except (StudyGroupError, DomainError):
        raise
    except Exception as e:
        raise _unexpected(f"look up group by code {code}", e) from e


@router.get("/{group_id}", response_model=GroupResponse, status_code=status.HTTP_200_OK)
def get_group(
    group_id: UUID,
    use_case: GroupManagementUseCase = Depends(
        inject_use_case(container.group_management_use_case)
    ),
) -> GroupResponse:
    try:
        return GroupResponse.from_domain(use_case.get_group(group_id))
    except (StudyGroupError, DomainError):
        raise
    except Exception as e:
        raise _unexpected(f"get group {group_id}", e) from e


@router.patch("/{group_id}", response_model=GroupResponse, status_code=status.HTTP_200_OK)
def rename_group(
    group_id: UUID,
    request: GroupUpdateRequest,
    use_case: GroupManagementUseCase = Depends(
        inject_use_case(container.group_management_use_case)
    ),
) -> GroupResponse:
    """Rename a group. The group code does not change."""
    try:
        return GroupResponse.from_domain(use_case.rename_group(group_id, request.name))
    except (StudyGroupError, DomainError):
        raise
    except Exception as e:
        raise _unexpected(f"rename group {group_id}", e) from e


@router.delete("/{group_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_group(
    group_id: UUID,
    use_case: GroupManagementUseCase = Depends(
        inject_use_case(container.group_management_use_case)
    ),
) -> None:
    """Delete a group with all its sessions, passes and attendances."""
    try:
        use_case.delete_group(group_id)
    except (StudyGroupError, DomainError):
        raise
    except Exception as e:
        raise _unexpected(f"delete group {group_id}", e) from e


@router.post("/{group_id}/code", response_model=GroupResponse, status_code=status.HTTP_200_OK)
def regenerate_group_code(
    group_id: UUID,
    use_case: GroupManagementUseCase = Depends(
        inject_use_case(container.group_management_use_case)
    ),
) -> GroupResponse:
    """Derive the group code again from the group's current name."""
    try:
        return GroupResponse.from_domain(use_case.regenerate_code(group_id))
    except (StudyGroupError, DomainError):
        raise
    except Exception as e:
        raise _unexpected(f"regenerate code of group {group_id}", e) from e


@router.get(
    "/{group_id}/students", response_model=StudentsResponse, status_code=status.HTTP_200_OK
)
def list_students(
    group_id: UUID,
    use_case: RosterUseCase = Depends(inject_use_case(container.roster_use_case)),
) -> StudentsResponse:
    try:
        return StudentsResponse.from_domain(group_id, use_case.list_students(group_id))
    except (StudyGroupError, DomainError):
        raise
    except Exception as e:
        raise _unexpected(f"list students of group {group_id}", e) from e


@router.put(
    "/{group_id}/students", response_model=StudentsResponse, status_code=status.HTTP_200_OK
)
def replace_students(
    group_id: UUID,
    request: RosterReplaceRequest,
    use_case: RosterUseCase = Depends(inject_use_case(container.roster_use_case)),
) -> StudentsResponse:
    """Replace the whole roster of a group. The new roster cannot be empty."""
    try:
        students = use_case.replace_roster(group_id, request.student_ids)
        return StudentsResponse.from_domain(group_id, students)
    except (StudyGroupError, DomainError):
        raise
    except Exception as e:
        raise _unexpected(f"replace roster of group {group_id}", e) from e


@router.put(
    "/{group_id}/students/{student_id}",
    response_model=RosterChangeResponse,
    status_code=status.HTTP_200_OK,
)
def register_student(
    group_id: UUID,
    student_id: UUID,
    use_case: RosterUseCase = Depends(inject_use_case(container.roster_use_case)),
) -> RosterChangeResponse:
    """
    Register a student in a group.

    Idempotent: registering an already registered student succeeds with
    ``changed`` set to false.
    """
    try:
        changed = use_case.register_student(group_id, student_id)
        return RosterChangeResponse(group_id=group_id, student_id=student_id, changed=changed)
    except (StudyGroupError, DomainError):
        raise
    except Exception as e:
        raise _unexpected(f"register student {student_id} in group {group_id}", e) from e


@router.delete(
    "/{group_id}/students/{student_id}",
    response_model=RosterChangeResponse,
    status_code=status.HTTP_200_OK,
)
def deregister_student(
    group_id: UUID,
    student_id: UUID,
    use_case: RosterUseCase = Depends(inject_use_case(container.roster_use_case)),
) -> RosterChangeResponse:
    """Remove a student from a group. Idempotent like registration."""
    try:
        changed = use_case.deregister_student(group_id, student_id)
        return RosterChangeResponse(group_id=group_id, student_id=student_id, changed=changed)
    except (StudyGroupError, DomainError):
        raise
    except Exception as e:
        raise _unexpected(f"deregister student {student_id} from group {group_id}", e) from e
