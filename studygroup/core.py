from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from studygroup.application.groups.use_cases import (
    AttendanceQueryUseCase,
    GroupManagementUseCase,
    PassUseCase,
    RosterUseCase,
    SessionSchedulingUseCase,
)
from studygroup.config import get_settings
from studygroup.domain.common.clock import utc_now
from studygroup.infrastructure.groups.repositories import GroupRepository


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    settings = providers.Callable(get_settings)
    clock = providers.Object(utc_now)

    # Repositories
    group_repository = providers.Factory(GroupRepository, db=db, clock=clock)

    # Study groups module, application use cases
    group_management_use_case = providers.Factory(
        GroupManagementUseCase,
        group_repository=group_repository,
    )
    roster_use_case = providers.Factory(
        RosterUseCase,
        group_repository=group_repository,
    )
    session_scheduling_use_case = providers.Factory(
        SessionSchedulingUseCase,
        group_repository=group_repository,
    )
    pass_use_case = providers.Factory(
        PassUseCase,
        group_repository=group_repository,
        pass_validity=settings.provided.pass_validity,
        pass_code_length=settings.provided.PASS_CODE_LENGTH,
    )
    attendance_query_use_case = providers.Factory(
        AttendanceQueryUseCase,
        group_repository=group_repository,
    )


container = Container()
