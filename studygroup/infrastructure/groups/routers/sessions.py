import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from starlette import status

from studygroup.application.groups.use_cases import SessionSchedulingUseCase
from studygroup.core import container
from studygroup.domain.common.exceptions import DomainError
from studygroup.domain.groups import SessionType
from studygroup.exceptions import StudyGroupError
from studygroup.infrastructure.common.di import inject_use_case
from studygroup.infrastructure.groups.schemas import (
    SessionCreateRequest,
    SessionResponse,
    SessionsResponse,
    SessionUpdateRequest,
    UnscheduleResponse,
)
from studygroup.infrastructure.identity import get_current_user_id

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/groups/{group_id}/sessions",
    tags=["sessions"],
    dependencies=[Depends(get_current_user_id)],
)


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
def schedule_session(
    group_id: UUID,
    request: SessionCreateRequest,
    use_case: SessionSchedulingUseCase = Depends(
        inject_use_case(container.session_scheduling_use_case)
    ),
) -> SessionResponse:
    """
    Schedule a session in a group.

    Args:
        group_id: ID of the group
        request: Session type, location and time window
        use_case: SessionSchedulingUseCase injected via dependency container

    Returns:
        The scheduled session

    Raises:
        HTTPException: If the group is not found or the time window is invalid
    """
    try:
        session = use_case.schedule_session(
            group_id,
            request.session_type,
            request.location,
            request.begins,
            request.ends,
        )
        return SessionResponse.from_domain(group_id, session)
    except (StudyGroupError, DomainError):
        # Re-raise custom exceptions - handled by exception handlers
        raise
    except Exception as e:
        logger.error(f"Failed to schedule session in group {group_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get("", response_model=SessionsResponse, status_code=status.HTTP_200_OK)
def list_sessions(
    group_id: UUID,
    session_type: SessionType | None = None,
    use_case: SessionSchedulingUseCase = Depends(
        inject_use_case(container.session_scheduling_use_case)
    ),
) -> SessionsResponse:
    """Get the sessions of a group in schedule order, optionally of one type."""
    try:
        sessions = use_case.list_sessions(group_id, session_type)
        return SessionsResponse(
            sessions=[SessionResponse.from_domain(group_id, s) for s in sessions]
        )
    except (StudyGroupError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to list sessions of group {group_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get("/{session_id}", response_model=SessionResponse, status_code=status.HTTP_200_OK)
def get_session(
    group_id: UUID,
    session_id: UUID,
    use_case: SessionSchedulingUseCase = Depends(
        inject_use_case(container.session_scheduling_use_case)
    ),
) -> SessionResponse:
    try:
        return SessionResponse.from_domain(group_id, use_case.get_session(group_id, session_id))
    except (StudyGroupError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to get session {session_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.patch("/{session_id}", response_model=SessionResponse, status_code=status.HTTP_200_OK)
def update_session(
    group_id: UUID,
    session_id: UUID,
    request: SessionUpdateRequest,
    use_case: SessionSchedulingUseCase = Depends(
        inject_use_case(container.session_scheduling_use_case)
    ),
) -> SessionResponse:
    """
    Repurpose, relocate or reschedule a session.

    Omitted fields keep their value. When only one time bound is sent the
    other one is kept and the resulting window must still be valid.
    """
    try:
        session = use_case.update_session(
            group_id,
            session_id,
            session_type=request.session_type,
            location=request.location,
            begins=request.begins,
            ends=request.ends,
        )
        return SessionResponse.from_domain(group_id, session)
    except (StudyGroupError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to update session {session_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_session(
    group_id: UUID,
    session_id: UUID,
    use_case: SessionSchedulingUseCase = Depends(
        inject_use_case(container.session_scheduling_use_case)
    ),
) -> None:
    """Remove a session together with its passes and attendances."""
    try:
        use_case.remove_session(group_id, session_id)
    except (StudyGroupError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to remove session {session_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.delete("", response_model=UnscheduleResponse, status_code=status.HTTP_200_OK)
def unschedule_group(
    group_id: UUID,
    use_case: SessionSchedulingUseCase = Depends(
        inject_use_case(container.session_scheduling_use_case)
    ),
) -> UnscheduleResponse:
    """Remove every session of a group."""
    try:
        removed = use_case.unschedule(group_id)
        return UnscheduleResponse(group_id=group_id, removed=removed)
    except (StudyGroupError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to unschedule group {group_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
