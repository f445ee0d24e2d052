import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from starlette import status

from studygroup.application.groups.use_cases import AttendanceQueryUseCase, PassUseCase
from studygroup.core import container
from studygroup.domain.common.exceptions import DomainError
from studygroup.exceptions import StudyGroupError
from studygroup.infrastructure.common.di import inject_use_case
from studygroup.infrastructure.groups.schemas import (
    AttendanceResponse,
    AttendancesResponse,
    PassIssueRequest,
    PassRedeemRequest,
    PassResponse,
)
from studygroup.infrastructure.identity import CurrentUserId, get_current_user_id

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/groups/{group_id}",
    tags=["attendance"],
    dependencies=[Depends(get_current_user_id)],
)


@router.post(
    "/sessions/{session_id}/passes",
    response_model=PassResponse,
    status_code=status.HTTP_201_CREATED,
)
def issue_pass(
    group_id: UUID,
    session_id: UUID,
    request: PassIssueRequest,
    current_user_id: CurrentUserId,
    use_case: PassUseCase = Depends(inject_use_case(container.pass_use_case)),
) -> PassResponse:
    """
    Issue an attendance pass for a session.

    The caller becomes the requester. The response carries the redemption
    code, which the requestee hands in to have their attendance recorded
    before the pass expires.

    Args:
        group_id: ID of the group
        session_id: ID of the session
        request: The requestee of the pass
        current_user_id: Authenticated caller
        use_case: PassUseCase injected via dependency container

    Returns:
        The issued pass

    Raises:
        HTTPException: 404 for an unknown group or session, 409 if the
            requestee already holds a live pass or already attended
    """
    try:
        issued = use_case.issue_pass(
            group_id, session_id, current_user_id.value, request.requestee_id
        )
        return PassResponse.from_domain(issued)
    except (StudyGroupError, DomainError):
        # Re-raise custom exceptions - handled by exception handlers
        raise
    except Exception as e:
        logger.error(f"Failed to issue pass for session {session_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get(
    "/sessions/{session_id}/passes/{requestee_id}",
    response_model=PassResponse,
    status_code=status.HTTP_200_OK,
)
def get_live_pass(
    group_id: UUID,
    session_id: UUID,
    requestee_id: UUID,
    use_case: PassUseCase = Depends(inject_use_case(container.pass_use_case)),
) -> PassResponse:
    """Get a user's pass for a session while it is still redeemable."""
    try:
        return PassResponse.from_domain(
            use_case.get_live_pass(group_id, session_id, requestee_id)
        )
    except (StudyGroupError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to get live pass for session {session_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post(
    "/sessions/{session_id}/attendances",
    response_model=AttendanceResponse,
    status_code=status.HTTP_201_CREATED,
)
def redeem_pass(
    group_id: UUID,
    session_id: UUID,
    request: PassRedeemRequest,
    use_case: PassUseCase = Depends(inject_use_case(container.pass_use_case)),
) -> AttendanceResponse:
    """
    Redeem a pass code and record the requestee's attendance.

    Unknown and expired codes are rejected with 409, as are codes whose
    requestee already attended or is not registered in the group.
    """
    try:
        attendance = use_case.redeem_pass(group_id, session_id, request.code)
        return AttendanceResponse.from_domain(attendance)
    except (StudyGroupError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to redeem pass for session {session_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get(
    "/sessions/{session_id}/attendances/{student_id}",
    response_model=AttendanceResponse,
    status_code=status.HTTP_200_OK,
)
def get_attendance(
    group_id: UUID,
    session_id: UUID,
    student_id: UUID,
    use_case: AttendanceQueryUseCase = Depends(
        inject_use_case(container.attendance_query_use_case)
    ),
) -> AttendanceResponse:
    try:
        attendance = use_case.get_attendance(group_id, session_id, student_id)
        return AttendanceResponse.from_domain(attendance)
    except (StudyGroupError, DomainError):
        raise
    except Exception as e:
        logger.error(
            f"Failed to get attendance of {student_id} for session {session_id}: {e!s}",
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get("/attendances", response_model=AttendancesResponse, status_code=status.HTTP_200_OK)
def list_attendances(
    group_id: UUID,
    student_id: UUID | None = None,
    session_id: UUID | None = None,
    use_case: AttendanceQueryUseCase = Depends(
        inject_use_case(container.attendance_query_use_case)
    ),
) -> AttendancesResponse:
    """Get the attendances recorded in a group, optionally for one student and/or session."""
    try:
        attendances = use_case.list_attendances(
            group_id, student_id=student_id, session_id=session_id
        )
        return AttendancesResponse(
            attendances=[AttendanceResponse.from_domain(a) for a in attendances]
        )
    except (StudyGroupError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to list attendances of group {group_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
