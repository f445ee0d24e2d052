"""Use case for issuing and redeeming attendance passes."""

from datetime import timedelta
from uuid import UUID

import structlog

from studygroup.application.groups.protocols.group_repository import GroupRepositoryProtocol
from studygroup.application.groups.use_cases.exceptions import LivePassNotFoundError
from studygroup.application.groups.use_cases.group_loader import load_group
from studygroup.domain.common.value_objects import SessionId, UserId
from studygroup.domain.groups import Attendance, Pass
from studygroup.domain.groups.value_objects import DEFAULT_PASS_CODE_LENGTH, DEFAULT_PASS_VALIDITY

logger = structlog.get_logger(__name__)


class PassUseCase:
    """
    Pass issuance and redemption.

    Both operations load the group with a row lock so that concurrent
    requests for the same group run one after the other.
    """

    def __init__(
        self,
        group_repository: GroupRepositoryProtocol,
        pass_validity: timedelta = DEFAULT_PASS_VALIDITY,
        pass_code_length: int = DEFAULT_PASS_CODE_LENGTH,
    ) -> None:
        self.group_repository = group_repository
        self.pass_validity = pass_validity
        self.pass_code_length = pass_code_length

    def issue_pass(
        self,
        group_id: UUID,
        session_id: UUID,
        requester_id: UUID,
        requestee_id: UUID,
    ) -> Pass:
        """
        Issue a pass for a student to have their attendance recorded.

        Args:
            group_id: ID of the group
            session_id: ID of the session the pass is for
            requester_id: User issuing the pass
            requestee_id: User the pass is for

        Returns:
            The issued pass with its redemption code

        Raises:
            GroupNotFoundError: If the group does not exist
            SessionNotFoundError: If the group has no such session
            LivePassExistsError: If the requestee already holds a live pass
            AlreadyAttendedError: If the requestee already attended
        """
        group = load_group(self.group_repository, group_id, for_update=True)
        issued = group.issue_pass(
            SessionId(session_id),
            UserId(requester_id),
            UserId(requestee_id),
            validity=self.pass_validity,
            code_length=self.pass_code_length,
        )

        self.group_repository.save(group)
        logger.info(
            "issued_pass",
            group_id=str(group_id),
            session_id=str(session_id),
            requester_id=str(requester_id),
            requestee_id=str(requestee_id),
            expires_at=issued.expires_at.isoformat(),
        )
        return issued

    def redeem_pass(self, group_id: UUID, session_id: UUID, code: str) -> Attendance:
        """
        Redeem a pass code and record the requestee's attendance.

        Args:
            group_id: ID of the group
            session_id: ID of the session
            code: Redemption code of the pass

        Returns:
            The recorded attendance

        Raises:
            GroupNotFoundError: If the group does not exist
            SessionNotFoundError: If the group has no such session
            InvalidPassError: If no live pass matches the code
            DuplicateAttendanceError: If the pass was already redeemed
            NotRegisteredError: If the requestee is not on the roster
        """
        group = load_group(self.group_repository, group_id, for_update=True)
        attendance = group.redeem_pass(SessionId(session_id), code)

        self.group_repository.save(group)
        logger.info(
            "recorded_attendance",
            group_id=str(group_id),
            session_id=str(session_id),
            student_id=str(attendance.student_id),
        )
        return attendance

    def get_live_pass(self, group_id: UUID, session_id: UUID, requestee_id: UUID) -> Pass:
        """
        Get the requestee's pass for a session while it can still be redeemed.

        Raises:
            GroupNotFoundError: If the group does not exist
            SessionNotFoundError: If the group has no such session
            LivePassNotFoundError: If the requestee holds no live pass
        """
        group = load_group(self.group_repository, group_id)
        live = group.session(SessionId(session_id)).live_pass_for(UserId(requestee_id))
        if live is None:
            raise LivePassNotFoundError(session_id, requestee_id)
        return live
