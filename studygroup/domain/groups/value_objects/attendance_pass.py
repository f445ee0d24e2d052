"""
Pass value object.

A pass is a short-lived capability one user (the requester) issues so that
another user's (the requestee's) attendance can be recorded for one session.
It is redeemed by presenting its code.
"""

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Self

from studygroup.domain.common.exceptions import ValidationError
from studygroup.domain.common.validation import check_not_blank, check_timezone_aware, require
from studygroup.domain.common.value_object import ValueObject
from studygroup.domain.common.value_objects import SessionId, UserId

DEFAULT_PASS_VALIDITY = timedelta(minutes=5)
DEFAULT_PASS_CODE_LENGTH = 8

# Upper-case letters and digits without the easily confused 0/O and 1/I
PASS_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"


def generate_pass_code(length: int = DEFAULT_PASS_CODE_LENGTH) -> str:
    """Return a random redemption code drawn from PASS_CODE_ALPHABET."""
    return "".join(secrets.choice(PASS_CODE_ALPHABET) for _ in range(length))


@dataclass(frozen=True)
class Pass(ValueObject):
    """
    Time-limited, single-target attendance capability.

    Business Rules:
    - Validity must be positive
    - A pass is expired once ``now`` reaches ``issued_at + validity``
    - Redemption does not delete the pass; the requestee's attendance
      record is what prevents a second redemption
    """

    session_id: SessionId
    requester_id: UserId
    requestee_id: UserId
    code: str
    issued_at: datetime
    validity: timedelta = DEFAULT_PASS_VALIDITY

    def __post_init__(self) -> None:
        """Validate invariants."""
        require(
            check_not_blank(self.code, "code"),
            check_timezone_aware(self.issued_at, "issued_at"),
        )
        if self.validity <= timedelta(0):
            raise ValidationError(
                "Pass validity must be positive", field="validity", value=str(self.validity)
            )

    @property
    def student_id(self) -> UserId:
        """The student whose attendance the pass records."""
        return self.requestee_id

    @property
    def expires_at(self) -> datetime:
        return self.issued_at + self.validity

    def is_expired(self, now: datetime) -> bool:
        """Check whether the validity window has elapsed at ``now``."""
        return now >= self.expires_at

    @classmethod
    def issue(
        cls,
        session_id: SessionId,
        requester_id: UserId,
        requestee_id: UserId,
        issued_at: datetime,
        validity: timedelta = DEFAULT_PASS_VALIDITY,
        code: str | None = None,
    ) -> Self:
        """
        Issue a new pass.

        Args:
            session_id: Session the pass is valid for
            requester_id: User issuing the pass
            requestee_id: User whose attendance the pass records
            issued_at: Issuance time, used for expiry
            validity: How long the pass stays redeemable
            code: Redemption code (random if not given)

        Returns:
            New Pass instance
        """
        return cls(
            session_id=session_id,
            requester_id=requester_id,
            requestee_id=requestee_id,
            code=code or generate_pass_code(),
            issued_at=issued_at,
            validity=validity,
        )
