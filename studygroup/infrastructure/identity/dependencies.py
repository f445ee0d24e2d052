"""FastAPI dependencies for the caller's identity."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, HTTPException
from starlette import status

from studygroup.domain.common.value_objects import UserId

USER_ID_HEADER = "X-User-Id"

CredentialsException = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail=f"Missing or invalid {USER_ID_HEADER} header",
)


def get_current_user_id(
    x_user_id: Annotated[str | None, Header(alias=USER_ID_HEADER)] = None,
) -> UserId:
    """
    Get the id of the calling user.

    Authentication happens upstream: the identity provider in front of this
    service verifies the user and forwards their id in the X-User-Id header.

    Raises:
        HTTPException: 401 if the header is missing or not a UUID
    """
    if not x_user_id:
        raise CredentialsException
    try:
        return UserId(UUID(x_user_id))
    except ValueError:
        raise CredentialsException from None


CurrentUserId = Annotated[UserId, Depends(get_current_user_id)]
