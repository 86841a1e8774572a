"""FastAPI dependency resolving the caller's identity."""

from typing import Annotated

from fastapi import Depends, Header

from chatterly.exceptions import UnauthorizedError

USER_ID_HEADER = "X-User-Id"


def get_current_user_id(
    x_user_id: Annotated[str | None, Header(alias=USER_ID_HEADER)] = None,
) -> str:
    """
    Get the trusted user id set by the upstream identity provider.

    Raises:
        UnauthorizedError: If the header is missing or blank
    """
    if x_user_id is None or not x_user_id.strip():
        raise UnauthorizedError
    return x_user_id.strip()


CurrentUserId = Annotated[str, Depends(get_current_user_id)]
