"""Current user API route."""

from fastapi import APIRouter, Request

from hostnote.auth import EMAIL_HEADER, PREFERRED_USERNAME_HEADER, USER_HEADER
from hostnote.exceptions import UnauthorizedError
from hostnote.schemas.user import UserInfoResponse

router = APIRouter(prefix="/api", tags=["User"])


@router.get("/user", response_model=UserInfoResponse)
def current_user_info(request: Request):
    """
    Describe the identity the reverse proxy asserted for this request.

    Raises:
        - 401: Neither user nor email header present
    """
    user = request.headers.get(USER_HEADER) or None
    email = request.headers.get(EMAIL_HEADER) or None
    preferred = request.headers.get(PREFERRED_USERNAME_HEADER) or user

    if not user and not email:
        raise UnauthorizedError("Not authenticated")

    return UserInfoResponse(
        username=user,
        email=email,
        display_name=preferred or user,
        avatar_url=f"https://github.com/{user}.png?size=80" if user else None,
    )
