"""Trusted identity extraction from reverse-proxy headers."""

from typing import Mapping, Optional

from fastapi import Request

from hostnote.exceptions import UnauthorizedError

EMAIL_HEADER = "x-auth-request-email"
USER_HEADER = "x-auth-request-user"
PREFERRED_USERNAME_HEADER = "x-auth-request-preferred-username"


def extract_identity(headers: Mapping[str, str]) -> Optional[str]:
    """
    Get the authenticated identity injected by the reverse proxy.

    Args:
        headers: Request headers (case-insensitive mapping, lowercase keys otherwise)

    Returns:
        The email header if present, else the user header, else None
    """
    return headers.get(EMAIL_HEADER) or headers.get(USER_HEADER) or None


async def get_current_user(request: Request) -> str:
    """
    FastAPI dependency returning the caller's identity.

    Raises:
        UnauthorizedError: If the proxy did not assert an identity
    """
    identity = extract_identity(request.headers)
    if not identity:
        raise UnauthorizedError("Authentication required")
    request.state.user_id = identity
    return identity
