"""Pydantic schemas for the current-user endpoint."""

from typing import Optional

from hostnote.schemas.common import CamelModel


class UserInfoResponse(CamelModel):
    """Response model for the identity asserted by the reverse proxy."""
    username: Optional[str] = None
    email: Optional[str] = None
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
