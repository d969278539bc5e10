"""Unauthenticated access to shared files."""

from fastapi import APIRouter, Depends

from hostnote.dependencies import get_share_service
from hostnote.schemas.files import PublicFileResponse
from hostnote.services.share_service import ShareService

router = APIRouter(prefix="/api/public", tags=["Public"])


@router.get("/{public_id}", response_model=PublicFileResponse)
def read_public_file(
    public_id: str,
    share_service: ShareService = Depends(get_share_service),
):
    """
    Read a shared file by its public link token.

    Raises:
        - 400: Token is not 32 lowercase hex characters
        - 404: Unknown token or file no longer available
    """
    public_file = share_service.read_public(public_id)
    return PublicFileResponse(name=public_file.name, content=public_file.content)
