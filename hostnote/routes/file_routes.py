"""File operation API routes."""

from typing import List

from fastapi import APIRouter, Depends

from hostnote.auth import get_current_user
from hostnote.dependencies import get_file_service, get_share_service
from hostnote.schemas.files import (
    DeleteFileResponse,
    FileContentResponse,
    FileEntryResponse,
    RenameFileRequest,
    RenameFileResponse,
    SaveFileRequest,
    SaveFileResponse,
    ShareFileResponse,
    UnshareFileResponse,
)
from hostnote.services.file_service import FileService
from hostnote.services.share_service import ShareService

router = APIRouter(prefix="/api/files", tags=["Files"])


@router.get("", response_model=List[FileEntryResponse])
def list_files(
    current_user: str = Depends(get_current_user),
    file_service: FileService = Depends(get_file_service),
):
    """
    List the caller's files.

    Returns:
        - name, size (stored bytes), modified, isPublic, publicId per file

    Raises:
        - 401: No identity asserted by the proxy
    """
    return [
        FileEntryResponse(
            name=entry.name,
            size=entry.size,
            modified=entry.modified,
            is_public=entry.is_public,
            public_id=entry.public_id,
        )
        for entry in file_service.list_files(current_user)
    ]


@router.get("/{filename}", response_model=FileContentResponse)
def read_file(
    filename: str,
    current_user: str = Depends(get_current_user),
    file_service: FileService = Depends(get_file_service),
):
    """
    Read and decrypt one file.

    Raises:
        - 400: Invalid filename
        - 401: No identity asserted by the proxy
        - 404: File not found (or failed decryption)
    """
    content = file_service.read_file(current_user, filename)
    return FileContentResponse(name=filename, content=content)


@router.post("/{filename}", response_model=SaveFileResponse)
def save_file(
    filename: str,
    request: SaveFileRequest,
    current_user: str = Depends(get_current_user),
    file_service: FileService = Depends(get_file_service),
):
    """
    Create or fully replace a file.

    Parameters:
        - content: File text (max 5 MiB as UTF-8)

    Raises:
        - 400: Invalid filename
        - 401: No identity asserted by the proxy
        - 413: Content too large
        - 422: Content missing or not a string
    """
    file_service.write_file(current_user, filename, request.content)
    return SaveFileResponse(name=filename)


@router.delete("/{filename}", response_model=DeleteFileResponse)
def delete_file(
    filename: str,
    current_user: str = Depends(get_current_user),
    file_service: FileService = Depends(get_file_service),
):
    """
    Delete a file, its metadata and any public link to it.

    Raises:
        - 400: Invalid filename
        - 401: No identity asserted by the proxy
        - 404: File not found
    """
    file_service.delete_file(current_user, filename)
    return DeleteFileResponse()


@router.put("/{filename}/rename", response_model=RenameFileResponse)
def rename_file(
    filename: str,
    request: RenameFileRequest,
    current_user: str = Depends(get_current_user),
    file_service: FileService = Depends(get_file_service),
):
    """
    Rename a file. Public links keep working under the new name.

    Parameters:
        - newName: Target filename

    Raises:
        - 400: Invalid filename
        - 401: No identity asserted by the proxy
        - 404: File not found
        - 409: Target name already exists
    """
    file_service.rename_file(current_user, filename, request.new_name)
    return RenameFileResponse(new_name=request.new_name)


@router.post("/{filename}/share", response_model=ShareFileResponse)
def share_file(
    filename: str,
    current_user: str = Depends(get_current_user),
    share_service: ShareService = Depends(get_share_service),
):
    """
    Make a file public. Repeated calls return the same link.

    Raises:
        - 400: Invalid filename
        - 401: No identity asserted by the proxy
        - 404: File not found
    """
    result = share_service.share(current_user, filename)
    return ShareFileResponse(public_id=result.public_id, public_url=result.public_url)


@router.post("/{filename}/unshare", response_model=UnshareFileResponse)
def unshare_file(
    filename: str,
    current_user: str = Depends(get_current_user),
    share_service: ShareService = Depends(get_share_service),
):
    """
    Make a file private again.

    Raises:
        - 400: Invalid filename
        - 401: No identity asserted by the proxy
        - 404: File not found
    """
    share_service.unshare(current_user, filename)
    return UnshareFileResponse()
