"""Service layer for business logic."""

from hostnote.services.file_service import FileService
from hostnote.services.share_service import ShareService

__all__ = [
    "FileService",
    "ShareService",
]
