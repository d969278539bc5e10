"""Filesystem repositories for file contents and sidecar metadata."""

from hostnote.repositories.file_repository import FileRepository
from hostnote.repositories.metadata_repository import MetadataRepository

__all__ = [
    "FileRepository",
    "MetadataRepository",
]
