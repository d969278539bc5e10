"""File service: encrypted CRUD over one user's namespace."""

import logging
from datetime import datetime, timezone
from typing import List, Union

from hostnote.constants import MAX_FILE_SIZE_BYTES
from hostnote.crypto import ContentCipher
from hostnote.exceptions import (
    AuthenticationError,
    ConflictError,
    HostNoteException,
    InvalidInputError,
    NotFoundError,
    PayloadTooLargeError,
    UnauthorizedError,
)
from hostnote.public_registry import PublicLinkRegistry
from hostnote.repositories.file_repository import FileRepository
from hostnote.repositories.metadata_repository import MetadataRepository
from hostnote.types import FileEntry
from hostnote.utils import validate_filename

logger = logging.getLogger(__name__)


def require_identity(identity: str) -> str:
    if not identity or not isinstance(identity, str):
        raise UnauthorizedError("Authentication required")
    return identity


class FileService:
    def __init__(
        self,
        cipher: ContentCipher,
        file_repo: FileRepository,
        metadata_repo: MetadataRepository,
        registry: PublicLinkRegistry,
    ):
        self.cipher = cipher
        self.file_repo = file_repo
        self.metadata_repo = metadata_repo
        self.registry = registry

    def list_files(self, identity: str) -> List[FileEntry]:
        """
        List every document in the identity's namespace with its sharing state.

        A namespace that was never written to lists as empty.
        """
        require_identity(identity)

        files = []
        for name, stat in self.file_repo.list_blobs(identity):
            metadata = self.metadata_repo.get(identity, name)
            files.append(FileEntry(
                name=name,
                size=stat.st_size,
                modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
                is_public=metadata.is_public,
                public_id=metadata.public_id,
            ))
        return files

    def read_file(self, identity: str, filename: str) -> str:
        """
        Decrypt and return a document's text.

        Raises:
            InvalidInputError: Bad filename
            NotFoundError: No such document
            AuthenticationError: Blob failed verification (tampered store or wrong secret)
        """
        require_identity(identity)
        validate_filename(filename)

        blob = self.file_repo.read_blob(identity, filename)

        try:
            plaintext = self.cipher.decrypt(blob, identity)
        except AuthenticationError:
            logger.error(f"Decryption failed for user {identity} file {filename}: authentication tag mismatch")
            raise

        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError as e:
            raise AuthenticationError("Decrypted content is not valid UTF-8") from e

    def write_file(self, identity: str, filename: str, content: Union[str, bytes]) -> None:
        """
        Encrypt and store a document, replacing any previous content.

        Raises:
            InvalidInputError: Bad filename or non-text content
            PayloadTooLargeError: Content over 5 MiB
        """
        require_identity(identity)
        validate_filename(filename)

        if isinstance(content, str):
            plaintext = content.encode("utf-8")
        elif isinstance(content, bytes):
            plaintext = content
        else:
            raise InvalidInputError("Invalid content")

        if len(plaintext) > MAX_FILE_SIZE_BYTES:
            raise PayloadTooLargeError("File too large (max 5MB)")

        blob = self.cipher.encrypt(plaintext, identity)
        self.file_repo.write_blob(identity, filename, blob)

        logger.info(f"ACTION: User {identity} saved file - {filename}")

    def delete_file(self, identity: str, filename: str) -> None:
        """
        Delete a document and its sidecar, revoking its public link first.

        Raises:
            NotFoundError: No such document
        """
        require_identity(identity)
        validate_filename(filename)

        if not self.file_repo.exists(identity, filename):
            raise NotFoundError("File not found")

        metadata = self.metadata_repo.get(identity, filename)
        if metadata.is_shared:
            self.registry.remove(metadata.public_id)

        self.file_repo.delete_blob(identity, filename)
        self.metadata_repo.delete(identity, filename)

        logger.info(f"ACTION: User {identity} deleted file - {filename}")

    def rename_file(self, identity: str, old_name: str, new_name: str) -> None:
        """
        Rename a document and its sidecar. A public link keeps its token
        and follows the file to its new name.

        Raises:
            NotFoundError: old_name does not exist
            ConflictError: new_name already exists
        """
        require_identity(identity)
        validate_filename(old_name)
        validate_filename(new_name)

        if self.file_repo.exists(identity, new_name):
            raise ConflictError("File already exists")
        if not self.file_repo.exists(identity, old_name):
            raise NotFoundError("File not found")

        metadata = self.metadata_repo.get(identity, old_name)

        self.file_repo.move_blob(identity, old_name, new_name)
        try:
            self.metadata_repo.move(identity, old_name, new_name)
        except HostNoteException:
            logger.error(f"Metadata rename failed for {old_name}; restoring content name")
            self.file_repo.move_blob(identity, new_name, old_name)
            raise

        if metadata.is_shared:
            self.registry.add(metadata.public_id, identity, new_name)

        logger.info(f"ACTION: User {identity} renamed file - {old_name} -> {new_name}")
