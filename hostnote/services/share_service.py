"""Share service: public links over files in a user's namespace."""

import logging

from hostnote.constants import PUBLIC_URL_PREFIX
from hostnote.exceptions import NotFoundError
from hostnote.public_registry import PublicLinkRegistry
from hostnote.repositories.file_repository import FileRepository
from hostnote.repositories.metadata_repository import MetadataRepository
from hostnote.services.file_service import FileService, require_identity
from hostnote.types import PublicFile, ShareResult
from hostnote.utils import generate_public_id, validate_filename

logger = logging.getLogger(__name__)


def build_public_url(public_id: str) -> str:
    return f"{PUBLIC_URL_PREFIX}{public_id}"


class ShareService:
    def __init__(
        self,
        file_service: FileService,
        file_repo: FileRepository,
        metadata_repo: MetadataRepository,
        registry: PublicLinkRegistry,
    ):
        self.file_service = file_service
        self.file_repo = file_repo
        self.metadata_repo = metadata_repo
        self.registry = registry

    def share(self, identity: str, filename: str) -> ShareResult:
        """
        Make a file publicly readable. Sharing an already shared file
        returns its existing token.

        Raises:
            NotFoundError: No such document
        """
        require_identity(identity)
        validate_filename(filename)

        if not self.file_repo.exists(identity, filename):
            raise NotFoundError("File not found")

        metadata = self.metadata_repo.get(identity, filename)
        if metadata.is_shared:
            return ShareResult(public_id=metadata.public_id, public_url=build_public_url(metadata.public_id))

        public_id = generate_public_id()
        metadata.is_public = True
        metadata.public_id = public_id
        metadata.user_id = identity

        self.metadata_repo.put(identity, filename, metadata)
        self.registry.add(public_id, identity, filename)

        logger.info(f"ACTION: User {identity} made file public - {filename} (token={public_id})")

        return ShareResult(public_id=public_id, public_url=build_public_url(public_id))

    def unshare(self, identity: str, filename: str) -> None:
        """
        Revoke a file's public link.

        The in-memory entry is dropped before the sidecar is rewritten so
        public reads stop resolving as early as possible.

        Raises:
            NotFoundError: No such document
        """
        require_identity(identity)
        validate_filename(filename)

        if not self.file_repo.exists(identity, filename):
            raise NotFoundError("File not found")

        metadata = self.metadata_repo.get(identity, filename)
        if metadata.public_id:
            self.registry.remove(metadata.public_id)

        metadata.is_public = False
        metadata.public_id = None
        self.metadata_repo.put(identity, filename, metadata)

        logger.info(f"ACTION: User {identity} made file private - {filename}")

    def read_public(self, public_id: str) -> PublicFile:
        """
        Read a shared file without authentication.

        Raises:
            InvalidInputError: Malformed token
            NotFoundError: Unknown token or the file is gone
            AuthenticationError: Shared file failed decryption
        """
        entry = self.registry.resolve(public_id)
        content = self.file_service.read_file(entry.identity, entry.filename)
        return PublicFile(name=entry.filename, content=content)
