"""In-memory index: public link token -> (identity, filename)."""

import logging
import threading
from typing import Dict, Optional

from hostnote.exceptions import InvalidInputError, NotFoundError
from hostnote.namespace import resolve_namespace
from hostnote.repositories.metadata_repository import MetadataRepository
from hostnote.types import PublicLinkEntry
from hostnote.utils import is_valid_filename, is_valid_public_id

logger = logging.getLogger(__name__)


class PublicLinkRegistry:
    """
    Cache of every shared file, keyed by public link token.

    The sidecar metadata on disk is the source of truth; rebuild()
    reconstructs this map from it at any time. All access goes through
    a single lock.
    """

    def __init__(self):
        self._links: Dict[str, PublicLinkEntry] = {}
        self._lock = threading.Lock()

    def add(self, public_id: str, identity: str, filename: str) -> None:
        with self._lock:
            self._links[public_id] = PublicLinkEntry(identity=identity, filename=filename)

    def remove(self, public_id: str) -> bool:
        """
        Drop a token.

        Returns:
            True if the token was present
        """
        with self._lock:
            return self._links.pop(public_id, None) is not None

    def get(self, public_id: str) -> Optional[PublicLinkEntry]:
        with self._lock:
            return self._links.get(public_id)

    def resolve(self, public_id: str) -> PublicLinkEntry:
        """
        Look up the file behind a public link.

        Args:
            public_id: Token from the public URL

        Returns:
            PublicLinkEntry for the shared file

        Raises:
            InvalidInputError: If the token is not 32 lowercase hex characters
            NotFoundError: If no shared file carries the token
        """
        if not is_valid_public_id(public_id):
            raise InvalidInputError("Invalid public ID format")
        entry = self.get(public_id)
        if entry is None:
            raise NotFoundError("Public file not found")
        return entry

    def count(self) -> int:
        with self._lock:
            return len(self._links)

    def rebuild(self, metadata_repo: MetadataRepository) -> int:
        """
        Replace the registry contents with what the sidecars on disk say.

        A record is loaded only when it is public, carries a well-formed
        token and owner identity, and the owner hashes to the namespace
        the sidecar was found in.

        Args:
            metadata_repo: Repository to scan

        Returns:
            Number of public links loaded
        """
        links: Dict[str, PublicLinkEntry] = {}

        for namespace, filename, metadata in metadata_repo.iter_records():
            if not metadata.is_shared:
                continue
            if not metadata.user_id or not is_valid_public_id(metadata.public_id):
                logger.warning(f"Skipping incomplete public metadata for {filename} in {namespace}")
                continue
            if not is_valid_filename(filename):
                logger.warning(f"Skipping metadata with invalid filename in {namespace}")
                continue
            if resolve_namespace(metadata.user_id) != namespace:
                logger.warning(f"Skipping metadata for {filename}: owner does not match namespace {namespace}")
                continue
            links[metadata.public_id] = PublicLinkEntry(identity=metadata.user_id, filename=filename)

        with self._lock:
            self._links = links

        logger.info(f"Loaded {len(links)} public files")
        return len(links)
