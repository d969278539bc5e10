"""Sidecar metadata records (public sharing state) stored next to each file."""

import json
import logging
from pathlib import Path
from typing import Iterator, Optional, Tuple

from hostnote.constants import METADATA_PREFIX, METADATA_SUFFIX
from hostnote.namespace import NamespaceResolver
from hostnote.repositories.file_repository import storage_errors
from hostnote.types import FileMetadata

logger = logging.getLogger(__name__)


def sidecar_name(filename: str) -> str:
    """
    Get the sidecar name for a content filename: ".<filename>.meta.json".

    Valid content names never start with a dot, so a sidecar name can
    never be chosen by a user.
    """
    return f"{METADATA_PREFIX}{filename}{METADATA_SUFFIX}"


def filename_from_sidecar(name: str) -> Optional[str]:
    """
    Recover the content filename from a sidecar name.

    Returns:
        The content filename, or None if name is not a sidecar
    """
    if not (name.startswith(METADATA_PREFIX) and name.endswith(METADATA_SUFFIX)):
        return None
    filename = name[len(METADATA_PREFIX):-len(METADATA_SUFFIX)]
    return filename or None


class MetadataRepository:
    """
    Reads and writes FileMetadata sidecars. Filenames must already be validated.
    """

    def __init__(self, resolver: NamespaceResolver):
        self.resolver = resolver

    def get_path(self, identity: str, filename: str) -> Path:
        return self.resolver.user_dir(identity) / sidecar_name(filename)

    def get(self, identity: str, filename: str) -> FileMetadata:
        """
        Load a file's sharing metadata.

        Missing, unreadable or corrupt sidecars yield the default
        (not public) record instead of an error.
        """
        return self._load(self.get_path(identity, filename)) or FileMetadata()

    def put(self, identity: str, filename: str, metadata: FileMetadata) -> None:
        path = self.get_path(identity, filename)
        with storage_errors("save metadata for", filename):
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(metadata.to_dict(), separators=(",", ":")), encoding="utf-8")

    def delete(self, identity: str, filename: str) -> bool:
        """
        Remove a sidecar.

        Returns:
            True if a sidecar was removed, False if there was none
        """
        path = self.get_path(identity, filename)
        with storage_errors("delete metadata for", filename):
            try:
                path.unlink()
            except FileNotFoundError:
                return False
        return True

    def move(self, identity: str, old_name: str, new_name: str) -> bool:
        """
        Rename a sidecar alongside its content file.

        Returns:
            True if a sidecar was moved, False if there was none
        """
        old_path = self.get_path(identity, old_name)
        new_path = self.get_path(identity, new_name)
        with storage_errors("rename metadata for", old_name):
            try:
                old_path.rename(new_path)
            except FileNotFoundError:
                return False
        return True

    def iter_records(self) -> Iterator[Tuple[str, str, FileMetadata]]:
        """
        Scan every namespace for sidecars.

        Corrupt or unreadable sidecars are logged and skipped.

        Yields:
            (namespace, filename, metadata) tuples
        """
        for user_dir in self.resolver.iter_namespace_dirs():
            try:
                names = sorted(p.name for p in user_dir.iterdir())
            except OSError as e:
                logger.warning(f"Skipping unreadable namespace {user_dir.name}: {e}")
                continue

            for name in names:
                filename = filename_from_sidecar(name)
                if filename is None:
                    continue
                metadata = self._load(user_dir / name)
                if metadata is None:
                    continue
                yield user_dir.name, filename, metadata

    def _load(self, path: Path) -> Optional[FileMetadata]:
        try:
            with path.open("r", encoding="utf-8") as f:
                return FileMetadata.from_dict(json.load(f))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable metadata {path.name}: {e}")
            return None
