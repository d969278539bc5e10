"""Ciphertext blob storage inside a user's namespace directory."""

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Tuple

from hostnote.constants import METADATA_PREFIX, TEMP_SUFFIX
from hostnote.exceptions import InternalError, NotFoundError
from hostnote.namespace import NamespaceResolver

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors(action: str, filename: str) -> Iterator[None]:
    """
    Translate low-level I/O failures into the storage error taxonomy.

    FileNotFoundError becomes NotFoundError; any other OSError becomes
    InternalError with the detail logged but not propagated.
    """
    try:
        yield
    except FileNotFoundError as e:
        raise NotFoundError("File not found") from e
    except OSError as e:
        logger.error(f"Storage failure during {action} of {filename}: {e}")
        raise InternalError(f"Failed to {action} file") from e


class FileRepository:
    """
    Reads and writes opaque ciphertext blobs. Filenames must already be validated.
    """

    def __init__(self, resolver: NamespaceResolver):
        self.resolver = resolver

    def get_path(self, identity: str, filename: str) -> Path:
        return self.resolver.user_dir(identity) / filename

    def exists(self, identity: str, filename: str) -> bool:
        return self.get_path(identity, filename).is_file()

    def list_blobs(self, identity: str) -> List[Tuple[str, os.stat_result]]:
        """
        List stored documents in a namespace.

        Dot-files (metadata sidecars, in-flight temp files) and anything
        that is not a regular file are skipped.

        Args:
            identity: Owner identity string

        Returns:
            List of (filename, stat) tuples sorted by filename; empty if the namespace does not exist
        """
        user_dir = self.resolver.user_dir(identity)
        if not user_dir.is_dir():
            return []

        entries = []
        with storage_errors("list", user_dir.name):
            for entry in os.scandir(user_dir):
                if entry.name.startswith(METADATA_PREFIX):
                    continue
                if not entry.is_file(follow_symlinks=False):
                    continue
                entries.append((entry.name, entry.stat(follow_symlinks=False)))

        entries.sort(key=lambda item: item[0])
        return entries

    def read_blob(self, identity: str, filename: str) -> bytes:
        """
        Read a stored blob as raw bytes; decoding is left to the cipher.
        """
        path = self.get_path(identity, filename)
        if not path.is_file():
            raise NotFoundError("File not found")
        with storage_errors("read", filename):
            return path.read_bytes()

    def write_blob(self, identity: str, filename: str, blob: str) -> None:
        """
        Replace a document's blob atomically.

        The blob is written to a hidden temp file in the same directory and
        moved over the target with os.replace.
        """
        user_dir = self.resolver.user_dir(identity)
        target = user_dir / filename
        tmp = user_dir / f"{METADATA_PREFIX}{filename}{TEMP_SUFFIX}"

        with storage_errors("write", filename):
            user_dir.mkdir(parents=True, exist_ok=True)
            try:
                with tmp.open("w", encoding="utf-8") as f:
                    f.write(blob)
                os.replace(tmp, target)
            except OSError:
                tmp.unlink(missing_ok=True)
                raise

    def delete_blob(self, identity: str, filename: str) -> None:
        with storage_errors("delete", filename):
            self.get_path(identity, filename).unlink()

    def move_blob(self, identity: str, old_name: str, new_name: str) -> None:
        with storage_errors("rename", old_name):
            os.rename(self.get_path(identity, old_name), self.get_path(identity, new_name))
