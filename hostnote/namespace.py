"""Maps trusted identity strings to per-user storage directories."""

import hashlib
import re
from pathlib import Path
from typing import Iterator

from hostnote.constants import NAMESPACE_LENGTH

NAMESPACE_PATTERN = re.compile(rf"^[0-9a-f]{{{NAMESPACE_LENGTH}}}$")


def resolve_namespace(identity: str) -> str:
    """
    Derive the namespace token for an identity.

    Args:
        identity: Non-empty trusted identity string

    Returns:
        First 16 hex characters of SHA-256(identity)

    Raises:
        ValueError: If identity is empty
    """
    if not identity:
        raise ValueError("identity must be a non-empty string")
    return hashlib.sha256(identity.encode("utf-8")).hexdigest()[:NAMESPACE_LENGTH]


class NamespaceResolver:
    """
    Resolves identities to namespace directories under a storage root.
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    def resolve(self, identity: str) -> str:
        return resolve_namespace(identity)

    def user_dir(self, identity: str) -> Path:
        """
        Get the namespace directory for an identity. The directory may not exist yet.
        """
        return self.root / self.resolve(identity)

    def iter_namespace_dirs(self) -> Iterator[Path]:
        """
        Yield every existing namespace directory under the root.

        Entries that do not look like namespace tokens are ignored.
        """
        if not self.root.is_dir():
            return
        for entry in sorted(self.root.iterdir()):
            if entry.is_dir() and NAMESPACE_PATTERN.match(entry.name):
                yield entry
