"""HostNote data type definitions."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class FileMetadata:
    """
    Sharing state persisted in a file's sidecar.

    user_id holds the owner identity so the public link registry can be
    rebuilt from disk; it is None until the file is first shared.
    """
    is_public: bool = False
    public_id: Optional[str] = None
    user_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"isPublic": self.is_public, "publicId": self.public_id}
        if self.user_id is not None:
            data["userId"] = self.user_id
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FileMetadata":
        if not isinstance(data, dict):
            raise ValueError("metadata must be a JSON object")
        public_id = data.get("publicId")
        user_id = data.get("userId")
        return cls(
            is_public=data.get("isPublic") is True,
            public_id=public_id if isinstance(public_id, str) else None,
            user_id=user_id if isinstance(user_id, str) else None,
        )

    @property
    def is_shared(self) -> bool:
        return self.is_public and bool(self.public_id)


@dataclass(frozen=True)
class FileEntry:
    """
    One row of a namespace listing.
    """
    name: str
    size: int
    modified: datetime
    is_public: bool
    public_id: Optional[str]


@dataclass(frozen=True)
class PublicLinkEntry:
    """
    Target of a public link token.
    """
    identity: str
    filename: str


@dataclass(frozen=True)
class ShareResult:
    public_id: str
    public_url: str


@dataclass(frozen=True)
class PublicFile:
    name: str
    content: str
