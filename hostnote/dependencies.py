"""Construction and injection of the storage core components."""

from dataclasses import dataclass

from fastapi import Request

from hostnote.config import Settings
from hostnote.crypto import ContentCipher
from hostnote.namespace import NamespaceResolver
from hostnote.public_registry import PublicLinkRegistry
from hostnote.repositories.file_repository import FileRepository
from hostnote.repositories.metadata_repository import MetadataRepository
from hostnote.services.file_service import FileService
from hostnote.services.share_service import ShareService


@dataclass
class HostNoteServices:
    """
    One explicitly owned set of core components.
    """
    resolver: NamespaceResolver
    cipher: ContentCipher
    file_repo: FileRepository
    metadata_repo: MetadataRepository
    registry: PublicLinkRegistry
    file_service: FileService
    share_service: ShareService

    def rebuild_registry(self) -> int:
        return self.registry.rebuild(self.metadata_repo)


def build_services(settings: Settings) -> HostNoteServices:
    """
    Wire the core components for a storage root.

    The registry starts empty; call rebuild_registry() to load it from disk.
    """
    resolver = NamespaceResolver(settings.data_dir)
    cipher = ContentCipher(settings.encryption_key, iterations=settings.kdf_iterations)
    file_repo = FileRepository(resolver)
    metadata_repo = MetadataRepository(resolver)
    registry = PublicLinkRegistry()

    file_service = FileService(cipher, file_repo, metadata_repo, registry)
    share_service = ShareService(file_service, file_repo, metadata_repo, registry)

    return HostNoteServices(
        resolver=resolver,
        cipher=cipher,
        file_repo=file_repo,
        metadata_repo=metadata_repo,
        registry=registry,
        file_service=file_service,
        share_service=share_service,
    )


def get_services(request: Request) -> HostNoteServices:
    return request.app.state.services


def get_file_service(request: Request) -> FileService:
    return get_services(request).file_service


def get_share_service(request: Request) -> ShareService:
    return get_services(request).share_service
