"""Tests for public sharing and registry consistency."""

import json

import pytest

from hostnote.dependencies import build_services
from hostnote.exceptions import InvalidInputError, NotFoundError
from hostnote.types import PublicLinkEntry


@pytest.fixture
def shared(services):
    """
    Alice's notes.md, shared publicly.
    """
    services.file_service.write_file("alice", "notes.md", "public words")
    return services.share_service.share("alice", "notes.md")


class TestShare:
    """Test sharing and unsharing."""

    def test_share_returns_token_and_url(self, shared):
        assert len(shared.public_id) == 32
        assert shared.public_url == f"/public/{shared.public_id}"

    def test_share_is_idempotent(self, services, shared):
        again = services.share_service.share("alice", "notes.md")
        assert again.public_id == shared.public_id
        assert services.registry.count() == 1

    def test_share_persists_owner(self, services, shared):
        raw = json.loads(services.metadata_repo.get_path("alice", "notes.md").read_text())
        assert raw == {"isPublic": True, "publicId": shared.public_id, "userId": "alice"}

    def test_resolve_after_share(self, services, shared):
        entry = services.registry.resolve(shared.public_id)
        assert entry == PublicLinkEntry(identity="alice", filename="notes.md")

    def test_share_missing_file(self, services):
        with pytest.raises(NotFoundError):
            services.share_service.share("alice", "missing.md")
        assert not services.metadata_repo.get_path("alice", "missing.md").exists()

    def test_unshare(self, services, shared):
        services.share_service.unshare("alice", "notes.md")

        with pytest.raises(NotFoundError):
            services.registry.resolve(shared.public_id)
        metadata = services.metadata_repo.get("alice", "notes.md")
        assert metadata.is_public is False
        assert metadata.public_id is None

    def test_unshare_never_shared_file(self, services):
        services.file_service.write_file("alice", "notes.md", "x")
        services.share_service.unshare("alice", "notes.md")

        raw = json.loads(services.metadata_repo.get_path("alice", "notes.md").read_text())
        assert raw == {"isPublic": False, "publicId": None}

    def test_reshare_mints_new_token(self, services, shared):
        services.share_service.unshare("alice", "notes.md")
        again = services.share_service.share("alice", "notes.md")

        assert again.public_id != shared.public_id
        with pytest.raises(NotFoundError):
            services.share_service.read_public(shared.public_id)
        assert services.share_service.read_public(again.public_id).content == "public words"

    def test_unshare_missing_file(self, services):
        with pytest.raises(NotFoundError):
            services.share_service.unshare("alice", "missing.md")


class TestPublicRead:
    """Test unauthenticated reads through public links."""

    def test_read_public(self, services, shared):
        public_file = services.share_service.read_public(shared.public_id)
        assert public_file.name == "notes.md"
        assert public_file.content == "public words"

    def test_read_public_sees_latest_content(self, services, shared):
        services.file_service.write_file("alice", "notes.md", "edited")
        assert services.share_service.read_public(shared.public_id).content == "edited"

    def test_read_public_malformed_token(self, services):
        with pytest.raises(InvalidInputError):
            services.share_service.read_public("../../etc/passwd")

    def test_read_public_unknown_token(self, services):
        with pytest.raises(NotFoundError):
            services.share_service.read_public("0" * 32)


class TestRegistryConsistency:
    """Test that mutations keep the registry in step with metadata."""

    def test_rename_preserves_sharing(self, services, shared):
        services.file_service.rename_file("alice", "notes.md", "renamed.md")

        entry = services.registry.resolve(shared.public_id)
        assert entry.filename == "renamed.md"
        assert services.share_service.read_public(shared.public_id).name == "renamed.md"

    def test_delete_cleans_registry(self, services, shared):
        services.file_service.delete_file("alice", "notes.md")

        with pytest.raises(NotFoundError):
            services.registry.resolve(shared.public_id)
        assert not services.file_repo.get_path("alice", "notes.md").exists()
        assert not services.metadata_repo.get_path("alice", "notes.md").exists()

    def test_restart_recovery(self, services, settings, shared):
        restarted = build_services(settings)
        assert restarted.registry.count() == 0

        assert restarted.rebuild_registry() == 1

        assert restarted.registry.resolve(shared.public_id) == PublicLinkEntry("alice", "notes.md")
        assert restarted.share_service.read_public(shared.public_id).content == "public words"

    def test_restart_after_rename_and_unshare(self, services, settings, shared):
        services.file_service.write_file("alice", "other.md", "other")
        other = services.share_service.share("alice", "other.md")
        services.file_service.rename_file("alice", "notes.md", "renamed.md")
        services.share_service.unshare("alice", "other.md")

        restarted = build_services(settings)
        restarted.rebuild_registry()

        assert restarted.registry.resolve(shared.public_id).filename == "renamed.md"
        with pytest.raises(NotFoundError):
            restarted.registry.resolve(other.public_id)

    def test_registries_are_isolated(self, services, settings, shared):
        fresh = build_services(settings)
        assert fresh.registry.get(shared.public_id) is None
        assert services.registry.get(shared.public_id) is not None
