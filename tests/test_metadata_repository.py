"""Tests for sidecar metadata storage."""

import json

from hostnote.namespace import NamespaceResolver
from hostnote.repositories.metadata_repository import (
    MetadataRepository,
    filename_from_sidecar,
    sidecar_name,
)
from hostnote.types import FileMetadata


def make_repo(storage_root):
    return MetadataRepository(NamespaceResolver(storage_root))


class TestSidecarNaming:
    """Test the sidecar naming convention."""

    def test_sidecar_name(self):
        assert sidecar_name("notes.md") == ".notes.md.meta.json"

    def test_round_trip_names(self):
        for name in ["notes.md", "a", "x.meta.json", "report_v2.txt"]:
            assert filename_from_sidecar(sidecar_name(name)) == name

    def test_non_sidecars(self):
        assert filename_from_sidecar("notes.md") is None
        assert filename_from_sidecar(".notes.md.tmp") is None
        assert filename_from_sidecar("x.meta.json") is None
        assert filename_from_sidecar(".meta.json") is None


class TestMetadataRepository:
    """Test get/put/delete/move of sidecars."""

    def test_missing_metadata_defaults_to_private(self, storage_root):
        repo = make_repo(storage_root)
        metadata = repo.get("alice", "notes.md")
        assert metadata == FileMetadata(is_public=False, public_id=None, user_id=None)

    def test_corrupt_metadata_defaults_to_private(self, storage_root):
        repo = make_repo(storage_root)
        path = repo.get_path("alice", "notes.md")
        path.parent.mkdir(parents=True)
        path.write_text("{not json")

        assert repo.get("alice", "notes.md").is_public is False

    def test_non_object_metadata_defaults_to_private(self, storage_root):
        repo = make_repo(storage_root)
        path = repo.get_path("alice", "notes.md")
        path.parent.mkdir(parents=True)
        path.write_text("[true]")

        assert repo.get("alice", "notes.md") == FileMetadata()

    def test_put_writes_compact_json(self, storage_root):
        repo = make_repo(storage_root)
        public_id = "0123456789abcdef0123456789abcdef"
        repo.put("alice", "notes.md", FileMetadata(True, public_id, "alice"))

        raw = repo.get_path("alice", "notes.md").read_text()
        assert raw == '{"isPublic":true,"publicId":"0123456789abcdef0123456789abcdef","userId":"alice"}'

    def test_put_omits_unknown_owner(self, storage_root):
        repo = make_repo(storage_root)
        repo.put("alice", "notes.md", FileMetadata())

        assert json.loads(repo.get_path("alice", "notes.md").read_text()) == {
            "isPublic": False,
            "publicId": None,
        }

    def test_put_then_get(self, storage_root):
        repo = make_repo(storage_root)
        metadata = FileMetadata(True, "0123456789abcdef0123456789abcdef", "alice")
        repo.put("alice", "notes.md", metadata)

        assert repo.get("alice", "notes.md") == metadata

    def test_delete(self, storage_root):
        repo = make_repo(storage_root)
        repo.put("alice", "notes.md", FileMetadata())

        assert repo.delete("alice", "notes.md") is True
        assert not repo.get_path("alice", "notes.md").exists()
        assert repo.delete("alice", "notes.md") is False

    def test_move(self, storage_root):
        repo = make_repo(storage_root)
        metadata = FileMetadata(True, "0123456789abcdef0123456789abcdef", "alice")
        repo.put("alice", "old.md", metadata)

        assert repo.move("alice", "old.md", "new.md") is True
        assert repo.get("alice", "new.md") == metadata
        assert not repo.get_path("alice", "old.md").exists()
        assert repo.move("alice", "old.md", "other.md") is False

    def test_iter_records_skips_corrupt(self, storage_root):
        repo = make_repo(storage_root)
        repo.put("alice", "good.md", FileMetadata(True, "0123456789abcdef0123456789abcdef", "alice"))
        bad = repo.get_path("alice", "bad.md")
        bad.write_text("garbage")
        (bad.parent / "good.md").write_text("blob")

        records = list(repo.iter_records())

        assert len(records) == 1
        namespace, filename, metadata = records[0]
        assert namespace == repo.resolver.resolve("alice")
        assert filename == "good.md"
        assert metadata.public_id == "0123456789abcdef0123456789abcdef"
