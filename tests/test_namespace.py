"""Tests for identity -> namespace resolution."""

import hashlib

import pytest

from hostnote.namespace import NamespaceResolver, resolve_namespace


def test_resolve_is_deterministic():
    assert resolve_namespace("alice@example.com") == resolve_namespace("alice@example.com")


def test_resolve_is_sha256_prefix():
    expected = hashlib.sha256(b"alice@example.com").hexdigest()[:16]
    assert resolve_namespace("alice@example.com") == expected


def test_resolve_is_fixed_length_hex():
    namespace = resolve_namespace("bob")
    assert len(namespace) == 16
    assert all(c in "0123456789abcdef" for c in namespace)


def test_distinct_identities_get_distinct_namespaces():
    identities = [f"user{i}@example.com" for i in range(200)] + ["alice", "Alice", "alice ", "bob"]
    namespaces = {resolve_namespace(identity) for identity in identities}
    assert len(namespaces) == len(identities)


def test_empty_identity_rejected():
    with pytest.raises(ValueError):
        resolve_namespace("")


def test_user_dir_under_root(tmp_path):
    resolver = NamespaceResolver(tmp_path)
    assert resolver.user_dir("alice") == tmp_path / resolve_namespace("alice")
    assert not resolver.user_dir("alice").exists()


def test_iter_namespace_dirs_skips_foreign_entries(tmp_path):
    resolver = NamespaceResolver(tmp_path)
    resolver.user_dir("alice").mkdir()
    resolver.user_dir("bob").mkdir()
    (tmp_path / "lost+found").mkdir()
    (tmp_path / "0123456789abcdef.txt").write_text("x")

    found = {path.name for path in resolver.iter_namespace_dirs()}

    assert found == {resolve_namespace("alice"), resolve_namespace("bob")}


def test_iter_namespace_dirs_missing_root(tmp_path):
    resolver = NamespaceResolver(tmp_path / "missing")
    assert list(resolver.iter_namespace_dirs()) == []
