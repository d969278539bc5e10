"""Shared pytest fixtures for all tests."""

import pytest
from fastapi.testclient import TestClient

from hostnote.config import Settings
from hostnote.crypto import ContentCipher
from hostnote.dependencies import build_services

TEST_SECRET = "test-master-secret-0123456789abcdef"

# Cheap stretch for tests; production stores use 100000
TEST_ITERATIONS = 1000


@pytest.fixture
def storage_root(tmp_path):
    """
    Create an empty storage root directory.
    """
    root = tmp_path / 'data'
    root.mkdir()
    return root


@pytest.fixture
def settings(storage_root):
    return Settings(
        encryption_key=TEST_SECRET,
        data_dir=storage_root,
        kdf_iterations=TEST_ITERATIONS,
    )


@pytest.fixture
def cipher():
    return ContentCipher(TEST_SECRET, iterations=TEST_ITERATIONS)


@pytest.fixture
def services(settings):
    """
    Fresh core components (with an empty registry) over the temp storage root.
    """
    return build_services(settings)


@pytest.fixture
def app_env(monkeypatch, storage_root):
    """
    Point the application startup at the temp storage root.
    """
    monkeypatch.setenv('ENCRYPTION_KEY', TEST_SECRET)
    monkeypatch.setenv('HOSTNOTE_DATA_DIR', str(storage_root))
    monkeypatch.setenv('HOSTNOTE_KDF_ITERATIONS', str(TEST_ITERATIONS))
    monkeypatch.delenv('HOSTNOTE_RATE_LIMIT_REQUESTS', raising=False)
    monkeypatch.delenv('HOSTNOTE_RATE_LIMIT_WINDOW', raising=False)
    return storage_root


@pytest.fixture
def client(app_env):
    """
    FastAPI test client with startup events run against the temp storage root.
    """
    from hostnote.main import app

    with TestClient(app) as test_client:
        yield test_client
