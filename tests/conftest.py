import pytest
from fastapi.testclient import TestClient

from versecast.api.deps import get_store
from versecast.core.config import Settings, get_settings
from versecast.main import app
from versecast.services.store.local import LocalBlobStore

UPLOAD_SECRET = "test-secret"


@pytest.fixture
def store(tmp_path):
    return LocalBlobStore(tmp_path / "store")


@pytest.fixture
def test_settings(tmp_path):
    return Settings(STORAGE_DIR=str(tmp_path / "store"), UPLOAD_SECRET=UPLOAD_SECRET)


@pytest.fixture
def client(store, test_settings):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_settings] = lambda: test_settings
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def auth():
    return {"Authorization": f"Bearer {UPLOAD_SECRET}"}
