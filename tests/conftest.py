import pytest
from fastapi.testclient import TestClient

from imagegate.core.config import get_settings
from imagegate.main import app, get_provider
from tests.fakes import FakeProvider


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for name in ("API_KEYS", "DEFAULT_IMAGE_MODEL", "REQUEST_TIMEOUT", "CLOUDFLARE_ACCOUNT_ID", "CLOUDFLARE_API_TOKEN"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def client(provider):
    app.dependency_overrides[get_provider] = lambda: provider
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
