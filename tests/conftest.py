"""
Shared pytest fixtures. Gemini is always replaced by FakeGeminiClient and
progress is written under tmp_path, so no test touches the network.
"""
import pytest
from fastapi.testclient import TestClient

from app.config import get_settings
from app.dependencies import get_progress_store
from app.main import app
from app.services.gemini_service import get_gemini_client
from app.services.progress_store import FileProgressStore

from factories import make_settings


@pytest.fixture
def settings(tmp_path):
    return make_settings(tmp_path)


@pytest.fixture
def store(tmp_path):
    return FileProgressStore(str(tmp_path / "progress"))


@pytest.fixture
def api(settings, store):
    """
    Build a TestClient wired to a given fake Gemini client.
    Pass client=None to simulate a missing GEMINI_API_KEY.
    """

    def _make(client=None):
        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_gemini_client] = lambda: client
        app.dependency_overrides[get_progress_store] = lambda: store
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()
