# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from dealcheck.api.http import app, get_narrative_service  # run tests from repo root


@pytest.fixture(scope="session")
def client():
    # no real narrative calls from tests unless a test installs its own fake
    app.dependency_overrides[get_narrative_service] = lambda: None
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def use_narrative(monkeypatch):
    """Install a fake narrative service for the duration of one test."""

    def _install(service):
        monkeypatch.setitem(app.dependency_overrides, get_narrative_service, lambda: service)

    return _install
