from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from connections.file_store import FileStore
from core.settings import settings


@pytest.fixture
def data_dir(tmp_path):
    path = tmp_path / "data"
    FileStore.configure(path)
    FileStore.initialize()
    yield path
    FileStore._data_dir = None


@pytest.fixture
def client(data_dir, monkeypatch):
    monkeypatch.setattr(settings, "EMAIL_ENABLED", False)

    from main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def lab_item():
    return {
        "category": "Lab Cost per pax per day",
        "description": "Cloud lab access",
        "cost": 100,
        "quantity": 2,
    }
