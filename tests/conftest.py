from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from healthmate.main import app
from healthmate.services.chat import manager


@pytest.fixture
def fast_typewriter(monkeypatch):
    # Keep streamed replies quick; pacing itself is covered in test_typewriter.
    monkeypatch.setattr(manager, "interval", 0.001)
    return manager


@pytest.fixture
def client(fast_typewriter):
    with TestClient(app) as test_client:
        yield test_client
