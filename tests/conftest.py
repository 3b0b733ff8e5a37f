import os

os.environ["APP_ENV"] = "test"
os.environ.setdefault("LOG_LEVEL", "INFO")
os.environ.setdefault("CORS_ORIGIN", "http://localhost:5173")

import pytest
from fastapi.testclient import TestClient

from hello_api.main import create_app


@pytest.fixture(autouse=True)
def _set_default_test_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.delenv("DISABLE_LOG_REDACTION", raising=False)


@pytest.fixture
def client():
    with TestClient(create_app()) as c:
        yield c
