"""
Pytest configuration and shared fixtures for the BigO Lens test suite.
"""

import json

import pytest
from fastapi.testclient import TestClient

from bigolens.config import Settings
from bigolens.main import create_app
from bigolens.storage import MemStorage


JSON_REPLY = json.dumps(
    {
        "timeComplexity": "O(n)",
        "spaceComplexity": "O(1)",
        "explanation": "Single pass over the input.",
    }
)


class FakeProvider:
    """Stands in for GeminiProvider and records every prompt it receives."""

    def __init__(self, reply=JSON_REPLY, error=None):
        self.reply = reply
        self.error = error
        self.prompts = []
        self.pings = 0

    @property
    def calls(self):
        return len(self.prompts)

    async def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply

    async def ping(self):
        self.pings += 1
        if self.error is not None:
            raise self.error


def make_settings(**overrides):
    values = {
        "GEMINI_API_KEY": "test-key",
        "ANALYZE_COOLDOWN_MS": 0,
        "_env_file": None,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep real credentials in the environment out of the tests."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)


@pytest.fixture
def settings_factory():
    return make_settings


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def storage():
    return MemStorage()


@pytest.fixture
def app(settings, provider, storage):
    return create_app(settings=settings, provider=provider, storage=storage)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_code():
    return "def total(xs):\n    s = 0\n    for x in xs:\n        s += x\n    return s\n"
