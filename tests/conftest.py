"""Shared fixtures: a scripted generation client and an API client wired to it."""

import os

# Keep a developer's real credential out of the test run before any app import.
os.environ["OPENAI_API_KEY_REAL"] = ""

import pytest
from fastapi.testclient import TestClient

from revtags.application import ReviewDrafter
from revtags.infrastructure.llm import GenerationServiceError
from revtags.web.app import app, get_drafter


class FakeGenerationClient:
    """Returns scripted responses in order; an exception instance is raised instead."""

    def __init__(self, responses=None, configured=True):
        self.responses = list(responses or [])
        self.configured = configured
        self.calls = []

    @property
    def is_configured(self):
        return self.configured

    def generate(self, prompt, temperature, max_tokens=None):
        self.calls.append({"prompt": prompt, "temperature": temperature})
        response = self.responses.pop(0) if self.responses else ""
        if isinstance(response, GenerationServiceError):
            raise response
        return response


@pytest.fixture
def fake_client():
    return FakeGenerationClient()


@pytest.fixture
def api(fake_client):
    app.dependency_overrides[get_drafter] = lambda: ReviewDrafter(fake_client)
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
