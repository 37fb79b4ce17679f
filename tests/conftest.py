"""Shared pytest fixtures for the glquery test suite."""

from __future__ import annotations

import pytest

from glquery.config import ClientSettings
from glquery.gitlab_client import GitLabClient
from tests.factories import RecordingTransport

pytest_plugins = ("respx",)

TOKEN = "XXXXXXXXXXXXXXXXXXXX"  # pragma: allowlist secret


@pytest.fixture
def settings() -> ClientSettings:
    """Provide client settings with deterministic defaults for tests."""
    return ClientSettings.model_validate(
        {
            "hostname": "gitlab.example.com",
            "token": TOKEN,
            "scheme": "https",
        },
    )


@pytest.fixture
def client(settings: ClientSettings) -> GitLabClient:
    """Provide a client backed by the real httpx transport."""
    return GitLabClient(settings)


@pytest.fixture
def transport() -> RecordingTransport:
    """Provide an empty recording transport."""
    return RecordingTransport()


@pytest.fixture
def fake_client(settings: ClientSettings, transport: RecordingTransport) -> GitLabClient:
    """Provide a client whose requests are answered by the recording transport."""
    return GitLabClient(settings, transport=transport)
