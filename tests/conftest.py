"""
Pytest configuration and fixtures for planner_integration tests.

Clears Microsoft credentials from the environment before any
planner_integration imports so the global settings never pick up a
developer's real credentials.
"""

import os

import pytest
from loguru import logger

for _name in (
    "MICROSOFT_CLIENT_ID",
    "MICROSOFT_CLIENT_SECRET",
    "MICROSOFT_TENANT_ID",
    "MICROSOFT_AUTHORITY_HOST",
    "MICROSOFT_GRAPH_BASE_URL",
    "PORT",
):
    os.environ.pop(_name, None)

from planner_integration.config import Settings  # noqa: E402

from tests.fakes import FakeMicrosoft  # noqa: E402


@pytest.fixture
def log_messages():
    """Capture loguru messages emitted during a test."""
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def test_settings() -> Settings:
    """Settings with complete (fake) credentials and no .env lookup."""
    return Settings(
        _env_file=None,
        client_id="client-id",
        client_secret="client-secret",
        tenant_id="tenant-id",
    )


@pytest.fixture
def microsoft() -> FakeMicrosoft:
    """Fake identity platform + Graph API served through httpx.MockTransport."""
    return FakeMicrosoft()
