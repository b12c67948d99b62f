"""Fixtures for infrastructure.logging tests."""

import pytest


@pytest.fixture
def event_dict():
    """Event dict as produced by a translation run."""
    return {
        "event": "openai_request_started",
        "model": "gpt-5",
        "api_key": "sk-live-123",
        "target_language": "fr",
    }
