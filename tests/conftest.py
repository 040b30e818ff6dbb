"""Pytest configuration and fixtures."""

import pytest
from pydantic import SecretStr

from jira_adf.config import JiraConfig


@pytest.fixture
def jira_config() -> JiraConfig:
    """Configuration for a fake Jira site.

    Uses a dummy token since no real API calls are made.
    """
    return JiraConfig(
        host="acme.atlassian.net",
        email="bot@acme.com",
        api_token=SecretStr("test-api-token"),
    )


@pytest.fixture(autouse=True)
def no_api_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep API capture off unless a test turns it on."""
    monkeypatch.delenv("JIRA_ADF_LOG_API", raising=False)
    monkeypatch.delenv("JIRA_ADF_LOG_API_DIR", raising=False)
