"""jira-adf configuration management.

Loads configuration from ~/.jira-adf/config.toml if present, then applies
environment variables. Configuration hierarchy (highest priority first):
1. Environment variables (JIRA_HOST, JIRA_EMAIL, JIRA_API_TOKEN), including
   values loaded from a .env file by the CLI
2. User-level config (~/.jira-adf/config.toml, [jira] section)
3. Defaults

The API token is only read from the environment, never from the config file.
"""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

from pydantic import SecretStr

JIRA_ADF_HOME = Path.home() / ".jira-adf"
CONFIG_FILE = JIRA_ADF_HOME / "config.toml"

DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_RESULTS = 100


class ConfigError(ValueError):
    """Raised when required Jira settings are missing."""


@dataclass
class JiraConfig:
    """Connection settings for a Jira Cloud site."""

    host: str
    email: str
    api_token: SecretStr
    timeout: float = DEFAULT_TIMEOUT
    max_results: int = DEFAULT_MAX_RESULTS

    @property
    def base_url(self) -> str:
        """REST API v3 root for this site."""
        return f"https://{self.host}/rest/api/3"

    def browse_url(self, issue_key: str) -> str:
        """Web URL for an issue."""
        return f"https://{self.host}/browse/{issue_key}"


def _normalize_host(host: str) -> str:
    """Strip scheme and trailing slashes so both "acme.atlassian.net" and
    "https://acme.atlassian.net/" are accepted."""
    host = host.strip()
    for scheme in ("https://", "http://"):
        if host.startswith(scheme):
            host = host[len(scheme) :]
    return host.rstrip("/")


def load_file_settings(config_path: Path | None = None) -> dict:
    """Read the [jira] section of the config file.

    Args:
        config_path: Override for the config file location.

    Returns:
        The [jira] table, or an empty dict if the file does not exist.
    """
    path = config_path or CONFIG_FILE
    if not path.exists():
        return {}

    with open(path, "rb") as f:
        data = tomllib.load(f)

    return data.get("jira", {})


def load_config(config_path: Path | None = None) -> JiraConfig:
    """Build the Jira configuration from the config file and environment.

    Args:
        config_path: Override for the config file location.

    Returns:
        JiraConfig ready for :class:`jira_adf.jira.JiraClient`.

    Raises:
        ConfigError: If host, email or API token cannot be determined.
    """
    settings = load_file_settings(config_path)

    host = os.environ.get("JIRA_HOST") or settings.get("host")
    email = os.environ.get("JIRA_EMAIL") or settings.get("email")
    token = os.environ.get("JIRA_API_TOKEN")

    missing = [
        name
        for name, value in (
            ("JIRA_HOST", host),
            ("JIRA_EMAIL", email),
            ("JIRA_API_TOKEN", token),
        )
        if not value
    ]
    if missing:
        raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

    return JiraConfig(
        host=_normalize_host(host),
        email=email,
        api_token=SecretStr(token),
        timeout=float(settings.get("timeout", DEFAULT_TIMEOUT)),
        max_results=int(settings.get("max_results", DEFAULT_MAX_RESULTS)),
    )
