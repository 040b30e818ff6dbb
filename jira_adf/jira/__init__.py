"""Jira Cloud REST client and API call capture."""

from jira_adf.jira.api_logging import clear_logs, get_log_directory, is_api_logging_enabled
from jira_adf.jira.client import CreatedIssue, JiraClient

__all__ = [
    "CreatedIssue",
    "JiraClient",
    "clear_logs",
    "get_log_directory",
    "is_api_logging_enabled",
]
