"""Jira Cloud REST API (v3) client.

Issues, comments, users and workflow transitions. Rich-text fields
(descriptions, comment bodies) are expected to already be ADF documents;
see :func:`jira_adf.adf.text_to_adf`.
"""

import logging
from dataclasses import dataclass

import httpx

from jira_adf.config import JiraConfig
from jira_adf.jira.api_logging import create_logging_client

logger = logging.getLogger(__name__)


@dataclass
class CreatedIssue:
    """Identifiers returned by Jira for a newly created issue."""

    id: str
    key: str
    url: str


class JiraClient:
    """Client for Jira Cloud REST API interactions."""

    def __init__(self, config: JiraConfig):
        """Initialize client for a Jira site.

        If JIRA_ADF_LOG_API is set (to "1", "true", "yes", or "on"), every
        request and response is also written to ~/.jira-adf/api_logs/ (or
        JIRA_ADF_LOG_API_DIR) as numbered JSON files.
        """
        self.config = config
        self._client = create_logging_client(
            base_url=config.base_url,
            auth=(config.email, config.api_token.get_secret_value()),
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
            timeout=config.timeout,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "JiraClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def browse_url(self, issue_key: str) -> str:
        return self.config.browse_url(issue_key)

    # Issues

    def create_issue(self, fields: dict) -> CreatedIssue:
        """Create an issue.

        Args:
            fields: Jira field mapping (project, summary, issuetype, ...)

        Returns:
            CreatedIssue with id, key and browse URL
        """
        resp = self._client.post("/issue", json={"fields": fields})
        resp.raise_for_status()
        data = resp.json()
        logger.info("Created issue %s", data["key"])
        return CreatedIssue(id=data["id"], key=data["key"], url=self.browse_url(data["key"]))

    def update_issue(self, issue_key: str, fields: dict) -> None:
        """Set fields on an existing issue."""
        resp = self._client.put(f"/issue/{issue_key}", json={"fields": fields})
        resp.raise_for_status()
        logger.info("Updated issue %s (%s)", issue_key, ", ".join(sorted(fields)))

    def delete_issue(self, issue_key: str) -> None:
        resp = self._client.delete(f"/issue/{issue_key}")
        resp.raise_for_status()
        logger.info("Deleted issue %s", issue_key)

    def search_issues(
        self,
        jql: str,
        fields: list[str] | None = None,
        max_results: int | None = None,
    ) -> list[dict]:
        """Search issues with JQL.

        Args:
            jql: JQL query (e.g., "project = ABC AND status = Done")
            fields: Field names to return (default: Jira's navigable set)
            max_results: Page size (default: configured max_results)

        Returns:
            Raw issue dicts as returned by Jira
        """
        payload: dict = {
            "jql": jql,
            "maxResults": max_results or self.config.max_results,
        }
        if fields:
            payload["fields"] = fields
        resp = self._client.post("/search/jql", json=payload)
        resp.raise_for_status()
        issues = resp.json().get("issues", [])
        logger.debug("JQL %r matched %d issues", jql, len(issues))
        return issues

    # Comments

    def get_comments(self, issue_key: str) -> list[dict]:
        resp = self._client.get(f"/issue/{issue_key}/comment")
        resp.raise_for_status()
        return resp.json().get("comments", [])

    def add_comment(self, issue_key: str, body: dict) -> str:
        """Add a comment to an issue.

        Args:
            issue_key: Issue to comment on
            body: Comment body as an ADF document

        Returns:
            ID of the new comment
        """
        resp = self._client.post(f"/issue/{issue_key}/comment", json={"body": body})
        resp.raise_for_status()
        comment_id = resp.json()["id"]
        logger.info("Added comment %s to %s", comment_id, issue_key)
        return comment_id

    # Users and workflow

    def search_users(self, query: str, max_results: int = 1) -> list[dict]:
        """Find users by email address or display name."""
        resp = self._client.get(
            "/user/search",
            params={"query": query, "maxResults": max_results},
        )
        resp.raise_for_status()
        return resp.json()

    def list_transitions(self, issue_key: str) -> list[dict]:
        """Workflow transitions currently available for an issue."""
        resp = self._client.get(f"/issue/{issue_key}/transitions")
        resp.raise_for_status()
        return resp.json().get("transitions", [])

    def transition_issue(self, issue_key: str, transition_id: str) -> None:
        resp = self._client.post(
            f"/issue/{issue_key}/transitions",
            json={"transition": {"id": transition_id}},
        )
        resp.raise_for_status()
        logger.info("Transitioned %s via transition %s", issue_key, transition_id)
