"""Tests for JiraClient with mocked HTTP responses.

These tests verify the code path from JiraClient methods through httpx
to response parsing, using mocked HTTP responses.
"""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from jira_adf.adf import text_to_adf
from jira_adf.jira import CreatedIssue, JiraClient

from .fixtures import load_fixture


class MockResponse:
    """Mock httpx.Response."""

    def __init__(self, json_data: dict | list | None = None, status_code: int = 200):
        self._json_data = json_data
        self.status_code = status_code

    def json(self) -> dict | list | None:
        return self._json_data

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise httpx.HTTPStatusError(
                f"HTTP {self.status_code}",
                request=MagicMock(),
                response=self,
            )


class TestJiraClientSetup:
    """Tests for client construction."""

    def test_base_url_and_auth(self, jira_config):
        with JiraClient(jira_config) as client:
            assert str(client._client.base_url) == "https://acme.atlassian.net/rest/api/3/"
            assert isinstance(client._client.auth, httpx.BasicAuth)
            assert client._client.headers["Accept"] == "application/json"

    def test_browse_url(self, jira_config):
        with JiraClient(jira_config) as client:
            assert client.browse_url("ABC-1") == "https://acme.atlassian.net/browse/ABC-1"

    def test_context_manager_closes_http_client(self, jira_config):
        with JiraClient(jira_config) as client:
            pass

        assert client._client.is_closed


class TestJiraClientIssues:
    """Tests for issue operations."""

    def test_create_issue(self, jira_config):
        fields = {
            "project": {"key": "ABC"},
            "summary": "Crash",
            "issuetype": {"name": "Bug"},
            "description": text_to_adf("Steps:\n\n1. open"),
        }

        with patch.object(httpx.Client, "post") as mock_post:
            mock_post.return_value = MockResponse(load_fixture("create_issue_response"), 201)

            with JiraClient(jira_config) as client:
                issue = client.create_issue(fields)

            assert issue == CreatedIssue(
                id="10042",
                key="ABC-42",
                url="https://acme.atlassian.net/browse/ABC-42",
            )
            mock_post.assert_called_once_with("/issue", json={"fields": fields})

    def test_update_issue(self, jira_config):
        with patch.object(httpx.Client, "put") as mock_put:
            mock_put.return_value = MockResponse(None, 204)

            with JiraClient(jira_config) as client:
                client.update_issue("ABC-1", {"summary": "New"})

            mock_put.assert_called_once_with("/issue/ABC-1", json={"fields": {"summary": "New"}})

    def test_delete_issue(self, jira_config):
        with patch.object(httpx.Client, "delete") as mock_delete:
            mock_delete.return_value = MockResponse(None, 204)

            with JiraClient(jira_config) as client:
                client.delete_issue("ABC-1")

            mock_delete.assert_called_once_with("/issue/ABC-1")

    def test_delete_missing_issue_raises(self, jira_config):
        with patch.object(httpx.Client, "delete") as mock_delete:
            mock_delete.return_value = MockResponse(
                {"errorMessages": ["Issue does not exist"]}, 404
            )

            with JiraClient(jira_config) as client, pytest.raises(httpx.HTTPStatusError):
                client.delete_issue("ABC-999")

    def test_search_issues(self, jira_config):
        with patch.object(httpx.Client, "post") as mock_post:
            mock_post.return_value = MockResponse(load_fixture("search_issues_response"))

            with JiraClient(jira_config) as client:
                issues = client.search_issues("project = ABC", fields=["summary"])

            assert [issue["key"] for issue in issues] == ["ABC-1", "ABC-2"]
            mock_post.assert_called_once_with(
                "/search/jql",
                json={"jql": "project = ABC", "maxResults": 100, "fields": ["summary"]},
            )

    def test_search_issues_max_results_override(self, jira_config):
        with patch.object(httpx.Client, "post") as mock_post:
            mock_post.return_value = MockResponse({"issues": []})

            with JiraClient(jira_config) as client:
                assert client.search_issues("project = ABC", max_results=5) == []

            assert mock_post.call_args.kwargs["json"] == {"jql": "project = ABC", "maxResults": 5}


class TestJiraClientComments:
    """Tests for comment operations."""

    def test_get_comments(self, jira_config):
        with patch.object(httpx.Client, "get") as mock_get:
            mock_get.return_value = MockResponse(load_fixture("comments_response"))

            with JiraClient(jira_config) as client:
                comments = client.get_comments("ABC-1")

            assert len(comments) == 1
            assert comments[0]["id"] == "20001"
            mock_get.assert_called_once_with("/issue/ABC-1/comment")

    def test_add_comment_sends_adf_body(self, jira_config):
        body = text_to_adf("- done")

        with patch.object(httpx.Client, "post") as mock_post:
            mock_post.return_value = MockResponse({"id": "20002"}, 201)

            with JiraClient(jira_config) as client:
                comment_id = client.add_comment("ABC-1", body)

            assert comment_id == "20002"
            mock_post.assert_called_once_with("/issue/ABC-1/comment", json={"body": body})


class TestJiraClientWorkflow:
    """Tests for user lookup and transitions."""

    def test_search_users(self, jira_config):
        with patch.object(httpx.Client, "get") as mock_get:
            mock_get.return_value = MockResponse(load_fixture("user_search_response"))

            with JiraClient(jira_config) as client:
                users = client.search_users("jane@acme.com")

            assert users[0]["accountId"] == "5b10ac8d82e05b22cc7d4ef5"
            mock_get.assert_called_once_with(
                "/user/search",
                params={"query": "jane@acme.com", "maxResults": 1},
            )

    def test_list_transitions(self, jira_config):
        with patch.object(httpx.Client, "get") as mock_get:
            mock_get.return_value = MockResponse(load_fixture("transitions_response"))

            with JiraClient(jira_config) as client:
                transitions = client.list_transitions("ABC-1")

            assert [t["name"] for t in transitions] == ["To Do", "In Progress", "Done"]

    def test_transition_issue(self, jira_config):
        with patch.object(httpx.Client, "post") as mock_post:
            mock_post.return_value = MockResponse(None, 204)

            with JiraClient(jira_config) as client:
                client.transition_issue("ABC-1", "31")

            mock_post.assert_called_once_with(
                "/issue/ABC-1/transitions",
                json={"transition": {"id": "31"}},
            )
