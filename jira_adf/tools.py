"""Jira tool definitions, argument validation and dispatch.

Each tool takes a JSON-like ``arguments`` mapping, converts any free-text
description or comment to ADF, calls Jira, and reports back a JSON text
payload. :func:`call_tool` is the single error boundary: validation
failures, unknown tools and Jira HTTP errors all come back as a
``ToolResult`` with ``is_error`` set rather than as exceptions.
"""

import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx

from jira_adf.adf import text_to_adf
from jira_adf.jira import JiraClient

logger = logging.getLogger(__name__)

ISSUE_DETAIL_FIELDS = [
    "summary",
    "description",
    "status",
    "priority",
    "assignee",
    "issuetype",
    "parent",
    "subtasks",
]


class ErrorCode(Enum):
    """Error categories reported to tool callers."""

    INVALID_PARAMS = "invalid_params"
    METHOD_NOT_FOUND = "method_not_found"


class ToolError(Exception):
    """A tool call was rejected before reaching Jira."""

    def __init__(self, code: ErrorCode, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


@dataclass
class ToolResult:
    """Outcome of a tool call."""

    text: str
    is_error: bool = False


def _string_property(description: str) -> dict:
    return {"type": "string", "description": description}


def _string_array_property(description: str) -> dict:
    return {"type": "array", "items": {"type": "string"}, "description": description}


# Tool names are part of the public interface, including the historical
# "udpate_jira_issue" spelling.
TOOL_DEFINITIONS: dict[str, dict] = {
    "delete_jira_issue": {
        "description": "Delete a Jira issue by key.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "issueKey": _string_property("The key of the Jira issue to delete."),
            },
            "required": ["issueKey"],
        },
    },
    "get_jira_issue_details": {
        "description": "Retrieve all issues and subtasks for a Jira project.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "projectKey": _string_property("The key of the Jira project."),
                "jql": _string_property("Optional JQL filter for issues."),
            },
            "required": ["projectKey"],
        },
    },
    "udpate_jira_issue": {
        "description": "Update fields of an existing Jira issue.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "issueKey": _string_property("The key of the Jira issue to update."),
                "summary": _string_property("The new summary for the issue."),
                "description": _string_property("The new description for the issue."),
                "assignee": _string_property("The email address of the new assignee."),
                "status": _string_property("The new status for the issue."),
                "priority": _string_property("The new priority for the issue."),
            },
            "required": ["issueKey"],
        },
    },
    "create_issue": {
        "description": "Create a new Jira issue.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "projectKey": _string_property("The key of the Jira project."),
                "summary": _string_property("The summary/title of the new issue."),
                "issueType": _string_property(
                    "The type of the new issue (e.g., Task, Bug, Story)."
                ),
                "description": _string_property("The detailed description of the new issue."),
                "assignee": _string_property("The email address of the assignee."),
                "labels": _string_array_property("Labels to apply to the new issue."),
                "components": _string_array_property(
                    "Component names to associate with the new issue."
                ),
                "priority": _string_property("The priority of the new issue."),
            },
            "required": ["projectKey", "summary", "issueType"],
        },
    },
    "add_comment": {
        "description": "Add a comment to a Jira issue.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "issueKey": _string_property("The key of the issue to comment on."),
                "comment": _string_property("The comment text to add to the issue."),
            },
            "required": ["issueKey", "comment"],
        },
    },
}


# Validation helpers


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _require_arguments(arguments: Any) -> Mapping[str, Any]:
    if not isinstance(arguments, Mapping):
        raise ToolError(ErrorCode.INVALID_PARAMS, "Arguments are required")
    return arguments


def _require_string(arguments: Mapping[str, Any], name: str, label: str) -> str:
    value = arguments.get(name)
    if not _is_non_empty_string(value):
        raise ToolError(ErrorCode.INVALID_PARAMS, f"{label} is required and must be a string")
    return value


def _json_text(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


# Handlers


def create_issue(client: JiraClient, arguments: Any) -> ToolResult:
    args = _require_arguments(arguments)
    project_key = _require_string(args, "projectKey", "Project key")
    summary = _require_string(args, "summary", "Summary")
    issue_type = _require_string(args, "issueType", "Issue type")
    if not args.get("assignee"):
        raise ToolError(ErrorCode.INVALID_PARAMS, "Assignee is required")

    fields: dict[str, Any] = {
        "project": {"key": project_key},
        "summary": summary,
        "issuetype": {"name": issue_type},
        "assignee": {"accountId": args["assignee"]},
    }
    if args.get("description"):
        fields["description"] = text_to_adf(args["description"])
    if args.get("labels") is not None:
        fields["labels"] = args["labels"]
    if args.get("components"):
        fields["components"] = [{"name": name} for name in args["components"]]
    if args.get("priority"):
        fields["priority"] = {"name": args["priority"]}
    if args.get("parent"):
        fields["parent"] = {"key": args["parent"]}

    issue = client.create_issue(fields)
    return ToolResult(
        _json_text(
            {
                "message": "Issue created successfully",
                "issue": {"id": issue.id, "key": issue.key, "url": issue.url},
            }
        )
    )


def _find_transition(transitions: list[dict], status: str) -> dict | None:
    wanted = status.lower()
    for transition in transitions:
        if transition.get("name", "").lower() == wanted:
            return transition
    return None


def update_issue(client: JiraClient, arguments: Any) -> ToolResult:
    args = _require_arguments(arguments)
    issue_key = _require_string(args, "issueKey", "Issue key")

    fields: dict[str, Any] = {}
    if args.get("summary"):
        fields["summary"] = args["summary"]
    if args.get("description"):
        fields["description"] = text_to_adf(args["description"])
    if args.get("assignee"):
        users = client.search_users(args["assignee"], max_results=1)
        if users:
            fields["assignee"] = {"accountId": users[0]["accountId"]}
        else:
            logger.warning("No Jira user matches %r; assignee unchanged", args["assignee"])
    if args.get("status"):
        transition = _find_transition(client.list_transitions(issue_key), args["status"])
        if transition:
            client.transition_issue(issue_key, transition["id"])
        else:
            logger.warning("No transition to %r available for %s", args["status"], issue_key)
    if args.get("priority"):
        fields["priority"] = {"name": args["priority"]}

    if fields:
        client.update_issue(issue_key, fields)

    return ToolResult(
        _json_text(
            {
                "message": "Issue updated successfully",
                "issue": {"key": issue_key, "url": client.browse_url(issue_key)},
            }
        )
    )


def delete_issue(client: JiraClient, arguments: Any) -> ToolResult:
    args = _require_arguments(arguments)
    issue_key = _require_string(args, "issueKey", "Issue key")
    client.delete_issue(issue_key)
    return ToolResult(_json_text({"message": "Issue deleted successfully", "issueKey": issue_key}))


def get_issue_details(client: JiraClient, arguments: Any) -> ToolResult:
    """Search a project's issues and attach each issue's comments.

    A failure to fetch comments for one issue is recorded on that issue
    as ``commentsError`` instead of failing the whole call.
    """
    args = _require_arguments(arguments)
    project_key = _require_string(args, "projectKey", "Project key")
    jql = f"project = {project_key}"
    if args.get("jql"):
        jql = f"{jql} AND {args['jql']}"

    issues = client.search_issues(jql, fields=ISSUE_DETAIL_FIELDS)
    detailed = []
    for issue in issues:
        try:
            comments = client.get_comments(issue["key"])
        except (httpx.HTTPError, ValueError, KeyError) as e:
            logger.warning("Could not fetch comments for %s: %s", issue.get("key"), e)
            detailed.append({**issue, "comments": [], "commentsError": str(e)})
            continue
        detailed.append({**issue, "comments": comments})

    return ToolResult(_json_text(detailed))


def add_comment(client: JiraClient, arguments: Any) -> ToolResult:
    args = _require_arguments(arguments)
    issue_key = args.get("issueKey")
    comment = args.get("comment")
    if not (
        isinstance(issue_key, str)
        and issue_key.strip()
        and isinstance(comment, str)
        and comment.strip()
    ):
        raise ToolError(
            ErrorCode.INVALID_PARAMS,
            "Both issueKey and comment are required and must be non-empty strings",
        )

    comment_id = client.add_comment(issue_key, text_to_adf(comment))
    return ToolResult(
        _json_text(
            {
                "message": "Comment added successfully",
                "commentId": comment_id,
                "issueKey": issue_key,
            }
        )
    )


TOOL_HANDLERS: dict[str, Callable[[JiraClient, Any], ToolResult]] = {
    "create_issue": create_issue,
    "udpate_jira_issue": update_issue,
    "delete_jira_issue": delete_issue,
    "get_jira_issue_details": get_issue_details,
    "add_comment": add_comment,
}


def list_tools() -> list[dict]:
    """Tool definitions in publication order, each with its name."""
    return [{"name": name, **definition} for name, definition in TOOL_DEFINITIONS.items()]


def call_tool(client: JiraClient, name: str, arguments: Any) -> ToolResult:
    """Run a tool by name.

    Args:
        client: Open Jira client
        name: Tool name from TOOL_DEFINITIONS
        arguments: Tool arguments (a mapping)

    Returns:
        ToolResult; failures are reported with is_error=True and the text
        "Operation failed: <reason>"
    """
    try:
        handler = TOOL_HANDLERS.get(name)
        if handler is None:
            raise ToolError(ErrorCode.METHOD_NOT_FOUND, f"Unknown tool: {name}")
        return handler(client, arguments)
    except ToolError as e:
        logger.warning("Tool %s rejected (%s): %s", name, e.code.value, e.message)
        return ToolResult(f"Operation failed: {e.message}", is_error=True)
    except Exception as e:
        logger.exception("Tool %s failed", name)
        return ToolResult(f"Operation failed: {e}", is_error=True)
