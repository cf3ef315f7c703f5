"""Module for Jira issue operations."""

import logging

from ..models.base import JsonObject
from ..models.jira import (
    JiraIssueDeletion,
    clean_labels,
    parent_reference,
    text_to_adf,
)
from ..utils.urls import quote_path_segment
from .client import JiraClient, require

logger = logging.getLogger("mcp-atlassian-cloud.jira")


class IssuesMixin(JiraClient):
    """Mixin for Jira issue operations."""

    def get_issue(
        self,
        issue_id_or_key: str,
        fields: str | None = None,
        expand: str | None = None,
    ) -> JsonObject:
        """
        Get an issue by id or key.

        Args:
            issue_id_or_key: Issue id or key, e.g. ``10001`` or ``ABC-1``
            fields: Optional comma-separated field list
            expand: Optional comma-separated expansions, e.g. ``changelog``

        Returns:
            The raw ``GET /issue/{id}`` response
        """
        issue_id_or_key = require(issue_id_or_key, "issueIdOrKey")
        params: dict[str, str] = {}
        if fields and fields.strip():
            params["fields"] = fields.strip()
        if expand and expand.strip():
            params["expand"] = expand.strip()

        return self._call_json(
            "GetIssue",
            "GET",
            f"issue/{quote_path_segment(issue_id_or_key)}",
            params=params or None,
        )

    def create_issue(
        self,
        project_key: str,
        issue_type_name: str,
        summary: str,
        description: str | None = None,
        labels: list[str] | None = None,
        parent_key_or_id: str | None = None,
    ) -> JsonObject:
        """
        Create an issue.

        Args:
            project_key: Key of the project, e.g. ``ABC``
            issue_type_name: Issue type name, e.g. ``Task`` or ``Sub-task``
            summary: The issue summary
            description: Optional plain-text description, sent as ADF
            labels: Optional labels; blank entries are dropped
            parent_key_or_id: Optional parent issue, by key (``ABC-1``) or id

        Returns:
            The ``{id, key, self}`` response of ``POST /issue``

        Raises:
            ValueError: If project_key, issue_type_name or summary is blank
            UpstreamHttpError: If Jira rejects the issue
        """
        fields: JsonObject = {
            "project": {"key": require(project_key, "projectKey")},
            "issuetype": {"name": require(issue_type_name, "issueTypeName")},
            "summary": require(summary, "summary"),
        }
        if description and description.strip():
            fields["description"] = text_to_adf(description)

        cleaned_labels = clean_labels(labels)
        if cleaned_labels:
            fields["labels"] = cleaned_labels

        if parent_key_or_id and parent_key_or_id.strip():
            fields["parent"] = parent_reference(parent_key_or_id.strip())

        return self._call_json("CreateIssue", "POST", "issue", data={"fields": fields})

    def delete_issue(
        self, issue_id_or_key: str, delete_subtasks: bool = False
    ) -> JiraIssueDeletion:
        """
        Delete an issue.

        Args:
            issue_id_or_key: Issue id or key
            delete_subtasks: Also delete the issue's subtasks

        Returns:
            JiraIssueDeletion confirming the deletion and the HTTP status

        Raises:
            UpstreamHttpError: If Jira refuses the deletion
        """
        issue_id_or_key = require(issue_id_or_key, "issueIdOrKey")
        response = self._call(
            "DeleteIssue",
            "DELETE",
            f"issue/{quote_path_segment(issue_id_or_key)}",
            params={"deleteSubtasks": "true" if delete_subtasks else "false"},
        )
        return JiraIssueDeletion.from_api_response(
            {},
            issue_id_or_key=issue_id_or_key,
            delete_subtasks=delete_subtasks,
            http_status=response.status_code,
        )
