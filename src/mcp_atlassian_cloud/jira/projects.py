"""Module for Jira project operations."""

import logging

from ..models.base import JsonObject
from ..models.jira import clamp_max_results
from ..utils.urls import quote_path_segment
from .client import JiraClient, require

logger = logging.getLogger("mcp-atlassian-cloud.jira")


class ProjectsMixin(JiraClient):
    """Mixin for Jira project operations."""

    def list_projects(
        self,
        query: str | None = None,
        start_at: int = 0,
        max_results: int = 50,
        order_by: str | None = None,
    ) -> JsonObject:
        """
        Search projects visible to the user.

        Args:
            query: Optional filter on project name or key
            start_at: Index of the first project; negative values mean 0
            max_results: Page size; defaults to 50, capped at 200
            order_by: Optional ordering, e.g. ``key`` or ``name``

        Returns:
            The raw ``GET /project/search`` page
        """
        params: dict[str, object] = {
            "startAt": max(start_at or 0, 0),
            "maxResults": clamp_max_results(max_results),
        }
        if query and query.strip():
            params["query"] = query.strip()
        if order_by and order_by.strip():
            params["orderBy"] = order_by.strip()

        return self._call_json("ListProjects", "GET", "project/search", params=params)

    def get_project(self, project_id_or_key: str) -> JsonObject:
        """
        Get a project by id or key.

        Raises:
            ValueError: If project_id_or_key is blank
        """
        project_id_or_key = require(project_id_or_key, "projectIdOrKey")
        return self._call_json(
            "GetProject", "GET", f"project/{quote_path_segment(project_id_or_key)}"
        )
