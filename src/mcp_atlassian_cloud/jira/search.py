"""Module for Jira JQL search."""

import logging

from ..models.base import JsonObject
from ..models.jira import clamp_max_results
from .client import JiraClient, require

logger = logging.getLogger("mcp-atlassian-cloud.jira")


class SearchMixin(JiraClient):
    """Mixin for Jira search operations."""

    def search_jql(
        self,
        jql: str,
        max_results: int = 50,
        next_page_token: str | None = None,
    ) -> JsonObject:
        """
        Search issues with JQL through ``POST /search/jql``.

        The endpoint pages with an opaque ``nextPageToken`` only; pass the
        token from the previous response to get the following page.

        Args:
            jql: JQL query, e.g. ``project = ABC ORDER BY created DESC``
            max_results: Page size; defaults to 50, capped at 200
            next_page_token: Cursor from a previous response

        Returns:
            The raw search response, all fields included
        """
        payload: JsonObject = {
            "jql": require(jql, "jql"),
            "maxResults": clamp_max_results(max_results),
            "fields": ["*all"],
        }
        if next_page_token and next_page_token.strip():
            payload["nextPageToken"] = next_page_token.strip()

        return self._call_json("SearchJql", "POST", "search/jql", data=payload)
