"""Read-only MCP resources mirroring the Confluence and Jira read tools.

Resources are registered on the main server itself rather than on the mounted
sub-servers, so their URIs are exposed exactly as written here.
"""

import asyncio
import json
import logging
from typing import Any

from fastmcp import Context, FastMCP

from ..utils.decorators import handle_resource_errors
from .dependencies import get_confluence_fetcher, get_jira_fetcher

logger = logging.getLogger("mcp-atlassian-cloud.servers.resources")

JSON_MIME_TYPE = "application/json"


def _dumps(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def register_resources(mcp: FastMCP) -> None:
    """Register the Confluence and Jira resources on ``mcp``.

    Args:
        mcp: The server the resources are added to. Its request context is
            used to reach the lifespan configuration when a resource is read.
    """

    def _context() -> Context:
        return Context(fastmcp=mcp)

    @mcp.resource(
        "confluence://spaces",
        name="Confluence spaces",
        description="Confluence spaces (first 25).",
        mime_type=JSON_MIME_TYPE,
    )
    @handle_resource_errors
    async def confluence_spaces() -> str:
        confluence_fetcher = await get_confluence_fetcher(_context())
        spaces = await asyncio.to_thread(confluence_fetcher.list_spaces, limit=25)
        return _dumps(spaces)

    @mcp.resource(
        "confluence://root-folders/{space_key}",
        name="Confluence root folders",
        description="Root-level folders of a Confluence space.",
        mime_type=JSON_MIME_TYPE,
    )
    @handle_resource_errors
    async def confluence_root_folders(space_key: str) -> str:
        confluence_fetcher = await get_confluence_fetcher(_context())
        folders = await asyncio.to_thread(confluence_fetcher.root_folders_json, space_key)
        return _dumps(folders)

    @mcp.resource(
        "confluence://page/{page_id}",
        name="Confluence page",
        description="A Confluence page by id.",
        mime_type=JSON_MIME_TYPE,
    )
    @handle_resource_errors
    async def confluence_page(page_id: str) -> str:
        confluence_fetcher = await get_confluence_fetcher(_context())
        page = await asyncio.to_thread(
            confluence_fetcher.get_page, page_id, include_children=False
        )
        return _dumps(page)

    @mcp.resource(
        "confluence://folder/{folder_id}",
        name="Confluence folder",
        description="A Confluence folder by id.",
        mime_type=JSON_MIME_TYPE,
    )
    @handle_resource_errors
    async def confluence_folder(folder_id: str) -> str:
        confluence_fetcher = await get_confluence_fetcher(_context())
        folder = await asyncio.to_thread(
            confluence_fetcher.get_folder, folder_id, include_children=False
        )
        return _dumps(folder)

    @mcp.resource(
        "jira://projects",
        name="Jira projects",
        description="Jira projects (first 50).",
        mime_type=JSON_MIME_TYPE,
    )
    @handle_resource_errors
    async def jira_projects() -> str:
        jira = await get_jira_fetcher(_context())
        projects = await asyncio.to_thread(
            jira.list_projects, start_at=0, max_results=50
        )
        return _dumps(projects)

    @mcp.resource(
        "jira://project/{project_id_or_key}",
        name="Jira project",
        description="A Jira project by id or key.",
        mime_type=JSON_MIME_TYPE,
    )
    @handle_resource_errors
    async def jira_project(project_id_or_key: str) -> str:
        jira = await get_jira_fetcher(_context())
        project = await asyncio.to_thread(jira.get_project, project_id_or_key)
        return _dumps(project)

    @mcp.resource(
        "jira://issue/{issue_id_or_key}",
        name="Jira issue",
        description="A Jira issue by id or key.",
        mime_type=JSON_MIME_TYPE,
    )
    @handle_resource_errors
    async def jira_issue(issue_id_or_key: str) -> str:
        jira = await get_jira_fetcher(_context())
        issue = await asyncio.to_thread(jira.get_issue, issue_id_or_key)
        return _dumps(issue)

    logger.debug("Registered Confluence and Jira resources")
