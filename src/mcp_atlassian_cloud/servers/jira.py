"""Jira FastMCP server instance and tool definitions."""

import asyncio
import json
import logging
from typing import Annotated, Any

from fastmcp import Context, FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from mcp_atlassian_cloud.servers.dependencies import get_jira_fetcher
from mcp_atlassian_cloud.utils.decorators import (
    check_write_access,
    convert_empty_defaults_to_none,
    handle_tool_errors,
)

logger = logging.getLogger(__name__)

jira_mcp = FastMCP(
    name="Jira MCP Service",
    instructions="Provides tools for interacting with Atlassian Jira Cloud (REST v3).",
)


def _dumps(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


@jira_mcp.tool(tags={"jira", "read"})
@handle_tool_errors
@convert_empty_defaults_to_none
async def list_projects(
    ctx: Context,
    query: Annotated[
        str,
        Field(description="Optional search string (filters projects by name/key)."),
    ] = "",
    start_at: Annotated[int, Field(description="Start index (default 0).")] = 0,
    max_results: Annotated[
        int, Field(description="Max results (default 50, max 200).")
    ] = 50,
    order_by: Annotated[
        str, Field(description="Optional orderBy (e.g. 'key' or 'name').")
    ] = "",
) -> str:
    """List Jira projects (REST v3). Supports optional query + pagination.

    Returns:
        JSON string of the project search page.
    """
    jira = await get_jira_fetcher(ctx)
    projects = await asyncio.to_thread(
        jira.list_projects,
        query=query,
        start_at=start_at,
        max_results=max_results,
        order_by=order_by,
    )
    return _dumps(projects)


@jira_mcp.tool(tags={"jira", "read"})
@handle_tool_errors
async def get_project(
    ctx: Context,
    project_id_or_key: Annotated[
        str, Field(description="Project id or key, e.g. 10000 or ABC")
    ],
) -> str:
    """Get a Jira project by id or key (REST v3)."""
    jira = await get_jira_fetcher(ctx)
    project = await asyncio.to_thread(jira.get_project, project_id_or_key)
    return _dumps(project)


@jira_mcp.tool(tags={"jira", "read"})
@handle_tool_errors
@convert_empty_defaults_to_none
async def get_issue(
    ctx: Context,
    issue_id_or_key: Annotated[
        str, Field(description="Issue id or key, e.g. 10001 or ABC-1")
    ],
    fields_csv: Annotated[
        str, Field(description="Optional fields CSV, e.g. 'summary,status,assignee'")
    ] = "",
    expand_csv: Annotated[
        str, Field(description="Optional expand CSV, e.g. 'renderedFields,changelog'")
    ] = "",
) -> str:
    """Get a Jira issue by id or key (REST v3)."""
    jira = await get_jira_fetcher(ctx)
    issue = await asyncio.to_thread(
        jira.get_issue, issue_id_or_key, fields=fields_csv, expand=expand_csv
    )
    return _dumps(issue)


@jira_mcp.tool(tags={"jira", "write"})
@handle_tool_errors
@check_write_access
@convert_empty_defaults_to_none
async def create_issue(
    ctx: Context,
    project_key: Annotated[str, Field(description="Project key, e.g. ABC")],
    issue_type: Annotated[
        str, Field(description="Issue type name, e.g. Task, Story, Epic")
    ],
    summary: Annotated[str, Field(description="Summary/title of the issue")],
    description: Annotated[
        str,
        Field(description="Optional description (plain text). Will be converted to ADF."),
    ] = "",
    labels_csv: Annotated[
        str, Field(description="Optional labels CSV, e.g. 'codex,backend,urgent'")
    ] = "",
    parent_issue: Annotated[
        str,
        Field(description="Optional parent issue id or key (for sub-tasks), e.g. ABC-1"),
    ] = "",
) -> str:
    """Create a Jira issue (REST v3 POST /issue).

    The description is plain text converted to ADF.

    Returns:
        JSON string {id, key, self} of the created issue.

    Raises:
        ToolError: If the issue could not be created, or in read-only mode.
    """
    labels = (
        [label.strip() for label in labels_csv.split(",") if label.strip()]
        if labels_csv
        else None
    )
    jira = await get_jira_fetcher(ctx)
    try:
        created = await asyncio.to_thread(
            jira.create_issue,
            project_key=project_key,
            issue_type_name=issue_type,
            summary=summary,
            description=description,
            labels=labels,
            parent_key_or_id=parent_issue,
        )
    except Exception as e:
        logger.error(f"Error creating issue in project {project_key}: {e}")
        raise ToolError(f"jira_create_issue failed: {e}") from e
    return _dumps(created)


@jira_mcp.tool(tags={"jira", "write"})
@handle_tool_errors
@check_write_access
async def delete_issue(
    ctx: Context,
    issue_id_or_key: Annotated[
        str, Field(description="Issue id or key, e.g. 10001 or ABC-1")
    ],
    delete_subtasks: Annotated[
        bool,
        Field(description="If true, delete subtasks as well (deleteSubtasks query param)."),
    ] = False,
) -> str:
    """Delete a Jira issue (REST v3 DELETE /issue/{issueIdOrKey}).

    Returns:
        JSON string {deleted, deleteSubtasks, httpStatus}.
    """
    jira = await get_jira_fetcher(ctx)
    deletion = await asyncio.to_thread(
        jira.delete_issue, issue_id_or_key, delete_subtasks=delete_subtasks
    )
    return _dumps(deletion.to_simplified_dict())


@jira_mcp.tool(tags={"jira", "read"})
@handle_tool_errors
@convert_empty_defaults_to_none
async def search_jql(
    ctx: Context,
    jql: Annotated[
        str,
        Field(description="JQL query, e.g. 'project = ABC ORDER BY created DESC'"),
    ],
    max_results: Annotated[
        int, Field(description="Max results (default 50, max 200).")
    ] = 50,
    next_page_token: Annotated[
        str, Field(description="Pagination token from a previous response (optional).")
    ] = "",
) -> str:
    """Search Jira issues using POST /rest/api/3/search/jql.

    Pagination uses nextPageToken only.
    """
    jira = await get_jira_fetcher(ctx)
    results = await asyncio.to_thread(
        jira.search_jql,
        jql,
        max_results=max_results,
        next_page_token=next_page_token,
    )
    return _dumps(results)
