"""Confluence FastMCP server instance and tool definitions."""

import asyncio
import json
import logging
from typing import Annotated, Any

from fastmcp import Context, FastMCP
from pydantic import Field

from mcp_atlassian_cloud.servers.dependencies import get_confluence_fetcher
from mcp_atlassian_cloud.utils.decorators import (
    check_write_access,
    convert_empty_defaults_to_none,
    handle_tool_errors,
)

logger = logging.getLogger(__name__)

confluence_mcp = FastMCP(
    name="Confluence MCP Service",
    instructions="Provides tools for interacting with Atlassian Confluence Cloud (REST v2).",
)


def _dumps(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


@confluence_mcp.tool(tags={"confluence", "read"})
@handle_tool_errors
@convert_empty_defaults_to_none
async def list_spaces(
    ctx: Context,
    keys: Annotated[
        str,
        Field(description="(Optional) Comma-separated space keys, e.g. 'ABC,HR'"),
    ] = "",
    limit: Annotated[
        int,
        Field(description="Max number of spaces to return (default 25)"),
    ] = 25,
) -> str:
    """List Confluence spaces (REST v2). Optionally filter by comma-separated keys.

    Args:
        ctx: The FastMCP context.
        keys: Comma-separated space keys to filter by.
        limit: Maximum number of spaces; 0 or less means 25.

    Returns:
        JSON string of the Confluence spaces page.
    """
    confluence_fetcher = await get_confluence_fetcher(ctx)
    spaces = await asyncio.to_thread(
        confluence_fetcher.list_spaces, keys=keys, limit=limit
    )
    return _dumps(spaces)


@confluence_mcp.tool(tags={"confluence", "read"})
@handle_tool_errors
async def get_space_homepage_id(
    ctx: Context,
    space_key: Annotated[str, Field(description="Confluence space key, e.g. 'ABC'")],
) -> str:
    """Get the homepageId for a Confluence space key (REST v2).

    Returns:
        The homepage id as a plain string.
    """
    confluence_fetcher = await get_confluence_fetcher(ctx)
    return await asyncio.to_thread(confluence_fetcher.get_homepage_id, space_key)


@confluence_mcp.tool(tags={"confluence", "read"})
@handle_tool_errors
async def get_space_info(
    ctx: Context,
    space_key: Annotated[str, Field(description="Confluence space key, e.g. 'ABC'")],
) -> str:
    """Get space info for a Confluence space key (REST v2): spaceId + homepageId.

    Returns:
        JSON string with spaceKey, spaceId and homepageId.
    """
    confluence_fetcher = await get_confluence_fetcher(ctx)
    space_info = await asyncio.to_thread(confluence_fetcher.get_space_info, space_key)
    return _dumps(space_info.to_simplified_dict())


@confluence_mcp.tool(tags={"confluence", "read"})
@handle_tool_errors
async def get_folder(
    ctx: Context,
    folder_id: Annotated[str, Field(description="Folder id")],
    include_children: Annotated[
        bool, Field(description="Include direct children")
    ] = False,
) -> str:
    """Get a Confluence folder by id (REST v2)."""
    confluence_fetcher = await get_confluence_fetcher(ctx)
    folder = await asyncio.to_thread(
        confluence_fetcher.get_folder, folder_id, include_children
    )
    return _dumps(folder)


@confluence_mcp.tool(tags={"confluence", "read"})
@handle_tool_errors
async def get_page(
    ctx: Context,
    page_id: Annotated[str, Field(description="Page id")],
    include_children: Annotated[
        bool, Field(description="Include direct children")
    ] = False,
) -> str:
    """Get a Confluence page by id (REST v2)."""
    confluence_fetcher = await get_confluence_fetcher(ctx)
    page = await asyncio.to_thread(
        confluence_fetcher.get_page, page_id, include_children
    )
    return _dumps(page)


@confluence_mcp.tool(tags={"confluence", "read"})
@handle_tool_errors
async def root_folders(
    ctx: Context,
    space_key: Annotated[str, Field(description="Confluence space key, e.g. 'ABC'")],
) -> str:
    """List ONLY root-level folders (type=folder) for a Confluence space.

    Handles spaces whose homepage is a page rather than a folder.

    Returns:
        JSON string with the folder results, paging metadata and a source block.
    """
    confluence_fetcher = await get_confluence_fetcher(ctx)
    folders = await asyncio.to_thread(confluence_fetcher.root_folders_json, space_key)
    return _dumps(folders)


@confluence_mcp.tool(tags={"confluence", "write"})
@handle_tool_errors
@check_write_access
@convert_empty_defaults_to_none
async def upsert_page(
    ctx: Context,
    space_key: Annotated[str, Field(description="Confluence space key, e.g. 'ABC'")],
    title: Annotated[str, Field(description="Page title")],
    body_storage_html: Annotated[
        str,
        Field(
            description=(
                "Body in Confluence 'storage' representation (HTML). "
                "To reference a Jira issue, use the Jira macro: "
                '<ac:structured-macro ac:name="jira"><ac:parameter ac:name="key">KEY'
                "</ac:parameter></ac:structured-macro>."
            )
        ),
    ],
    parent_id: Annotated[
        str,
        Field(
            description="Parent id for CREATE only. If empty, uses the space homepageId."
        ),
    ] = "",
    page_id: Annotated[
        str, Field(description="Page id to UPDATE. If empty => CREATE.")
    ] = "",
    status: Annotated[
        str, Field(description="Status: current or draft (default current).")
    ] = "",
    version_message: Annotated[
        str,
        Field(description="Optional version message for UPDATE (version.message)."),
    ] = "",
    subtype: Annotated[
        str, Field(description="Optional subtype for CREATE (leave empty unless needed).")
    ] = "",
) -> str:
    """Create or update a Confluence page (REST v2).

    If page_id is empty the page is created under parent_id, or under the
    space homepage when parent_id is empty too. Otherwise page_id is updated
    and its version number incremented.

    Args:
        ctx: The FastMCP context.
        space_key: The space the page lives in.
        title: The page title.
        body_storage_html: The page body in storage representation.
        parent_id: Parent for a new page.
        page_id: Page to update.
        status: Page status.
        version_message: Message for the new version on update.
        subtype: Page subtype on create.

    Returns:
        JSON string with the action taken, the space ids and the page.

    Raises:
        ToolError: If space_key, title or body_storage_html is blank, in
            read-only mode, or when a Confluence call fails.
    """
    if not space_key or not space_key.strip():
        raise ValueError("space_key is required.")
    if not title or not title.strip():
        raise ValueError("title is required.")
    if not body_storage_html or not body_storage_html.strip():
        raise ValueError("body_storage_html is required.")

    confluence_fetcher = await get_confluence_fetcher(ctx)
    space_info = await asyncio.to_thread(
        confluence_fetcher.get_space_info, space_key.strip()
    )

    result: dict[str, Any] = {
        "spaceKey": space_info.space_key,
        "spaceId": space_info.space_id,
    }
    if not page_id:
        parent = parent_id.strip() if parent_id else space_info.homepage_id
        page = await asyncio.to_thread(
            confluence_fetcher.create_page,
            space_id=space_info.space_id,
            parent_id=parent,
            title=title.strip(),
            body_html=body_storage_html,
            status=status,
            subtype=subtype,
        )
        result = {"action": "created", **result, "parentId": parent}
        logger.info(f"Created page '{title.strip()}' in space {space_info.space_key}")
    else:
        page = await asyncio.to_thread(
            confluence_fetcher.update_page,
            page_id=page_id.strip(),
            title=title.strip(),
            body_html=body_storage_html,
            status=status,
            version_message=version_message,
        )
        result = {"action": "updated", **result, "pageId": page_id.strip()}
        logger.info(f"Updated page {page_id.strip()} in space {space_info.space_key}")

    result["page"] = page
    return _dumps(result)
