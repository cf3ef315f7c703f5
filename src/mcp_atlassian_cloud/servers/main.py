"""Main FastMCP server setup for the Atlassian Cloud integration."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastmcp import FastMCP
from fastmcp.tools import Tool as FastMCPTool
from mcp.types import Tool as MCPTool
from starlette.requests import Request
from starlette.responses import JSONResponse

from mcp_atlassian_cloud.cloud_id import CloudIdCache, CloudIdResolver
from mcp_atlassian_cloud.config import AtlassianConfig
from mcp_atlassian_cloud.utils.environment import (
    get_enabled_tools,
    is_read_only_mode,
    should_include_tool,
)

from .confluence import confluence_mcp
from .context import MainAppContext
from .jira import jira_mcp
from .resources import register_resources

logger = logging.getLogger("mcp-atlassian-cloud.server.main")


async def health_check(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


@asynccontextmanager
async def main_lifespan(app: FastMCP[MainAppContext]) -> AsyncIterator[dict]:
    """Load the tenant configuration and share it with every tool call.

    Raises:
        ConfigError: If a required environment variable is missing, so the
            server refuses to start.
    """
    logger.info("Main Atlassian Cloud MCP server lifespan starting...")
    config = AtlassianConfig.from_env()
    config.log_summary()

    read_only = is_read_only_mode()
    enabled_tools = get_enabled_tools()

    app_context = MainAppContext(
        config=config,
        cloud_id_resolver=CloudIdResolver(
            CloudIdCache(), ssl_verify=config.ssl_verify, timeout=config.timeout
        ),
        read_only=read_only,
        enabled_tools=enabled_tools,
    )
    logger.info(f"Read-only mode: {'ENABLED' if read_only else 'DISABLED'}")
    logger.info(f"Enabled tools filter: {enabled_tools or 'All tools enabled'}")
    yield {"app_lifespan_context": app_context}
    logger.info("Main Atlassian Cloud MCP server lifespan shutting down.")


class AtlassianMCP(FastMCP[MainAppContext]):
    """Custom FastMCP server class for Atlassian integration with tool filtering."""

    async def _mcp_list_tools(self) -> list[MCPTool]:
        # Filter tools based on enabled_tools and read_only mode from the lifespan context.
        req_context = self._mcp_server.request_context
        if req_context is None or req_context.lifespan_context is None:
            logger.warning("Lifespan context not available during list_tools call.")
            return []

        lifespan_ctx_dict = req_context.lifespan_context
        app_lifespan_state: MainAppContext | None = (
            lifespan_ctx_dict.get("app_lifespan_context")
            if isinstance(lifespan_ctx_dict, dict)
            else None
        )
        if app_lifespan_state is None or app_lifespan_state.config is None:
            logger.warning(
                "Excluding all tools as the application configuration is unavailable."
            )
            return []

        read_only = app_lifespan_state.read_only
        enabled_tools_filter = app_lifespan_state.enabled_tools
        logger.debug(
            f"list_tools: read_only={read_only}, enabled_tools_filter={enabled_tools_filter}"
        )

        all_tools: dict[str, FastMCPTool] = await self.get_tools()
        logger.debug(
            f"Aggregated {len(all_tools)} tools before filtering: {list(all_tools.keys())}"
        )

        filtered_tools: list[MCPTool] = []
        for registered_name, tool_obj in all_tools.items():
            if not should_include_tool(registered_name, enabled_tools_filter):
                logger.debug(f"Excluding tool '{registered_name}' (not enabled)")
                continue

            if read_only and "write" in tool_obj.tags:
                logger.debug(
                    f"Excluding tool '{registered_name}' due to read-only mode and 'write' tag"
                )
                continue

            filtered_tools.append(tool_obj.to_mcp_tool(name=registered_name))

        logger.debug(f"list_tools: Total tools after filtering: {len(filtered_tools)}")
        return filtered_tools


main_mcp = AtlassianMCP(name="Atlassian Cloud MCP", lifespan=main_lifespan)
main_mcp.mount("confluence", confluence_mcp)
main_mcp.mount("jira", jira_mcp)
register_resources(main_mcp)


@main_mcp.custom_route("/healthz", methods=["GET"], include_in_schema=False)
async def _health_check_route(request: Request) -> JSONResponse:
    return await health_check(request)
