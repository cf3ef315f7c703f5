"""Dependency providers for ConfluenceFetcher and JiraFetcher.

Tools receive a fresh fetcher per invocation, built from the configuration
and the shared cloud ID resolver held in the lifespan context.
"""

from __future__ import annotations

import logging

from fastmcp import Context

from mcp_atlassian_cloud.confluence import ConfluenceFetcher
from mcp_atlassian_cloud.jira import JiraFetcher
from mcp_atlassian_cloud.servers.context import MainAppContext

logger = logging.getLogger("mcp-atlassian-cloud.servers.dependencies")


def get_app_context(ctx: Context) -> MainAppContext | None:
    """Return the MainAppContext stored by the lifespan, if any."""
    lifespan_ctx_dict = ctx.request_context.lifespan_context
    if isinstance(lifespan_ctx_dict, dict):
        return lifespan_ctx_dict.get("app_lifespan_context")
    return None


def _require_app_context(ctx: Context, service: str) -> MainAppContext:
    app_ctx = get_app_context(ctx)
    if app_ctx is None or app_ctx.config is None:
        logger.error(f"{service} configuration could not be resolved.")
        raise ValueError(
            f"{service} client (fetcher) not available. Ensure server is configured correctly."
        )
    return app_ctx


async def get_confluence_fetcher(ctx: Context) -> ConfluenceFetcher:
    """Returns a ConfluenceFetcher for the current request.

    Raises:
        ValueError: If the server has no configuration.
    """
    app_ctx = _require_app_context(ctx, "Confluence")
    return ConfluenceFetcher(config=app_ctx.config, resolver=app_ctx.cloud_id_resolver)


async def get_jira_fetcher(ctx: Context) -> JiraFetcher:
    """Returns a JiraFetcher for the current request.

    Raises:
        ValueError: If the server has no configuration.
    """
    app_ctx = _require_app_context(ctx, "Jira")
    return JiraFetcher(config=app_ctx.config, resolver=app_ctx.cloud_id_resolver)
