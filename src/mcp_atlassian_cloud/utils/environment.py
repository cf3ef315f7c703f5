"""Environment switches controlling which tools the server exposes."""

import logging
import os

logger = logging.getLogger("mcp-atlassian-cloud.utils.environment")

TRUTHY_VALUES = ("true", "1", "yes", "y", "on")


def is_env_truthy(name: str, default: str = "false") -> bool:
    """Return True when the environment variable holds a truthy value."""
    return os.getenv(name, default).strip().lower() in TRUTHY_VALUES


def is_read_only_mode() -> bool:
    """Check if the server is running in read-only mode.

    Read-only mode hides and refuses every tool tagged ``write`` (page upsert,
    issue create and delete) while leaving reads available.
    """
    return is_env_truthy("READ_ONLY_MODE")


def get_enabled_tools() -> list[str] | None:
    """Parse the ENABLED_TOOLS allow-list.

    Returns:
        The stripped, non-empty tool names, or None when the variable is
        unset or holds no names (meaning every tool is enabled).

    Examples:
        ENABLED_TOOLS="jira_get_issue, confluence_get_page" -> ["jira_get_issue", "confluence_get_page"]
        ENABLED_TOOLS=" , " -> None
    """
    raw = os.getenv("ENABLED_TOOLS")
    if not raw:
        return None
    tools = [name.strip() for name in raw.split(",") if name.strip()]
    logger.debug(f"Parsed enabled tools from environment: {tools}")
    return tools or None


def should_include_tool(tool_name: str, enabled_tools: list[str] | None) -> bool:
    """Check a tool name against the allow-list (None allows everything)."""
    if enabled_tools is None:
        return True
    return tool_name in enabled_tools
