"""Server implementations for the Atlassian Cloud MCP server."""

from .confluence import confluence_mcp
from .jira import jira_mcp
from .main import main_mcp

__all__ = ["confluence_mcp", "jira_mcp", "main_mcp"]
