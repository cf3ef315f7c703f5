"""
Utility functions for the Atlassian Cloud MCP server.
"""

from .environment import get_enabled_tools, is_read_only_mode, should_include_tool
from .logging import mask_sensitive, setup_logging
from .urls import gateway_url, is_atlassian_cloud_url, normalize_site_url

__all__ = [
    "gateway_url",
    "get_enabled_tools",
    "is_atlassian_cloud_url",
    "is_read_only_mode",
    "mask_sensitive",
    "normalize_site_url",
    "setup_logging",
    "should_include_tool",
]
