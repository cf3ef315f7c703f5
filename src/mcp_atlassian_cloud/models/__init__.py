"""
Models for the Atlassian Cloud API responses and request bodies.
"""

from .base import ApiModel, JsonObject
from .confluence import (
    ConfluencePageVersion,
    ConfluenceRootFolders,
    ConfluenceSpaceInfo,
    RootFoldersSource,
    normalize_status,
    storage_body,
)
from .jira import (
    JiraIssueDeletion,
    clamp_max_results,
    clean_labels,
    parent_reference,
    text_to_adf,
)

__all__ = [
    "ApiModel",
    "ConfluencePageVersion",
    "ConfluenceRootFolders",
    "ConfluenceSpaceInfo",
    "JiraIssueDeletion",
    "JsonObject",
    "RootFoldersSource",
    "clamp_max_results",
    "clean_labels",
    "normalize_status",
    "parent_reference",
    "storage_body",
    "text_to_adf",
]
