"""Confluence Cloud v2 API integration module."""

from .client import ConfluenceClient
from .folders import FoldersMixin
from .pages import PagesMixin
from .spaces import SpacesMixin


class ConfluenceFetcher(FoldersMixin, SpacesMixin, PagesMixin):
    """Main entry point for Confluence operations, combining all mixins."""

    pass


__all__ = ["ConfluenceClient", "ConfluenceFetcher"]
