"""Jira Cloud v3 API integration module."""

from .client import JiraClient
from .issues import IssuesMixin
from .projects import ProjectsMixin
from .search import SearchMixin


class JiraFetcher(ProjectsMixin, IssuesMixin, SearchMixin):
    """Main entry point for Jira operations, combining all mixins."""

    pass


__all__ = ["JiraClient", "JiraFetcher"]
