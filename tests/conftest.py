"""
Root pytest configuration file for MCP Atlassian Cloud tests.
"""

from unittest.mock import MagicMock, patch

import pytest
from fixtures.atlassian_mocks import (
    MOCK_CLOUD_ID,
    MOCK_CONFLUENCE_TOKEN,
    MOCK_EMAIL,
    MOCK_JIRA_TOKEN,
    MOCK_SITE,
)

from mcp_atlassian_cloud.cloud_id import CloudIdResolver
from mcp_atlassian_cloud.config import AtlassianConfig


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def mock_env_vars():
    """Mock the environment variables read by AtlassianConfig.from_env."""
    with patch.dict(
        "os.environ",
        {
            "ATLASSIAN_SITE": MOCK_SITE,
            "ATLASSIAN_EMAIL": MOCK_EMAIL,
            "CONFLUENCE_API_TOKEN": MOCK_CONFLUENCE_TOKEN,
            "JIRA_API_TOKEN": MOCK_JIRA_TOKEN,
        },
        clear=True,
    ):
        yield


@pytest.fixture
def atlassian_config():
    """Return a complete AtlassianConfig."""
    return AtlassianConfig(
        site=MOCK_SITE,
        email=MOCK_EMAIL,
        confluence_token=MOCK_CONFLUENCE_TOKEN,
        jira_token=MOCK_JIRA_TOKEN,
    )


@pytest.fixture
def mock_resolver():
    """A resolver that answers with a fixed cloud ID without any HTTP call."""
    resolver = MagicMock(spec=CloudIdResolver)
    resolver.resolve.return_value = MOCK_CLOUD_ID
    return resolver
