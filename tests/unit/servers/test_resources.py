"""Unit tests for the Confluence and Jira MCP resources."""

import json
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastmcp import Client, FastMCP
from fastmcp.client import FastMCPTransport
from fixtures.atlassian_mocks import (
    MOCK_ISSUE_RESPONSE,
    MOCK_PROJECT_RESPONSE,
    MOCK_PROJECT_SEARCH_RESPONSE,
    MOCK_SPACES_RESPONSE,
)
from mcp.shared.exceptions import McpError

from mcp_atlassian_cloud.confluence import ConfluenceFetcher
from mcp_atlassian_cloud.exceptions import UpstreamHttpError
from mcp_atlassian_cloud.jira import JiraFetcher
from mcp_atlassian_cloud.servers.context import MainAppContext
from mcp_atlassian_cloud.servers.resources import register_resources


@pytest.fixture
def mock_confluence_fetcher():
    mock_fetcher = MagicMock(spec=ConfluenceFetcher)
    mock_fetcher.list_spaces.return_value = MOCK_SPACES_RESPONSE
    mock_fetcher.root_folders_json.return_value = {"results": []}
    mock_fetcher.get_page.return_value = {"id": "2001"}
    mock_fetcher.get_folder.return_value = {"id": "3001"}
    return mock_fetcher


@pytest.fixture
def mock_jira_fetcher():
    mock_fetcher = MagicMock(spec=JiraFetcher)
    mock_fetcher.list_projects.return_value = MOCK_PROJECT_SEARCH_RESPONSE
    mock_fetcher.get_project.return_value = MOCK_PROJECT_RESPONSE
    mock_fetcher.get_issue.return_value = MOCK_ISSUE_RESPONSE
    return mock_fetcher


@pytest.fixture
def resources_mcp(atlassian_config, mock_resolver):
    @asynccontextmanager
    async def test_lifespan(app: FastMCP) -> AsyncGenerator[dict, None]:
        yield {
            "app_lifespan_context": MainAppContext(
                config=atlassian_config, cloud_id_resolver=mock_resolver
            )
        }

    test_mcp = FastMCP("TestResources", lifespan=test_lifespan)
    register_resources(test_mcp)
    return test_mcp


@pytest.fixture
async def client(resources_mcp, mock_confluence_fetcher, mock_jira_fetcher):
    with (
        patch(
            "mcp_atlassian_cloud.servers.resources.get_confluence_fetcher",
            AsyncMock(return_value=mock_confluence_fetcher),
        ),
        patch(
            "mcp_atlassian_cloud.servers.resources.get_jira_fetcher",
            AsyncMock(return_value=mock_jira_fetcher),
        ),
    ):
        async with Client(transport=FastMCPTransport(resources_mcp)) as connected:
            yield connected


@pytest.mark.anyio
async def test_resource_catalog(client):
    resources = await client.list_resources()
    templates = await client.list_resource_templates()

    assert {str(r.uri) for r in resources} == {"confluence://spaces", "jira://projects"}
    assert {t.uriTemplate for t in templates} == {
        "confluence://root-folders/{space_key}",
        "confluence://page/{page_id}",
        "confluence://folder/{folder_id}",
        "jira://project/{project_id_or_key}",
        "jira://issue/{issue_id_or_key}",
    }
    assert all(r.mimeType == "application/json" for r in resources)


@pytest.mark.anyio
async def test_confluence_spaces(client, mock_confluence_fetcher):
    contents = await client.read_resource("confluence://spaces")

    mock_confluence_fetcher.list_spaces.assert_called_once_with(limit=25)
    assert json.loads(contents[0].text) == MOCK_SPACES_RESPONSE


@pytest.mark.anyio
async def test_confluence_templates(client, mock_confluence_fetcher):
    await client.read_resource("confluence://root-folders/ABC")
    await client.read_resource("confluence://page/2001")
    await client.read_resource("confluence://folder/3001")

    mock_confluence_fetcher.root_folders_json.assert_called_once_with("ABC")
    mock_confluence_fetcher.get_page.assert_called_once_with(
        "2001", include_children=False
    )
    mock_confluence_fetcher.get_folder.assert_called_once_with(
        "3001", include_children=False
    )


@pytest.mark.anyio
async def test_jira_resources(client, mock_jira_fetcher):
    projects = await client.read_resource("jira://projects")
    project = await client.read_resource("jira://project/ABC")
    issue = await client.read_resource("jira://issue/ABC-42")

    mock_jira_fetcher.list_projects.assert_called_once_with(start_at=0, max_results=50)
    mock_jira_fetcher.get_project.assert_called_once_with("ABC")
    mock_jira_fetcher.get_issue.assert_called_once_with("ABC-42")
    assert json.loads(projects[0].text)["total"] == 2
    assert json.loads(project[0].text)["key"] == "ABC"
    assert json.loads(issue[0].text)["key"] == "ABC-42"


@pytest.mark.anyio
async def test_resource_builds_fetcher_from_lifespan(
    resources_mcp, atlassian_config, mock_resolver, mock_jira_fetcher
):
    with patch(
        "mcp_atlassian_cloud.servers.dependencies.JiraFetcher",
        return_value=mock_jira_fetcher,
    ) as fetcher_class:
        async with Client(transport=FastMCPTransport(resources_mcp)) as connected:
            await connected.read_resource("jira://project/ABC")

    fetcher_class.assert_called_once_with(
        config=atlassian_config, resolver=mock_resolver
    )
    mock_jira_fetcher.get_project.assert_called_once_with("ABC")


@pytest.mark.anyio
async def test_resource_error_reaches_host(client, mock_jira_fetcher):
    mock_jira_fetcher.get_issue.side_effect = UpstreamHttpError(
        "GetIssue", 404, '{"errorMessages":["Issue does not exist"]}'
    )

    with pytest.raises(McpError) as exc_info:
        await client.read_resource("jira://issue/ABC-404")

    assert "GetIssue failed HTTP 404" in str(exc_info.value)
    assert "Issue does not exist" in str(exc_info.value)
