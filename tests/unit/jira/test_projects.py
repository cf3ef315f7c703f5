"""Tests for the Jira ProjectsMixin."""

from unittest.mock import MagicMock

import pytest
from fixtures.atlassian_mocks import (
    MOCK_PROJECT_RESPONSE,
    MOCK_PROJECT_SEARCH_RESPONSE,
    make_response,
)

from mcp_atlassian_cloud.exceptions import UpstreamHttpError
from mcp_atlassian_cloud.jira.projects import ProjectsMixin


@pytest.fixture
def projects_mixin(atlassian_config, mock_resolver):
    mixin = ProjectsMixin(config=atlassian_config, resolver=mock_resolver)
    mixin._jira = MagicMock()
    mixin._jira.get.return_value = make_response(200, MOCK_PROJECT_SEARCH_RESPONSE)
    return mixin


def test_list_projects_defaults(projects_mixin):
    result = projects_mixin.list_projects()

    assert result == MOCK_PROJECT_SEARCH_RESPONSE
    projects_mixin.jira.get.assert_called_once_with(
        "rest/api/3/project/search",
        params={"startAt": 0, "maxResults": 50},
        advanced_mode=True,
    )


def test_list_projects_all_params(projects_mixin):
    projects_mixin.list_projects(
        query=" alpha ", start_at=50, max_results=500, order_by="key"
    )

    params = projects_mixin.jira.get.call_args.kwargs["params"]
    assert params == {
        "startAt": 50,
        "maxResults": 200,
        "query": "alpha",
        "orderBy": "key",
    }


def test_list_projects_normalizes_paging(projects_mixin):
    projects_mixin.list_projects(start_at=-5, max_results=0)

    params = projects_mixin.jira.get.call_args.kwargs["params"]
    assert params == {"startAt": 0, "maxResults": 50}


def test_get_project(projects_mixin):
    projects_mixin.jira.get.return_value = make_response(200, MOCK_PROJECT_RESPONSE)

    assert projects_mixin.get_project("ABC")["key"] == "ABC"
    projects_mixin.jira.get.assert_called_once_with(
        "rest/api/3/project/ABC", params=None, advanced_mode=True
    )


def test_get_project_blank(projects_mixin):
    with pytest.raises(ValueError, match="projectIdOrKey is required."):
        projects_mixin.get_project(" ")


def test_get_project_not_found(projects_mixin):
    projects_mixin.jira.get.return_value = make_response(404, text="No project")

    with pytest.raises(UpstreamHttpError, match="GetProject failed HTTP 404: No project"):
        projects_mixin.get_project("NOPE")
