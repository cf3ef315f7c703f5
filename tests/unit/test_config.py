"""Tests for AtlassianConfig."""

import logging
import os
from unittest.mock import patch

import pytest
from fixtures.atlassian_mocks import MOCK_JIRA_TOKEN, MOCK_SITE

from mcp_atlassian_cloud.config import AtlassianConfig
from mcp_atlassian_cloud.exceptions import ConfigError


def test_from_env_success(mock_env_vars):
    config = AtlassianConfig.from_env()

    assert config.site == MOCK_SITE
    assert config.email == "dev@acme.test"
    assert config.jira_token == MOCK_JIRA_TOKEN
    assert config.ssl_verify is True
    assert config.timeout == 75
    assert config.is_auth_configured()


def test_from_env_missing_variables_are_listed():
    with patch.dict(
        os.environ, {"ATLASSIAN_SITE": MOCK_SITE, "JIRA_API_TOKEN": "  "}, clear=True
    ):
        with pytest.raises(ConfigError) as exc_info:
            AtlassianConfig.from_env()

    message = str(exc_info.value)
    assert "ATLASSIAN_EMAIL" in message
    assert "CONFLUENCE_API_TOKEN" in message
    assert "JIRA_API_TOKEN" in message
    assert "ATLASSIAN_SITE" not in message


def test_from_env_optional_settings(mock_env_vars):
    with patch.dict(
        os.environ,
        {
            "ATLASSIAN_SITE": MOCK_SITE + "//",
            "ATLASSIAN_SSL_VERIFY": "false",
            "ATLASSIAN_TIMEOUT": "30",
        },
    ):
        config = AtlassianConfig.from_env()

    assert config.site == MOCK_SITE
    assert config.ssl_verify is False
    assert config.timeout == 30


def test_from_env_invalid_timeout(mock_env_vars):
    with patch.dict(os.environ, {"ATLASSIAN_TIMEOUT": "soon"}):
        with pytest.raises(ConfigError, match="ATLASSIAN_TIMEOUT"):
            AtlassianConfig.from_env()


def test_from_env_warns_for_non_cloud_site(mock_env_vars, caplog):
    with patch.dict(os.environ, {"ATLASSIAN_SITE": "https://jira.example.com"}):
        with caplog.at_level(logging.WARNING):
            AtlassianConfig.from_env()

    assert "does not look like an Atlassian Cloud URL" in caplog.text


def test_repr_hides_tokens(atlassian_config):
    text = repr(atlassian_config)

    assert MOCK_JIRA_TOKEN not in text
    assert "confluence_token" not in text


def test_log_summary_masks_tokens(atlassian_config, caplog):
    with caplog.at_level(logging.INFO, logger="mcp-atlassian-cloud"):
        atlassian_config.log_summary()

    assert MOCK_SITE in caplog.text
    assert MOCK_JIRA_TOKEN not in caplog.text
    assert atlassian_config.confluence_token not in caplog.text
