"""Tests for the command line entry point."""

import os
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from mcp_atlassian_cloud import main


@pytest.fixture
def mock_server():
    """Patch the server so that main() returns instead of serving."""
    server = MagicMock()
    server.settings.streamable_http_path = "/mcp"
    server.settings.sse_path = "/sse"
    with (
        patch("mcp_atlassian_cloud.servers.main_mcp", server),
        patch("mcp_atlassian_cloud.asyncio.run") as mock_run,
        patch("mcp_atlassian_cloud.load_dotenv"),
        patch.dict(os.environ, {}, clear=True),
    ):
        yield server, mock_run


def test_default_transport_is_stdio(mock_server):
    server, mock_run = mock_server

    result = CliRunner().invoke(main, [])

    assert result.exit_code == 0, result.output
    server.run_async.assert_called_once_with(transport="stdio")
    mock_run.assert_called_once()


def test_environment_transport_settings(mock_server):
    server, _ = mock_server
    os.environ.update(
        {
            "TRANSPORT": "streamable-http",
            "PORT": "9100",
            "HOST": "127.0.0.1",
            "STREAMABLE_HTTP_PATH": "/atlassian",
        }
    )

    result = CliRunner().invoke(main, [])

    assert result.exit_code == 0, result.output
    server.run_async.assert_called_once_with(
        transport="streamable-http",
        host="127.0.0.1",
        port=9100,
        log_level="warning",
        path="/atlassian",
    )


def test_options_override_environment(mock_server):
    server, _ = mock_server
    os.environ.update({"TRANSPORT": "sse", "PORT": "9100"})

    result = CliRunner().invoke(
        main, ["--transport", "streamable-http", "--port", "8111", "-vv"]
    )

    assert result.exit_code == 0, result.output
    kwargs = server.run_async.call_args.kwargs
    assert kwargs["transport"] == "streamable-http"
    assert kwargs["port"] == 8111
    assert kwargs["log_level"] == "debug"
    assert "path" not in kwargs


def test_invalid_environment_transport_falls_back_to_stdio(mock_server):
    server, _ = mock_server
    os.environ["TRANSPORT"] = "carrier-pigeon"

    result = CliRunner().invoke(main, [])

    assert result.exit_code == 0, result.output
    server.run_async.assert_called_once_with(transport="stdio")


def test_credential_options_are_exported(mock_server):
    os.environ["ATLASSIAN_SITE"] = "https://old.atlassian.net"

    result = CliRunner().invoke(
        main,
        [
            "--site",
            "https://acme.atlassian.net",
            "--email",
            "dev@acme.test",
            "--confluence-token",
            "c-token",
            "--jira-token",
            "j-token",
            "--read-only",
            "--no-ssl-verify",
            "--enabled-tools",
            "jira_get_issue",
        ],
    )

    assert result.exit_code == 0, result.output
    assert os.environ["ATLASSIAN_SITE"] == "https://acme.atlassian.net"
    assert os.environ["ATLASSIAN_EMAIL"] == "dev@acme.test"
    assert os.environ["CONFLUENCE_API_TOKEN"] == "c-token"
    assert os.environ["JIRA_API_TOKEN"] == "j-token"
    assert os.environ["READ_ONLY_MODE"] == "true"
    assert os.environ["ATLASSIAN_SSL_VERIFY"] == "false"
    assert os.environ["ENABLED_TOOLS"] == "jira_get_issue"


def test_unset_options_leave_environment_alone(mock_server):
    os.environ["READ_ONLY_MODE"] = "true"

    result = CliRunner().invoke(main, [])

    assert result.exit_code == 0, result.output
    assert os.environ["READ_ONLY_MODE"] == "true"
    assert "ATLASSIAN_SSL_VERIFY" not in os.environ
