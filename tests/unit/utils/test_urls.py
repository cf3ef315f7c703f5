import pytest

from mcp_atlassian_cloud.utils.urls import (
    gateway_url,
    is_atlassian_cloud_url,
    normalize_site_url,
    quote_path_segment,
)


def test_normalize_site_url():
    assert normalize_site_url(" https://acme.atlassian.net/ ") == (
        "https://acme.atlassian.net"
    )
    assert normalize_site_url("https://acme.atlassian.net//") == (
        "https://acme.atlassian.net"
    )


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://acme.atlassian.net", True),
        ("https://acme.jira.com", True),
        ("https://acme.jira-dev.com", True),
        ("https://jira.example.com", False),
        ("https://atlassian.net.evil.com", False),
        (None, False),
        ("", False),
    ],
)
def test_is_atlassian_cloud_url(url, expected):
    assert is_atlassian_cloud_url(url) is expected


def test_gateway_url():
    assert gateway_url("confluence", "abc") == (
        "https://api.atlassian.com/ex/confluence/abc"
    )
    assert gateway_url("jira", "abc") == "https://api.atlassian.com/ex/jira/abc"


def test_quote_path_segment():
    assert quote_path_segment("ABC-1") == "ABC-1"
    assert quote_path_segment("a/b c") == "a%2Fb%20c"
    assert quote_path_segment("123?expand=body") == "123%3Fexpand%3Dbody"
