"""URL helpers for Atlassian Cloud sites and API gateways."""

from urllib.parse import quote, urlparse

ATLASSIAN_API_GATEWAY = "https://api.atlassian.com/ex"


def normalize_site_url(url: str) -> str:
    """Strip surrounding whitespace and trailing slashes from a site URL."""
    return url.strip().rstrip("/")


def is_atlassian_cloud_url(url: str | None) -> bool:
    """Check whether a URL points at an Atlassian Cloud site.

    Args:
        url: The URL to check

    Returns:
        True for ``*.atlassian.net``, ``*.jira.com`` and ``*.jira-dev.com`` hosts
    """
    if not url:
        return False
    hostname = urlparse(url).hostname or ""
    return hostname.endswith((".atlassian.net", ".jira.com", ".jira-dev.com"))


def quote_path_segment(value: str) -> str:
    """Escape an id or key for use as a single URL path segment."""
    return quote(value, safe="")


def gateway_url(product: str, cloud_id: str) -> str:
    """Build the api.atlassian.com gateway root for a product and tenant.

    Example:
        gateway_url("jira", "abc") -> "https://api.atlassian.com/ex/jira/abc"
    """
    return f"{ATLASSIAN_API_GATEWAY}/{product}/{cloud_id}"
