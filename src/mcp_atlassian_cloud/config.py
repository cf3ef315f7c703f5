"""Configuration module for the Atlassian Cloud clients."""

import logging
import os
from dataclasses import dataclass, field

from .exceptions import ConfigError
from .utils.environment import is_env_truthy
from .utils.logging import log_config_param
from .utils.urls import is_atlassian_cloud_url, normalize_site_url

logger = logging.getLogger("mcp-atlassian-cloud.config")

DEFAULT_TIMEOUT = 75

REQUIRED_ENV_VARS = (
    "ATLASSIAN_SITE",
    "ATLASSIAN_EMAIL",
    "CONFLUENCE_API_TOKEN",
    "JIRA_API_TOKEN",
)


@dataclass(frozen=True)
class AtlassianConfig:
    """Tenant credentials for one Atlassian Cloud site.

    Confluence and Jira share the site and account email but are usually
    accessed with differently scoped API tokens.
    """

    site: str  # Site base URL, e.g. https://acme.atlassian.net
    email: str  # Account email used for basic auth
    confluence_token: str = field(repr=False)  # Scoped API token for Confluence
    jira_token: str = field(repr=False)  # Scoped API token for Jira
    ssl_verify: bool = True  # Whether to verify SSL certificates
    timeout: int = DEFAULT_TIMEOUT  # Per-request timeout in seconds

    def __post_init__(self) -> None:
        object.__setattr__(self, "site", normalize_site_url(self.site or ""))

    @classmethod
    def from_env(cls) -> "AtlassianConfig":
        """Create configuration from environment variables.

        Returns:
            AtlassianConfig with values from environment variables

        Raises:
            ConfigError: If any required environment variable is missing or blank
        """
        missing = [
            name for name in REQUIRED_ENV_VARS if not os.getenv(name, "").strip()
        ]
        if missing:
            raise ConfigError(
                "Atlassian configuration is incomplete, missing: " + ", ".join(missing)
            )

        timeout_env = os.getenv("ATLASSIAN_TIMEOUT", "")
        try:
            timeout = int(timeout_env) if timeout_env.strip() else DEFAULT_TIMEOUT
        except ValueError as e:
            raise ConfigError(
                f"ATLASSIAN_TIMEOUT must be an integer number of seconds, got '{timeout_env}'"
            ) from e

        config = cls(
            site=os.environ["ATLASSIAN_SITE"].strip(),
            email=os.environ["ATLASSIAN_EMAIL"].strip(),
            confluence_token=os.environ["CONFLUENCE_API_TOKEN"].strip(),
            jira_token=os.environ["JIRA_API_TOKEN"].strip(),
            ssl_verify=is_env_truthy("ATLASSIAN_SSL_VERIFY", "true"),
            timeout=timeout,
        )
        if not is_atlassian_cloud_url(config.site):
            logger.warning(
                f"Site '{config.site}' does not look like an Atlassian Cloud URL; "
                "cloud ID resolution may fail."
            )
        return config

    def is_auth_configured(self) -> bool:
        """Check that every credential needed for API calls is present."""
        return all(
            value.strip()
            for value in (self.site, self.email, self.confluence_token, self.jira_token)
        )

    def log_summary(self) -> None:
        """Log the loaded configuration with tokens masked."""
        log_config_param(logger, "site", self.site)
        log_config_param(logger, "email", self.email)
        log_config_param(logger, "Confluence token", self.confluence_token, True)
        log_config_param(logger, "Jira token", self.jira_token, True)
