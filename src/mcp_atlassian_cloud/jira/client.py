"""Base client module for Jira Cloud v3 API interactions."""

import json
import logging
from typing import Any

import requests
from atlassian import Jira

from .. import __version__
from ..cloud_id import CloudIdResolver
from ..config import AtlassianConfig
from ..exceptions import ConfigError, UpstreamHttpError
from ..models.base import JsonObject
from ..utils.urls import gateway_url

logger = logging.getLogger("mcp-atlassian-cloud.jira")

API_PREFIX = "rest/api/3"


def require(value: str | None, name: str) -> str:
    """Return the stripped value, raising ValueError when it is blank."""
    if value is None or not value.strip():
        raise ValueError(f"{name} is required.")
    return value.strip()


class JiraClient:
    """Base client for Jira Cloud v3 API interactions."""

    config: AtlassianConfig
    resolver: CloudIdResolver

    def __init__(
        self,
        config: AtlassianConfig | None = None,
        resolver: CloudIdResolver | None = None,
    ) -> None:
        """Initialize the Jira client with configuration options.

        Args:
            config: Tenant configuration (loaded from the environment if None)
            resolver: Cloud ID resolver sharing the server's cache

        Raises:
            ConfigError: If site, email or the Jira token is blank. Nothing is
                sent over the network in that case.
        """
        self.config = config or AtlassianConfig.from_env()
        if not (
            self.config.site.strip()
            and self.config.email.strip()
            and self.config.jira_token.strip()
        ):
            raise ConfigError(
                "Atlassian configuration incomplete for Jira (site/email/Jira API token)."
            )
        self.resolver = resolver or CloudIdResolver(
            ssl_verify=self.config.ssl_verify, timeout=self.config.timeout
        )
        self._jira: Jira | None = None

    @property
    def cloud_id(self) -> str:
        return self.resolver.resolve(
            self.config.site, self.config.email, self.config.jira_token
        )

    @property
    def jira(self) -> Jira:
        """The REST client bound to ``api.atlassian.com/ex/jira/{cloudId}``."""
        if self._jira is None:
            session = requests.Session()
            session.headers["User-Agent"] = f"mcp-atlassian-cloud/{__version__}"
            self._jira = Jira(
                url=gateway_url("jira", self.cloud_id),
                username=self.config.email,
                password=self.config.jira_token,
                session=session,
                cloud=True,
                verify_ssl=self.config.ssl_verify,
                timeout=self.config.timeout,
            )
        return self._jira

    def _call(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        data: JsonObject | None = None,
    ) -> requests.Response:
        """Send one request under ``/rest/api/3`` and check its status.

        Returns:
            The raw response, so callers can read the status of empty replies

        Raises:
            UpstreamHttpError: If the API answers with a non-success status
        """
        full_path = f"{API_PREFIX}/{path.lstrip('/')}"
        logger.debug(f"[JIRA] {method} {full_path} params={params}")
        if data is not None:
            logger.debug(f"[JIRA] payload: {json.dumps(data)}")

        if method == "GET":
            response = self.jira.get(full_path, params=params, advanced_mode=True)
        elif method == "POST":
            response = self.jira.post(
                full_path, data=data, params=params, advanced_mode=True
            )
        elif method == "DELETE":
            response = self.jira.delete(full_path, params=params, advanced_mode=True)
        else:
            raise ValueError(f"Unsupported HTTP method: {method}")

        if not response.ok:
            raise UpstreamHttpError(operation, response.status_code, response.text)
        return response

    def _call_json(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        data: JsonObject | None = None,
    ) -> JsonObject:
        """Like :meth:`_call` but decode the body (empty body -> ``{}``)."""
        response = self._call(operation, method, path, params=params, data=data)
        if not response.text or not response.text.strip():
            return {}
        return json.loads(response.text)
