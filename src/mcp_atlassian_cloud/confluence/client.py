"""Base client module for Confluence v2 API interactions."""

import json
import logging
from typing import Any

import requests
from atlassian import Confluence

from .. import __version__
from ..cloud_id import CloudIdResolver
from ..config import AtlassianConfig
from ..exceptions import ConfigError, UpstreamHttpError
from ..models.base import JsonObject
from ..utils.urls import gateway_url

logger = logging.getLogger("mcp-atlassian-cloud.confluence")

API_PREFIX = "wiki/api/v2"


class ConfluenceClient:
    """Base client for Confluence Cloud v2 API interactions.

    The REST client is bound to the tenant's gateway URL, so the cloud ID is
    resolved on first use and then shared by every call this instance makes.
    """

    def __init__(
        self,
        config: AtlassianConfig | None = None,
        resolver: CloudIdResolver | None = None,
    ) -> None:
        """Initialize the Confluence client with given or environment config.

        Args:
            config: Tenant configuration. If None, it is loaded from the
                environment.
            resolver: Cloud ID resolver, normally shared through the server
                lifespan so its cache is reused across invocations.

        Raises:
            ConfigError: If site, email or the Confluence token is blank
        """
        self.config = config or AtlassianConfig.from_env()
        if not (
            self.config.site.strip()
            and self.config.email.strip()
            and self.config.confluence_token.strip()
        ):
            raise ConfigError(
                "Atlassian configuration incomplete for Confluence "
                "(site/email/Confluence API token)."
            )
        self.resolver = resolver or CloudIdResolver(
            ssl_verify=self.config.ssl_verify, timeout=self.config.timeout
        )
        self._confluence: Confluence | None = None

    @property
    def cloud_id(self) -> str:
        return self.resolver.resolve(
            self.config.site, self.config.email, self.config.confluence_token
        )

    @property
    def confluence(self) -> Confluence:
        """The REST client bound to ``api.atlassian.com/ex/confluence/{cloudId}``."""
        if self._confluence is None:
            session = requests.Session()
            session.headers["User-Agent"] = f"mcp-atlassian-cloud/{__version__}"
            self._confluence = Confluence(
                url=gateway_url("confluence", self.cloud_id),
                username=self.config.email,
                password=self.config.confluence_token,
                session=session,
                cloud=True,
                verify_ssl=self.config.ssl_verify,
                timeout=self.config.timeout,
            )
        return self._confluence

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        data: JsonObject | None = None,
    ) -> requests.Response:
        """Send one request under the v2 API prefix and return the raw response."""
        full_path = f"{API_PREFIX}/{path.lstrip('/')}"
        logger.debug(f"{method} {full_path} params={params}")
        if method == "GET":
            return self.confluence.get(full_path, params=params, advanced_mode=True)
        if method == "POST":
            return self.confluence.post(
                full_path, data=data, params=params, advanced_mode=True
            )
        if method == "PUT":
            return self.confluence.put(
                full_path, data=data, params=params, advanced_mode=True
            )
        raise ValueError(f"Unsupported HTTP method: {method}")

    def _call(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        data: JsonObject | None = None,
    ) -> JsonObject:
        """Send a request and return its JSON body.

        Raises:
            UpstreamHttpError: If the API answers with a non-success status
        """
        response = self._request(method, path, params=params, data=data)
        if not response.ok:
            raise UpstreamHttpError(operation, response.status_code, response.text)
        return self._parse_json(response)

    @staticmethod
    def _parse_json(response: requests.Response) -> JsonObject:
        """Decode a response body, treating an empty body as ``{}``."""
        if not response.text or not response.text.strip():
            return {}
        return json.loads(response.text)
