"""Module for Confluence space operations."""

import logging

from ..models.base import JsonObject
from ..models.confluence import ConfluenceSpaceInfo
from .client import ConfluenceClient

logger = logging.getLogger("mcp-atlassian-cloud.confluence")

DEFAULT_SPACES_LIMIT = 25


class SpacesMixin(ConfluenceClient):
    """Mixin for Confluence space operations."""

    def list_spaces(
        self, keys: str | None = None, limit: int = DEFAULT_SPACES_LIMIT
    ) -> JsonObject:
        """
        List spaces, optionally restricted to some keys.

        Args:
            keys: Comma-separated space keys, e.g. ``ABC,HR``
            limit: Maximum number of spaces to return; values <= 0 mean 25

        Returns:
            The raw ``GET /spaces`` response
        """
        if limit is None or limit <= 0:
            limit = DEFAULT_SPACES_LIMIT
        params: dict[str, object] = {"limit": limit}
        if keys and keys.strip():
            params["keys"] = keys.strip()
        return self._call("ListSpaces", "GET", "spaces", params=params)

    def get_space_info(self, space_key: str) -> ConfluenceSpaceInfo:
        """
        Look up the id and homepage id of a space.

        Args:
            space_key: The space key, e.g. ``ABC``

        Returns:
            ConfluenceSpaceInfo for the space

        Raises:
            ValueError: If space_key is blank
            NotFoundError: If no space has this key
            DataError: If the space has no id or homepageId
        """
        if not space_key or not space_key.strip():
            raise ValueError("space_key is required.")
        space_key = space_key.strip()
        response = self._call(
            "GetSpaceInfo", "GET", "spaces", params={"keys": space_key, "limit": 1}
        )
        return ConfluenceSpaceInfo.from_api_response(response, space_key=space_key)

    def get_homepage_id(self, space_key: str) -> str:
        """Return the id of a space's homepage."""
        return self.get_space_info(space_key).homepage_id
