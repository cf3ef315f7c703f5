"""Module for discovering the root folders of a Confluence space."""

import logging

from ..exceptions import UpstreamHttpError
from ..models.base import JsonObject
from ..models.confluence import ConfluenceRootFolders
from ..utils.urls import quote_path_segment
from .pages import INCLUDE_CHILDREN_PARAM
from .spaces import SpacesMixin

logger = logging.getLogger("mcp-atlassian-cloud.confluence")

HTTP_NOT_FOUND = 404


class FoldersMixin(SpacesMixin):
    """Mixin for root folder discovery."""

    def root_folders(self, space_key: str) -> ConfluenceRootFolders:
        """
        List the folders directly under a space's homepage.

        The homepage is fetched as a folder first; when that answers 404 it
        is fetched again as a page, since most spaces use a page as their
        homepage. Only children of type ``folder`` are kept.

        Args:
            space_key: The space key, e.g. ``ABC``

        Returns:
            ConfluenceRootFolders with a ``source`` block describing the root

        Raises:
            NotFoundError: If the space does not exist
            UpstreamHttpError: If the homepage could be fetched neither as a
                folder nor as a page
            StructureError: If the homepage payload has no
                ``directChildren.results`` array
        """
        space_info = self.get_space_info(space_key)
        homepage_id = space_info.homepage_id
        params = {INCLUDE_CHILDREN_PARAM: "true"}

        folder_response = self._request(
            "GET", f"folders/{quote_path_segment(homepage_id)}", params=params
        )
        if folder_response.ok:
            root_payload = self._parse_json(folder_response)
        elif folder_response.status_code == HTTP_NOT_FOUND:
            logger.debug(
                f"Homepage {homepage_id} is not a folder, retrying it as a page"
            )
            page_response = self._request(
                "GET", f"pages/{quote_path_segment(homepage_id)}", params=params
            )
            if not page_response.ok:
                raise UpstreamHttpError(
                    "RootFolders",
                    page_response.status_code,
                    page_response.text,
                    message=(
                        f"Root homepageId={homepage_id} not found as folder (404). "
                        f"Page returned {page_response.status_code}: {page_response.text}"
                    ),
                )
            root_payload = self._parse_json(page_response)
        else:
            raise UpstreamHttpError(
                "RootFolders",
                folder_response.status_code,
                folder_response.text,
                message=(
                    f"Root container fetch failed HTTP {folder_response.status_code}: "
                    f"{folder_response.text}"
                ),
            )

        return ConfluenceRootFolders.from_api_response(
            root_payload, space_key=space_info.space_key, homepage_id=homepage_id
        )

    def root_folders_json(self, space_key: str) -> JsonObject:
        """Root folder listing as the dictionary returned to clients."""
        return self.root_folders(space_key).to_simplified_dict()
