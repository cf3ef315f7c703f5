"""Module for Confluence page and folder reads and writes."""

import logging

from ..models.base import JsonObject
from ..models.confluence import ConfluencePageVersion, normalize_status, storage_body
from ..utils.urls import quote_path_segment
from .client import ConfluenceClient

logger = logging.getLogger("mcp-atlassian-cloud.confluence")

INCLUDE_CHILDREN_PARAM = "include-direct-children"


def _children_params(include_children: bool) -> dict[str, str] | None:
    return {INCLUDE_CHILDREN_PARAM: "true"} if include_children else None


class PagesMixin(ConfluenceClient):
    """Mixin for Confluence page operations."""

    def get_folder(self, folder_id: str, include_children: bool = False) -> JsonObject:
        """
        Get a folder by id.

        Args:
            folder_id: The folder id
            include_children: Also return the folder's direct children

        Returns:
            The raw ``GET /folders/{id}`` response
        """
        if not folder_id or not folder_id.strip():
            raise ValueError("folder_id is required.")
        return self._call(
            "GetFolder",
            "GET",
            f"folders/{quote_path_segment(folder_id.strip())}",
            params=_children_params(include_children),
        )

    def get_page(self, page_id: str, include_children: bool = False) -> JsonObject:
        """
        Get a page by id.

        Args:
            page_id: The page id
            include_children: Also return the page's direct children

        Returns:
            The raw ``GET /pages/{id}`` response
        """
        if not page_id or not page_id.strip():
            raise ValueError("page_id is required.")
        return self._call(
            "GetPage",
            "GET",
            f"pages/{quote_path_segment(page_id.strip())}",
            params=_children_params(include_children),
        )

    def create_page(
        self,
        space_id: str,
        parent_id: str,
        title: str,
        body_html: str,
        status: str | None = None,
        subtype: str | None = None,
    ) -> JsonObject:
        """
        Create a page.

        Args:
            space_id: Id of the space to create the page in
            parent_id: Id of the parent page or folder
            title: The page title
            body_html: The body in storage representation
            status: ``current`` (default) or ``draft``
            subtype: Optional page subtype, e.g. ``live``

        Returns:
            The created page as returned by ``POST /pages``

        Raises:
            UpstreamHttpError: If the page could not be created
        """
        payload: JsonObject = {
            "spaceId": space_id,
            "status": normalize_status(status),
            "title": title,
            "parentId": parent_id,
            "body": storage_body(body_html),
        }
        if subtype and subtype.strip():
            payload["subtype"] = subtype.strip()

        logger.debug(f"Creating page '{title}' in space {space_id} under {parent_id}")
        return self._call("CreatePage", "POST", "pages", data=payload)

    def update_page(
        self,
        page_id: str,
        title: str,
        body_html: str,
        status: str | None = None,
        version_message: str | None = None,
    ) -> JsonObject:
        """
        Replace a page's title and body, bumping its version.

        The current version is read first and the update is sent as
        ``current + 1``. If another writer updates the page in between, the
        API rejects the stale version and the error is raised as is.

        Args:
            page_id: The page id
            title: The new title
            body_html: The new body in storage representation
            status: ``current`` (default) or ``draft``
            version_message: Optional message stored on the new version

        Returns:
            The updated page as returned by ``PUT /pages/{id}``

        Raises:
            DataError: If the current page has no version number
            UpstreamHttpError: If the page could not be read or updated
        """
        if not page_id or not page_id.strip():
            raise ValueError("page_id is required.")
        page_id = page_id.strip()
        page_path = f"pages/{quote_path_segment(page_id)}"
        current = self._call("GetPage", "GET", page_path)
        next_version = ConfluencePageVersion.from_api_response(current).next()

        payload: JsonObject = {
            "id": page_id,
            "status": normalize_status(status),
            "title": title,
            "body": storage_body(body_html),
            "version": {
                "number": next_version.number,
                "message": version_message or "",
            },
        }

        logger.debug(f"Updating page {page_id} to version {next_version.number}")
        return self._call("UpdatePage", "PUT", page_path, data=payload)
