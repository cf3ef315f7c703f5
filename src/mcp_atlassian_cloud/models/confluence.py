"""
Confluence v2 models and request-body builders.
"""

import logging
from typing import Any

from ..exceptions import DataError, NotFoundError, StructureError
from .base import ApiModel, JsonObject

logger = logging.getLogger(__name__)

STORAGE_REPRESENTATION = "storage"
DEFAULT_PAGE_STATUS = "current"


def _non_blank(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def storage_body(body_html: str) -> JsonObject:
    """Build a page body in Confluence storage representation."""
    return {"representation": STORAGE_REPRESENTATION, "value": body_html}


def normalize_status(status: str | None) -> str:
    """Default a blank page status to ``current``."""
    return status.strip() if status and status.strip() else DEFAULT_PAGE_STATUS


class ConfluenceSpaceInfo(ApiModel):
    """
    The two identifiers of a space needed to create content in it.
    """

    space_key: str
    space_id: str
    homepage_id: str

    @classmethod
    def from_api_response(
        cls, data: JsonObject, **kwargs: Any
    ) -> "ConfluenceSpaceInfo":
        """
        Create a ConfluenceSpaceInfo from a ``GET /spaces?keys=`` response.

        Args:
            data: The spaces list response
            space_key: The key that was looked up

        Raises:
            NotFoundError: If the response holds no space
            DataError: If the first space has no id or homepageId
        """
        space_key = kwargs.get("space_key", "")
        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list) or not results:
            raise NotFoundError(f"Space '{space_key}' not found or inaccessible.")

        space = results[0] if isinstance(results[0], dict) else {}
        space_id = _non_blank(space.get("id"))
        homepage_id = _non_blank(space.get("homepageId"))
        if space_id is None:
            raise DataError(f"Space '{space_key}' missing id.")
        if homepage_id is None:
            raise DataError(f"Space '{space_key}' missing homepageId.")

        return cls(space_key=space_key, space_id=space_id, homepage_id=homepage_id)

    def to_simplified_dict(self) -> JsonObject:
        return {
            "spaceKey": self.space_key,
            "spaceId": self.space_id,
            "homepageId": self.homepage_id,
        }


class ConfluencePageVersion(ApiModel):
    """
    The version block of a page; only the number is used.
    """

    number: int

    @classmethod
    def from_api_response(
        cls, data: JsonObject, **kwargs: Any
    ) -> "ConfluencePageVersion":
        """
        Read ``version.number`` from a ``GET /pages/{id}`` response.

        Raises:
            DataError: If the page has no integer version number
        """
        version = data.get("version") if isinstance(data, dict) else None
        number = version.get("number") if isinstance(version, dict) else None
        if isinstance(number, bool) or not isinstance(number, int):
            raise DataError(
                "Update page failed: missing version.number on GET /pages/{id}"
            )
        return cls(number=number)

    def next(self) -> "ConfluencePageVersion":
        return ConfluencePageVersion(number=self.number + 1)


class RootFoldersSource(ApiModel):
    """Where a root folder listing came from."""

    space_key: str
    homepage_id: str
    root_type: str

    def to_simplified_dict(self) -> JsonObject:
        return {
            "spaceKey": self.space_key,
            "homepageId": self.homepage_id,
            "rootType": self.root_type,
        }


class ConfluenceRootFolders(ApiModel):
    """
    The folders sitting directly under a space's homepage.

    Built from a folder or page payload fetched with
    ``include-direct-children=true``; non-folder children are dropped.
    """

    results: list[JsonObject]
    source: RootFoldersSource
    meta: Any = None
    links: Any = None

    @classmethod
    def from_api_response(
        cls, data: JsonObject, **kwargs: Any
    ) -> "ConfluenceRootFolders":
        """
        Reshape a homepage payload into a root folder listing.

        Args:
            data: Folder or page payload including ``directChildren``
            space_key: The space the homepage belongs to
            homepage_id: Id of the homepage

        Raises:
            StructureError: If ``directChildren.results`` is not an array
        """
        direct_children = data.get("directChildren") if isinstance(data, dict) else None
        if not isinstance(direct_children, dict):
            raise StructureError("Unexpected payload: missing 'directChildren'.")

        children = direct_children.get("results")
        if not isinstance(children, list):
            raise StructureError(
                "Unexpected payload: missing 'directChildren.results' array."
            )

        folders = [
            child
            for child in children
            if isinstance(child, dict)
            and str(child.get("type") or "").lower() == "folder"
        ]
        logger.debug(
            f"Kept {len(folders)} folder(s) out of {len(children)} direct children"
        )

        return cls(
            results=folders,
            meta=direct_children.get("meta"),
            links=direct_children.get("_links"),
            source=RootFoldersSource(
                space_key=kwargs.get("space_key", ""),
                homepage_id=kwargs.get("homepage_id", ""),
                root_type=_non_blank(data.get("type")) or "unknown",
            ),
        )

    def to_simplified_dict(self) -> JsonObject:
        simplified: JsonObject = {"results": self.results}
        if self.meta is not None:
            simplified["meta"] = self.meta
        if self.links is not None:
            simplified["_links"] = self.links
        simplified["source"] = self.source.to_simplified_dict()
        return simplified
