"""
Jira v3 models and request-body builders.
"""

from typing import Any

from .base import ApiModel, JsonObject

DEFAULT_MAX_RESULTS = 50
MAX_RESULTS_LIMIT = 200


def clamp_max_results(max_results: int | None) -> int:
    """Default a missing or non-positive page size to 50 and cap it at 200."""
    if max_results is None or max_results <= 0:
        return DEFAULT_MAX_RESULTS
    return min(max_results, MAX_RESULTS_LIMIT)


def text_to_adf(text: str) -> JsonObject:
    """Wrap plain text in a minimal Atlassian Document Format document.

    Jira Cloud v3 only accepts ADF for rich-text fields such as
    ``description``: one document holding one paragraph holding one text node.
    """
    return {
        "type": "doc",
        "version": 1,
        "content": [
            {
                "type": "paragraph",
                "content": [{"type": "text", "text": text or ""}],
            }
        ],
    }


def parent_reference(parent_key_or_id: str) -> JsonObject:
    """Reference a parent issue by key (``ABC-123``) or by numeric id."""
    if "-" in parent_key_or_id:
        return {"key": parent_key_or_id}
    return {"id": parent_key_or_id}


def clean_labels(labels: list[str] | None) -> list[str]:
    """Drop blank labels."""
    return [label for label in labels or [] if label and label.strip()]


class JiraIssueDeletion(ApiModel):
    """
    Confirmation returned after an issue was deleted.

    Jira usually answers a delete with ``204 No Content``, so the result is
    built from the request rather than from the response body.
    """

    deleted: str
    delete_subtasks: bool
    http_status: int

    @classmethod
    def from_api_response(cls, data: JsonObject, **kwargs: Any) -> "JiraIssueDeletion":
        return cls(
            deleted=kwargs["issue_id_or_key"],
            delete_subtasks=kwargs.get("delete_subtasks", False),
            http_status=kwargs["http_status"],
        )

    def to_simplified_dict(self) -> JsonObject:
        return {
            "deleted": self.deleted,
            "deleteSubtasks": self.delete_subtasks,
            "httpStatus": self.http_status,
        }
