"""
Base model for the handful of Atlassian response fields this package reads.

Atlassian payloads are otherwise passed through untouched as plain JSON
dictionaries; only the fields an operation depends on are modelled.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T", bound="ApiModel")

JsonObject = dict[str, Any]


class ApiModel(BaseModel):
    """
    Base model with the conversion methods shared by all API models.
    """

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_api_response(cls: type[T], data: JsonObject, **kwargs: Any) -> T:
        """
        Convert an API response to a model instance.

        Raises:
            NotImplementedError: If the subclass does not implement this method
        """
        raise NotImplementedError("Subclasses must implement from_api_response")

    def to_simplified_dict(self) -> JsonObject:
        """
        Convert the model to the dictionary returned to MCP clients.
        """
        return self.model_dump(exclude_none=True)
