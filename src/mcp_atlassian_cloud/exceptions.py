"""Exceptions raised by the Atlassian Cloud clients."""


class MCPAtlassianError(Exception):
    """Base class for all errors raised by this package."""


class ConfigError(MCPAtlassianError, ValueError):
    """A required credential or configuration value is missing."""


class ResolutionError(MCPAtlassianError):
    """The tenant cloud ID could not be resolved from the site."""


class NotFoundError(MCPAtlassianError):
    """A named entity (e.g. a space key) did not resolve to any result."""


class DataError(MCPAtlassianError):
    """A fetched entity is missing a field the operation needs."""


class StructureError(MCPAtlassianError):
    """A response does not have the shape the operation expects."""


class UpstreamHttpError(MCPAtlassianError):
    """The Atlassian API answered with a non-success HTTP status.

    Attributes:
        operation: Name of the failed operation (e.g. ``CreatePage``)
        status_code: HTTP status code returned by the API
        body: Raw response body, as returned by the API
    """

    def __init__(
        self, operation: str, status_code: int, body: str, message: str | None = None
    ) -> None:
        self.operation = operation
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"{operation} failed HTTP {status_code}: {body}")
