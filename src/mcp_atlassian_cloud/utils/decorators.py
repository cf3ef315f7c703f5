import inspect
import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

import requests
from fastmcp import Context
from fastmcp.exceptions import FastMCPError, ResourceError, ToolError

from ..exceptions import MCPAtlassianError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def convert_empty_defaults_to_none(func: F) -> F:
    """
    Decorator turning blank string arguments into None for optional parameters.

    Some MCP hosts send ``""`` (or whitespace) for optional string parameters
    instead of omitting them. For every parameter whose declared default is
    ``""`` a blank value is replaced with None, so the fetchers only ever see
    a real value or None.

    Args:
        func: The async tool function to wrap.

    Returns:
        The wrapped function.
    """
    sig = inspect.signature(func)
    optional_str_params = [
        name for name, param in sig.parameters.items() if param.default == ""
    ]

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        bound_args = sig.bind(*args, **kwargs)
        bound_args.apply_defaults()
        for name in optional_str_params:
            value = bound_args.arguments.get(name)
            if isinstance(value, str) and not value.strip():
                bound_args.arguments[name] = None
        return await func(*bound_args.args, **bound_args.kwargs)

    return wrapper  # type: ignore


def check_write_access(func: F) -> F:
    """
    Decorator for FastMCP tools refusing the call in read-only mode.

    Raises ToolError when the lifespan context reports read-only mode.
    Assumes the decorated function is async and takes ``ctx: Context`` first.
    """

    @wraps(func)
    async def wrapper(ctx: Context, *args: Any, **kwargs: Any) -> Any:
        lifespan_ctx_dict = ctx.request_context.lifespan_context
        app_lifespan_ctx = (
            lifespan_ctx_dict.get("app_lifespan_context")
            if isinstance(lifespan_ctx_dict, dict)
            else None
        )

        if app_lifespan_ctx is not None and app_lifespan_ctx.read_only:
            tool_name = func.__name__
            logger.warning(f"Attempted to call tool '{tool_name}' in read-only mode.")
            raise ToolError(
                f"Cannot {tool_name.replace('_', ' ')} in read-only mode."
            )

        return await func(ctx, *args, **kwargs)

    return wrapper  # type: ignore


def _reraise_as(error_type: type[FastMCPError], kind: str) -> Callable[[F], F]:
    def decorator(func: F) -> F:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except (
                MCPAtlassianError,
                ValueError,
                requests.exceptions.RequestException,
            ) as e:
                logger.error(f"{kind} '{func.__name__}' failed: {e}")
                raise error_type(str(e)) from e

        return wrapper  # type: ignore

    return decorator


def handle_tool_errors(func: F) -> F:
    """
    Decorator reporting client errors to the MCP host as ToolError.

    FastMCP replaces the message of any exception other than ToolError with a
    generic "Error calling tool" text. Package errors, ValueError and requests
    exceptions are re-raised as ToolError carrying their own message, so the
    host sees the HTTP status and body of a failed call.
    """
    return _reraise_as(ToolError, "Tool")(func)


def handle_resource_errors(func: F) -> F:
    """Decorator reporting client errors to the MCP host as ResourceError."""
    return _reraise_as(ResourceError, "Resource")(func)
