from unittest.mock import MagicMock

import pytest
import requests
from fastmcp.exceptions import ResourceError, ToolError

from mcp_atlassian_cloud.exceptions import DataError, UpstreamHttpError
from mcp_atlassian_cloud.utils.decorators import (
    check_write_access,
    convert_empty_defaults_to_none,
    handle_resource_errors,
    handle_tool_errors,
)


class DummyContext:
    def __init__(self, read_only):
        self.request_context = MagicMock()
        self.request_context.lifespan_context = {
            "app_lifespan_context": MagicMock(read_only=read_only)
        }


@pytest.mark.asyncio
async def test_check_write_access_blocks_in_read_only():
    @check_write_access
    async def delete_issue(ctx, x):
        return x * 2

    ctx = DummyContext(read_only=True)
    with pytest.raises(ToolError) as exc:
        await delete_issue(ctx, 3)
    assert str(exc.value) == "Cannot delete issue in read-only mode."


@pytest.mark.asyncio
async def test_check_write_access_allows_in_writable():
    @check_write_access
    async def dummy_tool(ctx, x):
        return x * 2

    ctx = DummyContext(read_only=False)
    result = await dummy_tool(ctx, 4)
    assert result == 8


@pytest.mark.asyncio
async def test_convert_empty_defaults_to_none():
    @convert_empty_defaults_to_none
    async def dummy_tool(ctx, required, optional="", other="", limit=25):
        return required, optional, other, limit

    result = await dummy_tool(None, "", optional="  ", other="value")

    # Required parameters are left untouched
    assert result == ("", None, "value", 25)


@pytest.mark.asyncio
async def test_convert_empty_defaults_keeps_signature():
    async def dummy_tool(ctx, optional: str = ""):
        return optional

    wrapped = convert_empty_defaults_to_none(dummy_tool)

    assert wrapped.__wrapped__ is dummy_tool
    assert await wrapped(None) is None
    assert await wrapped(None, optional="x") == "x"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        UpstreamHttpError("GetPage", 404, '{"message":"gone"}'),
        DataError("Page 2001 is missing version.number."),
        ValueError("page_id is required."),
        requests.exceptions.ConnectTimeout("timed out"),
    ],
)
async def test_handle_tool_errors_keeps_message(error):
    @handle_tool_errors
    async def get_page(ctx, page_id):
        raise error

    with pytest.raises(ToolError) as exc:
        await get_page(None, "2001")
    assert str(exc.value) == str(error)
    assert exc.value.__cause__ is error


@pytest.mark.asyncio
async def test_handle_tool_errors_leaves_other_errors_alone():
    @handle_tool_errors
    async def broken_tool(ctx):
        raise KeyError("boom")

    with pytest.raises(KeyError):
        await broken_tool(None)


@pytest.mark.asyncio
async def test_handle_tool_errors_passes_results_through():
    @handle_tool_errors
    async def dummy_tool(ctx, x):
        return x + 1

    assert await dummy_tool(None, 1) == 2
    assert dummy_tool.__wrapped__.__name__ == "dummy_tool"


@pytest.mark.asyncio
async def test_handle_resource_errors():
    @handle_resource_errors
    async def jira_issue(issue_id_or_key: str) -> str:
        raise UpstreamHttpError("GetIssue", 404, "missing")

    with pytest.raises(ResourceError, match="GetIssue failed HTTP 404: missing"):
        await jira_issue("ABC-1")
