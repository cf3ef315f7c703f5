from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mcp_atlassian_cloud.cloud_id import CloudIdCache, CloudIdResolver

if TYPE_CHECKING:
    from mcp_atlassian_cloud.config import AtlassianConfig


@dataclass(frozen=True)
class MainAppContext:
    """
    Context created by the server lifespan and shared by every tool call.

    Holds the tenant configuration loaded at startup and the cloud ID
    resolver whose cache lives as long as the server.
    """

    config: AtlassianConfig | None = None
    cloud_id_resolver: CloudIdResolver = field(
        default_factory=lambda: CloudIdResolver(CloudIdCache())
    )
    read_only: bool = False
    enabled_tools: list[str] | None = None
