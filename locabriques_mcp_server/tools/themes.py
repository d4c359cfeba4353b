"""Theme browsing tools."""

from typing import Optional

from pydantic import BaseModel, Field

from ..api_client import ApiRequest
from ..errors import StatusMessageFormatter
from .common import PAGE_DESCRIPTION, provided
from .registry import ToolRegistry


class ThemeSearchArguments(BaseModel):
    page: Optional[int] = Field(None, description=PAGE_DESCRIPTION)
    search: Optional[str] = Field(
        None,
        description=(
            "Search theme by slug. Only themes matching the whole string will be returned. This database "
            "only contains themes from sets that have been previously integrated by a user."
        ),
    )


class ThemeArguments(BaseModel):
    id: int = Field(..., description="A unique integer value identifying this theme.")


def register_theme_tools(registry: ToolRegistry) -> None:
    """Register theme_* tools."""
    formatter = StatusMessageFormatter()

    @registry.tool(
        "theme_search",
        "Search themes in our LEGO® sets database",
        formatter,
        arguments=ThemeSearchArguments,
    )
    async def theme_search(client, params):
        return await client.request(ApiRequest("GET", "/api/themes/", params=provided(params)))

    @registry.tool(
        "theme_retrieve",
        "Retrieve a LEGO® theme from our database",
        formatter,
        arguments=ThemeArguments,
    )
    async def theme_retrieve(client, params):
        return await client.request(ApiRequest("GET", f"/api/themes/{params.id}/"))
