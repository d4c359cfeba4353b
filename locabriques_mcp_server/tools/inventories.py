"""Public per-bags inventory tools."""

from typing import Optional

from pydantic import BaseModel, Field

from ..api_client import ApiRequest
from ..errors import StatusDataFormatter
from .common import PageArguments, provided
from .registry import ToolRegistry


class InventoryListArguments(PageArguments):
    search: Optional[str] = Field(None, description="Search inventories by set name or reference.")


class InventoryArguments(BaseModel):
    id: int = Field(..., description="A unique integer value identifying this Per-bags inventory.")


def register_inventory_tools(registry: ToolRegistry) -> None:
    """Register inventory_* tools."""
    formatter = StatusDataFormatter()

    @registry.tool(
        "inventory_list",
        "Search sets in our inventory database.",
        formatter,
        arguments=InventoryListArguments,
    )
    async def inventory_list(client, params):
        return await client.request(ApiRequest("GET", "/api/inventories/", params=provided(params)))

    @registry.tool(
        "inventory_retrieve",
        "Retrieve a specific inventory.",
        formatter,
        arguments=InventoryArguments,
    )
    async def inventory_retrieve(client, params):
        return await client.request(ApiRequest("GET", f"/api/inventories/{params.id}/"))
