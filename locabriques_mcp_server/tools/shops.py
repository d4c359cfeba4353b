"""Public shop directory tools."""

from typing import Optional

from pydantic import BaseModel, Field

from ..api_client import ApiRequest
from ..errors import ContextFormatter
from .common import PageArguments, provided
from .registry import ToolRegistry


class ShopListArguments(PageArguments):
    open_only: Optional[bool] = Field(None, description="Limit results to shops currently open")


class ShopArguments(BaseModel):
    slug: str = Field(..., description="The unique slug identifier of the shop.")


def register_shop_tools(registry: ToolRegistry) -> None:
    """Register the shop directory tools."""

    @registry.tool(
        "list_shops",
        "List all shops registered on LocaBriques. Allows filtering by open status and pagination.",
        ContextFormatter("Could not fetch shops"),
        arguments=ShopListArguments,
    )
    async def list_shops(client, params):
        return await client.request(ApiRequest("GET", "/api/shops/", params=provided(params)))

    @registry.tool(
        "get_shop",
        "Retrieve a specific shop registered on LocaBriques by its slug.",
        ContextFormatter("Could not fetch shop '{slug}'"),
        arguments=ShopArguments,
    )
    async def get_shop(client, params):
        return await client.request(ApiRequest("GET", f"/api/shops/{params.slug}/"))
