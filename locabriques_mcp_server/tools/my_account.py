"""Account tools: wish list and 'back in stock' alerts."""

from pydantic import BaseModel, Field

from ..api_client import ApiRequest
from ..errors import BareFormatter
from .common import LEGO_ID_PATTERN, provided
from .registry import ToolRegistry


class StockAlertArguments(BaseModel):
    id: int = Field(..., description="A unique integer value identifying this back in stock alert.")


class WishlistCreateArguments(BaseModel):
    legoset_lego_id: str = Field(..., pattern=LEGO_ID_PATTERN, description="LEGO® identifier of the set to add")


class WishlistItemArguments(BaseModel):
    id: int = Field(..., description="A unique integer value identifying this wish list item.")


def register_my_account_tools(registry: ToolRegistry) -> None:
    """Register account_* tools."""
    formatter = BareFormatter()

    @registry.tool(
        "account_list_stock_alerts",
        "List all your 'back in stock' alerts. "
        "This action allows you to list all sets in your 'back in stock' alerts.",
        formatter,
    )
    async def account_list_stock_alerts(client, params):
        return await client.request(ApiRequest("GET", "/api/my_account/backinstockalerts/"))

    @registry.tool(
        "account_delete_stock_alert",
        "Remove a 'back in stock' alert. This action allows you to remove a 'back in stock' alert.",
        formatter,
        arguments=StockAlertArguments,
        confirmation="Alert removed from your list",
    )
    async def account_delete_stock_alert(client, params):
        return await client.request(ApiRequest("DELETE", f"/api/my_account/backinstockalerts/{params.id}/"))

    @registry.tool(
        "account_list_wishlist",
        "List all sets in your wish list. This action allows you to list all sets in your wish list.",
        formatter,
    )
    async def account_list_wishlist(client, params):
        return await client.request(ApiRequest("GET", "/api/my_account/wishlist/"))

    @registry.tool(
        "account_create_wishlist_item",
        "Add a new set in your wish list. This action allows you to add a new set in your wish list.",
        formatter,
        arguments=WishlistCreateArguments,
    )
    async def account_create_wishlist_item(client, params):
        return await client.request(ApiRequest("POST", "/api/my_account/wishlist/", json=provided(params)))

    @registry.tool(
        "account_delete_wishlist_item",
        "Remove a set from your wish list. This action allows you to remove a set present in your wish list.",
        formatter,
        arguments=WishlistItemArguments,
        confirmation="Set removed from your wish list",
    )
    async def account_delete_wishlist_item(client, params):
        return await client.request(ApiRequest("DELETE", f"/api/my_account/wishlist/{params.id}/"))
