"""Tools managing the authenticated user's own per-bags inventories.

Bag write endpoints receive their data both in the query string and in the
JSON body; the upstream API accepts either.
"""

from pydantic import BaseModel, Field

from ..api_client import ApiRequest
from ..errors import PrefixedFormatter
from .common import LEGO_ID_PATTERN, PageArguments, provided
from .registry import ToolRegistry


REBRICKABLE_REF_PATTERN = r"^[-a-zA-Z0-9_]+$"
INVENTORY_ID_DESCRIPTION = "A unique integer value identifying this Per-bags inventory."


class InventoryCreateArguments(BaseModel):
    set_num: str = Field(..., pattern=LEGO_ID_PATTERN, description="LEGO® identifier of the set to add")


class MyInventoryArguments(BaseModel):
    id: int = Field(..., description=INVENTORY_ID_DESCRIPTION)


class BagsArguments(BaseModel):
    id: int = Field(..., description="ID of the inventory to look up")


class BagCreateArguments(BaseModel):
    id: int = Field(..., description="ID of the inventory to add bag to")
    bag_number: str = Field(..., min_length=1, max_length=32, description="Bag number")


class BagArguments(BaseModel):
    id: int = Field(..., description="ID of the inventory to look up")
    bag_number_slug: str = Field(..., description="bag number to retrieve")


class BagDeleteArguments(BaseModel):
    id: int = Field(..., description="ID of the inventory to delete bag from")
    bag_number_slug: str = Field(..., description="Slug of the bag to delete")


class BagNumberUpdateArguments(BaseModel):
    id: int = Field(..., description="ID of the inventory containing the bag to update")
    bag_number_slug: str = Field(..., description="Slug of the name of the bag to update")
    bag_number: str = Field(..., min_length=1, max_length=32, description="Bag number")


class BagContentUpdateArguments(BaseModel):
    id: int = Field(..., description="ID of the inventory containing the bag to update")
    bag_number_slug: str = Field(..., description="Slug of the name of the bag to update")
    part_num: str = Field(..., pattern=REBRICKABLE_REF_PATTERN, description="Rebrickable part reference")
    color_id: str = Field(..., pattern=REBRICKABLE_REF_PATTERN, description="Rebrickable color reference")
    quantity_used: int = Field(..., description="Quantity of part (part_num+color) present in the bag")


def _bag_path(params) -> str:
    return f"/api/inventories/mine/{params.id}/bags/{params.bag_number_slug}/"


def _query_and_body(method: str, path: str, data: dict) -> ApiRequest:
    return ApiRequest(method, path, params=data, json=data)


def register_my_inventory_tools(registry: ToolRegistry) -> None:
    """Register myinventory_* tools."""
    formatter = PrefixedFormatter()

    @registry.tool(
        "myinventory_list",
        "List your own per-bags set inventories",
        formatter,
        arguments=PageArguments,
    )
    async def myinventory_list(client, params):
        return await client.request(ApiRequest("GET", "/api/inventories/mine/", params=provided(params)))

    @registry.tool(
        "myinventory_create",
        "Register a new per-bags set inventory",
        formatter,
        arguments=InventoryCreateArguments,
    )
    async def myinventory_create(client, params):
        return await client.request(ApiRequest("POST", "/api/inventories/mine/", json=provided(params)))

    @registry.tool(
        "myinventory_retrieve",
        "Retrieve one of your own per-bags set inventories",
        formatter,
        arguments=MyInventoryArguments,
    )
    async def myinventory_retrieve(client, params):
        return await client.request(ApiRequest("GET", f"/api/inventories/mine/{params.id}/"))

    @registry.tool(
        "myinventory_delete",
        "Delete one of your per-bag inventories",
        formatter,
        arguments=MyInventoryArguments,
        confirmation="Inventory deleted",
    )
    async def myinventory_delete(client, params):
        return await client.request(ApiRequest("DELETE", f"/api/inventories/mine/{params.id}/"))

    @registry.tool(
        "myinventory_list_bags",
        "List all bags from an inventory",
        formatter,
        arguments=BagsArguments,
    )
    async def myinventory_list_bags(client, params):
        return await client.request(ApiRequest("GET", f"/api/inventories/mine/{params.id}/bags/"))

    @registry.tool(
        "myinventory_create_bag",
        "Create a new bag in your inventory",
        formatter,
        arguments=BagCreateArguments,
    )
    async def myinventory_create_bag(client, params):
        return await client.request(_query_and_body(
            "POST", f"/api/inventories/mine/{params.id}/bags/", {"bag_number": params.bag_number},
        ))

    @registry.tool(
        "myinventory_retrieve_bag",
        "Retrieve a bag present in an inventory",
        formatter,
        arguments=BagArguments,
    )
    async def myinventory_retrieve_bag(client, params):
        return await client.request(ApiRequest("GET", _bag_path(params)))

    @registry.tool(
        "myinventory_delete_bag",
        "Delete a bag from one of your inventories",
        formatter,
        arguments=BagDeleteArguments,
        confirmation="Bag deleted",
    )
    async def myinventory_delete_bag(client, params):
        return await client.request(ApiRequest("DELETE", _bag_path(params)))

    @registry.tool(
        "myinventory_update_bag_number",
        "Change number of a bag in an inventory",
        formatter,
        arguments=BagNumberUpdateArguments,
    )
    async def myinventory_update_bag_number(client, params):
        return await client.request(_query_and_body(
            "PUT", _bag_path(params), {"bag_number": params.bag_number},
        ))

    @registry.tool(
        "myinventory_partial_update_bag",
        "Update content of a bag in one of your own (not yet published) per-bags inventories",
        formatter,
        arguments=BagContentUpdateArguments,
    )
    async def myinventory_partial_update_bag(client, params):
        return await client.request(_query_and_body(
            "PATCH", _bag_path(params), provided(params, "id", "bag_number_slug"),
        ))

    @registry.tool(
        "myinventory_publish",
        "Publish one of your per-bags set inventories",
        formatter,
        arguments=MyInventoryArguments,
    )
    async def myinventory_publish(client, params):
        return await client.request(ApiRequest("POST", f"/api/inventories/mine/{params.id}/publish/"))
