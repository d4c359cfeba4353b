"""Catalog browsing tools: sets currently offered for rental."""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from ..api_client import ApiRequest
from ..errors import ContextFormatter
from .common import Number, PageArguments, provided
from .registry import ToolRegistry


SortKey = Literal[
    "-_average_rate", "-name", "-release_year", "-rental_price",
    "_average_rate", "name", "newest", "release_year", "rental_price",
]
SortingType = Literal["BAG_NUMBER", "COLOR", "OTHER"]


class CatalogSetsArguments(PageArguments):
    min_price: Optional[Number] = Field(None, description="Limit results to sets proposed for at least the given price (in euros)")
    max_price: Optional[Number] = Field(None, description="Limit results to sets proposed for at most the given price (in euros).")
    min_rate: Optional[Number] = Field(None, description="Limit results to sets whose average rating is at least the given number")
    max_rate: Optional[Number] = Field(None, description="Limit results to sets whose average rating is at most the given number")
    min_age: Optional[int] = Field(None, description="Limit results to sets whose age category is at least the given one")
    max_age: Optional[int] = Field(None, description="Limit results to sets whose age category is at most the given one. 19 is used for '18+'")
    min_part_count: Optional[int] = Field(None, description="Limit results to sets containing at least this number of parts")
    max_part_count: Optional[int] = Field(None, description="Limit results to sets containing at most this number of parts")
    searched_string: Optional[str] = Field(
        None,
        description=(
            "Limit results to sets matching this parameter in their name, headline, description or lego_id "
            "(and some custom keywords added from common spelling mistakes). If multiple words are specified, "
            "they are split and resulting sets match every word."
        ),
    )
    theme: Optional[str] = Field(
        None,
        description="Limit results to sets whose theme (or parent theme) matches this slug.",
    )
    sort: Optional[SortKey] = Field(
        None,
        description=(
            "Result ordering. 'newest' means most recently added to the catalog first. The underscore "
            "before average_rate is mandatory; it relies on set reviews left by users."
        ),
    )
    sorting_type: Optional[List[SortingType]] = Field(None, description="Limit results to sets available with these sorting types")
    exclude_mine: Optional[bool] = Field(None, description="If authenticated and owning a shop, exclude the sets present in your shop inventory")
    exclude_no_rates: Optional[bool] = Field(None, description="Limit results to sets that have at least one review")
    exclude_not_available: Optional[bool] = Field(None, description="Limit results to sets currently available")
    include_availability: Optional[bool] = Field(None, description="Include availabilities for the sets")
    include_images: Optional[bool] = Field(None, description="Include all images for the sets")


class CatalogSetArguments(BaseModel):
    lego_id: str = Field(..., description="The LEGO® identifier of the set to retrieve")


def register_catalog_tools(registry: ToolRegistry) -> None:
    """Register catalog_* tools."""

    @registry.tool(
        "catalog_list",
        "List all our catalogs. Returns links to different available catalogs.",
        ContextFormatter("Could not fetch catalogs"),
    )
    async def catalog_list(client, params):
        return await client.request(ApiRequest("GET", "/api/catalogs/"))

    @registry.tool(
        "catalog_list_sets",
        "List all LEGO® sets available for rental in our owners' shops. "
        "Supports extensive filtering by price, rating, age, theme, and more.",
        ContextFormatter("Could not fetch catalog sets"),
        arguments=CatalogSetsArguments,
    )
    async def catalog_list_sets(client, params):
        return await client.request(ApiRequest("GET", "/api/catalogs/sets/", params=provided(params)))

    @registry.tool(
        "catalog_retrieve_set",
        "Retrieve a LEGO® set present in at least one of our shops. "
        "Returns detailed information about a specific set available for rental.",
        ContextFormatter("Could not fetch catalog set '{lego_id}'"),
        arguments=CatalogSetArguments,
    )
    async def catalog_retrieve_set(client, params):
        return await client.request(ApiRequest("GET", f"/api/catalogs/sets/{params.lego_id}/"))
