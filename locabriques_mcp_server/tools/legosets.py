"""Public LEGO® set database tools, including registration from Brickset."""

from typing import Optional

from pydantic import BaseModel, Field

from ..api_client import ApiRequest
from ..errors import ContextFormatter, LegosetRegisterFormatter, LegosetRetrieveFormatter
from .common import PAGE_DESCRIPTION, provided
from .registry import ToolRegistry


class LegosetSearchArguments(BaseModel):
    page: Optional[int] = Field(None, description=PAGE_DESCRIPTION)
    search: Optional[str] = Field(
        None,
        description=(
            "Search sets by name, description, headline or LEGO® identifier. Only sets matching the whole "
            "string will be returned. This database only contains sets that have been previously integrated "
            "by a user."
        ),
    )


class LegosetArguments(BaseModel):
    id: int = Field(..., description="A unique integer value identifying this lego set.")


class LegosetRegisterArguments(BaseModel):
    brickset_set_id: int = Field(..., description="Set identifier in brickset database")


def register_legoset_tools(registry: ToolRegistry) -> None:
    """Register legoset_* tools."""

    @registry.tool(
        "legoset_search",
        "Search sets in our LEGO® sets database. "
        "This database only contains sets that have been previously integrated by a user.",
        ContextFormatter("Could not search LEGO sets"),
        arguments=LegosetSearchArguments,
    )
    async def legoset_search(client, params):
        return await client.request(ApiRequest("GET", "/api/legosets/", params=provided(params)))

    @registry.tool(
        "legoset_retrieve",
        "Retrieve a LEGO® set from our database.",
        LegosetRetrieveFormatter(),
        arguments=LegosetArguments,
    )
    async def legoset_retrieve(client, params):
        return await client.request(ApiRequest("GET", f"/api/legosets/{params.id}/"))

    @registry.tool(
        "legoset_register",
        "Register a new set in our LEGO® sets database, based on brickset API. Given a brickset id, we call "
        "the API, retrieve set data, and register it in our database. As we need some mandatory info, this "
        "call can fail in case some is missing. In this case, our team is automatically informed and will "
        "register the set manually (so no need to retry).",
        LegosetRegisterFormatter(),
        arguments=LegosetRegisterArguments,
    )
    async def legoset_register(client, params):
        # The only endpoint without a trailing slash.
        return await client.request(ApiRequest(
            "POST",
            "/api/legosets/register_from_brickset",
            json={"brickset_set_id": params.brickset_set_id},
        ))
