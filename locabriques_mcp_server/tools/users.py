"""User search tool."""

import logging
from typing import Optional

from pydantic import BaseModel, Field

from ..api_client import ApiRequest, TransportFailure
from ..errors import ContextDetailFormatter
from .common import PAGE_DESCRIPTION, PAGE_SIZE_DESCRIPTION, provided
from .registry import ToolRegistry


logger = logging.getLogger("locabriques_tools")


class UserListArguments(BaseModel):
    searched_string: str = Field(..., min_length=3, description="part of username to look for. At least 3 chars.")
    page: Optional[int] = Field(None, description=PAGE_DESCRIPTION)
    page_size: Optional[int] = Field(None, description=PAGE_SIZE_DESCRIPTION)


def register_user_tools(registry: ToolRegistry) -> None:
    """Register user_* tools."""

    @registry.tool(
        "user_list",
        "List all users registered on LocaBriques whose username matches 'searched_string'",
        ContextDetailFormatter("Could not fetch users"),
        arguments=UserListArguments,
    )
    async def user_list(client, params):
        result = await client.request(ApiRequest("GET", "/api/users/", params=provided(params)))
        if isinstance(result, TransportFailure):
            logger.error(f"Critical error in user_list tool: {result.message}")
        return result
