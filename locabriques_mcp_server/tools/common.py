"""Argument helpers shared by the tool groups."""

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field


Number = Union[int, float]

PAGE_DESCRIPTION = "A page number within the paginated result set."
PAGE_SIZE_DESCRIPTION = "Number of results to return per page."
LEGO_ID_PATTERN = r"^[0-9]{3,}-[0-9]$"


def provided(params: BaseModel, *exclude: str) -> Dict[str, Any]:
    """Fields the caller actually supplied, minus path parameters."""
    return params.model_dump(mode="json", exclude_unset=True, exclude=set(exclude))


class PageArguments(BaseModel):
    page: Optional[int] = Field(None, description=PAGE_DESCRIPTION)
    page_size: Optional[int] = Field(None, description=PAGE_SIZE_DESCRIPTION)
