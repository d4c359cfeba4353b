"""Self-service tools for the authenticated user's own shop.

Profile updates are sent as multipart forms so that an image can travel with
the other fields; coupons and rentable sets use plain JSON bodies.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from ..api_client import ApiRequest
from ..errors import PrefixedFormatter
from ..multipart import build_form, multipart_request
from .common import LEGO_ID_PATTERN, provided
from .registry import ToolRegistry


LanguageCode = Literal["en", "fr"]
DiscountType = Literal["percent", "amount", "week", "month"]
MinimalRentalDuration = Literal["1W", "2W", "3W", "1M"]
SortingType = Literal["BAG_NUMBER", "COLOR", "OTHER"]

INT32_MAX = 2147483647
INT32_MIN = -2147483648

IMAGE_DESCRIPTION = (
    "The shop image. Can be a public URL or a Base64 encoded string. "
    "The server will handle the multipart upload for you."
)
LANGUAGE_DESCRIPTION = "Language used to write description and comments about the products (en: English, fr: Français)"
PARCELSHOP_PATTERN = r"^[A-Za-z]{2}-[0-9]{6}$"


class PostalAddress(BaseModel):
    """Postal address configuration"""
    address: Optional[str] = Field(None, max_length=128)
    address2: Optional[str] = Field(None, max_length=128)
    postal_code: Optional[str] = Field(None, max_length=12)
    city: Optional[str] = Field(None, max_length=128)
    country: Optional[str] = None


class ShopUpdateArguments(BaseModel):
    name: str = Field(..., max_length=128, description="Name of the shop")
    description: str = Field(..., description="Full HTML description of the shop")
    city: str = Field(..., max_length=128, description="Shop city for hand delivery")
    image: str = Field(..., description=IMAGE_DESCRIPTION)
    language_code: LanguageCode = Field(..., description=LANGUAGE_DESCRIPTION)
    bank_account_iban: str = Field(..., max_length=34, description="IBAN for transfers")
    bank_account_bic: Optional[str] = Field(..., max_length=11, description="BIC for transfers")
    postaladdress: Optional[PostalAddress] = Field(..., description="Full postal address object")
    parcelshop_code: str = Field(..., pattern=PARCELSHOP_PATTERN, description="MondialRelay code")


class ShopPartialUpdateArguments(BaseModel):
    name: Optional[str] = Field(None, max_length=128, description="Name of the shop")
    description: Optional[str] = Field(None, description="Full HTML description of the shop")
    city: Optional[str] = Field(None, max_length=128, description="Shop city for hand delivery")
    image: Optional[str] = Field(None, description=IMAGE_DESCRIPTION)
    language_code: Optional[LanguageCode] = Field(None, description=LANGUAGE_DESCRIPTION)
    bank_account_iban: Optional[str] = Field(None, max_length=34, description="IBAN for transfers")
    bank_account_bic: Optional[str] = Field(None, max_length=11, description="BIC for transfers")
    postaladdress: Optional[PostalAddress] = Field(None, description="Full postal address object")
    parcelshop_code: Optional[str] = Field(None, pattern=PARCELSHOP_PATTERN, description="MondialRelay code")


class CouponArguments(BaseModel):
    code: str = Field(..., min_length=6, max_length=16, description="Coupon code")
    discount_value: int = Field(..., ge=1, le=INT32_MAX, description="Discount value")
    discount_type: DiscountType = Field(..., description="Discount type")
    usage_count: Optional[int] = Field(None, ge=INT32_MIN, le=INT32_MAX, description="Usage count")
    max_usage_count: Optional[int] = Field(None, ge=0, le=INT32_MAX, description="Maximum global usage count")
    validity_end: Optional[str] = Field(None, description="Validity end date (YYYY-MM-DD)")
    restrict_to_product: Optional[int] = Field(None, description="Internal ID of a set to restrict this coupon to")
    minimal_rental_duration: Optional[MinimalRentalDuration] = Field(None, description="Minimal rental duration condition")
    comment: Optional[str] = Field(None, description="Private comment")
    is_visible: bool = Field(..., description="Publicly visible coupon?")


class CouponIdArguments(BaseModel):
    id: int = Field(..., description="A unique integer value identifying this coupon.")


class CouponUpdateArguments(CouponArguments, CouponIdArguments):
    pass


class CouponPartialUpdateArguments(CouponIdArguments):
    code: Optional[str] = Field(None, min_length=6, max_length=16, description="Coupon code")
    discount_value: Optional[int] = Field(None, ge=1, le=INT32_MAX, description="Discount value")
    discount_type: Optional[DiscountType] = Field(None, description="Discount type")
    usage_count: Optional[int] = Field(None, ge=INT32_MIN, le=INT32_MAX, description="Usage count")
    max_usage_count: Optional[int] = Field(None, ge=0, le=INT32_MAX, description="Maximum global usage count")
    validity_end: Optional[str] = Field(None, description="Validity end date (YYYY-MM-DD)")
    restrict_to_product: Optional[int] = Field(None, description="Internal ID of a set to restrict this coupon to")
    minimal_rental_duration: Optional[MinimalRentalDuration] = Field(None, description="Minimal rental duration condition")
    comment: Optional[str] = Field(None, description="Private comment")
    is_visible: Optional[bool] = Field(None, description="Publicly visible coupon?")


class RentableSetFields(BaseModel):
    deposit: Optional[int] = Field(None, ge=0, description="Deposit asked to renters (in euros)")
    sorting_type: Optional[SortingType] = Field(None, description="How the parts of the set are sorted")
    comment: Optional[str] = Field(None, description="Public comment about this copy of the set")
    is_available: Optional[bool] = Field(None, description="Whether the set can currently be rented")


class RentableSetCreateArguments(RentableSetFields):
    legoset_lego_id: str = Field(..., pattern=LEGO_ID_PATTERN, description="LEGO® identifier of the set to add")
    rental_price: int = Field(..., ge=0, description="Rental price (in euros)")
    auto_update_deposit: bool = Field(..., description="Let LocaBriques compute the deposit from the set value")


class RentableSetIdArguments(BaseModel):
    id: int = Field(..., description="A unique integer value identifying this set in your shop.")


class RentableSetUpdateArguments(RentableSetFields, RentableSetIdArguments):
    rental_price: int = Field(..., ge=0, description="Rental price (in euros)")
    auto_update_deposit: bool = Field(..., description="Let LocaBriques compute the deposit from the set value")


class RentableSetPartialUpdateArguments(RentableSetFields, RentableSetIdArguments):
    rental_price: Optional[int] = Field(None, ge=0, description="Rental price (in euros)")
    auto_update_deposit: Optional[bool] = Field(None, description="Let LocaBriques compute the deposit from the set value")


async def _send_shop_form(client, method, params):
    form = await build_form(client, provided(params))
    if not isinstance(form, dict):
        return form
    return await client.request(multipart_request(method, "/api/my_shop/", form))


def register_my_shop_tools(registry: ToolRegistry) -> None:
    """Register myshop_* tools."""
    formatter = PrefixedFormatter()

    @registry.tool("myshop_retrieve", "Retrieve your shop data", formatter)
    async def myshop_retrieve(client, params):
        return await client.request(ApiRequest("GET", "/api/my_shop/"))

    @registry.tool("myshop_update", "Update your shop info", formatter, arguments=ShopUpdateArguments)
    async def myshop_update(client, params):
        return await _send_shop_form(client, "PUT", params)

    @registry.tool(
        "myshop_partial_update",
        "Partially update your shop information",
        formatter,
        arguments=ShopPartialUpdateArguments,
    )
    async def myshop_partial_update(client, params):
        return await _send_shop_form(client, "PATCH", params)

    # Coupons

    @registry.tool("myshop_list_coupons", "List all coupons in your shop", formatter)
    async def myshop_list_coupons(client, params):
        return await client.request(ApiRequest("GET", "/api/my_shop/coupons/"))

    @registry.tool(
        "myshop_create_coupon",
        "Register a new coupon set in your shop",
        formatter,
        arguments=CouponArguments,
    )
    async def myshop_create_coupon(client, params):
        return await client.request(ApiRequest("POST", "/api/my_shop/coupons/", json=provided(params)))

    @registry.tool(
        "myshop_retrieve_coupon",
        "Retrieve a coupon from your shop",
        formatter,
        arguments=CouponIdArguments,
    )
    async def myshop_retrieve_coupon(client, params):
        return await client.request(ApiRequest("GET", f"/api/my_shop/coupons/{params.id}/"))

    @registry.tool(
        "myshop_update_coupon",
        "Update a coupon in your shop",
        formatter,
        arguments=CouponUpdateArguments,
    )
    async def myshop_update_coupon(client, params):
        return await client.request(ApiRequest(
            "PUT", f"/api/my_shop/coupons/{params.id}/", json=provided(params, "id"),
        ))

    @registry.tool(
        "myshop_partial_update_coupon",
        "Partially update a coupon in your shop",
        formatter,
        arguments=CouponPartialUpdateArguments,
    )
    async def myshop_partial_update_coupon(client, params):
        return await client.request(ApiRequest(
            "PATCH", f"/api/my_shop/coupons/{params.id}/", json=provided(params, "id"),
        ))

    @registry.tool(
        "myshop_delete_coupon",
        "Remove a coupon from your shop",
        formatter,
        arguments=CouponIdArguments,
        confirmation="Coupon {id} deleted successfully.",
    )
    async def myshop_delete_coupon(client, params):
        return await client.request(ApiRequest("DELETE", f"/api/my_shop/coupons/{params.id}/"))

    # Rentable sets

    @registry.tool("myshop_list_sets", "List all sets proposed for rental in your shop", formatter)
    async def myshop_list_sets(client, params):
        return await client.request(ApiRequest("GET", "/api/my_shop/sets/"))

    @registry.tool(
        "myshop_create_set",
        "Add a set to your shop so that it can be rented",
        formatter,
        arguments=RentableSetCreateArguments,
    )
    async def myshop_create_set(client, params):
        return await client.request(ApiRequest("POST", "/api/my_shop/sets/", json=provided(params)))

    @registry.tool(
        "myshop_retrieve_set",
        "Retrieve a set from your shop",
        formatter,
        arguments=RentableSetIdArguments,
    )
    async def myshop_retrieve_set(client, params):
        return await client.request(ApiRequest("GET", f"/api/my_shop/sets/{params.id}/"))

    @registry.tool(
        "myshop_update_set",
        "Update a set in your shop",
        formatter,
        arguments=RentableSetUpdateArguments,
    )
    async def myshop_update_set(client, params):
        return await client.request(ApiRequest(
            "PUT", f"/api/my_shop/sets/{params.id}/", json=provided(params, "id"),
        ))

    @registry.tool(
        "myshop_partial_update_set",
        "Partially update a set in your shop",
        formatter,
        arguments=RentableSetPartialUpdateArguments,
    )
    async def myshop_partial_update_set(client, params):
        return await client.request(ApiRequest(
            "PATCH", f"/api/my_shop/sets/{params.id}/", json=provided(params, "id"),
        ))

    @registry.tool(
        "myshop_delete_set",
        "Remove a set from your shop",
        formatter,
        arguments=RentableSetIdArguments,
        confirmation="Set {id} deleted successfully.",
    )
    async def myshop_delete_set(client, params):
        return await client.request(ApiRequest("DELETE", f"/api/my_shop/sets/{params.id}/"))
