"""Multipart form assembly for shop profile updates."""

import base64
import binascii
import json
import secrets
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .api_client import ApiFailure, ApiRequest, ApiSuccess, LocaBriquesClient, TransportFailure


IMAGE_FIELD = "image"
IMAGE_FILENAME = "image.jpg"

FormParts = Dict[str, Tuple[Optional[str], bytes]]


def encode_form_value(value: Any) -> bytes:
    """Objects (and null) are sent as compact JSON, scalars as text."""
    if value is None or isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    if isinstance(value, bool):
        return b"true" if value else b"false"
    return str(value).encode("utf-8")


def decode_data_uri(value: str) -> bytes:
    """Decode the base64 payload of a ``data:image/...;base64,...`` value."""
    _, _, payload = value.partition(",")
    return base64.b64decode(payload)


async def resolve_image(client: LocaBriquesClient, image: Optional[str]) -> Union[bytes, None, ApiFailure]:
    """Turn an image reference into bytes.

    Returns ``None`` when there is nothing to upload, and the failure when a
    remote image could not be downloaded.
    """
    if not image:
        return None

    if image.startswith("http"):
        result = await client.download_image(image)
        if isinstance(result, ApiSuccess):
            return result.data
        return result

    if image.startswith("data:image"):
        try:
            return decode_data_uri(image)
        except (binascii.Error, ValueError) as e:
            return TransportFailure(f"Invalid base64 image: {e}")

    return None


async def build_form(client: LocaBriquesClient, fields: Mapping[str, Any]) -> Union[FormParts, ApiFailure]:
    """Build multipart parts from shop fields.

    Every field becomes a plain form part (no filename); the image, when it
    resolves, becomes a file part named ``image.jpg``.
    """
    parts: FormParts = {}
    for key, value in fields.items():
        if key != IMAGE_FIELD:
            parts[key] = (None, encode_form_value(value))

    image = await resolve_image(client, fields.get(IMAGE_FIELD))
    if isinstance(image, bytes):
        parts[IMAGE_FIELD] = (IMAGE_FILENAME, image)
    elif image is not None:
        return image

    return parts


def multipart_request(method: str, path: str, parts: FormParts) -> ApiRequest:
    """Wrap form parts in a request whose content type carries our boundary.

    httpx does not encode an empty ``files`` mapping, so a form without any
    part is written out as the closing delimiter alone.
    """
    boundary = secrets.token_hex(16)
    headers = {"Content-Type": f"multipart/form-data; boundary={boundary}"}
    if not parts:
        return ApiRequest(method=method, path=path, content=f"--{boundary}--\r\n".encode("ascii"), headers=headers)
    return ApiRequest(method=method, path=path, files=parts, headers=headers)
