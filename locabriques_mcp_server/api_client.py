"""LocaBriques REST API client.

Every call goes through ``LocaBriquesClient.request`` which never raises for
HTTP or network failures: it returns an ``ApiSuccess``, an ``HttpFailure`` or a
``TransportFailure`` so that tool handlers can branch on the outcome.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

import httpx

from .config import ApiConfig


NO_RESPONSE_MESSAGE = "LocaBriques API Error: No response received from server"

SENSITIVE_HEADERS = ("authorization", "cookie")


@dataclass(frozen=True)
class ApiRequest:
    """Outgoing request descriptor."""
    method: str
    path: str
    params: Optional[Dict[str, Any]] = None
    json: Optional[Any] = None
    files: Optional[Dict[str, Tuple[Optional[str], bytes]]] = None
    content: Optional[bytes] = None
    headers: Optional[Dict[str, str]] = None

    def query(self) -> Optional[Dict[str, Any]]:
        """Query parameters with unset values dropped."""
        if self.params is None:
            return None
        return {key: value for key, value in self.params.items() if value is not None}


@dataclass(frozen=True)
class ApiSuccess:
    """2xx response."""
    status: int
    data: Any = None


@dataclass(frozen=True)
class HttpFailure:
    """The server answered with a non-2xx status."""
    status: int
    message: str
    data: Any = None


@dataclass(frozen=True)
class TransportFailure:
    """No response was received, or the request could not be sent."""
    message: str
    status: Optional[int] = field(default=None, init=False)
    data: Any = field(default=None, init=False)


ApiFailure = Union[HttpFailure, TransportFailure]
ApiResult = Union[ApiSuccess, HttpFailure, TransportFailure]


def decode_body(response: httpx.Response) -> Any:
    """Decode a response body: JSON when possible, raw text otherwise.

    An empty body decodes to an empty string.
    """
    if not response.content:
        return ""
    try:
        return response.json()
    except ValueError:
        return response.text


def default_status_message(status: int) -> str:
    return f"Request failed with status code {status}"


class LocaBriquesClient:
    """Async client for the LocaBriques API.

    One instance is built at startup from an explicit ``ApiConfig`` and shared
    by every tool handler.
    """

    def __init__(self, config: ApiConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.logger = logging.getLogger("locabriques_client")

        headers = {
            "User-Agent": config.user_agent,
            "Content-Type": "application/json",
        }
        if config.token:
            headers["Authorization"] = f"Token {config.token}"

        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers=headers,
            timeout=config.timeout,
            verify=config.verify_ssl,
            transport=transport,
        )
        # Remote images live on third-party hosts: no base URL, no credentials.
        self._downloads = httpx.AsyncClient(
            headers={"User-Agent": config.user_agent},
            timeout=config.timeout,
            verify=config.verify_ssl,
            follow_redirects=True,
            transport=transport,
        )

        self.logger.info(
            f"LocaBriquesClient initialized for {config.base_url} "
            f"({'authenticated' if config.token else 'anonymous'})"
        )

    @property
    def headers(self) -> httpx.Headers:
        return self._client.headers

    def _mask_headers(self, headers: httpx.Headers) -> Dict[str, str]:
        """Mask sensitive headers for logging."""
        return {
            key: "***MASKED***" if key.lower() in SENSITIVE_HEADERS else value
            for key, value in headers.items()
        }

    async def close(self):
        """Close the HTTP client connections."""
        await self._client.aclose()
        await self._downloads.aclose()

    async def request(self, api_request: ApiRequest) -> ApiResult:
        """Perform one API call and classify its outcome."""
        method = api_request.method.upper()
        start_time = time.time()
        self.logger.info(f"API Request: {method} {api_request.path}")

        try:
            request = self._client.build_request(
                method,
                api_request.path,
                params=api_request.query(),
                json=api_request.json,
                files=api_request.files,
                content=api_request.content,
                headers=api_request.headers,
            )
            self.logger.debug(f"Request URL: {request.url}")
            self.logger.debug(f"Request Headers: {self._mask_headers(request.headers)}")
            response = await self._client.send(request)
        except httpx.UnsupportedProtocol as e:
            self.logger.error(f"API Request Error: {method} {api_request.path} - {e}")
            return TransportFailure(f"LocaBriques API Error: {e}")
        except httpx.TransportError as e:
            duration = time.time() - start_time
            self.logger.error(
                f"API Transport Error: {method} {api_request.path} - "
                f"Duration: {duration:.3f}s - Error: {e!r}"
            )
            return TransportFailure(NO_RESPONSE_MESSAGE)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            self.logger.error(f"API Request Error: {method} {api_request.path} - {e}")
            return TransportFailure(f"LocaBriques API Error: {e}")

        duration = time.time() - start_time
        data = decode_body(response)
        self.logger.info(
            f"API Response: {method} {api_request.path} - "
            f"Duration: {duration:.3f}s - Status: {response.status_code}"
        )

        if response.is_success:
            return ApiSuccess(status=response.status_code, data=data)

        detail = None
        if isinstance(data, dict):
            detail = data.get("message")
        message = f"LocaBriques API Error [{response.status_code}]: {detail or default_status_message(response.status_code)}"
        self.logger.warning(f"API HTTP Error: {method} {api_request.path} - {message}")
        return HttpFailure(status=response.status_code, message=message, data=data)

    async def download_image(self, url: str) -> ApiResult:
        """Stream an image from a public URL.

        Unlike ``request``, failures carry the raw transport message.
        """
        self.logger.info(f"Image download: {url}")
        try:
            async with self._downloads.stream("GET", url) as response:
                if not response.is_success:
                    await response.aread()
                    return HttpFailure(
                        status=response.status_code,
                        message=default_status_message(response.status_code),
                        data=decode_body(response),
                    )
                chunks = [chunk async for chunk in response.aiter_bytes()]
        except (httpx.RequestError, httpx.InvalidURL) as e:
            self.logger.error(f"Image download failed: {url} - {e!r}")
            return TransportFailure(str(e) or type(e).__name__)

        return ApiSuccess(status=response.status_code, data=b"".join(chunks))
