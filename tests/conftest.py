"""Pytest configuration and shared fixtures."""

import json
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest

from locabriques_mcp_server.api_client import LocaBriquesClient
from locabriques_mcp_server.config import ApiConfig, Config, ServerConfig
from locabriques_mcp_server.tools import ToolRegistry, register_all_tools


BASE_URL = "https://locabriques.test"
TOKEN = "secret-token"


def url_of(request: httpx.Request) -> str:
    url = request.url
    return f"{url.scheme}://{url.host}{url.path}"


class FakeApi:
    """In-memory upstream, served through ``httpx.MockTransport``.

    Routes are keyed on method and URL (query string excluded); paths
    starting with ``/`` are relative to ``BASE_URL``.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.routes: Dict[Tuple[str, str], Dict[str, Any]] = {}

    @staticmethod
    def _url(path: str) -> str:
        return BASE_URL + path if path.startswith("/") else path

    def add(self, method: str, path: str, status: int = 200, json: Any = None,
            content: Optional[bytes] = None, error: Optional[type] = None) -> None:
        self.routes[(method.upper(), self._url(path))] = {
            "status": status, "json": json, "content": content, "error": error,
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, url_of(request)))
        if route is None:
            return httpx.Response(599, json={"detail": f"unrouted {request.method} {request.url}"})
        if route["error"] is not None:
            raise route["error"]("Network Error", request=request)
        if route["content"] is not None:
            return httpx.Response(route["status"], content=route["content"])
        if route["json"] is None:
            return httpx.Response(route["status"])
        return httpx.Response(route["status"], json=route["json"])

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def calls(self) -> List[Tuple[str, str]]:
        return [(r.method, url_of(r)) for r in self.requests]


def query_of(request: httpx.Request) -> Dict[str, Any]:
    """Query parameters; repeated keys become lists."""
    result: Dict[str, Any] = {}
    for key, value in request.url.params.multi_items():
        if key in result:
            previous = result[key]
            result[key] = (previous if isinstance(previous, list) else [previous]) + [value]
        else:
            result[key] = value
    return result


def body_of(request: httpx.Request) -> Any:
    return json.loads(request.content)


def text_of(envelope) -> str:
    return envelope.content[0].text


@pytest.fixture
def fake_api():
    return FakeApi()


@pytest.fixture
def api_config():
    return ApiConfig(base_url=BASE_URL, token=TOKEN)


@pytest.fixture
def client(api_config, fake_api):
    return LocaBriquesClient(api_config, transport=httpx.MockTransport(fake_api.handler))


@pytest.fixture
def registry(client):
    registry = ToolRegistry(client)
    register_all_tools(registry)
    return registry


@pytest.fixture
def config(api_config):
    return Config(api=api_config, server=ServerConfig())


@pytest.fixture
def sample_tool_call_request():
    """Sample tool call request for testing."""
    return {
        "jsonrpc": "2.0",
        "id": 2,
        "method": "tools/call",
        "params": {
            "name": "get_shop",
            "arguments": {"slug": "my-shop"}
        }
    }
