"""Tests for MCP server implementation."""

import json

import pytest
from fastapi.testclient import TestClient

from locabriques_mcp_server import __version__
from locabriques_mcp_server.server import (
    INVALID_PARAMS, INVALID_REQUEST, METHOD_NOT_FOUND, PARSE_ERROR, SERVER_NAME, MCPServer,
)


@pytest.fixture
def server(config, client):
    """Create an MCPServer bound to the fake upstream."""
    return MCPServer(config, client=client)


@pytest.fixture
def http(server):
    """Create a test client for the server."""
    return TestClient(server.app)


class TestMCPServer:
    """Test MCPServer class."""

    def test_server_initialization(self, server):
        assert server.app is not None
        assert len(server.tools) == 44

        tool_names = [tool.name for tool in server.tools]
        assert "get_shop" in tool_names
        assert "myshop_update" in tool_names

    def test_builds_its_own_client(self, config):
        server = MCPServer(config)
        assert str(server.client.headers["Authorization"]) == "Token secret-token"


class TestMCPEndpoints:
    """Test MCP HTTP endpoints."""

    def test_initialize_method(self, http):
        response = http.post("/", json={"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {}})
        assert response.status_code == 200

        data = response.json()
        assert data["jsonrpc"] == "2.0"
        assert data["id"] == 1
        assert "error" not in data

        result = data["result"]
        assert result["protocolVersion"] == "2024-11-05"
        assert result["capabilities"]["tools"] == {}
        assert result["serverInfo"] == {"name": SERVER_NAME, "version": __version__}

    def test_ping(self, http):
        data = http.post("/", json={"jsonrpc": "2.0", "id": "p", "method": "ping"}).json()
        assert data == {"jsonrpc": "2.0", "id": "p", "result": {}}

    def test_list_tools_method(self, http):
        data = http.post("/", json={"jsonrpc": "2.0", "id": 2, "method": "tools/list"}).json()

        tools = data["result"]["tools"]
        assert len(tools) == 44
        assert tools[0]["name"] == "catalog_list"
        assert tools[-1]["name"] == "user_list"
        for tool in tools:
            assert set(tool) == {"name", "description", "inputSchema"}

    def test_call_tool_method(self, http, fake_api, sample_tool_call_request):
        fake_api.add("GET", "/api/shops/my-shop/", json={"slug": "my-shop", "name": "My Shop"})

        data = http.post("/", json=sample_tool_call_request).json()

        assert data["id"] == 2
        result = data["result"]
        assert "isError" not in result
        assert result["content"][0]["type"] == "text"
        assert json.loads(result["content"][0]["text"]) == {"slug": "my-shop", "name": "My Shop"}

    def test_call_tool_upstream_failure(self, http, fake_api, sample_tool_call_request):
        fake_api.add("GET", "/api/shops/my-shop/", status=404, json={"message": "Not found"})

        data = http.post("/", json=sample_tool_call_request).json()

        assert data["result"]["isError"] is True
        assert data["result"]["content"][0]["text"] == (
            "Could not fetch shop 'my-shop': LocaBriques API Error [404]: Not found"
        )

    def test_call_unknown_tool(self, http):
        data = http.post("/", json={
            "jsonrpc": "2.0", "id": 3, "method": "tools/call",
            "params": {"name": "nonexistent_tool", "arguments": {}},
        }).json()

        assert data["error"]["code"] == INVALID_PARAMS
        assert "Unknown tool: nonexistent_tool" in data["error"]["message"]

    def test_call_tool_invalid_arguments(self, http, fake_api):
        data = http.post("/", json={
            "jsonrpc": "2.0", "id": 4, "method": "tools/call",
            "params": {"name": "get_shop", "arguments": {}},
        }).json()

        assert data["error"]["code"] == INVALID_PARAMS
        assert "get_shop" in data["error"]["message"]
        assert fake_api.requests == []

    def test_call_tool_missing_params(self, http):
        data = http.post("/", json={"jsonrpc": "2.0", "id": 5, "method": "tools/call"}).json()

        assert data["error"]["code"] == INVALID_PARAMS
        assert data["error"]["message"] == "Missing params for tools/call"

    def test_unknown_method(self, http):
        data = http.post("/", json={"jsonrpc": "2.0", "id": 6, "method": "resources/list"}).json()

        assert data["id"] == 6
        assert data["error"]["code"] == METHOD_NOT_FOUND
        assert "resources/list" in data["error"]["message"]

    def test_invalid_json(self, http):
        response = http.post("/", content=b"{not json", headers={"Content-Type": "application/json"})

        data = response.json()
        assert data["error"]["code"] == PARSE_ERROR
        assert "id" not in data

    def test_invalid_request(self, http):
        data = http.post("/", json={"jsonrpc": "2.0", "id": 7}).json()

        assert data["id"] == 7
        assert data["error"]["code"] == INVALID_REQUEST

    def test_notification_gets_no_response(self, http):
        response = http.post("/", json={"jsonrpc": "2.0", "method": "notifications/initialized"})

        assert response.status_code == 202
        assert response.content == b""

    def test_request_without_id_gets_no_response(self, http):
        response = http.post("/", json={"jsonrpc": "2.0", "method": "ping"})

        assert response.status_code == 202

    def test_host_response_is_ignored(self, http):
        response = http.post("/", json={"jsonrpc": "2.0", "id": 7, "result": {}})

        assert response.status_code == 202


class TestHandleMessage:

    @pytest.mark.asyncio
    async def test_non_object_message(self, server):
        response = await server.handle_message([1, 2, 3])
        assert response["error"]["code"] == INVALID_REQUEST

    @pytest.mark.asyncio
    async def test_internal_error(self, server, monkeypatch):
        async def broken(request):
            raise RuntimeError("dispatcher exploded")

        monkeypatch.setattr(server, "dispatch", broken)
        response = await server.handle_message({"jsonrpc": "2.0", "id": 8, "method": "ping"})

        assert response["id"] == 8
        assert response["error"]["code"] == -32603
        assert "dispatcher exploded" in response["error"]["message"]

    @pytest.mark.asyncio
    async def test_notification_is_not_answered(self, server):
        assert await server.handle_message({"jsonrpc": "2.0", "method": "ping"}) is None
        assert await server.handle_message({"jsonrpc": "2.0", "method": "tools/list"}) is None

    @pytest.mark.asyncio
    async def test_host_responses_are_not_answered(self, server):
        assert await server.handle_message({"jsonrpc": "2.0", "id": 7, "result": {}}) is None
        assert await server.handle_message(
            {"jsonrpc": "2.0", "id": 8, "error": {"code": -32601, "message": "nope"}}
        ) is None
