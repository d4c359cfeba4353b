"""MCP server: JSON-RPC dispatch shared by the stdio and HTTP transports."""

import json
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError

from . import __version__
from .api_client import LocaBriquesClient
from .config import Config, load_config
from .models import (
    MCPRequest, MCPResponse, InitializeResult,
    ServerInfo, ListToolsResult, CallToolRequest
)
from .tools import ToolRegistry, register_all_tools


SERVER_NAME = "locabriques-mcp-server"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class MCPServer:
    """LocaBriques MCP server."""

    def __init__(self, config: Optional[Config] = None, client: Optional[LocaBriquesClient] = None):
        self.config = config if config is not None else load_config()
        self.logger = logging.getLogger("mcp_server")

        self.client = client if client is not None else LocaBriquesClient(self.config.api)
        self.registry = ToolRegistry(self.client)
        register_all_tools(self.registry)

        self.app = FastAPI(title="LocaBriques MCP Server", version=__version__, lifespan=self._lifespan)
        self.setup_routes()
        self.logger.info(f"MCP Server initialized with {len(self.registry)} tools")

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        yield
        await self.client.close()

    @property
    def tools(self):
        return self.registry.descriptors()

    def setup_routes(self):
        """Setup FastAPI routes."""

        @self.app.post("/")
        async def handle_mcp_request(request: Request):
            """Handle MCP JSON-RPC requests."""
            body = await request.body()
            response = await self.handle_raw(body)
            if response is None:
                return Response(status_code=202)
            return JSONResponse(content=response)

    async def handle_raw(self, raw: Any) -> Optional[Dict[str, Any]]:
        """Handle one serialized JSON-RPC message."""
        try:
            message = json.loads(raw)
        except (TypeError, ValueError) as e:
            return self._create_error_response(None, PARSE_ERROR, f"Parse error: {e}").to_wire()
        return await self.handle_message(message)

    async def handle_message(self, message: Any) -> Optional[Dict[str, Any]]:
        """Handle one decoded JSON-RPC message.

        Returns the response to send, or ``None`` for notifications and for
        responses sent by the host.
        """
        if isinstance(message, dict) and "method" not in message and ("result" in message or "error" in message):
            self.logger.debug(f"Ignoring response message with id {message.get('id')}")
            return None

        request_id = message.get("id") if isinstance(message, dict) else None
        if not isinstance(request_id, (str, int)):
            request_id = None
        try:
            mcp_request = MCPRequest.model_validate(message)
        except ValidationError as e:
            return self._create_error_response(request_id, INVALID_REQUEST, f"Invalid request: {e}").to_wire()

        try:
            response = await self.dispatch(mcp_request)
        except Exception as e:
            self.logger.exception(f"Internal error while handling {mcp_request.method}")
            response = self._create_error_response(mcp_request.id, INTERNAL_ERROR, f"Internal error: {str(e)}")

        if mcp_request.is_notification:
            return None
        return response.to_wire()

    async def dispatch(self, request: MCPRequest) -> MCPResponse:
        """Route a request to its method handler."""
        self.logger.debug(f"Dispatching {request.method}")
        if request.method == "initialize":
            return self._handle_initialize(request)
        if request.method == "ping":
            return MCPResponse(id=request.id, result={})
        if request.method == "tools/list":
            return self._handle_list_tools(request)
        if request.method == "tools/call":
            return await self._handle_call_tool(request)
        if request.method.startswith("notifications/"):
            return MCPResponse(id=request.id, result={})
        return self._create_error_response(
            request.id, METHOD_NOT_FOUND, f"Method not found: {request.method}"
        )

    def _handle_initialize(self, request: MCPRequest) -> MCPResponse:
        """Handle initialize method."""
        result = InitializeResult(
            capabilities={
                "tools": {}
            },
            serverInfo=ServerInfo(
                name=SERVER_NAME,
                version=__version__
            )
        )

        return MCPResponse(
            id=request.id,
            result=result.model_dump()
        )

    def _handle_list_tools(self, request: MCPRequest) -> MCPResponse:
        """Handle tools/list method."""
        result = ListToolsResult(tools=self.tools)

        return MCPResponse(
            id=request.id,
            result=result.model_dump()
        )

    async def _handle_call_tool(self, request: MCPRequest) -> MCPResponse:
        """Handle tools/call method."""
        if not request.params:
            return self._create_error_response(
                request.id, INVALID_PARAMS, "Missing params for tools/call"
            )

        try:
            tool_request = CallToolRequest(**request.params)
        except ValidationError as e:
            return self._create_error_response(
                request.id, INVALID_PARAMS, f"Invalid tool call: {str(e)}"
            )

        if tool_request.name not in self.registry:
            return self._create_error_response(
                request.id, INVALID_PARAMS, f"Unknown tool: {tool_request.name}"
            )

        try:
            result = await self.registry.call(tool_request.name, tool_request.arguments)
        except ValidationError as e:
            return self._create_error_response(
                request.id, INVALID_PARAMS, f"Invalid arguments for tool {tool_request.name}: {str(e)}"
            )

        return MCPResponse(
            id=request.id,
            result=result.to_envelope()
        )

    def _create_error_response(self, request_id: Optional[Any], code: int, message: str) -> MCPResponse:
        """Create an error response."""
        return MCPResponse(
            id=request_id,
            error={"code": code, "message": message}
        )


def create_app(config: Optional[Config] = None) -> FastAPI:
    """Create and return the FastAPI app."""
    server = MCPServer(config)
    return server.app
