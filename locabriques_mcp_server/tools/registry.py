"""Tool definitions and the registry that dispatches calls to them."""

import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from pydantic import BaseModel

from ..api_client import ApiResult, ApiSuccess, LocaBriquesClient, TransportFailure
from ..errors import ErrorFormatter
from ..models import CallToolResult, Tool


Handler = Callable[[LocaBriquesClient, Any], Awaitable[ApiResult]]


class NoArguments(BaseModel):
    """Arguments of tools that take none."""


@dataclass(frozen=True)
class ToolDefinition:
    """A registered tool.

    ``arguments`` is the declarative input schema; ``handler`` only ever sees
    an instance of it, already validated.
    """
    name: str
    description: str
    arguments: Type[BaseModel]
    handler: Handler
    formatter: ErrorFormatter
    confirmation: Optional[str] = None

    def descriptor(self) -> Tool:
        schema = self.arguments.model_json_schema()
        schema.pop("title", None)
        schema.pop("description", None)
        schema.setdefault("properties", {})
        return Tool(name=self.name, description=self.description, inputSchema=schema)

    def render(self, result: ApiResult, values: Dict[str, Any]) -> CallToolResult:
        if isinstance(result, ApiSuccess):
            if self.confirmation is not None:
                return CallToolResult.success(self.confirmation.format(**values))
            return CallToolResult.success(json.dumps(result.data, indent=2, ensure_ascii=False))
        return CallToolResult.failure(self.formatter.format(result, values))


class ToolRegistry:
    """Flat, ordered collection of tools bound to one API client."""

    def __init__(self, client: LocaBriquesClient):
        self.client = client
        self.logger = logging.getLogger("locabriques_tools")
        self._tools: Dict[str, ToolDefinition] = {}

    def register(self, definition: ToolDefinition) -> None:
        if definition.name in self._tools:
            raise ValueError(f"Tool '{definition.name}' is already registered")
        self._tools[definition.name] = definition

    def tool(
        self,
        name: str,
        description: str,
        formatter: ErrorFormatter,
        arguments: Type[BaseModel] = NoArguments,
        confirmation: Optional[str] = None,
    ) -> Callable[[Handler], Handler]:
        """Decorator registering an async handler as a tool."""
        def decorator(handler: Handler) -> Handler:
            self.register(ToolDefinition(
                name=name,
                description=description,
                arguments=arguments,
                handler=handler,
                formatter=formatter,
                confirmation=confirmation,
            ))
            return handler
        return decorator

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def get(self, name: str) -> ToolDefinition:
        return self._tools[name]

    @property
    def names(self) -> List[str]:
        return list(self._tools)

    def descriptors(self) -> List[Tool]:
        return [definition.descriptor() for definition in self._tools.values()]

    async def call(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> CallToolResult:
        """Validate arguments and run a tool.

        Raises ``KeyError`` for an unknown tool and ``pydantic.ValidationError``
        for invalid arguments; anything that happens once the handler runs ends
        up in the returned envelope.
        """
        definition = self._tools[name]
        params = definition.arguments.model_validate(arguments or {})
        values = params.model_dump()

        try:
            result = await definition.handler(self.client, params)
        except Exception as e:
            self.logger.exception(f"Tool {name} crashed")
            result = TransportFailure(str(e) or type(e).__name__)

        envelope = definition.render(result, values)
        if envelope.isError:
            self.logger.warning(f"Tool {name} failed: {envelope.text}")
        return envelope
