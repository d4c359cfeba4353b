"""stdio transport.

Line framing on stdin/stdout is done by the MCP SDK's ``stdio_server``; this
module only moves decoded messages between its streams and ``MCPServer``.
"""

import logging
from typing import Any, Callable, Dict, Optional

import anyio
from anyio.streams.memory import MemoryObjectReceiveStream, MemoryObjectSendStream
from mcp.server.stdio import stdio_server
from mcp.shared.message import SessionMessage
from mcp.types import JSONRPCMessage
from pydantic import ValidationError


logger = logging.getLogger("mcp_server")


async def _reply(server, write_stream: MemoryObjectSendStream, message: Dict[str, Any]) -> None:
    response = await server.handle_message(message)
    if response is None:
        return
    try:
        outgoing = JSONRPCMessage.model_validate(response)
    except ValidationError as e:
        logger.warning(f"Dropping response that cannot be framed: {e}")
        return
    await write_stream.send(SessionMessage(outgoing))


async def serve_streams(
    server,
    read_stream: MemoryObjectReceiveStream,
    write_stream: MemoryObjectSendStream,
) -> None:
    """Answer every message read from ``read_stream`` on ``write_stream``.

    Each message is handled in its own task. Returns once the input is
    exhausted and every reply has been sent.
    """
    async with write_stream:
        async with anyio.create_task_group() as tg:
            async with read_stream:
                async for item in read_stream:
                    if isinstance(item, Exception):
                        logger.warning(f"Ignoring malformed message: {item}")
                        continue
                    message = item.message.model_dump(by_alias=True, mode="json")
                    tg.start_soon(_reply, server, write_stream, message)
    logger.info("stdin closed, shutting down")


async def run_stdio(
    server,
    on_ready: Optional[Callable[[], None]] = None,
    stdin: Optional[anyio.AsyncFile] = None,
    stdout: Optional[anyio.AsyncFile] = None,
) -> None:
    """Run ``server`` on the process stdio (or the given files) until EOF."""
    try:
        async with stdio_server(stdin=stdin, stdout=stdout) as (read_stream, write_stream):
            if on_ready is not None:
                on_ready()
            await serve_streams(server, read_stream, write_stream)
    finally:
        await server.client.close()
