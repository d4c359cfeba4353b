"""Entry point for LocaBriques MCP Server."""

import argparse
import asyncio
import logging
import sys

import uvicorn

from .config import load_config
from .logging_config import setup_server_logging
from .server import MCPServer
from .stdio import run_stdio


STARTUP_MESSAGE = "LocaBriques MCP Server running on stdio"


def announce_startup() -> None:
    """Tell the host on stderr that the server is up, whatever the log level."""
    print(STARTUP_MESSAGE, file=sys.stderr, flush=True)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="locabriques-mcp-server",
        description="Expose the LocaBriques API as MCP tools",
    )
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport to serve on (default: stdio)",
    )
    parser.add_argument("--config", default=None, help="Path to a JSON configuration file")
    parser.add_argument("--host", default=None, help="Host to bind when using the http transport")
    parser.add_argument("--port", type=int, default=None, help="Port to bind when using the http transport")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logger = logging.getLogger("mcp_server")

    try:
        config = load_config(args.config)
        setup_server_logging(config.to_dict())
        server = MCPServer(config)

        if args.transport == "http":
            uvicorn.run(
                server.app,
                host=args.host or config.server.host,
                port=args.port or config.server.port,
            )
        else:
            asyncio.run(run_stdio(server, on_ready=announce_startup))
    except KeyboardInterrupt:
        return 0
    except Exception:
        logger.exception("Fatal error in main()")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
