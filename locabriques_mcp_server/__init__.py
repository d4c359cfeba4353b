"""LocaBriques MCP Server: the LocaBriques REST API exposed as MCP tools."""

__version__ = "1.0.0"
