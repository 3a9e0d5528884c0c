"""UBX protocol decoder and MCP server for u-blox GPS receivers."""

__version__ = "0.1.0"
