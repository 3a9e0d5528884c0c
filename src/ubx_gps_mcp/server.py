"""MCP server entry point for u-blox GPS receivers.

Exposes tools, resources, and prompts via the Model Context Protocol
using the official Python MCP SDK with stdio transport.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .protocol.commands import startup_commands
from .protocol.framing import parse_frame
from .protocol.parser import parse_message
from .receiver import GpsReceiver
from .transport.serial_connection import (
    DEFAULT_BAUDRATE,
    DEFAULT_PORT,
    SerialConnection,
)

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "ubx-gps",
    instructions="MCP server for u-blox GPS receivers speaking the UBX protocol",
)

# Global connection state
_connection: SerialConnection | None = None
_receiver: GpsReceiver | None = None


def _get_connection() -> SerialConnection:
    """Get the active serial connection, raising if not connected."""
    if _connection is None or not _connection.connected:
        raise RuntimeError(
            "Not connected to receiver. Use the 'connect' tool first."
        )
    return _connection


def _get_receiver() -> GpsReceiver:
    global _receiver
    if _receiver is None:
        _receiver = GpsReceiver()
    return _receiver


# ─── CONNECTION TOOLS ─────────────────────────────────────────────────

@mcp.tool()
def connect(
    port: str = DEFAULT_PORT,
    baudrate: int = DEFAULT_BAUDRATE,
    configure: bool = True,
) -> dict[str, Any]:
    """Open the serial port to the GPS receiver.

    Args:
        port: Serial device path (e.g. /dev/ttyACM0, /dev/ttyUSB0, COM3).
        baudrate: Current baud rate of the receiver's UART.
        configure: Send the UBX-only port config and enable NAV-PVT output.
    """
    global _connection, _receiver
    if _connection is not None and _connection.connected:
        return {
            "connected": True,
            "message": "Already connected",
            "port": _connection.port_info.port,
        }

    _connection = SerialConnection(port=port, baudrate=baudrate)
    info = _connection.open()
    _receiver = GpsReceiver()

    if configure:
        _receiver.configure(_connection)

    return {
        "connected": True,
        "port": info.port,
        "baudrate": _connection.port_info.baudrate,
        "configured": configure,
    }


@mcp.tool()
def disconnect() -> dict[str, bool]:
    """Close the serial connection to the receiver."""
    global _connection
    if _connection is None:
        return {"disconnected": True}
    _connection.close()
    _connection = None
    return {"disconnected": True}


@mcp.tool()
def configure_receiver() -> dict[str, Any]:
    """Re-send the start-up configuration (UBX-only port, NAV-PVT every solution)."""
    conn = _get_connection()
    _get_receiver().configure(conn)
    port_config, enable_pvt = startup_commands()
    return {
        "configured": True,
        "baudrate": conn.port_info.baudrate,
        "commands": [port_config.hex(" "), enable_pvt.hex(" ")],
    }


# ─── NAVIGATION TOOLS ────────────────────────────────────────────────

@mcp.tool()
def read_position(timeout_s: float = 2.0) -> dict[str, Any]:
    """Wait for the next NAV-PVT solution and return it.

    Args:
        timeout_s: Seconds to wait for a solution (receivers emit 1 per second by default).
    """
    conn = _get_connection()
    record = _get_receiver().read_record(conn, timeout_s)
    if record is None:
        return {"error": f"No NAV-PVT message within {timeout_s} s"}

    result = record.to_dict()
    result["summary"] = record.format_position()
    return result


@mcp.tool()
def get_status() -> dict[str, Any]:
    """Report fix status, satellite count and decoder counters."""
    receiver = _get_receiver()
    latest = receiver.latest
    return {
        "connected": _connection is not None and _connection.connected,
        "has_fix": receiver.has_fix(),
        "satellites": receiver.satellite_count(),
        "status": receiver.status_message(),
        "latest": latest.to_dict() if latest is not None else None,
        "decoder": receiver.decoder.stats.to_dict(),
    }


@mcp.tool()
def decode_hex(data: str) -> dict[str, Any]:
    """Decode a hex dump of captured receiver output without a device.

    Args:
        data: Hex string, whitespace allowed (e.g. "b5 62 01 07 5c 00 ...").
    """
    try:
        raw = bytes.fromhex(data)
    except ValueError as e:
        return {"error": f"Invalid hex input: {e}"}

    receiver = GpsReceiver()
    records = receiver.process_bytes(raw)
    result: dict[str, Any] = {
        "records": [r.to_dict() for r in records],
        "decoder": receiver.decoder.stats.to_dict(),
    }

    # A single complete frame of another type is still worth describing
    if not records:
        frame = parse_frame(raw)
        if frame is not None and parse_message(frame) is None:
            result["frame"] = repr(frame)
    return result


# ─── MCP RESOURCES ───────────────────────────────────────────────────

@mcp.resource("ubx://commands/startup")
def resource_startup_commands() -> str:
    """Start-up configuration frames as hex."""
    port_config, enable_pvt = startup_commands()
    return json.dumps(
        {
            "port_config_ubx_only": port_config.hex(" "),
            "enable_nav_pvt": enable_pvt.hex(" "),
        }
    )


# ─── MCP PROMPTS ─────────────────────────────────────────────────────

@mcp.prompt()
def describe_fix() -> str:
    """Guide the AI to read and explain the receiver's current position."""
    return """Use the get_status tool to check whether the receiver has a fix.
If it is not connected, call connect first.
Then call read_position and describe:
- Date and UTC time of the solution
- Latitude/longitude in degrees with the horizontal accuracy
- Altitude above mean sea level and ground speed
- Number of satellites and the fix type

If there is no valid fix, say so and suggest moving the antenna to open sky."""


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
