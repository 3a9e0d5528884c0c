"""Message class/id constants and configuration command builders.

The receiver is configured once at session start with two commands: a
CFG-PRT that restricts the UART to UBX in both directions, and a CFG-MSG
that enables NAV-PVT output on every navigation solution.
"""

from __future__ import annotations

from enum import IntEnum

from .framing import build_frame


class MessageClass(IntEnum):
    """UBX message classes."""

    NAV = 0x01
    CFG = 0x06


class NavId(IntEnum):
    """Message ids within the NAV class."""

    PVT = 0x07


class CfgId(IntEnum):
    """Message ids within the CFG class."""

    PRT = 0x00
    MSG = 0x01


class PortId(IntEnum):
    """Receiver port identifiers used by CFG-PRT."""

    I2C = 0
    UART1 = 1
    UART2 = 2
    USB = 3
    SPI = 4


# Protocol mask bits for CFG-PRT inProtoMask / outProtoMask
PROTO_UBX = 0x0001
PROTO_NMEA = 0x0002
PROTO_RTCM = 0x0004

DEFAULT_PORT_BAUDRATE = 38400
DEFAULT_UART_MODE = 0x23002300  # sent as 00 23 00 23

CFG_PRT_LENGTH = 20


def build_command(msg_class: int, msg_id: int, payload: bytes = b"") -> bytes:
    """Build a single UBX command frame."""
    return build_frame(int(msg_class), int(msg_id), payload)


def build_port_config(
    port_id: int = PortId.UART1,
    baudrate: int = DEFAULT_PORT_BAUDRATE,
    in_proto_mask: int = PROTO_UBX,
    out_proto_mask: int = PROTO_UBX,
    mode: int = DEFAULT_UART_MODE,
    tx_ready: int = 0,
    flags: int = 0,
) -> bytes:
    """Build a CFG-PRT command setting a port's framing and active protocols.

    Args:
        port_id: Target port (see :class:`PortId`).
        baudrate: UART baud rate in bits per second.
        in_proto_mask: Protocols accepted on the port (``PROTO_*`` bits).
        out_proto_mask: Protocols emitted on the port (``PROTO_*`` bits).
        mode: UART mode word (character length, parity, stop bits).
        tx_ready: TX-ready pin configuration.
        flags: Port flags.
    """
    valid_ports = [p.value for p in PortId]
    if port_id not in valid_ports:
        raise ValueError(f"Port id must be one of {valid_ports}, got {port_id}")
    if not 0 < baudrate <= 0xFFFFFFFF:
        raise ValueError(f"Baud rate must be a positive 32-bit value, got {baudrate}")
    for name, mask in (("in_proto_mask", in_proto_mask), ("out_proto_mask", out_proto_mask)):
        if not 0 <= mask <= 0xFFFF:
            raise ValueError(f"{name} must be 0-65535, got {mask}")

    payload = (
        bytes([int(port_id), 0])                 # portID, reserved
        + tx_ready.to_bytes(2, "little")
        + mode.to_bytes(4, "little")
        + baudrate.to_bytes(4, "little")
        + in_proto_mask.to_bytes(2, "little")
        + out_proto_mask.to_bytes(2, "little")
        + flags.to_bytes(2, "little")
        + b"\x00\x00"                            # reserved
    )
    return build_command(MessageClass.CFG, CfgId.PRT, payload)


def build_message_rate(msg_class: int, msg_id: int, rate: int = 1) -> bytes:
    """Build a CFG-MSG command setting a message's output rate on the current port.

    Args:
        msg_class: Class of the message to configure.
        msg_id: Id of the message to configure.
        rate: Emit once every ``rate`` navigation solutions (0 disables).
    """
    if not 0 <= msg_class <= 0xFF or not 0 <= msg_id <= 0xFF:
        raise ValueError(f"Message class/id must be 0-255, got 0x{msg_class:X}/0x{msg_id:X}")
    if not 0 <= rate <= 0xFF:
        raise ValueError(f"Rate must be 0-255, got {rate}")
    return build_command(MessageClass.CFG, CfgId.MSG, bytes([msg_class, msg_id, rate]))


def build_port_config_ubx_only() -> bytes:
    """CFG-PRT for UART1 at 38400 baud with UBX in and out, NMEA disabled."""
    return build_port_config()


def build_enable_nav_pvt() -> bytes:
    """CFG-MSG enabling NAV-PVT at one message per solution."""
    return build_message_rate(MessageClass.NAV, NavId.PVT, 1)


PORT_CONFIG_UBX_ONLY = build_port_config_ubx_only()
ENABLE_NAV_PVT = build_enable_nav_pvt()


def startup_commands() -> tuple[bytes, bytes]:
    """The configuration frames to send at session start, in order."""
    return PORT_CONFIG_UBX_ONLY, ENABLE_NAV_PVT
