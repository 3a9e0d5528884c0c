"""UBX message frame builder and whole-buffer parser.

Frame layout::

    +---------+---------+-------+----+-----------+------------------+------+------+
    | Sync 1  | Sync 2  | Class | ID |  Length   |     Payload      | CK_A | CK_B |
    | 0xB5    | 0x62    | 1 B   | 1 B| 2 B (LE)  |  Length bytes    | 1 B  | 1 B  |
    +---------+---------+-------+----+-----------+------------------+------+------+

- Length: little-endian size of the payload only
- Checksum: 8-bit Fletcher over class, id, length and payload

Streaming input from a serial link is handled by
:class:`~ubx_gps_mcp.protocol.decoder.FrameDecoder`; the functions here work
on complete, already-delimited buffers.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..utils.checksum import ubx_checksum

SYNC_CHAR_1 = 0xB5
SYNC_CHAR_2 = 0x62
PREAMBLE = bytes([SYNC_CHAR_1, SYNC_CHAR_2])
HEADER_SIZE = 6  # sync(2) + class(1) + id(1) + length(2)
CHECKSUM_SIZE = 2
MAX_PAYLOAD_SIZE = 256  # receive buffer capacity of the streaming decoder


@dataclass(frozen=True)
class Frame:
    """A complete, checksum-validated UBX message."""

    msg_class: int
    msg_id: int
    payload: bytes = b""

    @property
    def length(self) -> int:
        return len(self.payload)

    def __repr__(self) -> str:
        return (
            f"Frame(class=0x{self.msg_class:02X}, id=0x{self.msg_id:02X}, "
            f"payload={self.payload.hex(' ') if self.payload else '(empty)'})"
        )


def build_frame(msg_class: int, msg_id: int, payload: bytes = b"") -> bytes:
    """Build a complete UBX frame.

    Args:
        msg_class: Message class byte.
        msg_id: Message id byte within the class.
        payload: Message-specific payload bytes.

    Returns:
        Sync characters, header, payload and checksum as ``bytes``.
    """
    if not 0 <= msg_class <= 0xFF:
        raise ValueError(f"Message class must be 0-255, got {msg_class}")
    if not 0 <= msg_id <= 0xFF:
        raise ValueError(f"Message id must be 0-255, got {msg_id}")
    if len(payload) > 0xFFFF:
        raise ValueError(f"Payload must be at most 65535 bytes, got {len(payload)}")

    body = bytes([msg_class, msg_id]) + len(payload).to_bytes(2, "little") + payload
    return PREAMBLE + body + bytes(ubx_checksum(body))


def parse_frame(data: bytes) -> Frame | None:
    """Parse a buffer holding exactly one UBX frame at its start.

    Args:
        data: Raw bytes beginning with the sync characters.

    Returns:
        A ``Frame`` if the buffer holds a complete, valid message, or
        ``None`` if the preamble is missing, the buffer is truncated or
        the checksum fails.
    """
    if len(data) < HEADER_SIZE + CHECKSUM_SIZE:
        return None

    if data[0:2] != PREAMBLE:
        return None

    length = int.from_bytes(data[4:6], "little")
    end = HEADER_SIZE + length
    if len(data) < end + CHECKSUM_SIZE:
        return None

    # Verify checksum
    expected = (data[end], data[end + 1])
    if ubx_checksum(data[2:end]) != expected:
        return None

    return Frame(msg_class=data[2], msg_id=data[3], payload=bytes(data[HEADER_SIZE:end]))
