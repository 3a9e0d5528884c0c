"""Streaming UBX frame decoder.

Bytes from the serial link are fed one at a time into :class:`FrameDecoder`,
which tracks sync, header, payload and checksum in a small state machine::

    AWAIT_SYNC1 -> AWAIT_SYNC2 -> READ_CLASS -> READ_ID
        -> READ_LENGTH_LOW -> READ_LENGTH_HIGH -> READ_PAYLOAD*
        -> READ_CHECKSUM_A -> READ_CHECKSUM_B -> AWAIT_SYNC1

Every terminal transition (decoded frame, checksum mismatch, oversized
length) returns the decoder to ``AWAIT_SYNC1``. Nothing is ever raised to the
caller: a byte either completes a NAV-PVT record or yields ``None``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto

from ..models.nav_pvt import NavPvt
from ..utils.checksum import RollingChecksum
from .framing import MAX_PAYLOAD_SIZE, SYNC_CHAR_1, SYNC_CHAR_2, Frame
from .parser import parse_message

logger = logging.getLogger(__name__)


class DecoderState(Enum):
    AWAIT_SYNC1 = auto()
    AWAIT_SYNC2 = auto()
    READ_CLASS = auto()
    READ_ID = auto()
    READ_LENGTH_LOW = auto()
    READ_LENGTH_HIGH = auto()
    READ_PAYLOAD = auto()
    READ_CHECKSUM_A = auto()
    READ_CHECKSUM_B = auto()


@dataclass
class DecoderStats:
    """Counters for frames seen by a decoder. Informational only."""

    frames: int = 0            # checksum-valid frames of any class/id
    records: int = 0           # NAV-PVT records produced
    checksum_errors: int = 0
    oversized: int = 0

    def to_dict(self) -> dict:
        return {
            "frames": self.frames,
            "records": self.records,
            "checksum_errors": self.checksum_errors,
            "oversized": self.oversized,
        }


class FrameDecoder:
    """Byte-at-a-time UBX decoder that materialises NAV-PVT records.

    Usage::

        decoder = FrameDecoder()
        for byte in stream:
            record = decoder.consume(byte)
            if record is not None:
                handle(record)

    The payload buffer is allocated once and reused for every frame.
    """

    def __init__(self) -> None:
        self._state = DecoderState.AWAIT_SYNC1
        self._checksum = RollingChecksum()
        self._payload = bytearray(MAX_PAYLOAD_SIZE)
        self._index = 0
        self._msg_class = 0
        self._msg_id = 0
        self._length = 0
        self._rx_ck_a = 0
        self._rx_ck_b = 0
        self.stats = DecoderStats()

    @property
    def state(self) -> DecoderState:
        return self._state

    def reset(self) -> None:
        """Drop any in-flight frame and wait for the next sync sequence."""
        self._state = DecoderState.AWAIT_SYNC1
        self._checksum.reset()
        self._index = 0
        self._msg_class = 0
        self._msg_id = 0
        self._length = 0
        self._rx_ck_a = 0
        self._rx_ck_b = 0

    def consume(self, byte: int) -> NavPvt | None:
        """Advance the state machine by one received byte.

        Returns:
            A :class:`NavPvt` if this byte completed a checksum-valid
            NAV-PVT frame, otherwise ``None``.
        """
        state = self._state

        if state is DecoderState.AWAIT_SYNC1:
            if byte == SYNC_CHAR_1:
                self._state = DecoderState.AWAIT_SYNC2

        elif state is DecoderState.AWAIT_SYNC2:
            if byte == SYNC_CHAR_2:
                self._checksum.reset()
                self._state = DecoderState.READ_CLASS
            else:
                # The mismatched byte is not retried as a new sync 1
                self.reset()

        elif state is DecoderState.READ_CLASS:
            self._msg_class = byte
            self._checksum.update(byte)
            self._state = DecoderState.READ_ID

        elif state is DecoderState.READ_ID:
            self._msg_id = byte
            self._checksum.update(byte)
            self._state = DecoderState.READ_LENGTH_LOW

        elif state is DecoderState.READ_LENGTH_LOW:
            self._length = byte
            self._checksum.update(byte)
            self._state = DecoderState.READ_LENGTH_HIGH

        elif state is DecoderState.READ_LENGTH_HIGH:
            self._length |= byte << 8
            self._checksum.update(byte)
            self._index = 0
            if self._length == 0:
                self._state = DecoderState.READ_CHECKSUM_A
            elif self._length <= MAX_PAYLOAD_SIZE:
                self._state = DecoderState.READ_PAYLOAD
            else:
                logger.debug(
                    "Dropping oversized UBX frame 0x%02X/0x%02X (%d bytes)",
                    self._msg_class, self._msg_id, self._length,
                )
                self.stats.oversized += 1
                self.reset()

        elif state is DecoderState.READ_PAYLOAD:
            if self._index >= self._length or self._index >= MAX_PAYLOAD_SIZE:
                self.reset()
                return None
            self._payload[self._index] = byte
            self._index += 1
            self._checksum.update(byte)
            if self._index >= self._length:
                self._state = DecoderState.READ_CHECKSUM_A

        elif state is DecoderState.READ_CHECKSUM_A:
            self._rx_ck_a = byte
            self._state = DecoderState.READ_CHECKSUM_B

        elif state is DecoderState.READ_CHECKSUM_B:
            self._rx_ck_b = byte
            return self._finish_frame()

        return None

    def feed(self, data: bytes) -> list[NavPvt]:
        """Consume a chunk of bytes and return every record it completed."""
        records: list[NavPvt] = []
        for byte in data:
            record = self.consume(byte)
            if record is not None:
                records.append(record)
        return records

    def _finish_frame(self) -> NavPvt | None:
        record = None
        if self._checksum.matches(self._rx_ck_a, self._rx_ck_b):
            self.stats.frames += 1
            frame = Frame(
                msg_class=self._msg_class,
                msg_id=self._msg_id,
                payload=bytes(self._payload[: self._length]),
            )
            record = parse_message(frame)
            if record is not None:
                self.stats.records += 1
        else:
            self.stats.checksum_errors += 1
            logger.warning(
                "UBX checksum error on 0x%02X/0x%02X: got %02X %02X, expected %02X %02X",
                self._msg_class, self._msg_id,
                self._rx_ck_a, self._rx_ck_b,
                self._checksum.ck_a, self._checksum.ck_b,
            )
        self.reset()
        return record
