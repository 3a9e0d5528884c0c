"""Receiver session: one decoder plus the most recent navigation solution."""

from __future__ import annotations

import logging
import time

from .models.nav_pvt import NavPvt
from .protocol.commands import DEFAULT_PORT_BAUDRATE, startup_commands
from .protocol.decoder import FrameDecoder
from .transport.serial_connection import SerialConnection

logger = logging.getLogger(__name__)


class GpsReceiver:
    """Tracks the state of a GPS receiver from its UBX byte stream.

    Each decoded record replaces the previous one; nothing is merged.
    """

    def __init__(self) -> None:
        self.decoder = FrameDecoder()
        self._latest: NavPvt | None = None

    @property
    def latest(self) -> NavPvt | None:
        return self._latest

    def process_byte(self, byte: int) -> NavPvt | None:
        record = self.decoder.consume(byte)
        if record is not None:
            self._latest = record
        return record

    def process_bytes(self, data: bytes) -> list[NavPvt]:
        records = self.decoder.feed(data)
        if records:
            self._latest = records[-1]
        return records

    def has_fix(self) -> bool:
        return self._latest is not None and self._latest.valid

    def satellite_count(self) -> int:
        return self._latest.satellites if self._latest is not None else 0

    def status_message(self) -> str:
        if self.has_fix():
            return f"GPS Status: Active fix with {self.satellite_count()} satellites"
        return "GPS Status: Searching for satellites..."

    def config_commands(self) -> tuple[bytes, bytes]:
        """Port configuration and NAV-PVT enable frames, in send order."""
        return startup_commands()

    def configure(self, conn: SerialConnection, follow_baudrate: bool = True) -> None:
        """Send the start-up configuration over ``conn``.

        CFG-PRT moves the receiver's UART to 38400 baud; with
        ``follow_baudrate`` the host side is switched to match before the
        message-rate command is sent.
        """
        port_config, enable_pvt = self.config_commands()
        conn.write(port_config)
        if follow_baudrate and conn.port_info.baudrate != DEFAULT_PORT_BAUDRATE:
            # Let the receiver finish sending at the old rate
            time.sleep(0.1)
            conn.set_baudrate(DEFAULT_PORT_BAUDRATE)
        conn.write(enable_pvt)
        logger.info("UBX configuration sent, waiting for GPS data...")

    def read_record(self, conn: SerialConnection, timeout_s: float = 2.0) -> NavPvt | None:
        """Read from ``conn`` until a record is decoded or ``timeout_s`` elapses."""
        deadline = time.monotonic() + timeout_s
        while time.monotonic() < deadline:
            data = conn.read()
            if not data:
                continue
            records = self.process_bytes(data)
            if records:
                return records[-1]
        return None
