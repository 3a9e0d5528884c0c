"""Serial connection to a u-blox GPS receiver.

The receiver appears either as a USB CDC-ACM device (``/dev/ttyACM*``) or
behind a USB-UART bridge (``/dev/ttyUSB*``). Out of the box it talks at
9600 baud; after the CFG-PRT start-up command the UART switches to 38400.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import serial

logger = logging.getLogger(__name__)

DEFAULT_PORT = "/dev/ttyACM0"
DEFAULT_BAUDRATE = 9600
READ_TIMEOUT_S = 0.1
READ_CHUNK_SIZE = 256


@dataclass
class PortInfo:
    """Settings of the currently open serial port."""

    port: str = DEFAULT_PORT
    baudrate: int = DEFAULT_BAUDRATE
    timeout: float = READ_TIMEOUT_S


class SerialConnection:
    """Manages the serial link to the receiver.

    Usage::

        conn = SerialConnection("/dev/ttyUSB0", 9600)
        conn.open()
        conn.write(command_bytes)
        data = conn.read()
        conn.close()
    """

    def __init__(
        self,
        port: str = DEFAULT_PORT,
        baudrate: int = DEFAULT_BAUDRATE,
        timeout: float = READ_TIMEOUT_S,
    ) -> None:
        self._serial: serial.Serial | None = None
        self._port_info = PortInfo(port=port, baudrate=baudrate, timeout=timeout)

    @property
    def connected(self) -> bool:
        return self._serial is not None and self._serial.is_open

    @property
    def port_info(self) -> PortInfo:
        return self._port_info

    def open(self) -> PortInfo:
        """Open the serial port.

        Returns:
            PortInfo describing the opened port.

        Raises:
            ConnectionError: If the port cannot be opened.
        """
        info = self._port_info
        try:
            self._serial = serial.Serial(
                port=info.port,
                baudrate=info.baudrate,
                timeout=info.timeout,
            )
        except serial.SerialException as e:
            self._serial = None
            raise ConnectionError(
                f"Could not open GPS receiver on {info.port} at {info.baudrate} baud. "
                f"Ensure the device is connected and you have permissions. "
                f"Last error: {e}"
            ) from e

        logger.info("Opened %s at %d baud", info.port, info.baudrate)
        return info

    def close(self) -> None:
        """Close the serial port."""
        if self._serial is None:
            return

        try:
            self._serial.close()
        except serial.SerialException as e:
            logger.warning("Error closing port: %s", e)
        finally:
            self._serial = None
            logger.info("Disconnected")

    def set_baudrate(self, baudrate: int) -> None:
        """Change the host-side baud rate of an open port."""
        if not self.connected:
            raise ConnectionError("Not connected to receiver")
        self._serial.baudrate = baudrate
        self._port_info.baudrate = baudrate
        logger.info("Baud rate changed to %d", baudrate)

    def write(self, data: bytes) -> int:
        """Write raw bytes to the receiver.

        Raises:
            ConnectionError: If not connected or the write fails.
        """
        if not self.connected:
            raise ConnectionError("Not connected to receiver")

        try:
            written = self._serial.write(data)
            self._serial.flush()
        except serial.SerialException as e:
            raise ConnectionError(f"Write to {self._port_info.port} failed: {e}") from e
        return written

    def read(self, size: int = READ_CHUNK_SIZE) -> bytes:
        """Read whatever bytes are available, up to ``size``.

        Blocks for at most the port timeout and returns ``b""`` when
        nothing arrived.

        Raises:
            ConnectionError: If not connected or the read fails.
        """
        if not self.connected:
            raise ConnectionError("Not connected to receiver")

        try:
            waiting = self._serial.in_waiting
            return self._serial.read(min(max(waiting, 1), size))
        except serial.SerialException as e:
            raise ConnectionError(f"Read from {self._port_info.port} failed: {e}") from e
