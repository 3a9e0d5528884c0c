"""Byte transport to the receiver."""

from .serial_connection import SerialConnection
