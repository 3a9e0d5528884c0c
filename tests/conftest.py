"""Shared fixtures: synthetic UBX-NAV-PVT payloads and frames."""

from __future__ import annotations

import struct

import pytest

from ubx_gps_mcp.protocol.framing import build_frame

NAV_PVT_LENGTH = 92


def _make_pvt_payload(
    year: int = 2024,
    month: int = 3,
    day: int = 15,
    hour: int = 12,
    minute: int = 34,
    second: int = 56,
    nano: int = -12345,
    fix_type: int = 3,
    flags: int = 0x01,
    num_sv: int = 11,
    lon: int = 85432100,
    lat: int = 473271234,
    height: int = 170000,
    h_msl: int = 123456,
    h_acc: int = 2500,
    v_acc: int = 3700,
    g_speed: int = 1500,
    length: int = NAV_PVT_LENGTH,
) -> bytes:
    """Build a NAV-PVT payload by writing each field at its documented offset."""
    p = bytearray(length)
    struct.pack_into("<H5B", p, 4, year, month, day, hour, minute, second)
    struct.pack_into("<i", p, 16, nano)
    p[20] = fix_type
    p[21] = flags
    p[23] = num_sv
    struct.pack_into("<4i2I", p, 24, lon, lat, height, h_msl, h_acc, v_acc)
    struct.pack_into("<4i", p, 48, 100, -200, 300, g_speed)  # velN/E/D, gSpeed
    return bytes(p)


@pytest.fixture
def make_pvt_payload():
    return _make_pvt_payload


@pytest.fixture
def make_pvt_frame():
    def _make(**fields) -> bytes:
        return build_frame(0x01, 0x07, _make_pvt_payload(**fields))

    return _make


@pytest.fixture
def pvt_frame(make_pvt_frame) -> bytes:
    return make_pvt_frame()
