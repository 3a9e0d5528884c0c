"""Tests for UBX frame building and whole-buffer parsing."""

import pytest

from ubx_gps_mcp.protocol.framing import (
    PREAMBLE,
    Frame,
    build_frame,
    parse_frame,
)
from ubx_gps_mcp.utils.checksum import ubx_checksum


def test_build_frame_layout():
    """Sync, class, id, little-endian length, payload, checksum."""
    frame = build_frame(0x06, 0x01, b"\x01\x07\x01")
    assert frame[0:2] == PREAMBLE
    assert frame[2] == 0x06  # class
    assert frame[3] == 0x01  # id
    assert frame[4] == 0x03  # length low
    assert frame[5] == 0x00  # length high
    assert frame[6:9] == b"\x01\x07\x01"
    assert tuple(frame[9:11]) == ubx_checksum(frame[2:9])
    assert len(frame) == 11


def test_build_frame_length_little_endian():
    frame = build_frame(0x01, 0x07, bytes(300))
    assert frame[4] == 300 & 0xFF
    assert frame[5] == 300 >> 8


def test_build_frame_empty_payload():
    frame = build_frame(0x06, 0x00)
    assert len(frame) == 8
    assert frame[4:6] == b"\x00\x00"


def test_build_frame_rejects_bad_class():
    with pytest.raises(ValueError):
        build_frame(0x100, 0x00)
    with pytest.raises(ValueError):
        build_frame(0x01, -1)


def test_parse_built_frame():
    parsed = parse_frame(build_frame(0x0A, 0x04, b"\x10\x20"))
    assert parsed == Frame(msg_class=0x0A, msg_id=0x04, payload=b"\x10\x20")


def test_parse_invalid_preamble():
    bad = bytearray(build_frame(0x01, 0x07, b"\x00"))
    bad[1] = 0x63
    assert parse_frame(bytes(bad)) is None


def test_parse_bad_checksum():
    bad = bytearray(build_frame(0x01, 0x07, b"\x00\x01"))
    bad[-1] ^= 0xFF
    assert parse_frame(bytes(bad)) is None


def test_parse_truncated():
    frame = build_frame(0x01, 0x07, bytes(10))
    assert parse_frame(frame[:-1]) is None
    assert parse_frame(frame[:5]) is None


def test_frame_repr():
    r = repr(Frame(msg_class=0x01, msg_id=0x07, payload=b"\x02"))
    assert "0x01" in r
    assert "0x07" in r
    assert "02" in r
