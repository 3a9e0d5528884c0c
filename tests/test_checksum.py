"""Tests for the UBX Fletcher checksum."""

from ubx_gps_mcp.utils.checksum import RollingChecksum, ubx_checksum


def test_checksum_empty():
    """Checksum of no bytes is zero in both accumulators."""
    assert ubx_checksum(b"") == (0, 0)


def test_checksum_cfg_msg_known_value():
    """CFG-MSG enabling NAV-PVT carries checksum 0x13 0x51 on the wire."""
    body = bytes([0x06, 0x01, 0x03, 0x00, 0x01, 0x07, 0x01])
    assert ubx_checksum(body) == (0x13, 0x51)


def test_checksum_wraps_modulo_256():
    ck_a, ck_b = ubx_checksum(b"\xFF\xFF")
    assert ck_a == 0xFE
    assert ck_b == (0xFF + 0xFE) & 0xFF


def test_rolling_matches_one_shot():
    """Folding bytes one at a time gives the same result as the one-shot form."""
    data = bytes(range(200))
    rolling = RollingChecksum()
    for b in data:
        rolling.update(b)
    assert (rolling.ck_a, rolling.ck_b) == ubx_checksum(data)
    assert rolling.matches(*ubx_checksum(data))


def test_rolling_reset():
    rolling = RollingChecksum()
    rolling.update(0x42)
    rolling.reset()
    assert rolling.matches(0, 0)


def test_checksum_is_order_sensitive():
    """Swapping two bytes changes CK_B even though CK_A is the same."""
    assert ubx_checksum(b"\x01\x02")[0] == ubx_checksum(b"\x02\x01")[0]
    assert ubx_checksum(b"\x01\x02") != ubx_checksum(b"\x02\x01")
