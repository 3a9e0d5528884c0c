"""Tests for the GpsReceiver session object."""

from unittest.mock import MagicMock, call, patch

from ubx_gps_mcp.protocol.commands import ENABLE_NAV_PVT, PORT_CONFIG_UBX_ONLY
from ubx_gps_mcp.receiver import GpsReceiver


def test_no_record_yet():
    receiver = GpsReceiver()
    assert receiver.latest is None
    assert receiver.has_fix() is False
    assert receiver.satellite_count() == 0
    assert receiver.status_message() == "GPS Status: Searching for satellites..."


def test_process_bytes_keeps_latest(make_pvt_frame):
    receiver = GpsReceiver()
    records = receiver.process_bytes(make_pvt_frame(num_sv=6) + make_pvt_frame(num_sv=8))
    assert len(records) == 2
    assert receiver.latest is records[-1]
    assert receiver.satellite_count() == 8
    assert receiver.has_fix() is True
    assert receiver.status_message() == "GPS Status: Active fix with 8 satellites"


def test_process_byte(pvt_frame):
    receiver = GpsReceiver()
    results = [receiver.process_byte(b) for b in pvt_frame]
    assert results[-1] is not None
    assert receiver.latest is results[-1]


def test_invalid_fix_replaces_valid(make_pvt_frame):
    """A newer invalid record supersedes an older valid one."""
    receiver = GpsReceiver()
    receiver.process_bytes(make_pvt_frame())
    receiver.process_bytes(make_pvt_frame(fix_type=0, flags=0, num_sv=2))
    assert receiver.has_fix() is False
    assert receiver.satellite_count() == 2


def test_config_commands_order():
    assert GpsReceiver().config_commands() == (PORT_CONFIG_UBX_ONLY, ENABLE_NAV_PVT)


@patch("ubx_gps_mcp.receiver.time.sleep")
def test_configure_follows_baudrate(mock_sleep):
    conn = MagicMock()
    conn.port_info.baudrate = 9600
    GpsReceiver().configure(conn)
    assert conn.write.call_args_list == [call(PORT_CONFIG_UBX_ONLY), call(ENABLE_NAV_PVT)]
    conn.set_baudrate.assert_called_once_with(38400)


def test_configure_without_baudrate_change():
    conn = MagicMock()
    conn.port_info.baudrate = 38400
    GpsReceiver().configure(conn)
    assert conn.write.call_count == 2
    conn.set_baudrate.assert_not_called()


def test_read_record_across_chunks(pvt_frame):
    conn = MagicMock()
    conn.read.side_effect = [b"", pvt_frame[:50], pvt_frame[50:]]
    record = GpsReceiver().read_record(conn, timeout_s=5.0)
    assert record is not None
    assert record.satellites == 11


def test_read_record_timeout():
    conn = MagicMock()
    conn.read.return_value = b""
    assert GpsReceiver().read_record(conn, timeout_s=0.01) is None
