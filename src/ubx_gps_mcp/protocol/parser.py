"""Payload parsing for received UBX messages."""

from __future__ import annotations

import struct

from ..models.nav_pvt import NavPvt
from .commands import MessageClass, NavId
from .framing import Frame

# First 84 bytes of UBX-NAV-PVT, little-endian:
# iTOW, year, month, day, hour, min, sec, valid, tAcc, nano,
# fixType, flags, flags2, numSV, lon, lat, height, hMSL, hAcc, vAcc,
# velN, velE, velD, gSpeed, headMot, sAcc, headAcc, pDOP, reserved
NAV_PVT_STRUCT = struct.Struct("<IH6BIi4B4i2I5i2IH6x")
NAV_PVT_MIN_LENGTH = NAV_PVT_STRUCT.size  # 84

FIX_3D = 3
FLAG_GNSS_FIX_OK = 0x01


def parse_nav_pvt(frame: Frame) -> NavPvt | None:
    """Parse a NAV-PVT frame into a :class:`NavPvt` record.

    Returns ``None`` for frames of any other class/id, and for NAV-PVT
    frames shorter than the 84 bytes needed to reach the decoded fields.
    """
    if frame.msg_class != MessageClass.NAV or frame.msg_id != NavId.PVT:
        return None
    if len(frame.payload) < NAV_PVT_MIN_LENGTH:
        return None

    (
        _itow, year, month, day, hour, minute, second, _valid_flags,
        _t_acc, nano,
        fix_type, flags, _flags2, num_sv,
        lon, lat, _height, h_msl, h_acc, v_acc,
        _vel_n, _vel_e, _vel_d, g_speed, _head_mot,
        _s_acc, _head_acc, _p_dop,
    ) = NAV_PVT_STRUCT.unpack_from(frame.payload)

    # Only a 3D (or better) solution with gnssFixOK set counts as a fix
    valid = fix_type >= FIX_3D and bool(flags & FLAG_GNSS_FIX_OK)

    return NavPvt(
        valid=valid,
        year=year,
        month=month,
        day=day,
        hour=hour,
        minute=minute,
        second=second,
        nano=nano,
        latitude=lat,
        longitude=lon,
        height_msl=h_msl,
        horizontal_accuracy=h_acc,
        vertical_accuracy=v_acc,
        ground_speed=g_speed,
        satellites=num_sv,
        fix_type=fix_type,
    )


def parse_message(frame: Frame) -> NavPvt | None:
    """Dispatch a validated frame to the parser for its class/id.

    Only NAV-PVT is materialised; every other message yields ``None``.
    """
    parsers = {
        (MessageClass.NAV, NavId.PVT): parse_nav_pvt,
    }
    parser = parsers.get((frame.msg_class, frame.msg_id))
    if parser is None:
        return None
    return parser(frame)
