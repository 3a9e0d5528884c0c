"""UBX checksum: 8-bit Fletcher algorithm over class, id, length and payload."""

from __future__ import annotations


def ubx_checksum(data: bytes) -> tuple[int, int]:
    """Compute the two UBX checksum bytes (CK_A, CK_B) for ``data``.

    ``data`` must start at the class byte; sync characters are not part
    of the checksummed range.
    """
    ck_a = 0
    ck_b = 0
    for byte in data:
        ck_a = (ck_a + byte) & 0xFF
        ck_b = (ck_b + ck_a) & 0xFF
    return ck_a, ck_b


class RollingChecksum:
    """Incremental form of :func:`ubx_checksum` for byte-at-a-time decoding."""

    __slots__ = ("ck_a", "ck_b")

    def __init__(self) -> None:
        self.ck_a = 0
        self.ck_b = 0

    def reset(self) -> None:
        self.ck_a = 0
        self.ck_b = 0

    def update(self, byte: int) -> None:
        self.ck_a = (self.ck_a + byte) & 0xFF
        self.ck_b = (self.ck_b + self.ck_a) & 0xFF

    def matches(self, ck_a: int, ck_b: int) -> bool:
        return self.ck_a == ck_a and self.ck_b == ck_b

    def __repr__(self) -> str:
        return f"RollingChecksum(ck_a=0x{self.ck_a:02X}, ck_b=0x{self.ck_b:02X})"
