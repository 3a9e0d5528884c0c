"""NAV-PVT record: navigation position, velocity and time solution.

All positional quantities are kept as the receiver's fixed-point integers;
the properties convert them to physical units on demand.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timedelta, timezone

DEGREE_SCALE = 1e7   # latitude/longitude are in 1e-7 degrees
MILLI_SCALE = 1000.0  # heights and accuracies in mm, speed in mm/s

FIX_TYPE_NAMES = {
    0: "no fix",
    1: "dead reckoning",
    2: "2D",
    3: "3D",
    4: "GNSS + dead reckoning",
    5: "time only",
}


@dataclass(frozen=True)
class NavPvt:
    """A decoded UBX-NAV-PVT solution.

    When ``valid`` is false the positional fields still carry whatever the
    receiver reported, but they do not describe a usable fix.
    """

    valid: bool = False
    year: int = 0
    month: int = 0
    day: int = 0
    hour: int = 0
    minute: int = 0
    second: int = 0
    nano: int = 0                  # ns, signed fraction of the second
    latitude: int = 0              # 1e-7 deg
    longitude: int = 0             # 1e-7 deg
    height_msl: int = 0            # mm above mean sea level
    horizontal_accuracy: int = 0   # mm
    vertical_accuracy: int = 0     # mm
    ground_speed: int = 0          # mm/s
    satellites: int = 0
    fix_type: int = 0

    @property
    def latitude_degrees(self) -> float:
        return self.latitude / DEGREE_SCALE

    @property
    def longitude_degrees(self) -> float:
        return self.longitude / DEGREE_SCALE

    @property
    def altitude_meters(self) -> float:
        return self.height_msl / MILLI_SCALE

    @property
    def speed_ms(self) -> float:
        """Ground speed in meters per second."""
        return self.ground_speed / MILLI_SCALE

    @property
    def horizontal_accuracy_meters(self) -> float:
        return self.horizontal_accuracy / MILLI_SCALE

    @property
    def vertical_accuracy_meters(self) -> float:
        return self.vertical_accuracy / MILLI_SCALE

    @property
    def fix_type_name(self) -> str:
        return FIX_TYPE_NAMES.get(self.fix_type, f"unknown ({self.fix_type})")

    @property
    def utc_datetime(self) -> datetime | None:
        """UTC time of the solution, or ``None`` if the date fields are not a real date.

        ``nano`` may be negative (up to -1 s); it is applied as an offset
        from the whole second rather than as a field.
        """
        try:
            base = datetime(
                self.year, self.month, self.day,
                self.hour, self.minute, self.second,
                tzinfo=timezone.utc,
            )
        except ValueError:
            return None
        return base + timedelta(microseconds=self.nano // 1000)

    def format_position(self) -> list[str]:
        """Human-readable summary lines for this solution."""
        if not self.valid:
            return ["GPS: No valid fix"]
        return [
            f"GPS Fix: {self.year}/{self.month:02d}/{self.day:02d} "
            f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}",
            f"Position: {self.latitude_degrees:.7f}°, {self.longitude_degrees:.7f}° "
            f"(±{self.horizontal_accuracy_meters:.1f}m)",
            f"Altitude: {self.altitude_meters:.1f}m, Speed: {self.speed_ms:.1f}m/s, "
            f"Sats: {self.satellites}",
        ]

    def to_dict(self) -> dict:
        d = asdict(self)
        d.update(
            {
                "latitude_deg": self.latitude_degrees,
                "longitude_deg": self.longitude_degrees,
                "altitude_m": self.altitude_meters,
                "speed_mps": self.speed_ms,
                "horizontal_accuracy_m": self.horizontal_accuracy_meters,
                "vertical_accuracy_m": self.vertical_accuracy_meters,
                "fix_type_name": self.fix_type_name,
            }
        )
        utc = self.utc_datetime
        d["utc"] = utc.isoformat() if utc is not None else None
        return d
