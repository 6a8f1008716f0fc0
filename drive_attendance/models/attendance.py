from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from drive_attendance.models.drive import DEFAULT_MIME_TYPE


class AttendanceStatus(str, Enum):
    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"

    @property
    def label(self) -> str:
        return "Check-in" if self is AttendanceStatus.CHECK_IN else "Check-out"


def _format_number(value: float) -> str:
    # whole numbers render without a trailing ".0", as in the browser client
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


@dataclass(frozen=True)
class Location:
    latitude: float = 0.0
    longitude: float = 0.0

    def as_cell(self) -> str:
        return f"{_format_number(self.latitude)}, {_format_number(self.longitude)}"


@dataclass(frozen=True)
class AttendanceRecord:
    employee_id: str
    employee_name: str
    photo: bytes
    captured_at: datetime
    status: AttendanceStatus = AttendanceStatus.CHECK_IN
    location: Location = field(default_factory=Location)
    mime_type: str = DEFAULT_MIME_TYPE
