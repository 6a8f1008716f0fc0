from drive_attendance.schemas.common import CamelModel


class LocationData(CamelModel):
    latitude: float
    longitude: float


class AttendanceData(CamelModel):
    employee_id: str
    employee_name: str
    status: str
    timestamp: str
    location: LocationData
    drive_file: str
    sheet_title: str


class AttendanceSummary(CamelModel):
    spreadsheet_id: str
    sheet_title: str
    date: str
    range: str
    message: str
