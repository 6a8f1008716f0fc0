"""File names, sheet titles and row layouts shared by every upload path."""
from datetime import date, datetime

from drive_attendance.models.attendance import AttendanceRecord
from drive_attendance.models.drive import UploadResult

ATTENDANCE_COLUMNS = "A:G"
ATTENDANCE_HEADERS = [
    "Timestamp",
    "Employee ID",
    "Employee Name",
    "Status",
    "Location",
    "View Link",
    "Download Link",
]

UPLOAD_COLUMNS = "A:D"
UPLOAD_HEADERS = ["File Name", "View Link", "Download Link", "Uploaded At"]


def build_file_name(record: AttendanceRecord) -> str:
    """``{id}_{name}_{status}_{YYYY-MM-DD}_{HH-MM-SS}.jpg`` for the capture time."""
    stamp = record.captured_at
    return (
        f"{record.employee_id}_{record.employee_name}_{record.status.value}_"
        f"{stamp:%Y-%m-%d}_{stamp:%H-%M-%S}.jpg"
    )


def attendance_sheet_title(moment: date, prefix: str = "Attendance") -> str:
    return f"{prefix}_{moment:%Y}-{moment:%m}"


def format_local_date(moment: date) -> str:
    # id-ID short date: day/month/year without zero padding
    return f"{moment.day}/{moment.month}/{moment.year}"


def format_local_timestamp(moment: datetime) -> str:
    return f"{format_local_date(moment)}, {moment:%H.%M.%S}"


def build_attendance_row(
    record: AttendanceRecord, drive_file: UploadResult, timestamp: str
) -> list:
    return [
        timestamp,
        record.employee_id,
        record.employee_name,
        record.status.value,
        record.location.as_cell(),
        drive_file.view_link or "",
        drive_file.download_link or "",
    ]


def build_upload_row(file_name: str, drive_file: UploadResult, uploaded_at: str) -> list:
    return [
        file_name,
        drive_file.view_link or "",
        drive_file.download_link or "",
        uploaded_at,
    ]
