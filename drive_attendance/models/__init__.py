from drive_attendance.models.attendance import AttendanceRecord, AttendanceStatus, Location
from drive_attendance.models.drive import UploadRequest, UploadResult
from drive_attendance.models.results import BatchEntry, FileUploadResult, RecordResult

__all__ = [
    "AttendanceRecord",
    "AttendanceStatus",
    "Location",
    "UploadRequest",
    "UploadResult",
    "BatchEntry",
    "FileUploadResult",
    "RecordResult",
]
