from dataclasses import dataclass

from drive_attendance.models.drive import UploadResult
from drive_attendance.utils.exceptions import ErrorKind


@dataclass(frozen=True)
class RecordResult:
    remote_id: str
    sheet_title: str
    drive_file: UploadResult
    message: str


@dataclass(frozen=True)
class FileUploadResult:
    drive_file: UploadResult
    sheet_title: str
    uploaded_at: str


@dataclass(frozen=True)
class BatchEntry:
    """Outcome of one record in a batch; exactly one of data/error is set."""

    employee_id: str
    status: str
    data: RecordResult | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @classmethod
    def success(cls, employee_id: str, data: RecordResult) -> "BatchEntry":
        return cls(employee_id=employee_id, status="success", data=data)

    @classmethod
    def failure(cls, employee_id: str, error: str, kind: ErrorKind | None) -> "BatchEntry":
        return cls(employee_id=employee_id, status="failed", error=error, error_kind=kind)
