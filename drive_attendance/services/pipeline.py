"""Upload an asset to Drive, then record it as a row in a Google Sheet.

The two remote steps are not transactional. If the sheet step fails after
the upload succeeded, the Drive file stays behind with no row pointing to
it; nothing here tries to clean it up.
"""
import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Iterable, Sequence
from zoneinfo import ZoneInfo

from drive_attendance.clients.sheets import a1_range
from drive_attendance.config import Settings
from drive_attendance.models.attendance import AttendanceRecord
from drive_attendance.models.drive import DEFAULT_MIME_TYPE, UploadRequest, UploadResult
from drive_attendance.models.results import BatchEntry, FileUploadResult, RecordResult
from drive_attendance.services.naming import (
    ATTENDANCE_COLUMNS,
    ATTENDANCE_HEADERS,
    UPLOAD_COLUMNS,
    UPLOAD_HEADERS,
    attendance_sheet_title,
    build_attendance_row,
    build_file_name,
    build_upload_row,
    format_local_date,
    format_local_timestamp,
)
from drive_attendance.utils.exceptions import AppException

logger = logging.getLogger(__name__)


class RecordPipeline:
    def __init__(self, drive, sheets, config: Settings):
        self.drive = drive
        self.sheets = sheets
        self.config = config
        self._tz = ZoneInfo(config.timezone)

    def now(self) -> datetime:
        return datetime.now(self._tz)

    def _local(self, moment: datetime) -> datetime:
        if moment.tzinfo is None:
            return moment
        return moment.astimezone(self._tz)

    def format_timestamp(self, moment: datetime) -> str:
        return format_local_timestamp(self._local(moment))

    def _store_and_record(
        self,
        request: UploadRequest,
        spreadsheet_id: str,
        sheet_title: str,
        columns: str,
        headers: Sequence[str],
        build_row: Callable[[UploadResult], list],
    ) -> UploadResult:
        drive_file = self.drive.upload_request(request)
        logger.info("Uploaded %s as Drive file %s", request.file_name, drive_file.remote_id)

        created = self.sheets.ensure_sheet(spreadsheet_id, sheet_title)
        if created and self.config.write_sheet_headers:
            self.sheets.write_header(spreadsheet_id, sheet_title, headers)

        self.sheets.append_rows(
            spreadsheet_id, a1_range(sheet_title, columns), [build_row(drive_file)]
        )
        logger.info("Recorded %s in sheet %s", drive_file.remote_id, sheet_title)
        return drive_file

    def record_upload(
        self, record: AttendanceRecord, spreadsheet_id: str, folder_id: str | None
    ) -> RecordResult:
        captured_at = self._local(record.captured_at)
        local_record = replace(record, captured_at=captured_at)

        request = UploadRequest(
            payload=record.photo,
            file_name=build_file_name(local_record),
            folder_id=folder_id,
            mime_type=record.mime_type,
        )
        sheet_title = attendance_sheet_title(captured_at, self.config.attendance_sheet_prefix)
        timestamp = format_local_timestamp(captured_at)

        drive_file = self._store_and_record(
            request,
            spreadsheet_id,
            sheet_title,
            ATTENDANCE_COLUMNS,
            ATTENDANCE_HEADERS,
            lambda uploaded: build_attendance_row(local_record, uploaded, timestamp),
        )
        return RecordResult(
            remote_id=drive_file.remote_id,
            sheet_title=sheet_title,
            drive_file=drive_file,
            message=f"Attendance recorded successfully for {record.employee_name}",
        )

    def record_batch(
        self,
        records: Iterable[AttendanceRecord],
        spreadsheet_id: str,
        folder_id: str | None,
    ) -> list[BatchEntry]:
        """Record each entry in turn; a failure is reported, not raised."""
        results = []
        for record in records:
            try:
                data = self.record_upload(record, spreadsheet_id, folder_id)
            except AppException as e:
                logger.warning("Batch record for %s failed: %s", record.employee_id, e.message)
                results.append(BatchEntry.failure(record.employee_id, e.message, e.kind))
            except Exception as e:
                logger.exception("Batch record for %s failed", record.employee_id)
                results.append(BatchEntry.failure(record.employee_id, str(e) or "Unknown error", None))
            else:
                results.append(BatchEntry.success(record.employee_id, data))
        return results

    def upload_file(
        self,
        payload: bytes,
        file_name: str,
        spreadsheet_id: str,
        sheet_title: str | None = None,
        folder_id: str | None = None,
        mime_type: str = DEFAULT_MIME_TYPE,
    ) -> FileUploadResult:
        sheet_title = sheet_title or self.config.default_sheet_title
        request = UploadRequest(
            payload=payload, file_name=file_name, folder_id=folder_id, mime_type=mime_type
        )
        uploaded_at = format_local_timestamp(self.now())

        drive_file = self._store_and_record(
            request,
            spreadsheet_id,
            sheet_title,
            UPLOAD_COLUMNS,
            UPLOAD_HEADERS,
            lambda uploaded: build_upload_row(file_name, uploaded, uploaded_at),
        )
        return FileUploadResult(
            drive_file=drive_file, sheet_title=sheet_title, uploaded_at=uploaded_at
        )


def attendance_summary(spreadsheet_id: str, day: date, prefix: str = "Attendance") -> dict:
    """Point at the monthly sheet holding the rows for ``day``; no remote call."""
    sheet_title = attendance_sheet_title(day, prefix)
    return {
        "spreadsheetId": spreadsheet_id,
        "sheetTitle": sheet_title,
        "date": format_local_date(day),
        "range": a1_range(sheet_title, ATTENDANCE_COLUMNS),
        "message": f"Query attendance data from sheet: {sheet_title}",
    }
