from datetime import date, datetime
from typing import Callable
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from starlette.concurrency import run_in_threadpool

from drive_attendance.config import Settings
from drive_attendance.dependencies import get_pipeline_provider, get_settings
from drive_attendance.models.attendance import AttendanceRecord, Location
from drive_attendance.models.drive import DEFAULT_MIME_TYPE
from drive_attendance.schemas.attendance import AttendanceData, AttendanceSummary, LocationData
from drive_attendance.services.pipeline import RecordPipeline, attendance_summary
from drive_attendance.utils.exceptions import ConfigurationError, RemoteStoreError, ValidationError
from drive_attendance.utils.forms import parse_coordinate, parse_status, read_upload, required_text
from drive_attendance.utils.response import success_response

router = APIRouter(prefix="/attendance", tags=["attendance"])

USAGE = {
    "message": "Attendance API is ready",
    "endpoint": "/api/attendance",
    "method": "POST",
    "contentType": "multipart/form-data",
    "requiredFields": {
        "file": "Photo file from camera",
        "employeeId": "Employee ID",
        "employeeName": "Employee name",
        "spreadsheetId": "Google Sheets ID",
        "driveFolderId": "Google Drive folder ID",
        "status": "check-in or check-out",
    },
    "optionalFields": {
        "latitude": "Location latitude",
        "longitude": "Location longitude",
    },
    "example": {
        "method": "POST",
        "endpoint": "/api/attendance",
        "fields": {
            "file": "camera_photo.jpg",
            "employeeId": "EMP001",
            "employeeName": "John Doe",
            "spreadsheetId": "1a2b3c...",
            "driveFolderId": "folder123...",
            "status": "check-in",
            "latitude": "-7.2506",
            "longitude": "112.7508",
        },
    },
}


@router.get("")
async def attendance_usage():
    return USAGE


@router.post("")
async def record_attendance(
    file: UploadFile | None = File(None),
    employee_id: str | None = Form(None, alias="employeeId"),
    employee_name: str | None = Form(None, alias="employeeName"),
    spreadsheet_id: str | None = Form(None, alias="spreadsheetId"),
    drive_folder_id: str | None = Form(None, alias="driveFolderId"),
    status: str | None = Form(None),
    latitude: str | None = Form(None),
    longitude: str | None = Form(None),
    config: Settings = Depends(get_settings),
    pipeline_provider: Callable[[], RecordPipeline] = Depends(get_pipeline_provider),
):
    photo = await read_upload(file, "Photo is required", config.max_upload_size_bytes)
    employee_id = required_text(employee_id, "Employee ID is required", "employeeId")
    employee_name = required_text(employee_name, "Employee name is required", "employeeName")
    spreadsheet_id = required_text(spreadsheet_id, "Spreadsheet ID is required", "spreadsheetId")
    drive_folder_id = required_text(drive_folder_id, "Drive folder ID is required", "driveFolderId")
    attendance_status = parse_status(status)
    location = Location(parse_coordinate(latitude), parse_coordinate(longitude))
    pipeline = pipeline_provider()

    record = AttendanceRecord(
        employee_id=employee_id,
        employee_name=employee_name,
        photo=photo,
        captured_at=pipeline.now(),
        status=attendance_status,
        location=location,
        mime_type=file.content_type or DEFAULT_MIME_TYPE,
    )

    try:
        result = await run_in_threadpool(
            pipeline.record_upload, record, spreadsheet_id, drive_folder_id
        )
    except (RemoteStoreError, ConfigurationError) as e:
        raise e.relabel("Attendance upload failed") from e

    data = AttendanceData(
        employee_id=employee_id,
        employee_name=employee_name,
        status=attendance_status.value,
        timestamp=pipeline.format_timestamp(record.captured_at),
        location=LocationData(latitude=location.latitude, longitude=location.longitude),
        drive_file=result.remote_id,
        sheet_title=result.sheet_title,
    )
    return success_response(
        data=data.to_response(),
        message=f"{attendance_status.label} recorded successfully",
    )


@router.get("/summary")
async def summary(
    spreadsheet_id: str | None = Query(None, alias="spreadsheetId"),
    day: str | None = Query(None, alias="date"),
    config: Settings = Depends(get_settings),
):
    spreadsheet_id = required_text(spreadsheet_id, "Spreadsheet ID is required", "spreadsheetId")
    if day:
        try:
            target = date.fromisoformat(day)
        except ValueError:
            raise ValidationError("Use the YYYY-MM-DD format for 'date'", error="Invalid date") from None
    else:
        target = datetime.now(ZoneInfo(config.timezone)).date()

    data = AttendanceSummary(
        **attendance_summary(spreadsheet_id, target, config.attendance_sheet_prefix)
    )
    return success_response(data=data.to_response(), message=data.message)
