from typing import Callable

from fastapi import APIRouter, Depends, File, Form, UploadFile
from starlette.concurrency import run_in_threadpool

from drive_attendance.config import Settings
from drive_attendance.dependencies import get_pipeline_provider, get_settings
from drive_attendance.models.drive import DEFAULT_MIME_TYPE
from drive_attendance.schemas.upload import DriveUploadData
from drive_attendance.services.pipeline import RecordPipeline
from drive_attendance.utils.exceptions import ConfigurationError, RemoteStoreError
from drive_attendance.utils.forms import optional_text, read_upload, required_text
from drive_attendance.utils.response import success_response

router = APIRouter(prefix="/upload-to-drive", tags=["drive"])

USAGE = {
    "message": "Upload API is ready. Use POST to upload files.",
    "usage": {
        "method": "POST",
        "contentType": "multipart/form-data",
        "fields": {
            "file": "File to upload (required)",
            "spreadsheetId": "Google Sheets ID (required)",
            "sheetTitle": "Sheet name (optional, default: 'Uploads')",
            "folderId": "Google Drive folder ID (optional)",
            "fileName": "Custom file name (optional, uses original filename if not provided)",
        },
        "example": {
            "endpoint": "/api/upload-to-drive",
            "method": "POST",
        },
    },
}


@router.get("")
async def upload_usage():
    return USAGE


@router.post("")
async def upload_to_drive(
    file: UploadFile | None = File(None),
    spreadsheet_id: str | None = Form(None, alias="spreadsheetId"),
    sheet_title: str | None = Form(None, alias="sheetTitle"),
    folder_id: str | None = Form(None, alias="folderId"),
    file_name: str | None = Form(None, alias="fileName"),
    config: Settings = Depends(get_settings),
    pipeline_provider: Callable[[], RecordPipeline] = Depends(get_pipeline_provider),
):
    payload = await read_upload(file, "No file provided", config.max_upload_size_bytes)
    spreadsheet_id = required_text(spreadsheet_id, "Spreadsheet ID is required", "spreadsheetId")
    file_name = required_text(
        optional_text(file_name) or file.filename, "File name is required", "fileName"
    )
    pipeline = pipeline_provider()

    try:
        result = await run_in_threadpool(
            pipeline.upload_file,
            payload,
            file_name,
            spreadsheet_id,
            optional_text(sheet_title) or config.default_sheet_title,
            optional_text(folder_id),
            file.content_type or DEFAULT_MIME_TYPE,
        )
    except (RemoteStoreError, ConfigurationError) as e:
        raise e.relabel("Upload failed") from e

    drive_file = result.drive_file
    data = DriveUploadData(
        file_name=drive_file.display_name,
        drive_id=drive_file.remote_id,
        view_link=drive_file.view_link,
        download_link=drive_file.download_link,
        uploaded_at=result.uploaded_at,
    )
    return success_response(data=data.to_response(), message="File uploaded successfully")
