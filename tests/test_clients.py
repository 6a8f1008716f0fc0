from unittest.mock import MagicMock

import httplib2
import pytest
from googleapiclient.errors import HttpError

from drive_attendance.clients.drive import UPLOAD_FIELDS, DriveClient
from drive_attendance.clients.sheets import SheetsClient
from drive_attendance.utils.exceptions import ErrorKind, RemoteStoreError, ValidationError


def _http_error(status: int, message: str) -> HttpError:
    content = ('{"error": {"code": %d, "message": "%s"}}' % (status, message)).encode()
    return HttpError(httplib2.Response({"status": str(status)}), content)


def _drive_service(response=None):
    service = MagicMock()
    service.files.return_value.create.return_value.execute.return_value = response or {
        "id": "abc123",
        "name": "photo.jpg",
        "webViewLink": "https://drive.google.com/file/d/abc123/view",
        "webContentLink": "https://drive.google.com/uc?id=abc123&export=download",
    }
    return service


def _sheets_service(titles):
    """A Sheets service double whose tab list reflects addSheet requests."""
    service = MagicMock()
    spreadsheets = service.spreadsheets.return_value
    spreadsheets.get.return_value.execute.side_effect = lambda: {
        "sheets": [{"properties": {"title": title}} for title in titles]
    }

    def add_sheet(spreadsheetId, body):
        titles.append(body["requests"][0]["addSheet"]["properties"]["title"])
        request = MagicMock()
        request.execute.return_value = {"spreadsheetId": spreadsheetId}
        return request

    spreadsheets.batchUpdate.side_effect = add_sheet
    return service


def test_client_requires_credentials_or_factory():
    with pytest.raises(ValueError):
        DriveClient()


def test_drive_upload_returns_links():
    service = _drive_service()
    client = DriveClient(service_factory=lambda: service)

    result = client.upload(b"\xff\xd8", "photo.jpg", folder_id="FID", mime_type="image/jpeg")

    assert result.remote_id == "abc123"
    assert result.display_name == "photo.jpg"
    assert result.view_link == "https://drive.google.com/file/d/abc123/view"
    assert result.download_link == "https://drive.google.com/uc?id=abc123&export=download"

    kwargs = service.files.return_value.create.call_args.kwargs
    assert kwargs["body"] == {"name": "photo.jpg", "parents": ["FID"]}
    assert kwargs["fields"] == UPLOAD_FIELDS
    assert kwargs["supportsAllDrives"] is True
    assert kwargs["media_body"].mimetype() == "image/jpeg"


def test_drive_upload_without_folder_goes_to_root():
    service = _drive_service()
    client = DriveClient(service_factory=lambda: service)

    client.upload(b"data", "notes.txt")

    kwargs = service.files.return_value.create.call_args.kwargs
    assert kwargs["body"] == {"name": "notes.txt"}


def test_drive_upload_rejects_empty_payload_before_calling_api():
    service = _drive_service()
    client = DriveClient(service_factory=lambda: service)

    with pytest.raises(ValidationError):
        client.upload(b"", "photo.jpg")

    service.files.assert_not_called()


def test_drive_http_error_becomes_remote_store_error():
    service = _drive_service()
    service.files.return_value.create.return_value.execute.side_effect = _http_error(
        403, "The caller does not have permission"
    )
    client = DriveClient(service_factory=lambda: service)

    with pytest.raises(RemoteStoreError) as exc_info:
        client.upload(b"data", "photo.jpg", folder_id="FID")

    assert exc_info.value.kind is ErrorKind.REMOTE_STORE
    assert exc_info.value.status_code == 500
    assert "403" in exc_info.value.message
    assert isinstance(exc_info.value.__cause__, HttpError)


def test_drive_transport_error_becomes_remote_store_error():
    def broken_factory():
        raise httplib2.ServerNotFoundError("Unable to find the server at www.googleapis.com")

    client = DriveClient(service_factory=broken_factory)

    with pytest.raises(RemoteStoreError) as exc_info:
        client.upload(b"data", "photo.jpg")

    assert "Unable to find the server" in exc_info.value.message


def test_ensure_sheet_creates_missing_tab():
    titles = ["Sheet1"]
    service = _sheets_service(titles)
    client = SheetsClient(service_factory=lambda: service)

    assert client.ensure_sheet("SID", "Attendance_2024-03") is True
    assert titles == ["Sheet1", "Attendance_2024-03"]

    kwargs = service.spreadsheets.return_value.batchUpdate.call_args.kwargs
    assert kwargs["spreadsheetId"] == "SID"


def test_ensure_sheet_is_idempotent():
    titles = []
    service = _sheets_service(titles)
    client = SheetsClient(service_factory=lambda: service)

    assert client.ensure_sheet("SID", "Uploads") is True
    assert client.ensure_sheet("SID", "Uploads") is False

    assert titles == ["Uploads"]
    assert service.spreadsheets.return_value.batchUpdate.call_count == 1


def test_sheet_titles():
    service = _sheets_service(["Uploads", "Attendance_2024-03"])
    client = SheetsClient(service_factory=lambda: service)

    assert client.sheet_titles("SID") == ["Uploads", "Attendance_2024-03"]


def test_ensure_sheet_bad_spreadsheet():
    service = MagicMock()
    service.spreadsheets.return_value.get.return_value.execute.side_effect = _http_error(
        404, "Requested entity was not found."
    )
    client = SheetsClient(service_factory=lambda: service)

    with pytest.raises(RemoteStoreError) as exc_info:
        client.ensure_sheet("missing", "Uploads")

    assert "404" in exc_info.value.message


def test_append_rows_inserts_raw_values():
    service = MagicMock()
    values = service.spreadsheets.return_value.values.return_value
    values.append.return_value.execute.return_value = {"updates": {"updatedRows": 1}}
    client = SheetsClient(service_factory=lambda: service)

    response = client.append_rows("SID", "Uploads!A:D", [("a.pdf", "view", "download", "now")])

    assert response == {"updates": {"updatedRows": 1}}
    kwargs = values.append.call_args.kwargs
    assert kwargs == {
        "spreadsheetId": "SID",
        "range": "Uploads!A:D",
        "valueInputOption": "RAW",
        "insertDataOption": "INSERT_ROWS",
        "body": {"values": [["a.pdf", "view", "download", "now"]]},
    }


def test_write_header_targets_first_row():
    service = MagicMock()
    values = service.spreadsheets.return_value.values.return_value
    client = SheetsClient(service_factory=lambda: service)

    client.write_header("SID", "Attendance_2024-03", ["Timestamp", "Employee ID"])

    kwargs = values.update.call_args.kwargs
    assert kwargs["range"] == "'Attendance_2024-03'!A1:Z1"
    assert kwargs["body"] == {"values": [["Timestamp", "Employee ID"]]}
    assert kwargs["valueInputOption"] == "RAW"


def test_new_service_per_call():
    services = []

    def factory():
        service = MagicMock()
        services.append(service)
        return service

    client = SheetsClient(service_factory=factory)
    client.append_rows("SID", "Uploads!A:D", [["a"]])
    client.append_rows("SID", "Uploads!A:D", [["b"]])

    assert len(services) == 2
