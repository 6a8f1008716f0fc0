from datetime import datetime

from drive_attendance.clients.sheets import a1_range
from drive_attendance.models.attendance import AttendanceRecord, AttendanceStatus, Location
from drive_attendance.models.drive import UploadResult
from drive_attendance.services.naming import (
    attendance_sheet_title,
    build_attendance_row,
    build_file_name,
    build_upload_row,
    format_local_date,
    format_local_timestamp,
)


def _record(**overrides):
    fields = dict(
        employee_id="EMP001",
        employee_name="John",
        photo=b"\xff\xd8\xff\xe0",
        captured_at=datetime(2024, 3, 5, 8, 15, 30),
        status=AttendanceStatus.CHECK_IN,
        location=Location(-7.25, 112.75),
    )
    fields.update(overrides)
    return AttendanceRecord(**fields)


DRIVE_FILE = UploadResult(
    remote_id="abc123",
    display_name="photo.jpg",
    view_link="https://drive.google.com/file/d/abc123/view",
    download_link="https://drive.google.com/uc?id=abc123&export=download",
)


def test_file_name_from_record():
    assert build_file_name(_record()) == "EMP001_John_check-in_2024-03-05_08-15-30.jpg"


def test_file_name_check_out():
    name = build_file_name(_record(status=AttendanceStatus.CHECK_OUT))
    assert name == "EMP001_John_check-out_2024-03-05_08-15-30.jpg"
    assert ":" not in name


def test_sheet_title_is_monthly_bucket():
    assert attendance_sheet_title(datetime(2024, 3, 5, 8, 15, 30)) == "Attendance_2024-03"
    assert attendance_sheet_title(datetime(2024, 12, 31, 23, 59, 59)) == "Attendance_2024-12"


def test_sheet_title_custom_prefix():
    assert attendance_sheet_title(datetime(2025, 1, 2), prefix="Presensi") == "Presensi_2025-01"


def test_local_timestamp_format():
    assert format_local_timestamp(datetime(2024, 3, 5, 8, 15, 30)) == "5/3/2024, 08.15.30"
    assert format_local_date(datetime(2024, 11, 25)) == "25/11/2024"


def test_attendance_row_column_order():
    row = build_attendance_row(_record(), DRIVE_FILE, "5/3/2024, 08.15.30")
    assert row == [
        "5/3/2024, 08.15.30",
        "EMP001",
        "John",
        "check-in",
        "-7.25, 112.75",
        DRIVE_FILE.view_link,
        DRIVE_FILE.download_link,
    ]


def test_upload_row_blanks_missing_links():
    drive_file = UploadResult(remote_id="x", display_name="a.pdf", view_link=None, download_link=None)
    assert build_upload_row("a.pdf", drive_file, "1/1/2024, 00.00.00") == [
        "a.pdf",
        "",
        "",
        "1/1/2024, 00.00.00",
    ]


def test_a1_range_plain_title():
    assert a1_range("Uploads", "A:D") == "Uploads!A:D"


def test_a1_range_quotes_titles_with_symbols():
    assert a1_range("Attendance_2024-03", "A:G") == "'Attendance_2024-03'!A:G"
    assert a1_range("Bob's sheet", "A1:Z1") == "'Bob''s sheet'!A1:Z1"
