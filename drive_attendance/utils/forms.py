"""Helpers for pulling validated values out of multipart submissions."""
import math

from fastapi import UploadFile

from drive_attendance.models.attendance import AttendanceStatus
from drive_attendance.utils.exceptions import ValidationError


def required_text(value: str | None, error: str, field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"Form field '{field}' must be provided and non-empty", error=error)
    return value.strip()


def optional_text(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


async def read_upload(file: UploadFile | None, error: str, max_size: int) -> bytes:
    if file is None:
        raise ValidationError("Form field 'file' must contain a file", error=error)
    content = await file.read()
    if not content:
        raise ValidationError("The uploaded file is empty", error=error)
    if len(content) > max_size:
        raise ValidationError(
            f"The uploaded file is {len(content)} bytes; the limit is {max_size}",
            error="File too large",
        )
    return content


def parse_coordinate(value: str | None) -> float:
    """Parse a latitude/longitude form value; anything unusable becomes 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def parse_status(value: str | None) -> AttendanceStatus:
    if value is None or not value.strip():
        return AttendanceStatus.CHECK_IN
    try:
        return AttendanceStatus(value.strip())
    except ValueError:
        raise ValidationError(
            f"Status must be one of: {', '.join(s.value for s in AttendanceStatus)}",
            error="Invalid status",
        ) from None
