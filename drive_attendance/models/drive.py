from dataclasses import dataclass

from drive_attendance.utils.exceptions import ValidationError

DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class UploadRequest:
    """A single file headed for Drive."""

    payload: bytes
    file_name: str
    folder_id: str | None = None
    mime_type: str = DEFAULT_MIME_TYPE

    def __post_init__(self):
        if not self.payload:
            raise ValidationError("Upload payload is empty", error="Empty file")
        if not self.file_name or not self.file_name.strip():
            raise ValidationError("Upload needs a file name", error="File name is required")

    def metadata(self) -> dict:
        body: dict = {"name": self.file_name}
        if self.folder_id:
            body["parents"] = [self.folder_id]
        return body


@dataclass(frozen=True)
class UploadResult:
    remote_id: str
    display_name: str
    view_link: str | None
    download_link: str | None
