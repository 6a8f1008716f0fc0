from pydantic import Field

from drive_attendance.schemas.common import CamelModel


class DriveUploadData(CamelModel):
    file_name: str
    drive_id: str
    view_link: str | None = None
    download_link: str | None = None
    uploaded_at: str


class ImagePayload(CamelModel):
    image_base64: str | None = None
    file_name: str | None = None


class ImageData(CamelModel):
    file_name: str
    size_kb: int = Field(alias="sizeKB")
    note: str
