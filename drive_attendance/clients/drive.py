import io
import logging

from googleapiclient.http import MediaIoBaseUpload

from drive_attendance.clients.base import GoogleServiceClient
from drive_attendance.models.drive import DEFAULT_MIME_TYPE, UploadRequest, UploadResult

logger = logging.getLogger(__name__)

UPLOAD_FIELDS = "id, name, webViewLink, webContentLink"


class DriveClient(GoogleServiceClient):
    api_name = "drive"
    api_version = "v3"

    def upload(
        self,
        payload: bytes,
        name: str,
        folder_id: str | None = None,
        mime_type: str = DEFAULT_MIME_TYPE,
    ) -> UploadResult:
        """Create one Drive file named ``name``, inside ``folder_id`` when given."""
        request = UploadRequest(
            payload=payload, file_name=name, folder_id=folder_id, mime_type=mime_type
        )
        return self.upload_request(request)

    def upload_request(self, request: UploadRequest) -> UploadResult:
        media = MediaIoBaseUpload(
            io.BytesIO(request.payload), mimetype=request.mime_type, resumable=False
        )
        logger.info(
            "Uploading %s (%d bytes) to Drive folder %s",
            request.file_name,
            len(request.payload),
            request.folder_id or "<root>",
        )
        data = self._call(
            f"Drive upload of {request.file_name}",
            lambda service: service.files().create(
                body=request.metadata(),
                media_body=media,
                fields=UPLOAD_FIELDS,
                supportsAllDrives=True,
            ),
        )
        return UploadResult(
            remote_id=data["id"],
            display_name=data.get("name", request.file_name),
            view_link=data.get("webViewLink"),
            download_link=data.get("webContentLink"),
        )
