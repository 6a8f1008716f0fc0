import base64
import binascii
import math

from fastapi import APIRouter

from drive_attendance.schemas.upload import ImageData, ImagePayload
from drive_attendance.utils.exceptions import ValidationError

router = APIRouter(prefix="/upload-image", tags=["images"])

STORAGE_NOTE = "Store in sheet or use external storage service"


def size_in_kb(length: int) -> int:
    # half-up, like Math.round in the capture page
    return math.floor(length / 1024 + 0.5)


def _strip_data_url(image_base64: str) -> str:
    # "data:image/jpeg;base64,...." as produced by canvas.toDataURL()
    if image_base64.startswith("data:") and "," in image_base64:
        return image_base64.split(",", 1)[1]
    return image_base64


@router.post("")
async def receive_image(payload: ImagePayload):
    """Accept a base64 image from the capture page and report its size."""
    if not payload.image_base64 or not payload.file_name:
        raise ValidationError(
            "Both imageBase64 and fileName are required",
            error="Missing imageBase64 or fileName",
        )

    encoded = _strip_data_url(payload.image_base64)
    try:
        base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("imageBase64 is not valid base64 data", error="Invalid image data") from None

    image = ImageData(
        file_name=payload.file_name,
        size_kb=size_in_kb(len(payload.image_base64)),
        note=STORAGE_NOTE,
    )
    return {
        "success": True,
        "message": "Image data received. Ready for storage.",
        "imageData": image.to_response(),
    }
