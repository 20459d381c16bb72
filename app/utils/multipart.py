"""
Multipart form helpers.
Pull the `image` file field out of an incoming request.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Request
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from app.core.errors import ScannerError, ValidationError

logger = logging.getLogger(__name__)

IMAGE_FIELD = "image"


@dataclass(frozen=True)
class UploadRequest:
    """Image received from the client."""
    data: bytes
    filename: str
    content_type: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.data)


async def read_image_upload(request: Request, field: str = IMAGE_FIELD) -> UploadRequest:
    """
    Parse the multipart body and read the image field fully into memory.

    Args:
        request: Incoming request
        field: Form field holding the file

    Returns:
        UploadRequest with bytes, original filename and content type

    Raises:
        ValidationError: If the body is not multipart or the field is missing
        ScannerError: If the file cannot be read
    """
    try:
        form = await request.form()
    except (MultiPartException, StarletteHTTPException) as e:
        cause = getattr(e, "message", None) or getattr(e, "detail", None) or str(e)
        raise ValidationError("Failed to get file from request", cause) from e

    upload = form.get(field)
    if not isinstance(upload, UploadFile) or not upload.filename:
        raise ValidationError(
            "Failed to get file from request",
            f"no file in multipart field '{field}'"
        )

    try:
        data = await upload.read()
    except Exception as e:
        logger.error(f"Failed to read uploaded file {upload.filename}: {e}")
        raise ScannerError("Failed to read file", e) from e
    finally:
        await upload.close()

    return UploadRequest(
        data=data,
        filename=upload.filename,
        content_type=upload.content_type
    )
