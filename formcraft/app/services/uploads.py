"""Storing uploaded form images on disk.

Images are written under `settings.UPLOAD_DIR` and served by the app at `/uploads`.
"""
# app/services/uploads.py
import os
import random
import time

from fastapi import UploadFile

from formcraft.app.core.config import settings
from formcraft.app.core.errors import InvalidUpload

UPLOADS_URL_PREFIX = "/uploads"


def _extension(filename: str | None) -> str:
    return os.path.splitext(filename or "")[1].lower()


async def save_image(file: UploadFile | None, field_name: str) -> str:
    """Validate and store an uploaded image.

    Args:
        file: The uploaded file.
        field_name: Form field name, used as the stored filename prefix.

    Returns:
        str: The public URL of the stored image (`/uploads/<name>`).

    Raises:
        InvalidUpload: No file, not an allowed image type, or larger than the limit.
    """
    if file is None or not file.filename:
        raise InvalidUpload("No image file provided")

    ext = _extension(file.filename)
    allowed = {e.lstrip(".") for e in settings.ALLOWED_IMAGE_EXTENSIONS}
    subtype = (file.content_type or "").split("/")[-1].lower()
    if ext not in settings.ALLOWED_IMAGE_EXTENSIONS or subtype not in allowed:
        raise InvalidUpload("Only image files are allowed!")

    content = await file.read()
    if len(content) > settings.MAX_UPLOAD_BYTES:
        raise InvalidUpload("Image is too large")

    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    filename = f"{field_name}-{int(time.time() * 1000)}-{random.randint(0, 10**9)}{ext}"
    dest_path = os.path.join(settings.UPLOAD_DIR, filename)
    with open(dest_path, "wb") as f:
        f.write(content)

    return f"{UPLOADS_URL_PREFIX}/{filename}"
