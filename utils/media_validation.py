"""Validation helpers for uploaded scans."""

from typing import Tuple

from fastapi import HTTPException, UploadFile

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".bmp", ".gif", ".webp", ".tif", ".tiff")


def resolve_image_content_type(upload: UploadFile) -> str:
    """Return the upload's image MIME type or reject non-image uploads.

    When the client sends no content type, the filename extension decides.
    """
    if upload.content_type:
        content_type = upload.content_type.lower().split(";", 1)[0].strip()
        if content_type.startswith("image/"):
            return content_type
        raise HTTPException(status_code=415, detail="Please upload an image file.")

    filename = (upload.filename or "").lower()
    if filename.endswith(IMAGE_EXTENSIONS):
        suffix = filename.rsplit(".", 1)[-1]
        suffix = {"jpg": "jpeg", "tif": "tiff"}.get(suffix, suffix)
        return f"image/{suffix}"
    raise HTTPException(status_code=415, detail="Please upload an image file.")


async def read_image_bytes(upload: UploadFile) -> Tuple[bytes, str]:
    """Read validated scan bytes and their content type, ensuring the upload is not empty."""
    content_type = resolve_image_content_type(upload)
    image_bytes = await upload.read()
    if not image_bytes:
        raise HTTPException(status_code=400, detail="Uploaded image is empty.")
    return image_bytes, content_type
