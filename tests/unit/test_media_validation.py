"""
Unit Tests for scan upload validation.
"""
import io

import pytest
from fastapi import HTTPException, UploadFile
from starlette.datastructures import Headers

from utils.media_validation import read_image_bytes, resolve_image_content_type


def _upload(data: bytes, filename: str, content_type=None) -> UploadFile:
    headers = Headers({"content-type": content_type}) if content_type else None
    return UploadFile(file=io.BytesIO(data), filename=filename, headers=headers)


class TestResolveImageContentType:
    def test_declared_type_is_normalized(self):
        assert resolve_image_content_type(_upload(b"x", "scan.png", "Image/PNG; charset=binary")) == "image/png"

    @pytest.mark.parametrize(
        "filename, expected",
        [("scan.jpg", "image/jpeg"), ("slice.TIF", "image/tiff"), ("brain.webp", "image/webp")],
    )
    def test_extension_is_used_without_declared_type(self, filename, expected):
        assert resolve_image_content_type(_upload(b"x", filename)) == expected

    @pytest.mark.parametrize("filename, content_type", [("notes.txt", "text/plain"), ("notes.txt", None)])
    def test_non_image_is_rejected(self, filename, content_type):
        with pytest.raises(HTTPException) as exc_info:
            resolve_image_content_type(_upload(b"x", filename, content_type))
        assert exc_info.value.status_code == 415


@pytest.mark.asyncio
class TestReadImageBytes:
    async def test_returns_bytes_and_content_type(self, png_bytes):
        image_bytes, content_type = await read_image_bytes(_upload(png_bytes, "scan.png", "image/png"))
        assert image_bytes == png_bytes
        assert content_type == "image/png"

    async def test_empty_upload_is_rejected(self):
        with pytest.raises(HTTPException) as exc_info:
            await read_image_bytes(_upload(b"", "scan.png", "image/png"))
        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "Uploaded image is empty."
