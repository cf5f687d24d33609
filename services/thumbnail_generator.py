"""Thumbnail generator service.

Provides a small OOP wrapper around Pillow to render the preview kept with
each prediction history entry. Uploaded scans arrive as raw image bytes;
the thumbnail fits within 160x160 pixels and is returned as PNG bytes.

Example:
    tg = ThumbnailGenerator(max_size=(160, 160))
    png_bytes = tg.create_thumbnail(upload_bytes)
"""
from __future__ import annotations

import io
from typing import Tuple

from PIL import Image, UnidentifiedImageError


class ThumbnailGenerator:
    """Generate PNG thumbnails from uploaded image bytes.

    Args:
        max_size: Maximum width and height for the thumbnail. Defaults to (160, 160).
        background: Optional background color used when flattening images with alpha.
            If None, images with alpha are flattened against black.
    """

    def __init__(self, max_size: Tuple[int, int] = (160, 160), background: Tuple[int, int, int] | None = None):
        self.max_size = max_size
        self.background = background or (0, 0, 0)

    def create_thumbnail(self, data: bytes) -> bytes:
        """Create a PNG thumbnail from raw image bytes.

        Raises:
            ValueError: If the bytes cannot be opened as an image or exceed
                Pillow's decompression-bomb limit.
        """
        if not data:
            raise ValueError("Image bytes are required for a thumbnail")

        try:
            src = Image.open(io.BytesIO(data))
            src.load()
        except Image.DecompressionBombError as exc:
            raise ValueError("Uploaded image is too large for a thumbnail") from exc
        except (UnidentifiedImageError, OSError) as exc:
            raise ValueError("Uploaded bytes are not a supported image format") from exc

        # Grayscale MRI slices and palette images both go through RGBA
        src = src.convert("RGBA")
        src.thumbnail(self.max_size, Image.LANCZOS)

        background = Image.new("RGB", src.size, self.background)
        background.paste(src, mask=src.split()[3])

        out_io = io.BytesIO()
        background.save(out_io, format="PNG", optimize=True)
        return out_io.getvalue()
