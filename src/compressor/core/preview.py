from __future__ import annotations

from io import BytesIO

from PIL import Image, ImageOps

from compressor.config import PREVIEW_SIZE


def make_thumbnail(data: bytes, max_size: tuple[int, int] = PREVIEW_SIZE) -> Image.Image:
    """Small RGBA copy of an encoded image for before/after comparison."""
    with Image.open(BytesIO(data)) as source:
        source.seek(0)
        preview = ImageOps.exif_transpose(source).convert("RGBA")

    preview.thumbnail(max_size, Image.Resampling.LANCZOS)
    return preview
