from __future__ import annotations

from io import BytesIO

from PIL import Image


def make_image_bytes(size=(64, 48), mode="RGB", fmt="PNG", color=(200, 40, 90)) -> bytes:
    image = Image.new(mode, size, color)
    buffer = BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


def decode(data: bytes) -> Image.Image:
    image = Image.open(BytesIO(data))
    image.load()
    return image
