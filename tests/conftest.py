from __future__ import annotations

import pytest

from compressor.core.models import SourceImage

from image_factory import make_image_bytes


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes((64, 48), fmt="PNG")


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image_bytes((400, 200), fmt="JPEG")


@pytest.fixture
def rgba_png_bytes() -> bytes:
    return make_image_bytes((32, 32), mode="RGBA", fmt="PNG", color=(10, 20, 30, 128))


@pytest.fixture
def png_source(png_bytes) -> SourceImage:
    return SourceImage(data=png_bytes, declared_type="image/png", filename="pixel.png")


@pytest.fixture
def jpeg_source(jpeg_bytes) -> SourceImage:
    return SourceImage(data=jpeg_bytes, declared_type="image/jpeg", filename="photo.jpg")
