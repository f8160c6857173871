from __future__ import annotations

import pytest

from compressor.core.converter import process_image
from compressor.core.models import ProcessingParams
from compressor.core.preview import make_thumbnail

from image_factory import make_image_bytes


def test_thumbnail_fits_box_and_keeps_aspect(jpeg_bytes):
    thumbnail = make_thumbnail(jpeg_bytes, (100, 100))

    assert thumbnail.size == (100, 50)
    assert thumbnail.mode == "RGBA"


def test_small_image_is_not_enlarged(png_bytes):
    assert make_thumbnail(png_bytes, (160, 160)).size == (64, 48)


def test_before_and_after_previews(jpeg_source):
    result = process_image(jpeg_source, ProcessingParams(max_dimension=200, output_format="webp"))

    before = make_thumbnail(result.original_data, (80, 80))
    after = make_thumbnail(result.data, (80, 80))

    assert before.size == after.size == (80, 40)


def test_palette_thumbnail():
    data = make_image_bytes((40, 20), mode="P", fmt="GIF", color=1)

    assert make_thumbnail(data, (20, 20)).size == (20, 10)


def test_thumbnail_of_garbage_raises():
    with pytest.raises(OSError):
        make_thumbnail(b"not an image")
