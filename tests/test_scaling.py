from __future__ import annotations

import pytest

from compressor.core.scaling import round_half_up, scale_dimensions


@pytest.mark.parametrize("max_size", [0, -1, -500])
def test_non_positive_max_size_keeps_dimensions(max_size):
    assert scale_dimensions(4000, 3000, max_size) == (4000, 3000)


@pytest.mark.parametrize(
    "width, height, max_size",
    [(800, 600, 800), (800, 600, 1920), (10, 10, 10), (1, 1, 5000)],
)
def test_never_upscales(width, height, max_size):
    assert scale_dimensions(width, height, max_size) == (width, height)


def test_landscape_fits_longer_side():
    assert scale_dimensions(4000, 3000, 1000) == (1000, 750)


def test_portrait_fits_longer_side():
    assert scale_dimensions(1080, 1920, 1280) == (720, 1280)


def test_sides_are_rounded_independently():
    # 333 * (100 / 1000) = 33.3 and 667 * 0.1 = 66.7
    assert scale_dimensions(333, 1000, 100) == (33, 100)
    assert scale_dimensions(1000, 667, 100) == (100, 67)


def test_halves_round_up():
    # 250 * 0.5 = 125 exactly, 251 * 0.5 = 125.5
    assert scale_dimensions(1000, 251, 500) == (500, 126)


@pytest.mark.parametrize(
    "width, height, max_size",
    [(4000, 3000, 1024), (1920, 1080, 640), (1234, 5678, 999), (3, 7000, 100)],
)
def test_aspect_ratio_preserved_within_one_pixel(width, height, max_size):
    scaled = scale_dimensions(width, height, max_size)

    assert max(scaled) == max_size
    if width >= height:
        assert abs(scaled.height - height * scaled.width / width) <= 1
    else:
        assert abs(scaled.width - width * scaled.height / height) <= 1


def test_thin_side_never_collapses_to_zero():
    assert scale_dimensions(10000, 2, 100) == (100, 1)


def test_zero_dimensions_pass_through():
    assert scale_dimensions(0, 0, 100) == (0, 0)
    assert scale_dimensions(0, 500, 100) == (0, 100)


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
    assert round_half_up(-20.0) == -20
