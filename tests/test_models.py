from __future__ import annotations

import dataclasses

import pytest

from compressor.core.models import (
    BatchResult,
    Codec,
    ErrorKind,
    OutputFormat,
    ProcessingError,
    ProcessingParams,
    ProcessingResult,
    SourceImage,
)


def make_result(original_size: int, compressed_size: int, name: str = "a.jpg") -> ProcessingResult:
    return ProcessingResult(
        filename=name,
        original_size=original_size,
        compressed_size=compressed_size,
        savings_percent=0,
        codec=Codec.JPEG,
        output_name="a-compressed.jpg",
        data=b"x" * compressed_size,
        original_data=b"y" * original_size,
    )


def test_params_defaults():
    params = ProcessingParams()

    assert params.quality == 80
    assert params.max_dimension == 0
    assert params.output_format is OutputFormat.ORIGINAL


@pytest.mark.parametrize("quality, expected", [(-10, 0), (0, 0), (55, 55), (100, 100), (250, 100)])
def test_params_clamp_quality(quality, expected):
    assert ProcessingParams(quality=quality).quality == expected


def test_params_clamp_negative_max_dimension():
    assert ProcessingParams(max_dimension=-5).max_dimension == 0


def test_params_parse_format_string():
    assert ProcessingParams(output_format="webp").output_format is OutputFormat.WEBP


def test_params_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        ProcessingParams().quality = 10


def test_source_size():
    assert SourceImage(data=b"12345", declared_type=None, filename="x").size == 5


def test_batch_result_aggregates_successes_only():
    batch = BatchResult(
        outcomes=[
            make_result(1000, 400),
            ProcessingError("b.txt", ErrorKind.NOT_AN_IMAGE, "This file is not an image."),
            make_result(1000, 600),
        ]
    )

    assert batch.total == 3
    assert batch.succeeded == 2
    assert batch.failed == 1
    assert batch.input_total_bytes == 2000
    assert batch.output_total_bytes == 1000
    assert batch.bytes_saved == 1000
    assert batch.compression_rate_percent == pytest.approx(50.0)


def test_result_repr_hides_payloads():
    assert "data=" not in repr(make_result(10, 5))
