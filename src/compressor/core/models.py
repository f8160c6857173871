from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Union

from compressor.config import DEFAULT_MAX_DIMENSION, DEFAULT_QUALITY, MAX_QUALITY, MIN_QUALITY


class OutputFormat(str, Enum):
    """Format requested by the user. ORIGINAL keeps the source format when possible."""

    ORIGINAL = "original"
    JPEG = "jpeg"
    PNG = "png"
    WEBP = "webp"

    @classmethod
    def parse(cls, value: str) -> OutputFormat:
        normalized = value.strip().lower()
        if normalized.startswith("image/"):
            normalized = normalized[len("image/"):]
        if normalized == "jpg":
            normalized = "jpeg"
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unsupported output format: {value!r}") from None


class Codec(Enum):
    JPEG = ("image/jpeg", "jpg", "JPEG")
    PNG = ("image/png", "png", "PNG")
    WEBP = ("image/webp", "webp", "WEBP")

    def __init__(self, mime_type: str, extension: str, pillow_format: str) -> None:
        self.mime_type = mime_type
        self.extension = extension
        self.pillow_format = pillow_format

    @property
    def is_lossless(self) -> bool:
        return self is Codec.PNG


class ErrorKind(str, Enum):
    NOT_AN_IMAGE = "not-an-image"
    DECODE_FAILED = "decode-failed"
    ENCODE_FAILED = "encode-failed"
    CANCELLED = "cancelled"


class ScaledDimensions(NamedTuple):
    width: int
    height: int


@dataclass(frozen=True, slots=True)
class SourceImage:
    data: bytes
    declared_type: str | None
    filename: str

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True, slots=True)
class ProcessingParams:
    quality: int = DEFAULT_QUALITY
    max_dimension: int = DEFAULT_MAX_DIMENSION
    output_format: OutputFormat = OutputFormat.ORIGINAL

    def __post_init__(self) -> None:
        object.__setattr__(self, "quality", min(MAX_QUALITY, max(MIN_QUALITY, int(self.quality))))
        object.__setattr__(self, "max_dimension", max(0, int(self.max_dimension or 0)))
        if not isinstance(self.output_format, OutputFormat):
            object.__setattr__(self, "output_format", OutputFormat.parse(str(self.output_format)))


@dataclass(frozen=True, slots=True)
class ProcessingResult:
    filename: str
    original_size: int
    compressed_size: int
    savings_percent: int
    codec: Codec
    output_name: str
    data: bytes = field(repr=False)
    original_data: bytes = field(repr=False)
    width: int = 0
    height: int = 0


@dataclass(frozen=True, slots=True)
class ProcessingError:
    filename: str
    kind: ErrorKind
    message: str


Outcome = Union[ProcessingResult, ProcessingError]


@dataclass(slots=True)
class BatchResult:
    outcomes: list[Outcome]

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def results(self) -> list[ProcessingResult]:
        return [item for item in self.outcomes if isinstance(item, ProcessingResult)]

    @property
    def errors(self) -> list[ProcessingError]:
        return [item for item in self.outcomes if isinstance(item, ProcessingError)]

    @property
    def succeeded(self) -> int:
        return len(self.results)

    @property
    def failed(self) -> int:
        return len(self.errors)

    @property
    def input_total_bytes(self) -> int:
        return sum(item.original_size for item in self.results)

    @property
    def output_total_bytes(self) -> int:
        return sum(item.compressed_size for item in self.results)

    @property
    def bytes_saved(self) -> int:
        return self.input_total_bytes - self.output_total_bytes

    @property
    def compression_rate_percent(self) -> float:
        if self.input_total_bytes <= 0:
            return 0.0
        return (self.bytes_saved / self.input_total_bytes) * 100
