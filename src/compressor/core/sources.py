from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import Iterable

from compressor.core.models import SourceImage

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".gif", ".bmp", ".tif", ".tiff"}

mimetypes.add_type("image/webp", ".webp")


def guess_declared_type(filename: str) -> str | None:
    mime_type, _ = mimetypes.guess_type(filename)
    return mime_type


def load_source(path: Path) -> SourceImage:
    return SourceImage(
        data=path.read_bytes(),
        declared_type=guess_declared_type(path.name),
        filename=path.name,
    )


def load_sources(paths: Iterable[Path]) -> list[SourceImage]:
    return [load_source(path) for path in paths]
