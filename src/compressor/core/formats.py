from __future__ import annotations

from compressor.core.models import Codec, OutputFormat

_CODECS_BY_MIME = {
    "image/jpeg": Codec.JPEG,
    "image/jpg": Codec.JPEG,
    "image/pjpeg": Codec.JPEG,
    "image/png": Codec.PNG,
    "image/webp": Codec.WEBP,
}

_CODECS_BY_REQUEST = {
    OutputFormat.JPEG: Codec.JPEG,
    OutputFormat.PNG: Codec.PNG,
    OutputFormat.WEBP: Codec.WEBP,
}


def _normalize_mime(declared_type: str | None) -> str:
    if not declared_type:
        return ""
    return declared_type.split(";", 1)[0].strip().lower()


def is_image_type(declared_type: str | None) -> bool:
    return _normalize_mime(declared_type).startswith("image/")


def codec_for_mime(declared_type: str | None) -> Codec | None:
    return _CODECS_BY_MIME.get(_normalize_mime(declared_type))


def resolve_format(requested: OutputFormat, declared_type: str | None) -> Codec:
    """Turn the user's format choice into a concrete codec.

    An explicit request always wins. ``ORIGINAL`` keeps the declared source
    type when it is one we can encode, and falls back to JPEG otherwise.
    """
    if requested is OutputFormat.ORIGINAL:
        return codec_for_mime(declared_type) or Codec.JPEG
    return _CODECS_BY_REQUEST.get(requested, Codec.JPEG)
