from __future__ import annotations

import logging
from io import BytesIO

from PIL import Image, ImageOps

from compressor.core.errors import DecodeError, EncodeError
from compressor.core.models import Codec, ScaledDimensions

logger = logging.getLogger(__name__)

# EXIF orientations that swap width and height once applied.
_TRANSPOSED_ORIENTATIONS = {5, 6, 7, 8}
_ORIENTATION_TAG = 0x0112

_ALPHA_MODES = {"RGBA", "LA", "PA", "RGBa", "La"}
_PNG_MODES = {"1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"}


def read_dimensions(data: bytes) -> ScaledDimensions:
    """Return the displayed size of an encoded image without decoding its pixels."""
    try:
        with Image.open(BytesIO(data)) as image:
            width, height = image.size
            orientation = image.getexif().get(_ORIENTATION_TAG)
    except Exception as error:
        raise DecodeError(f"Could not read image file ({error}).") from error

    if orientation in _TRANSPOSED_ORIENTATIONS:
        width, height = height, width
    return ScaledDimensions(width, height)


def transcode(data: bytes, dimensions: ScaledDimensions, codec: Codec, quality: int) -> bytes:
    """Decode ``data``, resample it to ``dimensions`` and encode it as ``codec``.

    Quality is passed through as Pillow's 0-100 scale for JPEG and WebP and
    ignored for PNG. Raises :class:`DecodeError` when the bytes are not a
    readable image and :class:`EncodeError` when the result cannot be written.
    """
    image = _decode(data)
    try:
        width, height = dimensions
        if width <= 0 or height <= 0:
            raise EncodeError(f"Cannot encode an empty {width}x{height} image.")

        if image.size != (width, height):
            logger.debug("Resampling %sx%s -> %sx%s", image.width, image.height, width, height)
            image = _replace(image, _to_continuous_mode(image))
            image = _replace(image, image.resize((width, height), Image.Resampling.LANCZOS))

        image = _replace(image, _prepare_mode(image, codec))
        return _encode(image, codec, quality)
    finally:
        image.close()


def _replace(current: Image.Image, new: Image.Image) -> Image.Image:
    if new is not current:
        current.close()
    return new


def _has_alpha(image: Image.Image) -> bool:
    return image.mode in _ALPHA_MODES or (image.mode == "P" and "transparency" in image.info)


def _to_continuous_mode(image: Image.Image) -> Image.Image:
    # Pillow resizes "1" and "P" images with NEAREST whatever filter is asked for.
    if image.mode == "1":
        return image.convert("L")
    if image.mode in ("P", "PA"):
        return image.convert("RGBA" if _has_alpha(image) else "RGB")
    return image


def _decode(data: bytes) -> Image.Image:
    if not data:
        raise DecodeError("Could not read image file (empty data).")

    try:
        with Image.open(BytesIO(data)) as source:
            source.seek(0)
            source.load()
            image = ImageOps.exif_transpose(source)
    except Exception as error:
        raise DecodeError(f"Could not read image file ({error}).") from error

    return image


def _prepare_mode(image: Image.Image, codec: Codec) -> Image.Image:
    has_alpha = _has_alpha(image)

    if codec is Codec.JPEG:
        if image.mode in ("RGB", "L"):
            return image
        return image.convert("RGB")

    if codec is Codec.WEBP:
        target = "RGBA" if has_alpha else "RGB"
        if image.mode == target:
            return image
        return image.convert(target)

    if image.mode in _PNG_MODES:
        return image
    return image.convert("RGBA" if has_alpha else "RGB")


def _encode(image: Image.Image, codec: Codec, quality: int) -> bytes:
    options: dict[str, object]
    if codec.is_lossless:
        options = {"optimize": True}
    elif codec is Codec.WEBP:
        options = {"quality": quality, "method": 6}
    else:
        options = {"quality": quality, "optimize": True}

    output = BytesIO()
    try:
        image.save(output, format=codec.pillow_format, **options)
    except Exception as error:
        raise EncodeError(f"Failed to compress image ({error}).") from error

    encoded = output.getvalue()
    if not encoded:
        raise EncodeError("Failed to compress image (encoder produced no output).")
    return encoded
