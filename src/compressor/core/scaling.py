from __future__ import annotations

import math

from compressor.core.models import ScaledDimensions


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def scale_dimensions(width: int, height: int, max_size: int) -> ScaledDimensions:
    """Fit ``width`` x ``height`` inside a ``max_size`` box, keeping the aspect ratio.

    Images are never upscaled and ``max_size <= 0`` disables scaling. Each side
    is rounded on its own, so the aspect ratio may drift by up to one pixel.
    """
    if not max_size or max_size <= 0:
        return ScaledDimensions(width, height)

    longer = max(width, height)
    if longer <= max_size:
        return ScaledDimensions(width, height)

    factor = max_size / longer
    return ScaledDimensions(_scale_side(width, factor), _scale_side(height, factor))


def _scale_side(side: int, factor: float) -> int:
    if side <= 0:
        return 0
    return max(1, round_half_up(side * factor))
