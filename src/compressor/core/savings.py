from __future__ import annotations

from compressor.core.scaling import round_half_up

_UNITS = ("B", "KB", "MB", "GB")


def savings_percent(original_size: int, compressed_size: int) -> int:
    """Percentage of bytes saved, rounded and clamped to 0-100.

    Outputs larger than their input report 0 rather than a negative number,
    which hides files that grew during compression.
    """
    if not original_size:
        return 0
    saved = round_half_up((original_size - compressed_size) / original_size * 100)
    return min(100, max(0, saved))


def format_bytes(byte_count: int) -> str:
    if byte_count <= 0:
        return "0 B"

    value = float(byte_count)
    unit_index = 0

    while value >= 1024 and unit_index < len(_UNITS) - 1:
        value /= 1024
        unit_index += 1

    decimals = 0 if value > 100 else 2
    return f"{value:.{decimals}f} {_UNITS[unit_index]}"
