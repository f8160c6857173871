from __future__ import annotations

from compressor.config import OUTPUT_SUFFIX


def output_name(original_name: str, extension: str) -> str:
    # A leading dot marks a hidden file, not an extension.
    dot_index = original_name.rfind(".")
    base_name = original_name[:dot_index] if dot_index > 0 else original_name
    return f"{base_name}{OUTPUT_SUFFIX}.{extension}"
