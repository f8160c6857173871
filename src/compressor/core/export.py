from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

from compressor.config import REPORT_FILENAME
from compressor.core.models import Outcome, ProcessingError, ProcessingResult


def write_output(output_dir: Path, result: ProcessingResult, filename: str | None = None) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / (filename or result.output_name)
    output_path.write_bytes(result.data)
    return output_path


def write_outputs(output_dir: Path, outcomes: Iterable[Outcome]) -> list[Path]:
    return [write_output(output_dir, item) for item in outcomes if isinstance(item, ProcessingResult)]


def _report_entry(item: Outcome) -> dict[str, Any]:
    if isinstance(item, ProcessingError):
        return {
            "source_file": item.filename,
            "status": "error",
            "error": item.kind.value,
            "message": item.message,
        }
    return {
        "source_file": item.filename,
        "status": "ok",
        "output_file": item.output_name,
        "format": item.codec.extension,
        "mime_type": item.codec.mime_type,
        "width": item.width,
        "height": item.height,
        "original_size": item.original_size,
        "compressed_size": item.compressed_size,
        "savings_percent": item.savings_percent,
    }


def write_report(output_dir: Path, outcomes: Iterable[Outcome]) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    report_path = output_dir / REPORT_FILENAME
    payload = [_report_entry(item) for item in outcomes]

    with report_path.open("w", encoding="utf-8") as stream:
        json.dump(payload, stream, indent=2, ensure_ascii=False)

    return report_path
