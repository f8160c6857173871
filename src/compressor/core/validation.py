from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from compressor.config import OUTPUT_SUBDIR, REPORT_FILENAME


@dataclass(slots=True)
class OutputConflicts:
    report_exists: bool
    duplicate_files: list[str]

    @property
    def has_conflicts(self) -> bool:
        return self.report_exists or bool(self.duplicate_files)


def resolve_effective_output_dir(base_output_dir: Path) -> Path:
    return base_output_dir / OUTPUT_SUBDIR


def find_repeated_names(output_names: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    repeated: list[str] = []
    for name in output_names:
        if name in seen and name not in repeated:
            repeated.append(name)
        seen.add(name)
    return repeated


def detect_output_conflicts(output_dir: Path, expected_output_names: Iterable[str]) -> OutputConflicts:
    report_exists = (output_dir / REPORT_FILENAME).exists()
    duplicate_files = [name for name in expected_output_names if (output_dir / name).exists()]

    return OutputConflicts(
        report_exists=report_exists,
        duplicate_files=duplicate_files,
    )
