from __future__ import annotations

import os

DEFAULT_QUALITY = 80
MIN_QUALITY = 0
MAX_QUALITY = 100

# 0 keeps the source dimensions.
DEFAULT_MAX_DIMENSION = 0
MAX_DIMENSION_CHOICES = (0, 640, 1024, 1280, 1600, 1920, 2560)

FORMAT_CHOICES = ("original", "jpeg", "png", "webp")
DEFAULT_FORMAT = "original"

DEFAULT_WORKERS = max(1, os.cpu_count() or 1)

OUTPUT_SUBDIR = "compressed"
OUTPUT_SUFFIX = "-compressed"
REPORT_FILENAME = "compression-report.json"

PREVIEW_SIZE = (160, 160)
