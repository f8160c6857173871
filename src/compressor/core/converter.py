from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Callable, Sequence

from compressor.config import DEFAULT_WORKERS
from compressor.core.errors import TranscodeError
from compressor.core.formats import is_image_type, resolve_format
from compressor.core.models import (
    BatchResult,
    ErrorKind,
    Outcome,
    ProcessingError,
    ProcessingParams,
    ProcessingResult,
    SourceImage,
)
from compressor.core.naming import output_name
from compressor.core.savings import format_bytes, savings_percent
from compressor.core.scaling import scale_dimensions
from compressor.core.transcoder import read_dimensions, transcode

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]
LogCallback = Callable[[str], None]


def process_image(source: SourceImage, params: ProcessingParams) -> Outcome:
    """Compress a single image. Failures come back as a :class:`ProcessingError`."""
    if not is_image_type(source.declared_type):
        return ProcessingError(source.filename, ErrorKind.NOT_AN_IMAGE, "This file is not an image.")

    try:
        width, height = read_dimensions(source.data)
        dimensions = scale_dimensions(width, height, params.max_dimension)
        codec = resolve_format(params.output_format, source.declared_type)
        encoded = transcode(source.data, dimensions, codec, params.quality)
    except TranscodeError as error:
        return ProcessingError(source.filename, error.kind, error.message)

    return ProcessingResult(
        filename=source.filename,
        original_size=source.size,
        compressed_size=len(encoded),
        savings_percent=savings_percent(source.size, len(encoded)),
        codec=codec,
        output_name=output_name(source.filename, codec.extension),
        data=encoded,
        original_data=source.data,
        width=dimensions.width,
        height=dimensions.height,
    )


class BatchConverter:
    def __init__(self, max_workers: int | None = None) -> None:
        self.max_workers = max(1, max_workers or DEFAULT_WORKERS)

    def run(
        self,
        sources: Sequence[SourceImage],
        params: ProcessingParams,
        on_progress: ProgressCallback | None = None,
        on_log: LogCallback | None = None,
        cancel_event: threading.Event | None = None,
    ) -> BatchResult:
        total = len(sources)
        outcomes: list[Outcome | None] = [None] * total
        if not total:
            return BatchResult(outcomes=[])

        workers = min(self.max_workers, total)
        logger.debug("Processing %d file(s) with %d worker(s)", total, workers)

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures: dict[Future[Outcome], int] = {
                executor.submit(self._process_one, source, params, cancel_event): index
                for index, source in enumerate(sources)
            }

            for done, future in enumerate(as_completed(futures), start=1):
                index = futures[future]
                outcome = future.result()
                outcomes[index] = outcome

                message = self._describe(outcome)
                if isinstance(outcome, ProcessingError) and outcome.kind is not ErrorKind.CANCELLED:
                    logger.warning(message)
                if on_log:
                    on_log(f"[{done}/{total}] {message}")
                if on_progress:
                    on_progress(done, total)

        return BatchResult(outcomes=[outcome for outcome in outcomes if outcome is not None])

    def _process_one(
        self,
        source: SourceImage,
        params: ProcessingParams,
        cancel_event: threading.Event | None,
    ) -> Outcome:
        if cancel_event is not None and cancel_event.is_set():
            return ProcessingError(source.filename, ErrorKind.CANCELLED, "Cancelled before processing started.")
        return process_image(source, params)

    def _describe(self, outcome: Outcome) -> str:
        if isinstance(outcome, ProcessingError):
            return f"Failed: {outcome.filename} ({outcome.kind.value}: {outcome.message})"
        return (
            f"Saved: {outcome.output_name} "
            f"({format_bytes(outcome.original_size)} -> {format_bytes(outcome.compressed_size)}, "
            f"{outcome.savings_percent}% saved)"
        )


def process_batch(
    sources: Sequence[SourceImage],
    params: ProcessingParams,
    on_progress: ProgressCallback | None = None,
    on_log: LogCallback | None = None,
    cancel_event: threading.Event | None = None,
    max_workers: int | None = None,
) -> list[Outcome]:
    converter = BatchConverter(max_workers=max_workers)
    result = converter.run(
        sources,
        params,
        on_progress=on_progress,
        on_log=on_log,
        cancel_event=cancel_event,
    )
    return result.outcomes
