"""Common functions shared across all scheduler implementations."""

import glob
import os
import shutil
import tempfile
import time
from concurrent.futures import Future
from contextlib import closing, contextmanager
from typing import BinaryIO, Callable, Iterator, List, Optional, Tuple

from PIL import Image

from ..core import (
    ImageJob,
    JobResult,
    ResizeConfig,
    ResizeTo,
    decide,
    get_logger,
)
from ..core.error_handling import BatchOperationContextManager
from ..core.exceptions import (
    CopyError,
    EncodeError,
    NoFilesMatchedError,
    OpenError,
    PipelineError,
    UnsupportedFormatError,
    with_error_handling,
)
from ..core.image_utils import (
    SUPPORTED_FORMATS,
    PillowCodec,
    calculate_destination_path,
)
from ..core.models import ImageFormat
from ..core.observability import MetricsCollector, PerformanceMetrics
from ..core.protocols import ImageCodecProtocol

ProcessBatchFunction = Callable[
    [List[ImageJob], ResizeConfig, Optional[ImageCodecProtocol]], List[JobResult]
]


@contextmanager
def _atomic_output(destination_path: str, mode_source: str) -> Iterator[BinaryIO]:
    """Yield a temp file beside ``destination_path``; rename over it on success."""
    directory = os.path.dirname(destination_path) or "."
    fd, temp_path = tempfile.mkstemp(dir=directory, prefix=".resizing-", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as handle:
            yield handle
        shutil.copymode(mode_source, temp_path)
        os.replace(temp_path, destination_path)
    except BaseException:
        if os.path.exists(temp_path):
            os.remove(temp_path)
        raise


def _decode_source(
    job: ImageJob, codec: ImageCodecProtocol
) -> Tuple[ImageFormat, Image.Image]:
    """Read, sniff and decode the source file. The raw bytes die with this frame."""
    logger = get_logger("resizer")
    try:
        with open(job.source_path, "rb") as source:
            data = source.read()
    except OSError as exc:
        raise OpenError(
            f"Error opening file {job.source_path}: {exc}", job.source_path
        ) from exc

    image_format = codec.sniff(data)
    if image_format not in SUPPORTED_FORMATS:
        raise UnsupportedFormatError(
            f"File {job.source_path} is of unsupported type {image_format.value}",
            job.source_path,
        )
    logger.debug(f"[Resize] {job.source_path} detected as {image_format.value}")

    try:
        image = codec.decode(image_format, data)
    except PipelineError as exc:
        exc.path = job.source_path
        raise
    return image_format, image


def _resize_and_encode(
    image: Image.Image,
    image_format: ImageFormat,
    decision: ResizeTo,
    config: ResizeConfig,
    codec: ImageCodecProtocol,
) -> bytes:
    try:
        scaled = codec.scale(
            image, decision.width, decision.height, config.resample_filter
        )
    except (OSError, ValueError) as exc:
        raise EncodeError(f"Error scaling image: {exc}") from exc

    with closing(scaled):
        return codec.encode(image_format, scaled, config.quality)


def _write_output(job: ImageJob, encoded: bytes) -> None:
    try:
        with _atomic_output(job.destination_path, job.source_path) as output:
            output.write(encoded)
    except OSError as exc:
        raise EncodeError(
            f"Failed to write destination file {job.destination_path}: {exc}",
            job.destination_path,
        ) from exc


def copy_file(job: ImageJob) -> int:
    """
    Copy the source file byte for byte to the destination.

    Args:
        job: The job whose source is copied

    Returns:
        Number of bytes copied

    Raises:
        CopyError: If the source cannot be read or the destination written
    """
    logger = get_logger("resizer")
    try:
        with open(job.source_path, "rb") as source:
            with _atomic_output(job.destination_path, job.source_path) as output:
                shutil.copyfileobj(source, output)
                bytes_copied = output.tell()
    except OSError as exc:
        raise CopyError(
            f"Failed to copy file from {job.source_path} to {job.destination_path}: {exc}",
            job.source_path,
        ) from exc

    logger.info(
        f"[Copy] Copied {bytes_copied} bytes from {job.source_path} to {job.destination_path}"
    )
    return bytes_copied


@with_error_handling
def process_single_image(
    job: ImageJob,
    config: ResizeConfig,
    codec: Optional[ImageCodecProtocol] = None,
) -> JobResult:
    """Process a single image: Read → Sniff → Decode → Decide → Resize+Encode | Copy."""
    logger = get_logger("resizer")
    codec = codec or PillowCodec()
    result = JobResult(
        source_path=job.source_path,
        destination_path=job.destination_path,
        start_time=time.time(),
    )

    try:
        image_format, image = _decode_source(job, codec)

        encoded: Optional[bytes] = None
        with closing(image):
            result.original_size = image.size
            decision = decide(image.width, image.height, config.longest_side)
            if isinstance(decision, ResizeTo):
                logger.info(
                    f"[Resize] Resizing {job.source_path} "
                    f"{image.width}x{image.height} -> {decision.width}x{decision.height}..."
                )
                encoded = _resize_and_encode(
                    image, image_format, decision, config, codec
                )

        if isinstance(decision, ResizeTo):
            logger.info(f"[Resize] Writing to {job.destination_path}...")
            _write_output(job, encoded)
            result.action = "resized"
            result.output_size = (decision.width, decision.height)
        else:
            logger.info(
                f"[Copy] No resize required. Copying {job.source_path} -> {job.destination_path}"
            )
            copy_file(job)
            result.action = "copied"
            result.output_size = result.original_size

        result.success = True
        logger.debug(f"[{job.source_path}] Processing completed successfully.")

    except PipelineError as e:
        result.success = False
        result.error = str(e)
        result.error_kind = type(e).__name__
        stage = "Copy" if isinstance(e, CopyError) else "Resize"
        logger.error(f"[{stage}][Error] {job.source_path}: {e}")

    result.processing_time = time.time() - result.start_time
    return result


def failed_result(job: ImageJob, error: BaseException) -> JobResult:
    """Build the result for a job whose worker raised instead of returning."""
    return JobResult(
        source_path=job.source_path,
        destination_path=job.destination_path,
        success=False,
        error=str(error),
        error_kind=type(error).__name__,
    )


def collect_result(future: "Future[JobResult]", job: ImageJob) -> JobResult:
    """Return a finished future's result, turning a raised exception into a failure."""
    try:
        return future.result()
    except Exception as e:
        get_logger("resizer").error(
            f"[Resize][Error] Worker for {job.source_path} failed: {e}"
        )
        return failed_result(job, e)


def log_dispatch(index: int, total: int, job: ImageJob) -> None:
    """Log a job as it is handed to a worker."""
    logger = get_logger("resizer")
    logger.info(f"[Main] ({index}/{total}) {job.source_path} -> {job.destination_path}")


def discover_files(pattern: str) -> List[str]:
    """
    Expand a glob pattern into the sorted list of matching files.

    ``~`` is expanded and ``**`` matches across directories. Directories
    that match the pattern are skipped.

    Args:
        pattern: Filesystem glob pattern

    Returns:
        Sorted list of file paths
    """
    expanded = os.path.expanduser(pattern)
    return sorted(
        path for path in glob.glob(expanded, recursive=True) if not os.path.isdir(path)
    )


def discover_and_validate_files(config: ResizeConfig) -> List[str]:
    """
    Discover the files to process.

    Raises:
        NoFilesMatchedError: If the pattern matches nothing
    """
    logger = get_logger("resizer")
    logger.info(f"Expanding pattern {config.pattern}...")

    source_files = discover_files(config.pattern)
    if not source_files:
        raise NoFilesMatchedError(f"No files found with pattern - {config.pattern}")

    logger.info(f"Found {len(source_files)} files")
    return source_files


def create_jobs(source_files: List[str], config: ResizeConfig) -> List[ImageJob]:
    """Create one job per source file."""
    return [
        ImageJob(
            source_path=source_path,
            destination_path=calculate_destination_path(source_path, config.prefix),
        )
        for source_path in source_files
    ]


def log_configuration(config: ResizeConfig, processor_name: str):
    """Log the resolved configuration."""
    logger = get_logger("resizer")
    logger.info("=" * 80)
    logger.info(f"{processor_name.upper()} IMAGE RESIZER")
    logger.info("=" * 80)
    logger.info(f"  File Glob Pattern:       {config.pattern}")
    logger.info(f"  Resized Filename Prefix: {config.prefix}")
    logger.info(f"  Long Side in Pixel:      {config.longest_side}")
    logger.info(f"  JPEG Quality:            {config.quality}")
    logger.info(f"  Concurrency:             {config.concurrency}")
    logger.info(f"  Resample Filter:         {config.resample_filter.value}")
    logger.info("=" * 80)


def record_metrics(
    results: List[JobResult], metrics_collector: MetricsCollector
) -> None:
    for result in results:
        metrics_collector.record_metric(
            PerformanceMetrics(
                start_time=result.start_time,
                end_time=result.start_time + result.processing_time,
                success=result.success,
            )
        )


def log_final_statistics(
    total_time: float,
    results: List[JobResult],
    metrics_collector: MetricsCollector,
):
    """Log final processing statistics."""
    logger = get_logger("resizer")
    total_items = len(results)
    overall_rate = total_items / total_time if total_time > 0 else 0
    resized = sum(1 for r in results if r.action == "resized")
    copied = sum(1 for r in results if r.action == "copied")
    failed = sum(1 for r in results if not r.success)
    summary = metrics_collector.get_summary()

    logger.info("=" * 80)
    logger.info("PROCESSING COMPLETED")
    logger.info("=" * 80)
    logger.info(f"Total execution time: {total_time:.1f}s")
    logger.info(f"Overall processing rate: {overall_rate:.1f} images/sec")
    logger.info(f"Resized: {resized}")
    logger.info(f"Copied unchanged: {copied}")
    logger.info(f"Errors encountered: {failed}")
    if summary:
        logger.info(
            f"Job duration min/avg/max: {summary['min_duration']:.2f}s / "
            f"{summary['avg_duration']:.2f}s / {summary['max_duration']:.2f}s"
        )
    logger.info("=" * 80)


def run_processing(
    config: ResizeConfig,
    processor_name: str,
    process_batch_fn: ProcessBatchFunction,
    codec: Optional[ImageCodecProtocol] = None,
) -> List[JobResult]:
    """
    Resize every file matched by ``config.pattern``.

    Raises:
        NoFilesMatchedError: If the pattern matches nothing; no job is started
    """
    logger = get_logger("resizer")
    log_configuration(config, processor_name)
    start_time = time.time()

    source_files = discover_and_validate_files(config)
    jobs = create_jobs(source_files, config)
    logger.info(f"Processing {len(jobs)} images using {processor_name}...")

    with BatchOperationContextManager(
        operation_name=f"Image resizing via {processor_name}"
    ) as batch_manager:
        results = process_batch_fn(jobs, config, codec)
        for result in results:
            if not result.success:
                batch_manager.add_error(
                    item_identifier=result.source_path,
                    error_message=f"{result.error_kind}: {result.error}",
                )

    metrics_collector = MetricsCollector()
    record_metrics(results, metrics_collector)
    log_final_statistics(time.time() - start_time, results, metrics_collector)
    return results
