"""Multiprocess processor implementation - uses process pool for parallelism."""

from typing import List, Optional, Tuple
from concurrent.futures import ProcessPoolExecutor

from ..core import (
    ImageJob,
    JobResult,
    ResizeConfig,
    configure_multiprocessing_logging,
)
from ..core.protocols import ImageCodecProtocol
from .common import collect_result, log_dispatch, process_single_image


def process_single_image_worker(
    args: Tuple[int, int, ImageJob, ResizeConfig]
) -> JobResult:
    """
    Worker function designed for use with a `ProcessPoolExecutor`.

    It configures logging for the current process, then resizes or copies
    one image with a Pillow codec created inside the worker.

    Args:
        args: A tuple `(index: int, total: int, job: ImageJob, config: ResizeConfig)`.

    Returns:
        A `JobResult` object detailing the outcome.
    """
    index, total, job, config = args

    configure_multiprocessing_logging("DEBUG" if config.debug else None)
    log_dispatch(index, total, job)

    return process_single_image(job, config)


def process_batch(
    jobs: List[ImageJob],
    config: ResizeConfig,
    codec: Optional[ImageCodecProtocol] = None,  # codec is unused
) -> List[JobResult]:
    """
    Processes jobs using a `ProcessPoolExecutor` of `config.concurrency` workers.

    Resampling is CPU-bound, so separate processes scale past the GIL. Each
    worker builds its own Pillow codec; the `codec` argument is accepted for
    signature compatibility only.

    Args:
        jobs: Jobs in enumeration order
        config: Resize configuration
        codec: Unused

    Returns:
        One result per job, in enumeration order
    """
    if not jobs:
        return []

    total = len(jobs)
    max_workers = min(config.concurrency, total)

    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            executor.submit(process_single_image_worker, (index, total, job, config))
            for index, job in enumerate(jobs, start=1)
        ]

    return [collect_result(f, job) for f, job in zip(futures, jobs)]
