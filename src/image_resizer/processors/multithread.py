"""Multithreaded processor implementation - a fixed-size thread pool."""

from typing import List, Optional
from concurrent.futures import ThreadPoolExecutor

from ..core import ImageJob, JobResult, ResizeConfig
from ..core.protocols import ImageCodecProtocol
from .common import collect_result, log_dispatch, process_single_image


def _run_job(
    index: int,
    total: int,
    job: ImageJob,
    config: ResizeConfig,
    codec: Optional[ImageCodecProtocol],
) -> JobResult:
    log_dispatch(index, total, job)
    return process_single_image(job, config, codec)


def process_batch(
    jobs: List[ImageJob],
    config: ResizeConfig,
    codec: Optional[ImageCodecProtocol] = None,
) -> List[JobResult]:
    """
    Process jobs on a pool of ``config.concurrency`` threads.

    A free thread picks up the next job immediately, so there is no barrier
    between groups of jobs. Pillow releases the GIL in its C codecs and
    resamplers, which lets threads overlap the heavy work.

    Args:
        jobs: Jobs in enumeration order
        config: Resize configuration
        codec: Imaging backend (defaults to Pillow)

    Returns:
        One result per job, in enumeration order
    """
    if not jobs:
        return []

    total = len(jobs)
    max_workers = min(config.concurrency, total)

    with ThreadPoolExecutor(
        max_workers=max_workers, thread_name_prefix="resize-worker"
    ) as executor:
        futures = [
            executor.submit(_run_job, index, total, job, config, codec)
            for index, job in enumerate(jobs, start=1)
        ]

    return [collect_result(f, job) for f, job in zip(futures, jobs)]
