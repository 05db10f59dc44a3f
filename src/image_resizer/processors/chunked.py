"""Chunked processor implementation - bulk-synchronous batches of worker threads."""

from concurrent.futures import ThreadPoolExecutor, wait
from typing import List, Optional

from ..core import ImageJob, JobResult, ResizeConfig
from ..core.protocols import ImageCodecProtocol
from .common import collect_result, log_dispatch, process_single_image


def process_batch(
    jobs: List[ImageJob],
    config: ResizeConfig,
    codec: Optional[ImageCodecProtocol] = None,
) -> List[JobResult]:
    """
    Process jobs in consecutive chunks of at most ``config.concurrency``.

    Every job in a chunk gets its own worker thread. The next chunk starts
    only after every job of the current one has finished, successfully or
    not, so a slow job delays the following chunk even when other slots are
    already idle.

    Args:
        jobs: Jobs in enumeration order
        config: Resize configuration
        codec: Imaging backend (defaults to Pillow)

    Returns:
        One result per job, in enumeration order
    """
    results: List[JobResult] = []
    total = len(jobs)

    for chunk_start in range(0, total, config.concurrency):
        chunk = jobs[chunk_start : chunk_start + config.concurrency]

        with ThreadPoolExecutor(
            max_workers=len(chunk), thread_name_prefix="resize-chunk"
        ) as executor:
            futures = []
            for offset, job in enumerate(chunk, start=1):
                log_dispatch(chunk_start + offset, total, job)
                futures.append(
                    executor.submit(process_single_image, job, config, codec)
                )
            wait(futures)

        results.extend(collect_result(f, job) for f, job in zip(futures, chunk))

    return results
