"""Serial processor implementation - processes images one by one."""

from typing import List, Optional

from ..core import ImageJob, JobResult, ResizeConfig
from ..core.protocols import ImageCodecProtocol
from .common import failed_result, log_dispatch, process_single_image


def process_batch(
    jobs: List[ImageJob],
    config: ResizeConfig,
    codec: Optional[ImageCodecProtocol] = None,
) -> List[JobResult]:
    """
    Processes jobs serially, one by one, in the current thread.

    ``config.concurrency`` is ignored: at most one decoded image exists at a
    time.

    Args:
        jobs: Jobs in enumeration order
        config: Resize configuration
        codec: Imaging backend (defaults to Pillow)

    Returns:
        One result per job, in enumeration order
    """
    results = []
    total = len(jobs)

    for index, job in enumerate(jobs, start=1):
        log_dispatch(index, total, job)
        try:
            result = process_single_image(job, config, codec)
        except Exception as e:
            result = failed_result(job, e)
        results.append(result)

    return results
