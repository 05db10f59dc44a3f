#!/usr/bin/env python3
"""
Batch Image Resizer CLI

Glob → Read → Sniff (JPEG/PNG) → Resize to the longest side, or copy unchanged
Supports several concurrency strategies: chunked, multithread, multiprocess, serial
"""

import sys
import argparse
import logging
from typing import Dict, List, Optional, Tuple

from pydantic import ValidationError

from .core import ConfigurationError, NoFilesMatchedError, ResizeConfig, get_logger
from .core.models import SCHEDULERS, ResampleFilter
from .processors.common import ProcessBatchFunction, run_processing
from .processors import (
    chunked_process_batch,
    multiprocess_process_batch,
    multithread_process_batch,
    serial_process_batch,
)

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_JOB_FAILURES = 2

PROCESSORS: Dict[str, Tuple[str, ProcessBatchFunction]] = {
    "chunked": ("Chunked", chunked_process_batch),
    "multithread": ("Multithreaded", multithread_process_batch),
    "multiprocess": ("Multiprocess", multiprocess_process_batch),
    "serial": ("Serial", serial_process_batch),
}


def add_resize_arguments(parser: argparse.ArgumentParser) -> None:
    """Register the resize options on ``parser``."""
    parser.add_argument(
        "-p",
        "--pattern",
        required=True,
        help="File glob pattern to search for image files",
    )
    parser.add_argument(
        "--prefix",
        "--pre",
        default="resized_",
        help="Prefix added to the resized image files' name (default: resized_)",
    )
    parser.add_argument(
        "--longest-side",
        "--long",
        type=int,
        default=2560,
        help="The length in pixels of the long side to resize the image to (default: 2560)",
    )
    parser.add_argument(
        "-q",
        "--quality",
        type=int,
        default=100,
        help="JPEG quality of the output image file, 1-100. Only used for JPEG (default: 100)",
    )
    parser.add_argument(
        "-c",
        "--concurrency",
        type=int,
        default=4,
        help="Concurrent conversions allowed. This is usually memory bound (default: 4)",
    )
    parser.add_argument(
        "--high-quality-resize",
        "--betterResize",
        action="store_true",
        help="Use bicubic (Catmull-Rom) instead of bilinear resampling",
    )
    parser.add_argument(
        "--scheduler",
        type=str,
        default="chunked",
        choices=list(SCHEDULERS),
        help="Concurrency strategy to use (default: chunked)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parses command-line arguments for the image resizer.

    Args:
        argv: Argument list; defaults to ``sys.argv[1:]``

    Returns:
        An `argparse.Namespace` object containing the parsed arguments.
    """
    parser = argparse.ArgumentParser(
        description="Resize images matched by a glob pattern down to a longest side"
    )
    add_resize_arguments(parser)
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> ResizeConfig:
    """
    Build an immutable configuration from parsed arguments.

    Raises:
        ConfigurationError: If any value is out of range
    """
    try:
        return ResizeConfig(
            pattern=args.pattern,
            prefix=args.prefix,
            longest_side=args.longest_side,
            quality=args.quality,
            concurrency=args.concurrency,
            resample_filter=(
                ResampleFilter.HIGH_QUALITY
                if args.high_quality_resize
                else ResampleFilter.FAST
            ),
            scheduler=args.scheduler,
            debug=args.debug,
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the image resizer.

    Parses arguments, builds the configuration, selects the scheduler and
    runs the batch.

    Returns:
        0 when every job succeeded, 2 when at least one job failed and 1 on a
        fatal error (invalid configuration or no matching files).
    """
    logger = get_logger("resizer")
    args: argparse.Namespace = parse_args(argv)

    if args.debug:
        logger.setLevel(logging.DEBUG)

    try:
        config = build_config(args)
        processor_name, process_batch_fn = PROCESSORS[config.scheduler]
        results = run_processing(config, processor_name, process_batch_fn)

    except ConfigurationError as e:
        logger.error(f"[Main][Error] {e}")
        return EXIT_FATAL
    except NoFilesMatchedError as e:
        logger.error(f"[Main][Error] {e}")
        return EXIT_FATAL
    except KeyboardInterrupt:
        logger.warning("Processing interrupted by user.")
        return EXIT_FATAL

    if any(not result.success for result in results):
        return EXIT_JOB_FAILURES
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
