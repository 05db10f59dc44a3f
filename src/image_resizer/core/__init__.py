"""Core utilities and shared components for the image resizer."""

from .image_utils import (
    PillowCodec,
    calculate_destination_path,
)
from .logging_config import (
    configure_multiprocessing_logging,
    get_logger,
    setup_logger,
)
from .exceptions import (
    ImageResizerError,
    ConfigurationError,
    NoFilesMatchedError,
    PipelineError,
    OpenError,
    UnsupportedFormatError,
    DecodeError,
    CopyError,
    EncodeError,
    with_error_handling,
)
from .models import (
    ImageFormat,
    ImageJob,
    JobResult,
    NoResizeNeeded,
    ResampleFilter,
    ResizeConfig,
    ResizeTo,
)
from .policy import decide

__all__ = [
    "ResizeConfig",
    "ImageJob",
    "JobResult",
    "ImageFormat",
    "ResampleFilter",
    "NoResizeNeeded",
    "ResizeTo",
    "decide",
    "PillowCodec",
    "calculate_destination_path",
    "setup_logger",
    "get_logger",
    "configure_multiprocessing_logging",
    "ImageResizerError",
    "ConfigurationError",
    "NoFilesMatchedError",
    "PipelineError",
    "OpenError",
    "UnsupportedFormatError",
    "DecodeError",
    "CopyError",
    "EncodeError",
    "with_error_handling",
]
