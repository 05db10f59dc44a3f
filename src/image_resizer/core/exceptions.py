"""Custom exceptions and error handling utilities for the image resizer."""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable, TypeVar

from .logging_config import get_logger


class ImageResizerError(Exception):
    """Base exception for all image resizer errors."""


class ConfigurationError(ImageResizerError):
    """Error raised for invalid configuration options."""


class NoFilesMatchedError(ImageResizerError):
    """Error raised when the glob pattern matches no files."""


class PipelineError(ImageResizerError):
    """Error raised when processing a single image fails.

    Job-scoped: it is reported for the offending file and the batch goes on.
    """

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class OpenError(PipelineError):
    """The source file could not be opened or read."""


class UnsupportedFormatError(PipelineError):
    """The source content is neither JPEG nor PNG."""


class DecodeError(PipelineError):
    """The source content could not be decoded."""


class CopyError(PipelineError):
    """The unchanged source could not be copied to the destination."""


class EncodeError(PipelineError):
    """The scaled image could not be encoded or written."""


F = TypeVar("F", bound=Callable[..., Any])


def with_error_handling(func: F) -> F:
    """Wrap a function with standardized error handling."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:  # type: ignore[override]
        logger = get_logger("resizer")
        try:
            return func(*args, **kwargs)
        except ImageResizerError:
            logger.error("Resizer error", exc_info=True)
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error(f"Unhandled error in {func.__name__}: {exc}", exc_info=True)
            raise PipelineError(str(exc)) from exc

    return wrapper  # type: ignore[return-value]
