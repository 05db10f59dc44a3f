"""Shared data models for the image resizer."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

SCHEDULERS = ("chunked", "multithread", "multiprocess", "serial")


class ImageFormat(str, Enum):
    """Raster formats recognised by content sniffing."""

    JPEG = "JPEG"
    PNG = "PNG"
    UNKNOWN = "UNKNOWN"


class ResampleFilter(str, Enum):
    """Interpolation kernel used when scaling down."""

    FAST = "fast"
    HIGH_QUALITY = "high_quality"


class ResizeConfig(BaseModel):
    """Configuration for a resize run. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    pattern: str = Field(min_length=1)
    prefix: str = "resized_"
    longest_side: int = Field(default=2560, gt=0)
    quality: int = Field(default=100, ge=1, le=100)
    concurrency: int = Field(default=4, gt=0)
    resample_filter: ResampleFilter = ResampleFilter.FAST
    scheduler: str = "chunked"
    debug: bool = False

    @field_validator("scheduler")
    @classmethod
    def _known_scheduler(cls, value: str) -> str:
        if value not in SCHEDULERS:
            raise ValueError(
                f"Unknown scheduler '{value}', expected one of {', '.join(SCHEDULERS)}"
            )
        return value


class ImageJob(BaseModel):
    """A single source file and the path its output is written to."""

    model_config = ConfigDict(frozen=True)

    source_path: str
    destination_path: str


class JobResult(BaseModel):
    """Result of processing a single image."""

    source_path: str
    destination_path: str = ""
    success: bool = False
    action: str = ""
    error: str = ""
    error_kind: str = ""
    original_size: Optional[Tuple[int, int]] = None
    output_size: Optional[Tuple[int, int]] = None
    start_time: float = 0.0
    processing_time: float = 0.0


@dataclass(frozen=True)
class NoResizeNeeded:
    """The image already fits within the longest-side limit."""


@dataclass(frozen=True)
class ResizeTo:
    """The image must be scaled to exactly these dimensions."""

    width: int
    height: int


ResizeDecision = Union[NoResizeNeeded, ResizeTo]
