"""Tests for core data models."""

import pytest
from pydantic import ValidationError

from image_resizer.core.models import (
    ImageFormat,
    ImageJob,
    JobResult,
    NoResizeNeeded,
    ResampleFilter,
    ResizeConfig,
    ResizeTo,
)


class TestResizeConfig:
    """Tests for ResizeConfig."""

    def test_resize_config_defaults(self):
        """Test creating ResizeConfig with the pattern only."""
        config = ResizeConfig(pattern="*.jpg")
        assert config.pattern == "*.jpg"
        assert config.prefix == "resized_"
        assert config.longest_side == 2560
        assert config.quality == 100
        assert config.concurrency == 4
        assert config.resample_filter is ResampleFilter.FAST
        assert config.scheduler == "chunked"
        assert config.debug is False

    def test_resize_config_all_parameters(self):
        """Test creating ResizeConfig with all parameters."""
        config = ResizeConfig(
            pattern="photos/*.png",
            prefix="small_",
            longest_side=1024,
            quality=80,
            concurrency=8,
            resample_filter=ResampleFilter.HIGH_QUALITY,
            scheduler="multithread",
            debug=True,
        )
        assert config.prefix == "small_"
        assert config.longest_side == 1024
        assert config.quality == 80
        assert config.concurrency == 8
        assert config.resample_filter is ResampleFilter.HIGH_QUALITY
        assert config.scheduler == "multithread"
        assert config.debug is True

    def test_resize_config_is_immutable(self):
        """Test that ResizeConfig cannot be modified after creation."""
        config = ResizeConfig(pattern="*.jpg")
        with pytest.raises(ValidationError):
            config.concurrency = 16

    def test_resize_config_accepts_filter_value(self):
        """Test that the resample filter can be given by value."""
        config = ResizeConfig(pattern="*.jpg", resample_filter="high_quality")
        assert config.resample_filter is ResampleFilter.HIGH_QUALITY

    @pytest.mark.parametrize(
        "overrides",
        [
            {"pattern": ""},
            {"longest_side": 0},
            {"longest_side": -5},
            {"quality": 0},
            {"quality": 101},
            {"concurrency": 0},
            {"scheduler": "asyncio"},
        ],
    )
    def test_resize_config_rejects_invalid_values(self, overrides):
        """Test validation of out-of-range values."""
        values = {"pattern": "*.jpg", **overrides}
        with pytest.raises(ValidationError):
            ResizeConfig(**values)


class TestImageJob:
    """Tests for ImageJob."""

    def test_image_job_creation(self):
        """Test creating ImageJob with required parameters."""
        job = ImageJob(source_path="a/b.jpg", destination_path="a/resized_b.jpg")
        assert job.source_path == "a/b.jpg"
        assert job.destination_path == "a/resized_b.jpg"

    def test_image_job_is_immutable(self):
        """Test that ImageJob fields cannot be modified."""
        job = ImageJob(source_path="a/b.jpg", destination_path="a/resized_b.jpg")
        with pytest.raises(ValidationError):
            job.source_path = "c.jpg"

    def test_image_job_is_hashable(self):
        """Test that equal jobs hash equally."""
        first = ImageJob(source_path="x.png", destination_path="resized_x.png")
        second = ImageJob(source_path="x.png", destination_path="resized_x.png")
        assert first == second
        assert len({first, second}) == 1


class TestJobResult:
    """Tests for JobResult."""

    def test_job_result_creation_minimal(self):
        """Test creating JobResult with minimal parameters."""
        result = JobResult(source_path="test.jpg")
        assert result.source_path == "test.jpg"
        assert result.destination_path == ""
        assert result.success is False
        assert result.action == ""
        assert result.error == ""
        assert result.error_kind == ""
        assert result.original_size is None
        assert result.output_size is None
        assert result.start_time == 0.0
        assert result.processing_time == 0.0

    def test_job_result_modification(self):
        """Test that JobResult fields can be filled in as a job progresses."""
        result = JobResult(source_path="test.jpg")
        result.success = True
        result.action = "resized"
        result.original_size = (4000, 2000)
        result.output_size = (2560, 1280)

        assert result.success is True
        assert result.action == "resized"
        assert result.original_size == (4000, 2000)
        assert result.output_size == (2560, 1280)


class TestDecisionTypes:
    """Tests for resize decision values."""

    def test_no_resize_needed_equality(self):
        """Test NoResizeNeeded values compare equal."""
        assert NoResizeNeeded() == NoResizeNeeded()

    def test_resize_to_fields(self):
        """Test ResizeTo carries the target size."""
        decision = ResizeTo(2560, 1280)
        assert decision.width == 2560
        assert decision.height == 1280
        assert decision != ResizeTo(1280, 2560)


class TestEnums:
    """Tests for enum values."""

    def test_image_format_values(self):
        """Test ImageFormat matches Pillow format names."""
        assert ImageFormat.JPEG.value == "JPEG"
        assert ImageFormat.PNG.value == "PNG"

    def test_resample_filter_values(self):
        """Test ResampleFilter values."""
        assert ResampleFilter("fast") is ResampleFilter.FAST
        assert ResampleFilter("high_quality") is ResampleFilter.HIGH_QUALITY
