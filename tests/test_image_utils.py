"""Tests for image_utils.py: the Pillow codec and path helpers."""

import io
import os

import pytest
from PIL import Image

from image_resizer.core.exceptions import (
    DecodeError,
    EncodeError,
    UnsupportedFormatError,
)
from image_resizer.core.image_utils import PillowCodec, calculate_destination_path
from image_resizer.core.models import ImageFormat, ResampleFilter
from image_resizer.testing.fakes import create_test_image


@pytest.fixture
def codec():
    return PillowCodec()


class TestCalculateDestinationPath:
    """Tests for calculate_destination_path function."""

    def test_prefix_added_to_base_name(self):
        """Test that the prefix goes in front of the file name."""
        result = calculate_destination_path(os.path.join("photos", "a.jpg"), "resized_")
        assert result == os.path.join("photos", "resized_a.jpg")

    def test_same_directory_as_source(self):
        """Test that the output stays next to the source."""
        source = os.path.join("deep", "nested", "dir", "img.png")
        result = calculate_destination_path(source, "small_")
        assert os.path.dirname(result) == os.path.dirname(source)

    def test_bare_file_name(self):
        """Test a source without a directory component."""
        assert calculate_destination_path("img.png", "resized_") == "resized_img.png"

    def test_empty_prefix(self):
        """Test that an empty prefix keeps the original name."""
        assert calculate_destination_path("img.png", "") == "img.png"


class TestSniff:
    """Tests for content-based format detection."""

    def test_sniff_jpeg(self, codec):
        """Test JPEG bytes are detected."""
        assert codec.sniff(create_test_image(10, 10, "JPEG")) is ImageFormat.JPEG

    def test_sniff_png(self, codec):
        """Test PNG bytes are detected."""
        assert codec.sniff(create_test_image(10, 10, "PNG")) is ImageFormat.PNG

    @pytest.mark.parametrize("image_format", ["GIF", "BMP"])
    def test_sniff_other_image_formats_unknown(self, codec, image_format):
        """Test that other raster formats are reported as unknown."""
        assert codec.sniff(create_test_image(10, 10, image_format)) is ImageFormat.UNKNOWN

    def test_sniff_text_unknown(self, codec):
        """Test that non-image bytes are unknown."""
        assert codec.sniff(b"This is not an image") is ImageFormat.UNKNOWN

    def test_sniff_empty_unknown(self, codec):
        """Test that empty input is unknown."""
        assert codec.sniff(b"") is ImageFormat.UNKNOWN

    def test_sniff_ignores_header_only_content(self, codec):
        """Test that a bare signature is enough to classify the content."""
        assert codec.sniff(b"\x89PNG\r\n\x1a\n") is ImageFormat.PNG
        assert codec.sniff(b"\xff\xd8\xff\xe0") is ImageFormat.JPEG


class TestDecode:
    """Tests for decoding."""

    def test_decode_jpeg(self, codec):
        """Test decoding a JPEG yields a loaded image of the right size."""
        image = codec.decode(ImageFormat.JPEG, create_test_image(64, 32, "JPEG"))
        assert image.size == (64, 32)
        assert image.format == "JPEG"

    def test_decode_png(self, codec):
        """Test decoding a PNG."""
        image = codec.decode(ImageFormat.PNG, create_test_image(20, 40, "PNG", mode="RGBA"))
        assert image.size == (20, 40)
        assert image.mode == "RGBA"

    def test_decode_truncated_raises_decode_error(self, codec):
        """Test that a valid header with a cut-off body fails to decode."""
        data = create_test_image(200, 200, "JPEG")
        with pytest.raises(DecodeError):
            codec.decode(ImageFormat.JPEG, data[: len(data) // 2])

    def test_decode_garbage_with_signature_raises_decode_error(self, codec):
        """Test that a PNG signature followed by garbage fails to decode."""
        with pytest.raises(DecodeError):
            codec.decode(ImageFormat.PNG, b"\x89PNG\r\n\x1a\n" + b"garbage" * 10)

    def test_decode_mismatched_format_raises_decode_error(self, codec):
        """Test decoding PNG bytes as JPEG fails."""
        with pytest.raises(DecodeError):
            codec.decode(ImageFormat.JPEG, create_test_image(10, 10, "PNG"))

    def test_decode_unknown_format_raises(self, codec):
        """Test that UNKNOWN cannot be decoded."""
        with pytest.raises(UnsupportedFormatError):
            codec.decode(ImageFormat.UNKNOWN, b"whatever")


class TestScale:
    """Tests for scaling."""

    @pytest.mark.parametrize(
        "resample_filter", [ResampleFilter.FAST, ResampleFilter.HIGH_QUALITY]
    )
    def test_scale_to_exact_size(self, codec, resample_filter):
        """Test the result has exactly the requested size."""
        source = Image.new("RGB", (400, 200), color="red")
        scaled = codec.scale(source, 100, 50, resample_filter)
        assert scaled.size == (100, 50)
        assert scaled is not source

    def test_scale_palette_image_goes_through_rgba(self, codec):
        """Test that palette images are scaled as RGBA."""
        source = Image.new("P", (40, 40))
        scaled = codec.scale(source, 10, 10, ResampleFilter.FAST)
        assert scaled.mode == "RGBA"
        assert scaled.size == (10, 10)

    def test_scale_keeps_grayscale(self, codec):
        """Test that L images stay L."""
        source = Image.new("L", (40, 40), color=200)
        assert codec.scale(source, 20, 20, ResampleFilter.HIGH_QUALITY).mode == "L"

    def test_scale_preserves_solid_color(self, codec):
        """Test that a uniform image stays uniform."""
        source = Image.new("RGB", (300, 300), color=(10, 200, 30))
        scaled = codec.scale(source, 30, 30, ResampleFilter.FAST)
        assert scaled.getpixel((15, 15)) == (10, 200, 30)


class TestEncode:
    """Tests for encoding."""

    def test_encode_jpeg_round_trip_format(self, codec):
        """Test JPEG output decodes as JPEG."""
        data = codec.encode(ImageFormat.JPEG, Image.new("RGB", (30, 20)), 90)
        with Image.open(io.BytesIO(data)) as reopened:
            assert reopened.format == "JPEG"
            assert reopened.size == (30, 20)

    def test_encode_png_round_trip_format(self, codec):
        """Test PNG output decodes as PNG."""
        data = codec.encode(ImageFormat.PNG, Image.new("RGBA", (30, 20)), 90)
        with Image.open(io.BytesIO(data)) as reopened:
            assert reopened.format == "PNG"
            assert reopened.mode == "RGBA"

    def test_encode_jpeg_flattens_alpha(self, codec):
        """Test that RGBA input is written as RGB JPEG."""
        data = codec.encode(ImageFormat.JPEG, Image.new("RGBA", (16, 16)), 90)
        with Image.open(io.BytesIO(data)) as reopened:
            assert reopened.mode == "RGB"

    def test_encode_quality_affects_jpeg_only(self, codec):
        """Test that quality changes JPEG output but not PNG output."""
        noisy = Image.effect_noise((128, 128), 64).convert("RGB")

        low = codec.encode(ImageFormat.JPEG, noisy, 10)
        high = codec.encode(ImageFormat.JPEG, noisy, 100)
        assert len(low) < len(high)

        assert codec.encode(ImageFormat.PNG, noisy, 10) == codec.encode(
            ImageFormat.PNG, noisy, 100
        )

    def test_encode_unknown_format_raises(self, codec):
        """Test that UNKNOWN cannot be encoded."""
        with pytest.raises(EncodeError):
            codec.encode(ImageFormat.UNKNOWN, Image.new("RGB", (4, 4)), 90)
