"""Image processing utilities for the image resizer."""

import io
import os
from typing import Dict, Optional, Tuple

from PIL import Image, UnidentifiedImageError

from .exceptions import DecodeError, EncodeError, UnsupportedFormatError
from .models import ImageFormat, ResampleFilter

SUPPORTED_FORMATS: Tuple[ImageFormat, ...] = (ImageFormat.JPEG, ImageFormat.PNG)

RESAMPLE_FILTERS: Dict[ResampleFilter, Image.Resampling] = {
    ResampleFilter.FAST: Image.Resampling.BILINEAR,
    # Pillow's bicubic kernel uses a = -0.5, i.e. Catmull-Rom
    ResampleFilter.HIGH_QUALITY: Image.Resampling.BICUBIC,
}

# Modes that resize directly; everything else goes through RGBA first
_SCALABLE_MODES = ("RGB", "RGBA", "L")
_JPEG_MODES = ("RGB", "L", "CMYK")

_DECODE_ERRORS = (
    OSError,
    SyntaxError,
    ValueError,
    UnidentifiedImageError,
    Image.DecompressionBombError,
)


class PillowCodec:
    """Sniff, decode, scale and encode JPEG/PNG images with Pillow."""

    def sniff(self, data: bytes) -> ImageFormat:
        """
        Detect the format from the leading bytes, ignoring any file name.

        Uses the acceptance checks Pillow registers for its JPEG and PNG
        plugins, so only the magic signature is inspected.

        Args:
            data: Encoded image bytes (the first few are enough)

        Returns:
            The detected format, or ``ImageFormat.UNKNOWN``
        """
        Image.init()
        prefix = data[:16]
        for image_format in SUPPORTED_FORMATS:
            _factory, accept = Image.OPEN[image_format.value]
            if accept is not None and accept(prefix):
                return image_format
        return ImageFormat.UNKNOWN

    def decode(self, image_format: ImageFormat, data: bytes) -> Image.Image:
        """
        Decode ``data`` as ``image_format`` and load its pixels.

        Raises:
            UnsupportedFormatError: If the format is not JPEG or PNG
            DecodeError: If Pillow cannot decode the content
        """
        if image_format not in SUPPORTED_FORMATS:
            raise UnsupportedFormatError(f"Cannot decode format {image_format.value}")

        image: Optional[Image.Image] = None
        try:
            image = Image.open(io.BytesIO(data), formats=[image_format.value])
            image.load()
        except _DECODE_ERRORS as exc:
            if image is not None:
                image.close()
            raise DecodeError(f"Error decoding as {image_format.value}: {exc}") from exc
        return image

    def scale(
        self,
        image: Image.Image,
        width: int,
        height: int,
        resample_filter: ResampleFilter,
    ) -> Image.Image:
        """Scale ``image`` to ``width`` x ``height`` with the configured kernel."""
        resample = RESAMPLE_FILTERS[resample_filter]
        if image.mode in _SCALABLE_MODES:
            return image.resize((width, height), resample)

        with image.convert("RGBA") as working:
            return working.resize((width, height), resample)

    def encode(
        self, image_format: ImageFormat, image: Image.Image, quality: int
    ) -> bytes:
        """
        Encode ``image`` as ``image_format``.

        ``quality`` is honoured for JPEG only; PNG is lossless.

        Raises:
            EncodeError: If the format is unsupported or Pillow fails to write
        """
        output = io.BytesIO()
        try:
            if image_format == ImageFormat.JPEG:
                if image.mode in _JPEG_MODES:
                    image.save(output, format="JPEG", quality=quality)
                else:
                    with image.convert("RGB") as flattened:
                        flattened.save(output, format="JPEG", quality=quality)
            elif image_format == ImageFormat.PNG:
                image.save(output, format="PNG")
            else:
                raise EncodeError(f"Cannot encode format {image_format.value}")
        except (OSError, ValueError, KeyError) as exc:
            raise EncodeError(f"Error encoding as {image_format.value}: {exc}") from exc
        return output.getvalue()


def calculate_destination_path(source_path: str, prefix: str) -> str:
    """
    Calculate the output path for a source file.

    The output lives next to the source, with ``prefix`` prepended to the
    base name.

    Args:
        source_path: Path of the matched source file
        prefix: String prepended to the base file name

    Returns:
        Destination path
    """
    directory, base_name = os.path.split(source_path)
    return os.path.join(directory, f"{prefix}{base_name}")
