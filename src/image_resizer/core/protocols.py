"""Protocol definitions for dependency injection and testability."""

from typing import Protocol

from PIL import Image

from .models import ImageFormat, ResampleFilter


class ImageCodecProtocol(Protocol):
    """Protocol for the imaging operations the pipeline depends on."""

    def sniff(self, data: bytes) -> ImageFormat:
        """Detect the format of encoded image bytes from their content."""
        ...

    def decode(self, image_format: ImageFormat, data: bytes) -> Image.Image:
        """Decode image bytes into a fully loaded raster."""
        ...

    def encode(
        self, image_format: ImageFormat, image: Image.Image, quality: int
    ) -> bytes:
        """Encode a raster in the given format."""
        ...

    def scale(
        self,
        image: Image.Image,
        width: int,
        height: int,
        resample_filter: ResampleFilter,
    ) -> Image.Image:
        """Return a new raster of exactly ``width`` x ``height``."""
        ...
