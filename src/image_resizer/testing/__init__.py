"""Testing utilities and fakes for the image resizer."""

from .fakes import (
    FakeLogger,
    TrackingCodec,
    create_test_image,
    write_test_image,
)

__all__ = [
    "FakeLogger",
    "TrackingCodec",
    "create_test_image",
    "write_test_image",
]
