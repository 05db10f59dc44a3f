"""Batch image resizer with bounded concurrency."""

__version__ = "0.1.0"
