"""Batch schedulers with different concurrency strategies."""

from .chunked import process_batch as chunked_process_batch
from .multiprocess import process_batch as multiprocess_process_batch
from .multithread import process_batch as multithread_process_batch
from .serial import process_batch as serial_process_batch

__all__ = [
    "chunked_process_batch",
    "multiprocess_process_batch",
    "multithread_process_batch",
    "serial_process_batch",
]
