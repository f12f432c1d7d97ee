"""Storage layer for TimePulse.

Provides the Storage interface the core components depend on and an
in-memory implementation.
"""

from timepulse.storage.base import (
    DuplicateRecordError,
    ProjectRegistry,
    RecordNotFoundError,
    Storage,
    StorageError,
)
from timepulse.storage.memory_storage import MemStorage
from timepulse.storage.sample_data import seed_sample_data

__all__ = [
    "DuplicateRecordError",
    "MemStorage",
    "ProjectRegistry",
    "RecordNotFoundError",
    "Storage",
    "StorageError",
    "seed_sample_data",
]
