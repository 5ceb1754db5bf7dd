"""Golden record store and candidate index."""

from .base import GoldenRecord, GoldenRecordAccessor, PotentialGoldenRecord
from .in_memory import InMemoryGoldenRecordAccessor

__all__ = [
    "GoldenRecord",
    "GoldenRecordAccessor",
    "InMemoryGoldenRecordAccessor",
    "PotentialGoldenRecord",
]
