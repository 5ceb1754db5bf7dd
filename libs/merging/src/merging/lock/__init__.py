"""Merge locks: curated sources that are merged regardless of their matching probability."""

from .base import MergeLock, MergeLockAccessor
from .file import FileMergeLockAccessor
from .in_memory import InMemoryMergeLockAccessor

__all__ = [
    "FileMergeLockAccessor",
    "InMemoryMergeLockAccessor",
    "MergeLock",
    "MergeLockAccessor",
]
