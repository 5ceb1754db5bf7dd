"""Merge lock accessor backed by a JSON file.

File format::

    {
      "mergeLocks": [
        ["https://anidb.net/anime/6751", "https://myanimelist.net/anime/6682"]
      ]
    }
"""

import asyncio
import json
import logging
from pathlib import Path

from .base import MergeLock
from .in_memory import InMemoryMergeLockAccessor

logger = logging.getLogger(__name__)

MERGE_LOCKS_KEY = "mergeLocks"


class FileMergeLockAccessor(InMemoryMergeLockAccessor):
    """Merge lock accessor reading from and writing to a JSON file.

    The file is read on first access. A missing file is treated as an empty
    list of merge locks. Every mutation rewrites the whole file with sorted
    merge locks, so the file stays diff-friendly.

    Args:
        merge_lock_file: Path of the JSON file
    """

    def __init__(self, merge_lock_file: Path | str) -> None:
        super().__init__()
        self.merge_lock_file = Path(merge_lock_file)

    async def _load(self) -> list[MergeLock]:
        if not self.merge_lock_file.is_file():
            logger.warning(f"Merge lock file {self.merge_lock_file} does not exist")
            return []

        logger.info(f"Loading merge lock file {self.merge_lock_file}")
        content = await asyncio.to_thread(self.merge_lock_file.read_text, encoding="utf-8")
        data = json.loads(content)
        return [frozenset(merge_lock) for merge_lock in data.get(MERGE_LOCKS_KEY, [])]

    async def _persist(self) -> None:
        content = json.dumps(
            {MERGE_LOCKS_KEY: self.sorted_merge_locks()}, ensure_ascii=False, indent=2
        )
        await asyncio.to_thread(self._write, content)

    def _write(self, content: str) -> None:
        self.merge_lock_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.merge_lock_file, "w", encoding="utf-8") as f:
            f.write(content)
