"""In-memory merge lock accessor."""

import asyncio
import logging
from collections import Counter
from collections.abc import Iterable

from ..exceptions import DuplicateMergeLockError
from .base import MergeLock, MergeLockAccessor

logger = logging.getLogger(__name__)


class InMemoryMergeLockAccessor(MergeLockAccessor):
    """Merge lock accessor keeping all merge locks in memory.

    Merge locks are loaded lazily on first access. Subclasses provide
    persistence by overriding ``_load`` and ``_persist``. All mutations are
    serialized through an ``asyncio.Lock``.

    Args:
        merge_locks: Initial merge locks
    """

    def __init__(self, merge_locks: Iterable[Iterable[str]] = ()) -> None:
        self._initial_merge_locks = [frozenset(merge_lock) for merge_lock in merge_locks]
        self._merge_locks: dict[str, MergeLock] = {}
        self._write_access = asyncio.Lock()
        self._is_initialized = False

    async def has_merge_lock(self, sources: set[str] | frozenset[str]) -> bool:
        await self._ensure_initialized()
        return bool(sources) and all(source in self._merge_locks for source in sources)

    async def is_part_of_merge_lock(self, source: str) -> bool:
        await self._ensure_initialized()
        return source in self._merge_locks

    async def get_merge_lock(self, source: str) -> MergeLock:
        await self._ensure_initialized()
        return self._merge_locks.get(source, frozenset())

    async def all_sources_in_all_merge_lock_entries(self) -> frozenset[str]:
        await self._ensure_initialized()
        return frozenset(self._merge_locks)

    async def add_merge_lock(self, merge_lock: set[str] | frozenset[str]) -> None:
        merge_lock = frozenset(merge_lock)
        if not merge_lock:
            return

        await self._ensure_initialized()

        async with self._write_access:
            existing = {self._merge_locks[uri] for uri in merge_lock if uri in self._merge_locks}
            if existing == {merge_lock}:
                return

            # Existing merge locks may only be extended, never split up
            conflicting = sorted(
                uri
                for lock in existing
                if not lock <= merge_lock
                for uri in lock & merge_lock
            )
            if conflicting:
                raise DuplicateMergeLockError(
                    f"Sources {conflicting} are already part of a different merge lock"
                )

            logger.debug(f"Adding merge lock {sorted(merge_lock)}")
            for uri in merge_lock:
                self._merge_locks[uri] = merge_lock
            await self._persist()

    async def replace_uri(self, old_uri: str, new_uri: str) -> None:
        await self._ensure_initialized()

        async with self._write_access:
            current = self._merge_locks.get(old_uri)
            if current is None:
                return

            owner = self._merge_locks.get(new_uri)
            if owner is not None and owner != current:
                raise DuplicateMergeLockError(
                    f"Source [{new_uri}] is already part of a different merge lock"
                )

            logger.debug(f"Replacing merge lock entry [{old_uri}] with [{new_uri}]")
            self._replace(current, (current - {old_uri}) | {new_uri})
            await self._persist()

    async def remove_entry(self, uri: str) -> None:
        await self._ensure_initialized()

        async with self._write_access:
            current = self._merge_locks.get(uri)
            if current is None:
                return

            logger.debug(f"Removing [{uri}] from merge locks")
            self._replace(current, current - {uri})
            await self._persist()

    def sorted_merge_locks(self) -> list[list[str]]:
        """Return all merge locks as sorted lists, ordered by their first source."""
        unique = {tuple(sorted(lock)) for lock in self._merge_locks.values()}
        return [list(lock) for lock in sorted(unique)]

    async def _load(self) -> list[MergeLock]:
        return self._initial_merge_locks

    async def _persist(self) -> None:
        pass

    async def _ensure_initialized(self) -> None:
        if self._is_initialized:
            return

        async with self._write_access:
            if not self._is_initialized:
                self._register(await self._load())
                self._is_initialized = True

    def _register(self, merge_locks: list[MergeLock]) -> None:
        occurrences = Counter(uri for merge_lock in merge_locks for uri in merge_lock)
        duplicates = sorted(uri for uri, count in occurrences.items() if count > 1)
        if duplicates:
            raise DuplicateMergeLockError(f"Duplicates found: {duplicates}")

        for merge_lock in merge_locks:
            for uri in merge_lock:
                self._merge_locks[uri] = merge_lock

    def _replace(self, current: MergeLock, updated: MergeLock) -> None:
        for uri in current:
            del self._merge_locks[uri]
        for uri in updated:
            self._merge_locks[uri] = updated
