"""Abstract base class for merge lock accessors."""

from abc import ABC, abstractmethod

MergeLock = frozenset[str]


class MergeLockAccessor(ABC):
    """Curated sets of source URLs that always belong to one golden record.

    Every source is part of at most one merge lock.
    """

    # ==================== Queries ====================

    @abstractmethod
    async def has_merge_lock(self, sources: set[str] | frozenset[str]) -> bool:
        """Check whether every one of the given sources is part of a merge lock."""
        pass

    @abstractmethod
    async def is_part_of_merge_lock(self, source: str) -> bool:
        """Check whether the source is part of a merge lock."""
        pass

    @abstractmethod
    async def get_merge_lock(self, source: str) -> MergeLock:
        """Return the merge lock containing the source, empty if there is none."""
        pass

    @abstractmethod
    async def all_sources_in_all_merge_lock_entries(self) -> frozenset[str]:
        """Return every source of every merge lock."""
        pass

    # ==================== Mutations ====================

    @abstractmethod
    async def add_merge_lock(self, merge_lock: set[str] | frozenset[str]) -> None:
        """Add a merge lock.

        Raises:
            DuplicateMergeLockError: If one of the sources is already part of
                a different merge lock
        """
        pass

    @abstractmethod
    async def replace_uri(self, old_uri: str, new_uri: str) -> None:
        """Replace a source within its merge lock, e.g. after a provider changed its ids."""
        pass

    @abstractmethod
    async def remove_entry(self, uri: str) -> None:
        """Remove a source from its merge lock."""
        pass
