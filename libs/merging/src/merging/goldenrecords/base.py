"""Abstract base class for golden record stores."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from common.models.anime import Anime


@dataclass
class GoldenRecord:
    """Accepted, merged representation of one anime across providers.

    Attributes:
        id: Identifier assigned at creation, never reused
        anime: Current merged record, replaced on every merge
    """

    id: str
    anime: Anime


@dataclass(frozen=True)
class PotentialGoldenRecord:
    """Read-only view of a golden record returned as merge candidate.

    Attributes:
        id: Identifier of the golden record, used to merge into it
        anime: Snapshot of the golden record at lookup time
    """

    id: str
    anime: Anime


class GoldenRecordAccessor(ABC):
    """Abstract base class for the golden record store and its candidate index.

    Golden records are only ever changed through ``merge``. Duplicate
    suppression is left to the caller.
    """

    # ==================== Creation & Merging ====================

    @abstractmethod
    def create_golden_record(self, anime: Anime) -> str:
        """Create a new golden record without any duplicate check and return its id."""
        pass

    @abstractmethod
    def merge(self, golden_record_id: str, anime: Anime) -> Anime:
        """Merge ``anime`` into the golden record with the given id.

        Raises:
            GoldenRecordNotFoundError: If the id is unknown
        """
        pass

    # ==================== Lookup ====================

    @abstractmethod
    def find_golden_record_by_source(self, sources: set[str] | frozenset[str]) -> GoldenRecord | None:
        """Find the golden record containing any of the given sources."""
        pass

    @abstractmethod
    def find_possible_golden_records(self, anime: Anime) -> list[PotentialGoldenRecord]:
        """Find candidates whose normalized title or synonym equals the normalized title of ``anime``."""
        pass

    # ==================== Housekeeping ====================

    @abstractmethod
    def clear(self) -> None:
        """Drop all golden records and indexes."""
        pass

    @abstractmethod
    def all_entries(self) -> list[Anime]:
        """Return all golden records in creation order."""
        pass
