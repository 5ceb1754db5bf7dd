"""In-memory golden record store with a partitioned title index."""

import logging

from common.config.providers import hostname_of
from common.config.settings import Settings, get_settings
from common.models.anime import Anime
from common.utils.id_generation import generate_ulid

from ..exceptions import GoldenRecordNotFoundError
from ..utils.title_normalization import normalize_title
from .base import GoldenRecord, GoldenRecordAccessor, PotentialGoldenRecord

logger = logging.getLogger(__name__)


class InMemoryGoldenRecordAccessor(GoldenRecordAccessor):
    """Golden record store living for the duration of one merge pass.

    Three structures are kept in sync:

    - golden records by id, in creation order
    - source URL to golden record id
    - title index: partition (prefix of the normalized title) to normalized
      title to the ids of all golden records carrying that title or synonym

    Normalized titles shorter than the partition width form their own
    partition, so they are found like any other title.
    """

    def __init__(self, settings: Settings | None = None):
        """Initialize an empty store.

        Args:
            settings: Merging settings, defaults to the cached application settings
        """
        self.settings = settings or get_settings()
        self._golden_records: dict[str, Anime] = {}
        self._creation_order: dict[str, int] = {}
        self._sources: dict[str, str] = {}
        self._titles: dict[str, dict[str, set[str]]] = {}

    def __len__(self) -> int:
        return len(self._golden_records)

    def create_golden_record(self, anime: Anime) -> str:
        golden_record_id = generate_ulid("golden_record")
        self._golden_records[golden_record_id] = anime
        self._creation_order[golden_record_id] = len(self._creation_order)
        self._index(golden_record_id, anime)
        logger.debug(f"Created golden record [{golden_record_id}] for '{anime.title}'")
        return golden_record_id

    def merge(self, golden_record_id: str, anime: Anime) -> Anime:
        existing = self._golden_records.get(golden_record_id)
        if existing is None:
            raise GoldenRecordNotFoundError(
                f"Unable to find golden record [{golden_record_id}]"
            )

        merged = existing.merge_with(anime)
        self._golden_records[golden_record_id] = merged
        self._index(golden_record_id, merged)
        logger.debug(
            f"Merged '{anime.title}' into golden record [{golden_record_id}] '{merged.title}'"
        )
        return merged

    def find_golden_record_by_source(
        self, sources: set[str] | frozenset[str]
    ) -> GoldenRecord | None:
        for source in sorted(sources):
            golden_record_id = self._sources.get(source)
            if golden_record_id is not None:
                return GoldenRecord(
                    id=golden_record_id, anime=self._golden_records[golden_record_id]
                )
        return None

    def find_possible_golden_records(self, anime: Anime) -> list[PotentialGoldenRecord]:
        candidates = self._find_by_title(anime.title)

        if not candidates and self._is_synonym_fallback_applicable(anime):
            synonym = sorted(anime.synonyms)[0]
            logger.debug(f"No candidates for '{anime.title}', retrying with synonym '{synonym}'")
            candidates = self._find_by_title(synonym)

        return candidates

    def clear(self) -> None:
        self._golden_records.clear()
        self._creation_order.clear()
        self._sources.clear()
        self._titles.clear()

    def all_entries(self) -> list[Anime]:
        return list(self._golden_records.values())

    def _partition(self, key: str) -> str:
        return key[: self.settings.title_partition_width]

    def _index(self, golden_record_id: str, anime: Anime) -> None:
        for title in {anime.title, *anime.synonyms}:
            key = normalize_title(title)
            partition = self._titles.setdefault(self._partition(key), {})
            partition.setdefault(key, set()).add(golden_record_id)

        for source in anime.sources:
            self._sources[source] = golden_record_id

    def _find_by_title(self, title: str) -> list[PotentialGoldenRecord]:
        key = normalize_title(title)
        ids = self._titles.get(self._partition(key), {}).get(key, set())
        return [
            PotentialGoldenRecord(id=golden_record_id, anime=self._golden_records[golden_record_id])
            for golden_record_id in sorted(ids, key=self._creation_order.__getitem__)
        ]

    def _is_synonym_fallback_applicable(self, anime: Anime) -> bool:
        if len(anime.sources) != 1 or not anime.synonyms:
            return False
        (source,) = anime.sources
        return hostname_of(source) in self.settings.synonym_fallback_hostnames
