"""Merging orchestrator resolving per-provider records into golden records.

Each record of a batch is either folded into an existing golden record,
turned into a new golden record or, if the evidence is ambiguous, deferred.
Deferred records are reconsidered in follow-up runs of the same pass, once
the records processed after them have been added to the store. Records that
are still ambiguous after the last run are returned unchanged.
"""

import logging

from common.config.settings import Settings, get_settings
from common.models.anime import Anime

from .goldenrecords.base import GoldenRecordAccessor
from .goldenrecords.in_memory import InMemoryGoldenRecordAccessor
from .lock.base import MergeLockAccessor
from .lock.file import FileMergeLockAccessor
from .lock.in_memory import InMemoryMergeLockAccessor
from .matching.base import MatchingProbabilityCalculator, MatchingProbabilityResult
from .matching.calculator import DefaultMatchingProbabilityCalculator

logger = logging.getLogger(__name__)


class MergingService:
    """Batch merging of anime records from different metadata providers.

    The store is cleared at the start of every pass, so one instance must not
    be used for concurrent passes.

    Args:
        golden_record_accessor: Store and candidate index for golden records
        merge_lock_accessor: Curated merge locks
        matching_probability_calculator: Scorer for candidates
        settings: Threshold and number of runs
    """

    def __init__(
        self,
        golden_record_accessor: GoldenRecordAccessor,
        merge_lock_accessor: MergeLockAccessor,
        matching_probability_calculator: MatchingProbabilityCalculator,
        settings: Settings | None = None,
    ) -> None:
        self.golden_record_accessor = golden_record_accessor
        self.merge_lock_accessor = merge_lock_accessor
        self.matching_probability_calculator = matching_probability_calculator
        self.settings = settings or get_settings()

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "MergingService":
        """Create a service with the default components configured by ``settings``.

        Merge locks are read from ``settings.merge_lock_file`` if it is set.
        """
        settings = settings or get_settings()

        merge_lock_accessor: MergeLockAccessor
        if settings.merge_lock_file is not None:
            merge_lock_accessor = FileMergeLockAccessor(settings.merge_lock_file)
        else:
            merge_lock_accessor = InMemoryMergeLockAccessor()

        return cls(
            golden_record_accessor=InMemoryGoldenRecordAccessor(settings),
            merge_lock_accessor=merge_lock_accessor,
            matching_probability_calculator=DefaultMatchingProbabilityCalculator(settings),
            settings=settings,
        )

    async def merge(self, records: list[Anime]) -> list[Anime]:
        """Merge a batch of records.

        Args:
            records: Per-provider records, processed in the given order

        Returns:
            All golden records followed by the records that could not be
            resolved unambiguously. Compare as a set, not as a sequence.
        """
        self.golden_record_accessor.clear()

        pending = list(records)
        max_runs = self.settings.merge_max_runs

        for run in range(1, max_runs + 1):
            if not pending:
                break

            logger.info(f"Run: {run}/{max_runs} - merging [{len(pending)}] entries")
            deferred = [anime for anime in pending if not await self._merge_entry(anime)]

            # A follow-up run without progress leaves the store unchanged
            stalled = run > 1 and len(deferred) == len(pending)
            pending = deferred
            if stalled:
                break

        if pending:
            logger.info(f"Returning [{len(pending)}] ambiguous entries unmerged")

        return self.golden_record_accessor.all_entries() + pending

    async def _merge_entry(self, anime: Anime) -> bool:
        """Resolve a single record, returns ``False`` if it has been deferred."""
        logger.debug(f"Merging {sorted(anime.sources)}")

        if await self.merge_lock_accessor.has_merge_lock(anime.sources):
            await self._handle_merge_lock(anime)
            return True

        possible_golden_records = self.golden_record_accessor.find_possible_golden_records(anime)
        logger.debug(
            f"Found [{len(possible_golden_records)}] possible golden records for {sorted(anime.sources)}"
        )

        results = [
            self.matching_probability_calculator.calculate(anime, potential_golden_record)
            for potential_golden_record in possible_golden_records
        ]

        match results:
            case []:
                self.golden_record_accessor.create_golden_record(anime)
                return True
            case [result]:
                self._found_exactly_one_golden_record(result)
                return True
            case _:
                return self._found_multiple_golden_records(results)

    async def _handle_merge_lock(self, anime: Anime) -> None:
        merge_lock: set[str] = set()
        for source in anime.sources:
            merge_lock |= await self.merge_lock_accessor.get_merge_lock(source)

        logger.info(f"Found merge lock {sorted(merge_lock)} for {sorted(anime.sources)}")

        golden_record = self.golden_record_accessor.find_golden_record_by_source(merge_lock)
        if golden_record is None:
            self.golden_record_accessor.create_golden_record(anime)
        else:
            self.golden_record_accessor.merge(golden_record.id, anime)

    def _found_exactly_one_golden_record(self, result: MatchingProbabilityResult) -> None:
        golden_record = result.potential_golden_record
        logger.debug(
            f"Found golden record {sorted(golden_record.anime.sources)} for "
            f"{sorted(result.anime.sources)} with probability [{result.match_probability}]"
        )

        if result.match_probability >= self.settings.merge_equality_threshold:
            self.golden_record_accessor.merge(golden_record.id, result.anime)
        else:
            self.golden_record_accessor.create_golden_record(result.anime)

    def _found_multiple_golden_records(self, results: list[MatchingProbabilityResult]) -> bool:
        accepted = sorted(
            (r for r in results if r.match_probability >= self.settings.merge_equality_threshold),
            key=lambda r: r.match_probability,
            reverse=True,
        )

        if not accepted:
            logger.debug(f"No candidate is likely enough for {sorted(results[0].anime.sources)}, deferring")
            return False

        if len(accepted) > 1 and accepted[0].match_probability == accepted[1].match_probability:
            logger.debug(f"No clear winner among candidates for {sorted(results[0].anime.sources)}, deferring")
            return False

        identified = accepted[0]
        logger.debug(
            f"Identified golden record {sorted(identified.potential_golden_record.anime.sources)} "
            f"for {sorted(identified.anime.sources)} with a probability of [{identified.match_probability}]"
        )
        self.golden_record_accessor.merge(identified.potential_golden_record.id, identified.anime)
        return True
