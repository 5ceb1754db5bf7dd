"""Abstract base class for matching probability calculators."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from common.models.anime import Anime

from ..goldenrecords.base import PotentialGoldenRecord


@dataclass(frozen=True)
class MatchingProbabilityResult:
    """Outcome of comparing an incoming record with a potential golden record.

    Attributes:
        anime: Incoming record
        potential_golden_record: Candidate the record was compared with
        match_probability: Probability in [0, 1] that both describe the same anime
    """

    anime: Anime
    potential_golden_record: PotentialGoldenRecord
    match_probability: float


class MatchingProbabilityCalculator(ABC):
    """Pure and deterministic scorer for a record and a merge candidate."""

    @abstractmethod
    def calculate(
        self, anime: Anime, potential_golden_record: PotentialGoldenRecord
    ) -> MatchingProbabilityResult:
        """Calculate the probability that ``anime`` belongs to the golden record."""
        pass
