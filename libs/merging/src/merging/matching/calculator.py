"""Default matching probability calculator.

The probability is the weighted mean of per-attribute similarities over the
attributes that are known on both sides. It is truncated to two decimals.
"""

import logging
import math

from rapidfuzz.distance import JaroWinkler

from common.config.settings import Settings, get_settings
from common.models.anime import Anime, AnimeType

from ..goldenrecords.base import PotentialGoldenRecord
from ..utils.number_similarity import weighted_probability_of_two_numbers_being_equal
from ..utils.title_normalization import normalize_title
from .base import MatchingProbabilityCalculator, MatchingProbabilityResult
from .weights import MatchAttribute, applicable_attributes, normalized_weights

logger = logging.getLogger(__name__)

# Providers disagree on whether short web releases are specials or ONAs
_PARTIALLY_MATCHING_TYPES = frozenset({AnimeType.SPECIAL, AnimeType.ONA})
_PARTIAL_TYPE_SIMILARITY = 0.4

_EPISODES_FACTOR = 4
_YEAR_FACTOR = 3
_DURATION_FACTOR = 2

_SECONDS_PER_HOUR = 3600
_SECONDS_PER_MINUTE = 60


def title_similarity(title: str, other: str) -> float:
    """Jaro-Winkler similarity of the normalized titles.

    Example:
        >>> title_similarity("Cowboy Bebop", "COWBOY BEBOP!")
        1.0
    """
    key = normalize_title(title)
    other_key = normalize_title(other)

    if key == other_key:
        return 1.0

    return JaroWinkler.similarity(key, other_key)


def type_similarity(anime_type: AnimeType, other: AnimeType) -> float:
    if anime_type == other:
        return 1.0

    if {anime_type, other} == _PARTIALLY_MATCHING_TYPES:
        return _PARTIAL_TYPE_SIMILARITY

    return 0.0


def duration_similarity(seconds: int, other: int) -> float:
    """Compare two durations on the coarsest unit both exceed.

    Two durations of several hours are compared in hours, two durations of
    several minutes in minutes, so that the result does not depend on the
    unit a provider used.
    """
    if seconds > _SECONDS_PER_HOUR and other > _SECONDS_PER_HOUR:
        seconds //= _SECONDS_PER_HOUR
        other //= _SECONDS_PER_HOUR

    if seconds > _SECONDS_PER_MINUTE and other > _SECONDS_PER_MINUTE:
        seconds //= _SECONDS_PER_MINUTE
        other //= _SECONDS_PER_MINUTE

    return weighted_probability_of_two_numbers_being_equal(seconds, other, _DURATION_FACTOR)


class DefaultMatchingProbabilityCalculator(MatchingProbabilityCalculator):
    """Weighted multi-attribute matching probability.

    Attributes unknown on either side are left out and the base weights of
    the remaining ones are renormalized. A structurally identical pair scores
    exactly 1.0 and a pair without anything in common exactly 0.0.
    """

    def __init__(self, settings: Settings | None = None):
        """Initialize the calculator.

        Args:
            settings: Merging settings providing the base weights, defaults to
                the cached application settings
        """
        self.settings = settings or get_settings()

    def calculate(
        self, anime: Anime, potential_golden_record: PotentialGoldenRecord
    ) -> MatchingProbabilityResult:
        other = potential_golden_record.anime
        weights = normalized_weights(
            applicable_attributes(anime, other),
            self.settings.matching_attribute_weights,
        )

        score = sum(
            weight * self._similarity(attribute, anime, other)
            for attribute, weight in weights.items()
        )
        probability = _truncate(score)

        logger.debug(
            f"Probability of '{anime.title}' matching [{potential_golden_record.id}] "
            f"'{other.title}': {probability}"
        )

        return MatchingProbabilityResult(
            anime=anime,
            potential_golden_record=potential_golden_record,
            match_probability=probability,
        )

    @staticmethod
    def _similarity(attribute: MatchAttribute, anime: Anime, other: Anime) -> float:
        match attribute:
            case MatchAttribute.TITLE:
                return title_similarity(anime.title, other.title)
            case MatchAttribute.TYPE:
                return type_similarity(anime.type, other.type)
            case MatchAttribute.EPISODES:
                return weighted_probability_of_two_numbers_being_equal(
                    anime.episode_count, other.episode_count, _EPISODES_FACTOR
                )
            case MatchAttribute.STATUS:
                return 1.0 if anime.status == other.status else 0.0
            case MatchAttribute.YEAR:
                return weighted_probability_of_two_numbers_being_equal(
                    anime.year, other.year, _YEAR_FACTOR
                )
            case MatchAttribute.DURATION:
                return duration_similarity(anime.duration, other.duration)


def _truncate(score: float) -> float:
    # Tolerance absorbs float error of the weighted sum, e.g. 2.4 / 3
    truncated = math.floor(score * 100 + 1e-6) / 100
    return min(1.0, max(0.0, truncated))
