"""Shared test fixtures for merging unit tests.

Records resemble real entries of the respective metadata providers.
"""

import pytest

from common.config.settings import Settings
from common.models.anime import Anime, AnimeStatus, AnimeType, TimeUnit, duration_in_seconds
from merging.goldenrecords.in_memory import InMemoryGoldenRecordAccessor
from merging.lock.in_memory import InMemoryMergeLockAccessor
from merging.matching.calculator import DefaultMatchingProbabilityCalculator
from merging.service import MergingService


# ============================================================================
# Components
# ============================================================================


@pytest.fixture
def golden_record_accessor(settings: Settings) -> InMemoryGoldenRecordAccessor:
    """Empty golden record store."""
    return InMemoryGoldenRecordAccessor(settings)


@pytest.fixture
def calculator(settings: Settings) -> DefaultMatchingProbabilityCalculator:
    """Matching probability calculator with default weights."""
    return DefaultMatchingProbabilityCalculator(settings)


@pytest.fixture
def merging_service(
    settings: Settings,
    golden_record_accessor: InMemoryGoldenRecordAccessor,
    calculator: DefaultMatchingProbabilityCalculator,
) -> MergingService:
    """Merging service without any merge locks."""
    return MergingService(
        golden_record_accessor=golden_record_accessor,
        merge_lock_accessor=InMemoryMergeLockAccessor(),
        matching_probability_calculator=calculator,
        settings=settings,
    )


# ============================================================================
# Records
# ============================================================================


@pytest.fixture
def anilist_11eyes() -> Anime:
    return Anime(
        title="11eyes",
        sources=["https://anilist.co/anime/6682"],
        synonyms=["11eyes -Tsumi to Batsu to Aganai no Shoujo-", "イレブンアイズ"],
        type=AnimeType.TV,
        episode_count=12,
        status=AnimeStatus.FINISHED,
        year=2009,
        duration=duration_in_seconds(25, TimeUnit.MINUTES),
        related_anime=["https://anilist.co/anime/110465", "https://anilist.co/anime/7739"],
    )


@pytest.fixture
def anidb_11eyes() -> Anime:
    return Anime(
        title="11 Eyes",
        sources=["https://anidb.net/anime/6751"],
        synonyms=[
            "11 akių",
            "11 глаз",
            "11eyes",
            "11eyes -罪與罰與贖的少女-",
            "11eyes: Tsumi to Batsu to Aganai no Shoujo",
            "イレブンアイズ",
            "罪与罚与赎的少女",
        ],
        type=AnimeType.TV,
        episode_count=12,
        status=AnimeStatus.FINISHED,
        year=2009,
        duration=duration_in_seconds(25, TimeUnit.MINUTES),
    )


@pytest.fixture
def mal_11eyes() -> Anime:
    return Anime(
        title="11 - eyes",
        sources=["https://myanimelist.net/anime/6682"],
        synonyms=["11eyes -Tsumi to Batsu to Aganai no Shoujo-", "11eyes イレブンアイズ"],
        type=AnimeType.TV,
        episode_count=12,
        status=AnimeStatus.FINISHED,
        year=2009,
        duration=duration_in_seconds(25, TimeUnit.MINUTES),
        related_anime=["https://myanimelist.net/anime/20557", "https://myanimelist.net/anime/7739"],
    )


@pytest.fixture
def cowboy_bebop() -> Anime:
    return Anime(
        title="Cowboy Bebop",
        sources=["https://myanimelist.net/anime/1"],
        synonyms=["カウボーイビバップ"],
        type=AnimeType.TV,
        episode_count=26,
        year=1998,
        duration=duration_in_seconds(24, TimeUnit.MINUTES),
        related_anime=["https://myanimelist.net/anime/5"],
    )


@pytest.fixture
def mal_daydream() -> Anime:
    return Anime(
        title="daydream",
        sources=["https://myanimelist.net/anime/59110"],
        type=AnimeType.SPECIAL,
        episode_count=1,
        status=AnimeStatus.FINISHED,
        year=2024,
        duration=duration_in_seconds(120),
    )
