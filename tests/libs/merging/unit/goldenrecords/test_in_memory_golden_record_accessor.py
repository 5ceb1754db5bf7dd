"""Unit tests for the in-memory golden record store and candidate index."""

import pytest
from common.config.settings import Settings
from common.models.anime import Anime, AnimeType
from merging.exceptions import GoldenRecordNotFoundError
from merging.goldenrecords.in_memory import InMemoryGoldenRecordAccessor


class TestCreateGoldenRecord:
    """Test suite for golden record creation."""

    def test_identical_anime_creates_two_golden_records(
        self, golden_record_accessor: InMemoryGoldenRecordAccessor, cowboy_bebop: Anime
    ):
        """Creation performs no duplicate check."""
        first = golden_record_accessor.create_golden_record(cowboy_bebop)
        second = golden_record_accessor.create_golden_record(cowboy_bebop)

        assert first != second
        assert len(golden_record_accessor) == 2
        assert golden_record_accessor.all_entries() == [cowboy_bebop, cowboy_bebop]

    def test_ids_are_prefixed(
        self, golden_record_accessor: InMemoryGoldenRecordAccessor, cowboy_bebop: Anime
    ):
        assert golden_record_accessor.create_golden_record(cowboy_bebop).startswith("gr_")


class TestFindGoldenRecordBySource:
    """Test suite for lookups by source."""

    def test_any_shared_source_is_sufficient(
        self, golden_record_accessor: InMemoryGoldenRecordAccessor, cowboy_bebop: Anime
    ):
        golden_record_id = golden_record_accessor.create_golden_record(cowboy_bebop)

        golden_record = golden_record_accessor.find_golden_record_by_source(
            {"https://anidb.net/anime/23", "https://myanimelist.net/anime/1"}
        )

        assert golden_record is not None
        assert golden_record.id == golden_record_id
        assert golden_record.anime == cowboy_bebop

    def test_unknown_sources(
        self, golden_record_accessor: InMemoryGoldenRecordAccessor, cowboy_bebop: Anime
    ):
        golden_record_accessor.create_golden_record(cowboy_bebop)

        assert golden_record_accessor.find_golden_record_by_source({"https://anidb.net/anime/23"}) is None
        assert golden_record_accessor.find_golden_record_by_source(set()) is None


class TestFindPossibleGoldenRecords:
    """Test suite for the candidate search."""

    def test_finds_by_normalized_title(
        self, golden_record_accessor: InMemoryGoldenRecordAccessor, cowboy_bebop: Anime
    ):
        golden_record_id = golden_record_accessor.create_golden_record(cowboy_bebop)

        candidates = golden_record_accessor.find_possible_golden_records(
            Anime(title="COWBOY BEBOP!", sources=["https://anidb.net/anime/23"])
        )

        assert [candidate.id for candidate in candidates] == [golden_record_id]
        assert candidates[0].anime == cowboy_bebop

    def test_finds_by_synonym(
        self, golden_record_accessor: InMemoryGoldenRecordAccessor, cowboy_bebop: Anime
    ):
        golden_record_accessor.create_golden_record(cowboy_bebop)

        candidates = golden_record_accessor.find_possible_golden_records(
            Anime(title="カウボーイビバップ", sources=["https://anidb.net/anime/23"])
        )

        assert len(candidates) == 1

    def test_synonym_collision_returns_multiple_candidates_in_creation_order(
        self, golden_record_accessor: InMemoryGoldenRecordAccessor
    ):
        """A record can be a candidate because of a synonym even if the main titles differ."""
        first = golden_record_accessor.create_golden_record(
            Anime(title="Daydream", sources=["https://myanimelist.net/anime/59110"])
        )
        second = golden_record_accessor.create_golden_record(
            Anime(
                title="Hakuchuumu",
                sources=["https://anidb.net/anime/100"],
                synonyms=["daydream"],
            )
        )
        golden_record_accessor.create_golden_record(
            Anime(title="Nightmare", sources=["https://anidb.net/anime/101"])
        )

        candidates = golden_record_accessor.find_possible_golden_records(
            Anime(title="Day Dream", sources=["https://anilist.co/anime/1"])
        )

        assert [candidate.id for candidate in candidates] == [first, second]

    def test_no_candidates(
        self, golden_record_accessor: InMemoryGoldenRecordAccessor, cowboy_bebop: Anime
    ):
        golden_record_accessor.create_golden_record(cowboy_bebop)

        assert golden_record_accessor.find_possible_golden_records(Anime(title="Trigun")) == []

    @pytest.mark.parametrize("partition_width", [1, 2, 5])
    def test_title_shorter_than_partition_width(self, partition_width: int):
        """Short titles are found by exact lookup and don't collide with longer ones."""
        settings = Settings(_env_file=None, title_partition_width=partition_width)
        accessor = InMemoryGoldenRecordAccessor(settings)
        short = accessor.create_golden_record(Anime(title="K", sources=["https://anidb.net/anime/1"]))
        accessor.create_golden_record(Anime(title="K-On!", sources=["https://anidb.net/anime/2"]))

        candidates = accessor.find_possible_golden_records(Anime(title="k"))

        assert [candidate.id for candidate in candidates] == [short]

    def test_anime_planet_falls_back_to_first_synonym(
        self, golden_record_accessor: InMemoryGoldenRecordAccessor, cowboy_bebop: Anime
    ):
        """Anime-Planet records are looked up by their first synonym if the title finds nothing."""
        golden_record_id = golden_record_accessor.create_golden_record(cowboy_bebop)
        anime_planet = Anime(
            title="Cowboy Bebop: The Series",
            sources=["https://www.anime-planet.com/anime/cowboy-bebop"],
            synonyms=["Cowboy Bebop", "Kaubooi Bibappu"],
        )

        candidates = golden_record_accessor.find_possible_golden_records(anime_planet)

        assert [candidate.id for candidate in candidates] == [golden_record_id]

    def test_synonym_fallback_only_for_configured_providers(
        self, golden_record_accessor: InMemoryGoldenRecordAccessor, cowboy_bebop: Anime
    ):
        golden_record_accessor.create_golden_record(cowboy_bebop)
        anidb = Anime(
            title="Cowboy Bebop: The Series",
            sources=["https://anidb.net/anime/23"],
            synonyms=["Cowboy Bebop"],
        )

        assert golden_record_accessor.find_possible_golden_records(anidb) == []

    def test_synonym_fallback_only_for_single_source(
        self, golden_record_accessor: InMemoryGoldenRecordAccessor, cowboy_bebop: Anime
    ):
        golden_record_accessor.create_golden_record(cowboy_bebop)
        merged = Anime(
            title="Cowboy Bebop: The Series",
            sources=[
                "https://www.anime-planet.com/anime/cowboy-bebop",
                "https://anidb.net/anime/23",
            ],
            synonyms=["Cowboy Bebop"],
        )

        assert golden_record_accessor.find_possible_golden_records(merged) == []


class TestMerge:
    """Test suite for merging into golden records."""

    def test_merge_replaces_anime_with_merged_anime(
        self, golden_record_accessor: InMemoryGoldenRecordAccessor, cowboy_bebop: Anime
    ):
        golden_record_id = golden_record_accessor.create_golden_record(cowboy_bebop)
        anidb = Anime(
            title="Cowboy Bebop",
            sources=["https://anidb.net/anime/23"],
            type=AnimeType.TV,
            related_anime=["https://myanimelist.net/anime/1"],
        )

        merged = golden_record_accessor.merge(golden_record_id, anidb)

        assert merged == cowboy_bebop.merge_with(anidb)
        assert golden_record_accessor.all_entries() == [merged]
        assert "https://myanimelist.net/anime/1" not in merged.related_anime

    def test_merged_sources_and_titles_are_indexed(
        self, golden_record_accessor: InMemoryGoldenRecordAccessor, cowboy_bebop: Anime
    ):
        golden_record_id = golden_record_accessor.create_golden_record(cowboy_bebop)
        golden_record_accessor.merge(
            golden_record_id,
            Anime(title="Kaubooi Bibappu", sources=["https://anidb.net/anime/23"]),
        )

        by_source = golden_record_accessor.find_golden_record_by_source({"https://anidb.net/anime/23"})
        by_title = golden_record_accessor.find_possible_golden_records(Anime(title="Kaubooi Bibappu"))

        assert by_source is not None
        assert by_source.id == golden_record_id
        assert [candidate.id for candidate in by_title] == [golden_record_id]

    def test_unknown_id_raises(
        self, golden_record_accessor: InMemoryGoldenRecordAccessor, cowboy_bebop: Anime
    ):
        with pytest.raises(GoldenRecordNotFoundError, match="Unable to find golden record"):
            golden_record_accessor.merge("gr_unknown", cowboy_bebop)

    def test_not_found_error_is_a_runtime_error(self):
        assert issubclass(GoldenRecordNotFoundError, RuntimeError)


class TestClear:
    """Test suite for dropping all state."""

    def test_clear_drops_records_and_indexes(
        self, golden_record_accessor: InMemoryGoldenRecordAccessor, cowboy_bebop: Anime
    ):
        golden_record_id = golden_record_accessor.create_golden_record(cowboy_bebop)

        golden_record_accessor.clear()

        assert golden_record_accessor.all_entries() == []
        assert golden_record_accessor.find_golden_record_by_source(cowboy_bebop.sources) is None
        assert golden_record_accessor.find_possible_golden_records(cowboy_bebop) == []
        with pytest.raises(GoldenRecordNotFoundError):
            golden_record_accessor.merge(golden_record_id, cowboy_bebop)
