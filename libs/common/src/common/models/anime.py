"""Pydantic models for per-provider anime records and their field-level merge policy."""

import re
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_serializer,
    field_validator,
)

_WHITESPACE = re.compile(r"\s+")


def normalize_whitespace(value: str) -> str:
    """Collapse every run of whitespace into a single space and strip both ends."""
    return _WHITESPACE.sub(" ", value).strip()


class AnimeStatus(str, Enum):
    """Anime airing status classification."""

    FINISHED = "FINISHED"
    UPCOMING = "UPCOMING"
    ONGOING = "ONGOING"
    UNKNOWN = "UNKNOWN"


class AnimeType(str, Enum):
    """Anime type classification."""

    MOVIE = "MOVIE"
    ONA = "ONA"
    OVA = "OVA"
    SPECIAL = "SPECIAL"
    TV = "TV"
    UNKNOWN = "UNKNOWN"


class AnimeSeason(str, Enum):
    """Anime season classification."""

    SPRING = "SPRING"
    SUMMER = "SUMMER"
    FALL = "FALL"
    WINTER = "WINTER"
    UNDEFINED = "UNDEFINED"


class TimeUnit(str, Enum):
    """Unit a provider uses to express episode duration."""

    SECONDS = "SECONDS"
    MINUTES = "MINUTES"
    HOURS = "HOURS"

    @property
    def seconds(self) -> int:
        match self:
            case TimeUnit.HOURS:
                return 3600
            case TimeUnit.MINUTES:
                return 60
            case _:
                return 1


def duration_in_seconds(value: int, unit: TimeUnit = TimeUnit.SECONDS) -> int:
    """Convert a duration given in ``unit`` to seconds.

    Example:
        >>> duration_in_seconds(24, TimeUnit.MINUTES)
        1440
    """
    return value * unit.seconds


class Anime(BaseModel):
    """A single anime record as delivered by a provider, or a merged golden record.

    Records are immutable. Unknown values are expressed through sentinels:
    ``UNKNOWN`` enums, ``UNDEFINED`` season and ``0`` for episode count, year
    and duration.
    """

    model_config = ConfigDict(frozen=True)

    # =====================================================================
    # IDENTITY
    # =====================================================================
    title: str = Field(..., description="Primary title, never blank")
    sources: frozenset[str] = Field(
        default_factory=frozenset, description="Source URLs from the providers"
    )
    synonyms: frozenset[str] = Field(
        default_factory=frozenset,
        description="Alternative titles (case-sensitive), never containing the title",
    )

    # =====================================================================
    # SCALAR FIELDS
    # =====================================================================
    type: AnimeType = Field(default=AnimeType.UNKNOWN, description="TV, Movie, OVA, etc.")
    episode_count: int = Field(default=0, ge=0, description="Number of episodes, 0 if unknown")
    status: AnimeStatus = Field(default=AnimeStatus.UNKNOWN, description="Airing status")
    season: AnimeSeason = Field(default=AnimeSeason.UNDEFINED, description="Premiere season")
    year: int = Field(default=0, ge=0, description="Year of premiere, 0 if unknown")
    duration: int = Field(
        default=0, ge=0, description="Episode duration in seconds, 0 if unknown"
    )

    # =====================================================================
    # RELATIONS
    # =====================================================================
    related_anime: frozenset[str] = Field(
        default_factory=frozenset,
        description="URLs of related anime, never containing one of the own sources",
    )
    tags: frozenset[str] = Field(default_factory=frozenset, description="Lower-cased tags")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Normalize whitespace and reject blank titles."""
        title = normalize_whitespace(v)
        if not title:
            raise ValueError("Title must not be blank")
        return title

    @field_validator("synonyms")
    @classmethod
    def validate_synonyms(cls, v: frozenset[str], info: ValidationInfo) -> frozenset[str]:
        """Normalize whitespace, drop blanks and any synonym equal to the title."""
        title = info.data.get("title")
        synonyms = {normalize_whitespace(synonym) for synonym in v}
        return frozenset(s for s in synonyms if s and s != title)

    @field_validator("duration", mode="before")
    @classmethod
    def convert_duration(cls, v: Any) -> Any:
        """Accept ``{"value": 24, "unit": "MINUTES"}`` in addition to plain seconds."""
        if isinstance(v, dict):
            unit = TimeUnit(str(v.get("unit", TimeUnit.SECONDS.value)).upper())
            return duration_in_seconds(int(v.get("value", 0)), unit)
        return v

    @field_validator("related_anime")
    @classmethod
    def validate_related_anime(
        cls, v: frozenset[str], info: ValidationInfo
    ) -> frozenset[str]:
        """A source can never be related to itself."""
        sources = info.data.get("sources", frozenset())
        return frozenset(uri for uri in v if uri not in sources)

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: frozenset[str]) -> frozenset[str]:
        tags = {normalize_whitespace(tag).lower() for tag in v}
        return frozenset(tag for tag in tags if tag)

    @field_serializer("sources", "synonyms", "related_anime", "tags")
    def serialize_sorted(self, value: frozenset[str]) -> list[str]:
        return sorted(value)

    def is_episode_count_known(self) -> bool:
        return self.episode_count > 0

    def is_year_known(self) -> bool:
        return self.year > 0

    def is_duration_known(self) -> bool:
        return self.duration > 0

    def merge_with(self, other: "Anime") -> "Anime":
        """Fold ``other`` into this record and return the merged record.

        The title of this record is kept. The title and synonyms of ``other``
        become synonyms. Sources, related anime and tags are united, with
        related anime that are also a source removed. Scalar fields keep the
        value of this record unless it is unknown and ``other`` knows it.

        Args:
            other: Incoming record

        Returns:
            New merged record; neither input is modified
        """
        sources = self.sources | other.sources
        return Anime(
            title=self.title,
            sources=sources,
            synonyms=self.synonyms | other.synonyms | {other.title},
            type=_fallback(self.type, other.type, AnimeType.UNKNOWN),
            episode_count=_fallback(self.episode_count, other.episode_count, 0),
            status=_fallback(self.status, other.status, AnimeStatus.UNKNOWN),
            season=_fallback(self.season, other.season, AnimeSeason.UNDEFINED),
            year=_fallback(self.year, other.year, 0),
            duration=_fallback(self.duration, other.duration, 0),
            related_anime=(self.related_anime | other.related_anime) - sources,
            tags=self.tags | other.tags,
        )


def _fallback(own: Any, incoming: Any, unknown: Any) -> Any:
    return incoming if own == unknown else own
