"""Merging Engine Configuration Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MATCH_ATTRIBUTE_NAMES = ["title", "type", "episodes", "status", "year", "duration"]


class Settings(BaseSettings):
    """Merging engine settings with validation and type safety."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # ============================================================================
    # MERGE DECISIONS
    # ============================================================================

    merge_equality_threshold: float = Field(
        default=0.8,
        ge=0.0,
        le=1.0,
        description="Minimum match probability for merging a record into a golden record",
    )
    merge_max_runs: int = Field(
        default=4,
        ge=1,
        description="Number of runs per pass, deferred records are reconsidered in every run after the first",
    )

    # ============================================================================
    # CANDIDATE INDEX
    # ============================================================================

    title_partition_width: int = Field(
        default=2,
        ge=1,
        description="Length of the normalized title prefix used to partition the title index",
    )
    synonym_fallback_hostnames: list[str] = Field(
        default=["anime-planet.com"],
        description="Providers whose records are looked up by their first synonym if the title finds nothing",
    )

    # ============================================================================
    # MATCHING PROBABILITY
    # ============================================================================

    matching_attribute_weights: dict[str, float] = Field(
        default={name: 1.0 for name in MATCH_ATTRIBUTE_NAMES},
        description="Base weight per attribute, renormalized over the attributes applicable to a pair",
    )

    # ============================================================================
    # MERGE LOCKS
    # ============================================================================

    merge_lock_file: Path | None = Field(
        default=None,
        description="JSON file with curated merge locks, in-memory locks are used if unset",
    )

    # ============================================================================
    # LOGGING
    # ============================================================================

    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("synonym_fallback_hostnames")
    @classmethod
    def validate_synonym_fallback_hostnames(cls, v: list[str]) -> list[str]:
        return [hostname.strip().lower() for hostname in v if hostname.strip()]

    @field_validator("matching_attribute_weights")
    @classmethod
    def validate_matching_attribute_weights(cls, v: dict[str, float]) -> dict[str, float]:
        """Validate attribute names and weights, filling in missing attributes."""
        weights = {name.lower(): weight for name, weight in v.items()}
        unknown = sorted(set(weights) - set(MATCH_ATTRIBUTE_NAMES))
        if unknown:
            raise ValueError(
                f"Unknown matching attributes {unknown}, must be one of: {MATCH_ATTRIBUTE_NAMES}"
            )
        negative = sorted(name for name, weight in weights.items() if weight < 0)
        if negative:
            raise ValueError(f"Matching attribute weights must not be negative: {negative}")
        return {name: weights.get(name, 1.0) for name in MATCH_ATTRIBUTE_NAMES}


@lru_cache
def get_settings() -> Settings:
    """Get cached Settings instance populated from environment variables.

    Returns:
        Cached Settings instance.

    Note:
        Uses @lru_cache for singleton pattern. For testing, call
        get_settings.cache_clear() to reset the cache.
    """
    return Settings()
