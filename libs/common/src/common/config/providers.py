"""Metadata provider configuration.

Every source URL of an anime record originates from one of the known
metadata providers. The provider is resolved by the host name of the URL.
"""

from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field


class MetaDataProviderConfig(BaseModel):
    """Static description of a metadata provider."""

    model_config = ConfigDict(frozen=True)

    hostname: str = Field(..., description="Host name without 'www.', e.g. 'myanimelist.net'")
    name: str = Field(..., description="Human readable provider name")

    def matches(self, uri: str) -> bool:
        """Check whether ``uri`` belongs to this provider."""
        return hostname_of(uri) == self.hostname


PROVIDERS: tuple[MetaDataProviderConfig, ...] = (
    MetaDataProviderConfig(hostname="anidb.net", name="AniDB"),
    MetaDataProviderConfig(hostname="anilist.co", name="AniList"),
    MetaDataProviderConfig(hostname="anime-planet.com", name="Anime-Planet"),
    MetaDataProviderConfig(hostname="animenewsnetwork.com", name="Anime News Network"),
    MetaDataProviderConfig(hostname="anisearch.com", name="aniSearch"),
    MetaDataProviderConfig(hostname="kitsu.app", name="Kitsu"),
    MetaDataProviderConfig(hostname="livechart.me", name="LiveChart"),
    MetaDataProviderConfig(hostname="myanimelist.net", name="MyAnimeList"),
    MetaDataProviderConfig(hostname="notify.moe", name="Notify.moe"),
    MetaDataProviderConfig(hostname="simkl.com", name="Simkl"),
)


def hostname_of(uri: str) -> str:
    """Extract the lower-cased host name of ``uri`` without a leading 'www.'.

    Example:
        >>> hostname_of("https://www.anime-planet.com/anime/11eyes")
        'anime-planet.com'
    """
    hostname = (urlparse(uri).hostname or "").lower()
    return hostname.removeprefix("www.")


def provider_for_source(uri: str) -> MetaDataProviderConfig | None:
    """Resolve the provider a source URL belongs to, ``None`` for unknown hosts."""
    hostname = hostname_of(uri)
    return next((p for p in PROVIDERS if p.hostname == hostname), None)
