"""Configuration package for the merging engine."""

from .providers import MetaDataProviderConfig, hostname_of, provider_for_source
from .settings import Settings, get_settings

__all__ = [
    "MetaDataProviderConfig",
    "Settings",
    "get_settings",
    "hostname_of",
    "provider_for_source",
]
