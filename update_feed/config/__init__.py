"""Configuration package."""

from update_feed.config.settings import Settings, settings
from update_feed.config.sources import DEFAULT_SOURCES, RepoSource

__all__ = [
    "DEFAULT_SOURCES",
    "RepoSource",
    "Settings",
    "settings",
]
