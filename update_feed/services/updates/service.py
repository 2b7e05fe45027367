"""
UpdatesService - the entry point for the activity feed.

Wires together the pipeline:
  commit history (per source) → merged stream → commit cache
  → classified updates → contributor ranking

Callers pick between the full history of every source and a recent window
(the newest N commits per source); each is cached independently.
"""

import logging
from datetime import UTC, tzinfo
from zoneinfo import ZoneInfo

from update_feed.config import Settings
from update_feed.services.github.commit_operations import GitHubCommitOperations
from update_feed.services.github.types import CommitRecord, RepoStats
from update_feed.services.updates.cache import CacheKey, CommitCacheStore
from update_feed.services.updates.contributors import aggregate_contributors
from update_feed.services.updates.feed import build_feed
from update_feed.services.updates.fetcher import MultiSourceFetcher
from update_feed.services.updates.types import Contributor, Update, UpdateType

logger = logging.getLogger(__name__)

# Recent windows used when callers don't search the full history
FILTER_RECENT_WINDOW = 500
CONTRIBUTOR_RECENT_WINDOW = 1000
MIN_RECENT_WINDOW = 100


class UpdatesService:
    """
    Activity feed over all configured repositories.

    The cache store is injected so one store can back several services (or
    a test can supply its own clock).
    """

    def __init__(
        self,
        fetcher: MultiSourceFetcher,
        cache: CommitCacheStore,
        tz: tzinfo = UTC,
        default_recent_count: int = 200,
    ) -> None:
        self.fetcher = fetcher
        self.cache = cache
        self.tz = tz
        self.default_recent_count = default_recent_count

    @classmethod
    def from_settings(cls, settings: Settings, cache: CommitCacheStore | None = None) -> "UpdatesService":
        """Build a service from application settings."""
        github = GitHubCommitOperations(settings.github_token or None)
        fetcher = MultiSourceFetcher(
            github,
            settings.update_sources,
            page_size=settings.commits_page_size,
        )
        return cls(
            fetcher=fetcher,
            cache=cache or CommitCacheStore(ttl_millis=settings.updates_cache_ttl_ms),
            tz=ZoneInfo(settings.feed_timezone),
            default_recent_count=settings.recent_updates_count,
        )

    async def get_commits(self, fetch_all: bool = True, recent_count: int | None = None) -> list[CommitRecord]:
        """
        Get merged commits, from cache when fresh.

        Args:
            fetch_all: Full history (True) or the recent window (False)
            recent_count: Commits per source in the recent window

        Returns:
            Merged commits, newest first
        """
        if fetch_all:
            return await self.cache.get_or_fetch(
                CacheKey.all_history(),
                lambda: self.fetcher.fetch_all(),
            )

        count = recent_count or self.default_recent_count
        return await self.cache.get_or_fetch(
            CacheKey.recent(count),
            lambda: self.fetcher.fetch_all(max_records_per_source=count),
        )

    async def get_all_updates(self, fetch_all: bool = True, recent_count: int | None = None) -> list[Update]:
        """Get classified updates, newest first."""
        commits = await self.get_commits(fetch_all, recent_count)
        return build_feed(commits, self.tz)

    async def get_recent_updates(self, count: int = 5) -> list[Update]:
        """Get the ``count`` newest updates across all sources."""
        window = max(count * 2, MIN_RECENT_WINDOW)
        updates = await self.get_all_updates(fetch_all=False, recent_count=window)
        return updates[:count]

    async def get_updates_by_type(self, update_type: UpdateType, search_all: bool = False) -> list[Update]:
        """Get updates of one change type."""
        updates = await self.get_all_updates(search_all, FILTER_RECENT_WINDOW)
        return [u for u in updates if u.type == update_type]

    async def get_updates_by_category(self, category: str, search_all: bool = False) -> list[Update]:
        """Get updates in one functional category (exact match)."""
        updates = await self.get_all_updates(search_all, FILTER_RECENT_WINDOW)
        return [u for u in updates if u.category == category]

    async def get_unique_contributors(self, search_all: bool = True) -> list[Contributor]:
        """
        Rank contributors by commit count.

        Searching the full history gives accurate counts; the recent window
        is cheaper for a quick "who is active" view.
        """
        updates = await self.get_all_updates(search_all, CONTRIBUTOR_RECENT_WINDOW)
        return aggregate_contributors(updates)

    async def get_source_stats(self) -> list[RepoStats]:
        """Describe every configured source (bypasses the cache)."""
        github = self.fetcher.github
        return [await github.get_repo_stats(source) for source in self.fetcher.sources]
