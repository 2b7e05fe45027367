"""
Update feed package.

Usage: `from update_feed.services.updates import UpdatesService, classify`

Module structure:
- service.py: UpdatesService facade (the only entry point for callers)
- fetcher.py: Concurrent multi-repository fetch and merge
- cache.py: TTL commit cache with single-flight population and snapshots
- classifier.py: Commit message → (type, category), summaries
- rules.py: Ordered rule tables used by the classifier
- feed.py: Update construction, pagination, incremental reveal
- contributors.py: Contributor ranking
- types.py: Data types
"""

from update_feed.services.updates.cache import CacheEntry, CacheKey, CommitCacheStore
from update_feed.services.updates.classifier import (
    classify,
    classify_category,
    classify_type,
    clear_classification_cache,
    summarize,
)
from update_feed.services.updates.contributors import aggregate_contributors
from update_feed.services.updates.feed import FeedReveal, build_feed, paginate, to_update
from update_feed.services.updates.fetcher import MultiSourceFetcher, merge_commit_streams
from update_feed.services.updates.service import UpdatesService
from update_feed.services.updates.types import (
    Classification,
    Contributor,
    Update,
    UpdateType,
)

__all__ = [
    # Service (main entry point)
    "UpdatesService",
    # Pipeline stages
    "MultiSourceFetcher",
    "merge_commit_streams",
    "CommitCacheStore",
    "CacheKey",
    "CacheEntry",
    "classify",
    "classify_type",
    "classify_category",
    "summarize",
    "clear_classification_cache",
    "build_feed",
    "to_update",
    "paginate",
    "FeedReveal",
    "aggregate_contributors",
    # Types
    "Classification",
    "Contributor",
    "Update",
    "UpdateType",
]
