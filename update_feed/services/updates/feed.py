"""
Feed assembly: classified updates, page slicing and incremental reveal.

Updates are rebuilt from commits on demand and never stored. Classification
is memoised per message, so rebuilding a feed from cached commits does not
re-run the rule engine.
"""

from datetime import UTC, datetime, tzinfo

from update_feed.services.github.types import CommitRecord
from update_feed.services.updates.classifier import classify, summarize
from update_feed.services.updates.fetcher import timeline_sort_key
from update_feed.services.updates.types import Update

DEFAULT_PAGE_SIZE = 15


def to_update(commit: CommitRecord, tz: tzinfo = UTC) -> Update:
    """Derive the Update for a single commit."""
    classification = classify(commit.raw_message)
    moment = datetime.fromtimestamp(commit.timestamp, tz=tz)

    return Update(
        short_hash=commit.short_hash,
        timestamp=commit.timestamp,
        author_handle=commit.author_handle,
        raw_message=commit.raw_message,
        source_tag=commit.source_tag,
        type=classification.type,
        category=classification.category,
        date_iso=moment.strftime("%Y-%m-%d"),
        time_hhmm=moment.strftime("%H:%M"),
        summary=summarize(commit.raw_message),
    )


def build_feed(commits: list[CommitRecord], tz: tzinfo = UTC) -> list[Update]:
    """Convert commits to updates, newest first."""
    updates = [to_update(c, tz) for c in commits]
    updates.sort(key=timeline_sort_key)
    return updates


def paginate(feed: list[Update], page_index: int, page_size: int = DEFAULT_PAGE_SIZE) -> list[Update]:
    """
    Return one page of the feed.

    Args:
        feed: Updates, newest first
        page_index: Zero-based page number
        page_size: Updates per page

    Returns:
        The page slice; empty when the page lies past the end of the feed
    """
    if page_index < 0:
        raise ValueError(f"page_index must be >= 0, got {page_index}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")

    start = page_index * page_size
    return feed[start : start + page_size]


class FeedReveal:
    """
    Incremental "load more" view over an already-built feed.

    The revealed count only grows, one page at a time, and never past the
    end of the feed. Loading more re-slices the same updates; nothing is
    refetched or reclassified.
    """

    def __init__(self, feed: list[Update], page_size: int = DEFAULT_PAGE_SIZE) -> None:
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        self._feed = tuple(feed)
        self.page_size = page_size
        self._revealed = min(page_size, len(self._feed))

    @property
    def revealed(self) -> int:
        return self._revealed

    @property
    def total(self) -> int:
        return len(self._feed)

    @property
    def visible(self) -> list[Update]:
        return list(self._feed[: self._revealed])

    @property
    def has_more(self) -> bool:
        return self._revealed < len(self._feed)

    def load_more(self) -> list[Update]:
        """Reveal the next page and return everything now visible."""
        self._revealed = min(self._revealed + self.page_size, len(self._feed))
        return self.visible
