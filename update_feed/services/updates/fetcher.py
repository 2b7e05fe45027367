"""
Multi-repository commit fetching.

Fans out one history retrieval per configured source, waits for every one of
them, and merges the results into a single newest-first stream. If any
source fails the whole fetch fails: a timeline missing one repository would
misrepresent recency across sources.
"""

import asyncio
import logging

from update_feed.config.sources import RepoSource
from update_feed.services.github.commit_operations import GitHubCommitOperations
from update_feed.services.github.types import CommitRecord
from update_feed.services.updates.types import Update

logger = logging.getLogger(__name__)


def timeline_sort_key(item: CommitRecord | Update) -> tuple[int, str, str]:
    """Newest first; equal timestamps ordered by source tag, then short hash."""
    return (-item.timestamp, item.source_tag, item.short_hash)


def merge_commit_streams(streams: list[list[CommitRecord]]) -> list[CommitRecord]:
    """Concatenate per-source commits and order them newest first, deterministically."""
    merged = [commit for stream in streams for commit in stream]
    merged.sort(key=timeline_sort_key)
    return merged


class MultiSourceFetcher:
    """Fetches and merges commit history across all configured repositories."""

    def __init__(
        self,
        github: GitHubCommitOperations,
        sources: list[RepoSource],
        page_size: int = GitHubCommitOperations.MAX_PAGE_SIZE,
    ) -> None:
        self.github = github
        self.sources = list(sources)
        self.page_size = page_size

    async def fetch_all(self, max_records_per_source: int | None = None) -> list[CommitRecord]:
        """
        Fetch every source concurrently and merge.

        Args:
            max_records_per_source: Ceiling per repository (None = full history)

        Returns:
            Merged commits, newest first

        Raises:
            GitHubAPIError: The first failure in source order, once all
                retrievals have finished
        """
        results = await asyncio.gather(
            *[
                self.github.fetch_all(source, max_records_per_source, per_page=self.page_size)
                for source in self.sources
            ],
            return_exceptions=True,
        )

        streams: list[list[CommitRecord]] = []
        first_error: BaseException | None = None
        for source, result in zip(self.sources, results, strict=True):
            if isinstance(result, BaseException):
                logger.warning(f"Failed to fetch commits for {source.full_name}: {result}")
                if first_error is None:
                    first_error = result
                continue
            streams.append(result)

        if first_error is not None:
            raise first_error

        merged = merge_commit_streams(streams)
        logger.info(f"Merged {len(merged)} commits from {len(self.sources)} sources")
        return merged
