"""
GitHub commit history operations.

Provides paged retrieval of commit history for one configured repository:
- Single page fetch (one round trip, no local state, no retries)
- "Fetch all" loop with an optional record ceiling
- Repository stats lookup for monitoring configured sources
"""

import logging
from datetime import UTC, datetime
from typing import Any

import httpx

from update_feed.config.sources import RepoSource
from update_feed.services.github.exceptions import GitHubAPIError
from update_feed.services.github.helpers import handle_error_response
from update_feed.services.github.http_client import auth_headers, get_github_client
from update_feed.services.github.types import CommitRecord, RepoStats

logger = logging.getLogger(__name__)

SHORT_HASH_LENGTH = 7


def parse_commit_timestamp(value: str) -> int:
    """Convert a GitHub ISO 8601 date ("2025-06-16T12:48:55Z") to Unix seconds."""
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return int(parsed.timestamp())


class GitHubCommitOperations:
    """
    Commit history client for the GitHub REST API.

    Uses the shared GitHub client (base URL and API version headers) and adds
    only the bearer header per request. A token is optional: anonymous
    requests work against public repositories with a lower rate limit.
    """

    MAX_PAGE_SIZE = 100  # GitHub's per_page ceiling

    def __init__(self, token: str | None = None):
        self.token = token or None
        self._headers = auth_headers(self.token)

    def _normalize_commit(self, data: dict[str, Any], source: RepoSource) -> CommitRecord:
        """Convert a GitHub commit payload to a CommitRecord."""
        commit = data.get("commit", {})
        committer = commit.get("committer") or commit.get("author") or {}

        # Prefer the linked GitHub login; unlinked commits only carry the git author name
        linked_author = data.get("author")
        if linked_author and linked_author.get("login"):
            author_handle = linked_author["login"]
        else:
            author_handle = (commit.get("author") or {}).get("name", "")

        message = commit.get("message") or ""

        return CommitRecord(
            short_hash=data["sha"][:SHORT_HASH_LENGTH],
            timestamp=parse_commit_timestamp(committer["date"]),
            author_handle=author_handle,
            raw_message=message.split("\n")[0],
            source_tag=source.source_tag,
        )

    async def fetch_page(
        self,
        source: RepoSource,
        page: int,
        per_page: int = MAX_PAGE_SIZE,
    ) -> list[CommitRecord]:
        """
        Fetch one page of commit history.

        Args:
            source: Repository to read
            page: Page number (1-indexed)
            per_page: Commits per page (max 100)

        Returns:
            Commits on that page, newest first. An empty list means the end
            of history has been reached.

        Raises:
            ValueError: If page or per_page is out of range
            GitHubAPIError: On a non-200 response or a transport failure
        """
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        if not 1 <= per_page <= self.MAX_PAGE_SIZE:
            raise ValueError(f"per_page must be between 1 and {self.MAX_PAGE_SIZE}, got {per_page}")

        params: dict[str, str | int] = {"per_page": per_page, "page": page}
        if source.branch:
            params["sha"] = source.branch

        client = get_github_client()
        try:
            response = await client.get(
                f"/repos/{source.owner}/{source.name}/commits",
                headers=self._headers,
                params=params,
            )
        except httpx.RequestError as e:
            raise GitHubAPIError(f"Failed to reach GitHub for {source.full_name}: {e}") from e

        # GitHub answers 409 "Git Repository is empty" for a repo with no commits
        if response.status_code == 409:
            logger.info(f"Repository {source.full_name} has no commits yet")
            return []

        handle_error_response(response, source.full_name)

        data: list[dict[str, Any]] = response.json()
        return [self._normalize_commit(c, source) for c in data]

    async def fetch_all(
        self,
        source: RepoSource,
        max_records: int | None = None,
        per_page: int = MAX_PAGE_SIZE,
    ) -> list[CommitRecord]:
        """
        Fetch a repository's history page by page.

        Stops on whichever comes first: an empty page, a short page (fewer
        than ``per_page`` commits), or ``max_records`` collected, in which
        case the result is truncated to exactly ``max_records``.

        Args:
            source: Repository to read
            max_records: Ceiling on commits returned (None or 0 = everything)
            per_page: Commits per request (max 100)

        Returns:
            Commits newest first, without duplicates
        """
        if max_records is not None and max_records < 0:
            raise ValueError(f"max_records must be >= 0, got {max_records}")

        limit = max_records or None
        scope = f"max: {limit}" if limit else "all"
        logger.info(f"Fetching commits from {source.full_name} ({scope})")

        commits: list[CommitRecord] = []
        page = 1

        while True:
            batch = await self.fetch_page(source, page, per_page)
            if not batch:
                break

            commits.extend(batch)
            logger.debug(
                f"Fetched page {page} of {source.full_name}: {len(batch)} commits "
                f"(total so far: {len(commits)})"
            )

            if limit and len(commits) >= limit:
                logger.debug(f"Reached max commits limit ({limit}) for {source.full_name}")
                return commits[:limit]

            # A short page is the last one; skips the extra empty-page round trip
            if len(batch) < per_page:
                break

            page += 1

        logger.info(f"Finished fetching {len(commits)} commits from {source.full_name}")
        return commits

    async def get_repo_stats(self, source: RepoSource) -> RepoStats:
        """
        Fetch repository metadata for a configured source.

        Args:
            source: Repository to describe

        Returns:
            RepoStats with name, default branch, language and size
        """
        client = get_github_client()
        try:
            response = await client.get(
                f"/repos/{source.owner}/{source.name}",
                headers=self._headers,
                timeout=15.0,
            )
        except httpx.RequestError as e:
            raise GitHubAPIError(f"Failed to reach GitHub for {source.full_name}: {e}") from e

        handle_error_response(response, source.full_name)

        data = response.json()
        return RepoStats(
            name=data["name"],
            full_name=data["full_name"],
            default_branch=data.get("default_branch", "main"),
            language=data.get("language"),
            size=data.get("size", 0),
            updated_at=data.get("updated_at", ""),
        )
