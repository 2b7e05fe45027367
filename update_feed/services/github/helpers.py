"""
GitHub API helper utilities.

Provides rate limit handling and error response processing for the
commit history client.
"""

import logging
import re

import httpx

from update_feed.services.github.exceptions import (
    GitHubAPIError,
    GitHubRateLimitError,
    GitHubRepoRenamed,
)

logger = logging.getLogger(__name__)


class RateLimitInfo:
    """Rate limit information from GitHub API response."""

    def __init__(self, response: httpx.Response) -> None:
        self.remaining = response.headers.get("X-RateLimit-Remaining")
        self.reset = response.headers.get("X-RateLimit-Reset")
        self.retry_after = response.headers.get("Retry-After")

    @property
    def reset_timestamp(self) -> int | None:
        """Get reset timestamp as integer, or None if not available."""
        return int(self.reset) if self.reset else None

    @property
    def retry_after_seconds(self) -> int | None:
        """Get Retry-After as seconds, or None if absent or not numeric."""
        if self.retry_after and self.retry_after.isdigit():
            return int(self.retry_after)
        return None

    @property
    def is_exhausted(self) -> bool:
        """Check if rate limit is exhausted."""
        return self.remaining is not None and int(self.remaining) == 0


def parse_redirect_location(location: str) -> tuple[str, str] | None:
    """
    Extract owner/repo from GitHub redirect Location header.

    Args:
        location: The Location header value, which can be:
            - Absolute: "https://api.github.com/repos/owner/newname/..."
            - Relative: "/repos/owner/newname/..."

    Returns:
        Tuple of (owner, repo) if parseable, None otherwise
    """
    if not location:
        return None

    match = re.match(r"https://api\.github\.com/repos/([^/]+)/([^/?]+)", location)
    if match:
        return (match.group(1), match.group(2))

    match = re.match(r"/repos/([^/]+)/([^/?]+)", location)
    if match:
        return (match.group(1), match.group(2))

    return None


def handle_error_response(response: httpx.Response, repo_name: str) -> None:
    """
    Raise for any non-200 response from GitHub API.

    Args:
        response: The HTTP response from GitHub API
        repo_name: Repository name for error context (format: "owner/repo")

    Raises:
        GitHubRepoRenamed: If repository was renamed/transferred (301)
        GitHubRateLimitError: If GitHub asks the caller to back off (403/429)
        GitHubAPIError: For authentication, authorization, or other API errors
    """
    if response.status_code == 200:
        return

    rate_info = RateLimitInfo(response)

    if response.status_code == 301:
        location = response.headers.get("Location", "")
        logger.debug(f"Got 301 redirect for {repo_name}, Location header: {location!r}")

        new_repo = parse_redirect_location(location)
        if new_repo:
            new_full_name = f"{new_repo[0]}/{new_repo[1]}"
            logger.info(f"Repository redirect detected: {repo_name} → {new_full_name}")
            raise GitHubRepoRenamed(repo_name, new_full_name)

        logger.warning(
            f"Repository {repo_name} returned 301 but Location header couldn't be parsed. "
            f"Location: {location!r}"
        )
        raise GitHubRepoRenamed(repo_name)
    elif response.status_code == 401:
        raise GitHubAPIError("Invalid or expired GitHub token", 401)
    elif response.status_code == 404:
        raise GitHubAPIError(f"Repository or resource not found: {repo_name}", 404)
    elif response.status_code == 429:
        raise GitHubRateLimitError(
            "GitHub API secondary rate limit exceeded",
            429,
            rate_limit_reset=rate_info.reset_timestamp,
            retry_after=rate_info.retry_after_seconds,
        )
    elif response.status_code == 403:
        if rate_info.is_exhausted:
            raise GitHubRateLimitError(
                "GitHub API rate limit exceeded",
                403,
                rate_limit_reset=rate_info.reset_timestamp,
                retry_after=rate_info.retry_after_seconds,
            )
        raise GitHubAPIError("GitHub API forbidden", 403)
    else:
        raise GitHubAPIError(
            f"GitHub API error: {response.status_code}", response.status_code
        )
