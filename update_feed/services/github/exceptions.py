"""Exceptions for GitHub service."""


class GitHubAPIError(Exception):
    """Error from GitHub API (non-2xx response or transport failure)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        rate_limit_reset: int | None = None,
    ):
        self.message = message
        self.status_code = status_code  # None when the request never got a response
        self.rate_limit_reset = rate_limit_reset  # Unix timestamp when rate limit resets
        super().__init__(message)


class GitHubRateLimitError(GitHubAPIError):
    """GitHub asked us to back off.

    Raised for a 403 with an exhausted rate limit or a 429. Nothing retries
    internally; callers decide when to try again using ``retry_after``
    (seconds, from the Retry-After header) or ``rate_limit_reset``.
    """

    def __init__(
        self,
        message: str = "GitHub API rate limit exceeded",
        status_code: int = 403,
        rate_limit_reset: int | None = None,
        retry_after: int | None = None,
    ):
        self.retry_after = retry_after
        super().__init__(message, status_code, rate_limit_reset=rate_limit_reset)


class GitHubRepoRenamed(GitHubAPIError):
    """Configured repository has been renamed or transferred on GitHub.

    GitHub answers a renamed repository with a 301. The new owner/repo is
    parsed from the Location header when possible so the source
    configuration can be corrected.
    """

    def __init__(self, old_full_name: str, new_full_name: str | None = None):
        self.old_full_name = old_full_name
        self.new_full_name = new_full_name

        if new_full_name:
            message = f"Repository renamed: {old_full_name} → {new_full_name}"
        else:
            message = f"Repository {old_full_name} was moved"

        super().__init__(message, status_code=301)
