"""
GitHub service package.

Re-exports all public types and classes.
Usage: `from update_feed.services.github import GitHubCommitOperations, CommitRecord`

Module structure:
- commit_operations.py: Paged commit history retrieval
- helpers.py: Rate limit handling and error utilities
- types.py: Data types
- exceptions.py: Custom exceptions
- http_client.py: Shared HTTP client lifecycle
"""

from update_feed.services.github.commit_operations import (
    GitHubCommitOperations,
    parse_commit_timestamp,
)
from update_feed.services.github.exceptions import (
    GitHubAPIError,
    GitHubRateLimitError,
    GitHubRepoRenamed,
)
from update_feed.services.github.helpers import RateLimitInfo, handle_error_response
from update_feed.services.github.http_client import close_github_client, get_github_client
from update_feed.services.github.types import CommitRecord, RepoStats

__all__ = [
    # Client
    "GitHubCommitOperations",
    "parse_commit_timestamp",
    # HTTP client lifecycle
    "close_github_client",
    "get_github_client",
    # Utilities
    "handle_error_response",
    "RateLimitInfo",
    # Exceptions
    "GitHubAPIError",
    "GitHubRateLimitError",
    "GitHubRepoRenamed",
    # Types
    "CommitRecord",
    "RepoStats",
]
