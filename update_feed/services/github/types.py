"""Data types for GitHub API responses."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CommitRecord:
    """Normalized commit, one per raw GitHub commit.

    ``(short_hash, source_tag)`` is unique within a session.
    """

    short_hash: str  # First 7 hex chars of the SHA
    timestamp: int  # Committer date, Unix seconds; ordering source of truth
    author_handle: str  # GitHub login if linked, otherwise the git author name
    raw_message: str  # First line of the commit message
    source_tag: str  # Which configured repository it came from


@dataclass
class RepoStats:
    """Repository metadata used for monitoring configured sources."""

    name: str
    full_name: str
    default_branch: str
    language: str | None
    size: int  # Repository size in KB
    updated_at: str  # ISO 8601
